"""cm5probe utilities - shared helper functions and utilities."""

from cm5probe.utils.env import (
    ENV_GPIO_SETTLE_SECONDS,
    ENV_LOG_LEVEL,
    ENV_ROOT,
    EnvVarError,
    EnvVarTypeError,
    get_env,
)
from cm5probe.utils.logger import (
    Logger,
    LoggerNotConfiguredError,
    LogLevel,
)

__all__ = [
    # Env
    "ENV_GPIO_SETTLE_SECONDS",
    "ENV_LOG_LEVEL",
    "ENV_ROOT",
    "EnvVarError",
    "EnvVarTypeError",
    "get_env",
    # Logger
    "LogLevel",
    "Logger",
    "LoggerNotConfiguredError",
]
