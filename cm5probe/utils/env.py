"""Environment variable helpers with type coercion and logging.

Usage:
    from cm5probe.utils.env import get_env

    level = get_env("CM5PROBE_LOG_LEVEL", default="INFO")
    settle = get_env("CM5PROBE_GPIO_SETTLE_SECONDS", default=0.1, as_type=float)
"""

from __future__ import annotations

import os
from typing import Any, TypeVar, cast, overload

T = TypeVar("T")

# Variables understood by cm5probe
ENV_LOG_LEVEL = "CM5PROBE_LOG_LEVEL"
ENV_ROOT = "CM5PROBE_ROOT"
ENV_GPIO_SETTLE_SECONDS = "CM5PROBE_GPIO_SETTLE_SECONDS"


class EnvVarError(Exception):
    """Base exception for environment variable errors."""

    pass


class EnvVarTypeError(EnvVarError):
    """Raised when an environment variable cannot be converted to the expected type."""

    def __init__(self, name: str, value: str, expected_type: type) -> None:
        self.name = name
        self.value = value
        self.expected_type = expected_type
        super().__init__(f"Cannot convert {name}='{value}' to {expected_type.__name__}")


def _coerce_type(name: str, value: str, as_type: type) -> Any:
    """Convert a string value to the specified type.

    Args:
        name: Variable name (for error messages).
        value: String value to convert.
        as_type: Target type.

    Returns:
        Converted value.

    Raises:
        EnvVarTypeError: If conversion fails.
    """
    try:
        # "false", "0", "" and friends are False
        if as_type is bool:
            return value.lower() not in ("false", "0", "", "no", "off")

        if as_type is int:
            return int(value)
        if as_type is float:
            return float(value)
        if as_type is str:
            return value

        origin = getattr(as_type, "__origin__", None)
        if as_type is list or origin is list:
            return [item.strip() for item in value.split(",") if item.strip()]

        return as_type(value)

    except (ValueError, TypeError) as e:
        raise EnvVarTypeError(name, value, as_type) from e


def _log_access(name: str, value: str | None) -> None:
    """Log environment variable access if logger is configured."""
    from cm5probe.utils.logger import Logger

    if not Logger.is_configured():
        return

    Logger.get("env").debug(f"ENV GET {name}={value}")


@overload
def get_env(name: str, *, default: T, as_type: type[T], log: bool = ...) -> T:
    ...


@overload
def get_env(name: str, *, default: T, log: bool = ...) -> T:
    ...


@overload
def get_env(name: str, *, as_type: type[T], log: bool = ...) -> T | None:
    ...


@overload
def get_env(name: str, *, log: bool = ...) -> str | None:
    ...


def get_env(
    name: str,
    *,
    default: T | None = None,
    as_type: type[T] | None = None,
    log: bool = False,
) -> T | str | None:
    """Get an environment variable with optional type coercion.

    Args:
        name: Environment variable name.
        default: Returned when the variable is not set.
        as_type: Type to convert the value to (bool, int, float, str, list).
        log: If True, log the access (uses Logger if configured).

    Returns:
        The environment variable value, converted to as_type if specified,
        or default if not set.

    Raises:
        EnvVarTypeError: If as_type is specified and conversion fails.

    Examples:
        >>> get_env("CM5PROBE_ROOT", default="/")
        "/"
        >>> get_env("CM5PROBE_GPIO_SETTLE_SECONDS", default=0.1, as_type=float)
        0.1
    """
    value = os.environ.get(name)

    if log:
        _log_access(name, value)

    if value is None:
        return default

    if as_type is not None:
        return cast(T, _coerce_type(name, value, as_type))

    return value
