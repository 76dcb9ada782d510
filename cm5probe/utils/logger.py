"""Logging for cm5probe.

All loggers live under the ``cm5probe`` hierarchy: ``cm5probe.testers.GPIOTester``,
``cm5probe.backends.gpio_sysfs`` and so on. Reports go to stdout, so log
lines default to stderr and never interleave with a report being piped into
a file.

The CLI configures logging once per process:

    Logger.configure(level="INFO")
    log = Logger.get("env")

Testers and backends can also be used without the CLI, for example from a
board bring-up script. They take their logger from ``get_or_default``, which
works before configuration and picks up the handler once an application
calls ``configure``.
"""

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import TextIO


class LogLevel(Enum):
    """Names accepted by ``CM5PROBE_LOG_LEVEL`` and ``Logger.configure``."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_logging_level(self) -> int:
        level: int = getattr(logging, self.value)
        return level


class LoggerNotConfiguredError(Exception):
    """Raised by ``Logger.get`` and ``Logger.set_level`` before ``configure``."""

    def __init__(self) -> None:
        super().__init__(
            "Logger not configured. Call Logger.configure() before Logger.get()."
        )


LogOutput = str | Path | TextIO | None


class Logger:
    """Process-wide logging setup for the ``cm5probe`` hierarchy.

    Example:
        >>> Logger.configure(level="DEBUG", output="bringup.log")
        >>> Logger.get("testers.GPIOTester").debug("GPIO 2: round trip ok")
    """

    _configured: bool = False
    _root_name: str = "cm5probe"

    @classmethod
    def configure(
        cls,
        level: str | LogLevel = "INFO",
        output: LogOutput = None,
        timestamps: bool = True,
        include_location: bool = False,
        format_string: str | None = None,
    ) -> None:
        """Install a single handler on the ``cm5probe`` logger.

        Calling it again replaces the previous handler, so a CLI invoked
        repeatedly in one process (as in tests) never duplicates lines.

        Args:
            level: Level name or LogLevel.
            output: None for stderr, "stdout", a log file path, or an open
                stream.
            timestamps: Prefix each line with the time.
            include_location: Add [file:line] to each line.
            format_string: Full logging format, overriding the two flags above.
        """
        level = cls._as_level(level)
        logger = logging.getLogger(cls._root_name)
        logger.setLevel(level.to_logging_level())

        for old in logger.handlers[:]:
            logger.removeHandler(old)
            old.close()

        handler = cls._make_handler(output)
        handler.setLevel(level.to_logging_level())
        handler.setFormatter(
            logging.Formatter(
                format_string or cls._format_string(timestamps, include_location)
            )
        )
        logger.addHandler(handler)
        logger.propagate = False

        cls._configured = True

    @staticmethod
    def _make_handler(output: LogOutput) -> logging.Handler:
        if output is None:
            return logging.StreamHandler(sys.stderr)
        if output == "stdout":
            return logging.StreamHandler(sys.stdout)
        if isinstance(output, str | Path):
            return logging.FileHandler(str(output))
        if hasattr(output, "write"):
            return logging.StreamHandler(output)
        raise ValueError(f"Invalid output: {type(output)}")

    @staticmethod
    def _format_string(timestamps: bool, include_location: bool) -> str:
        fields = ["%(levelname)s", "[%(name)s]"]
        if timestamps:
            fields.insert(0, "%(asctime)s")
        if include_location:
            fields.append("[%(filename)s:%(lineno)d]")
        fields.append("%(message)s")
        return " ".join(fields)

    @staticmethod
    def _as_level(level: str | LogLevel) -> LogLevel:
        if isinstance(level, LogLevel):
            return level
        return LogLevel(level.upper())

    @classmethod
    def get(cls, name: str | None = None) -> logging.Logger:
        """Return ``cm5probe.<name>`` for application code.

        Raises:
            LoggerNotConfiguredError: If configure() has not run yet.
        """
        if not cls._configured:
            raise LoggerNotConfiguredError()
        return cls._named(name)

    @classmethod
    def get_or_default(cls, name: str | None = None) -> logging.Logger:
        """Return ``cm5probe.<name>`` whether or not configure() has run."""
        return cls._named(name)

    @classmethod
    def _named(cls, name: str | None) -> logging.Logger:
        if name:
            return logging.getLogger(f"{cls._root_name}.{name}")
        return logging.getLogger(cls._root_name)

    @classmethod
    def set_level(cls, level: str | LogLevel) -> None:
        """Change the level after configure(), e.g. for ``--verbose``.

        Raises:
            LoggerNotConfiguredError: If configure() has not run yet.
        """
        if not cls._configured:
            raise LoggerNotConfiguredError()

        numeric = cls._as_level(level).to_logging_level()
        logger = logging.getLogger(cls._root_name)
        logger.setLevel(numeric)
        for handler in logger.handlers:
            handler.setLevel(numeric)

    @classmethod
    def is_configured(cls) -> bool:
        return cls._configured
