"""Severity levels for logging directives.

LogLevel is the tagged severity carried by a LoggingDirective. emit() is the
single dispatch point from a LogLevel to the stdlib logging call.
"""

from __future__ import annotations

__all__ = [
    "LogLevel",
    "emit",
]

import logging
from enum import Enum

from logaspect.constants import TRACE_LEVEL_NUM

logging.addLevelName(TRACE_LEVEL_NUM, "TRACE")


class LogLevel(str, Enum):
    """Severity of the lines emitted for an intercepted call.

    Inherits from str for easy serialization and comparison.

    Attributes:
        TRACE: Finer than DEBUG (stdlib level 5, registered as "TRACE").
        DEBUG: stdlib DEBUG.
        INFO: stdlib INFO.
        WARN: stdlib WARNING.
        ERROR: stdlib ERROR.
    """

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"

    @property
    def numeric(self) -> int:
        """Numeric stdlib logging level for this severity."""
        return _LEVEL_NUMBERS[self]

    @classmethod
    def parse(cls, name: str | LogLevel) -> LogLevel:
        """Parse a severity name, case-insensitively.

        Accepts "WARNING" as an alias of WARN.

        Args:
            name: Severity name (e.g. "info", "WARNING") or a LogLevel.

        Returns:
            Matching LogLevel.

        Raises:
            ValueError: If name is not a known severity.
        """
        if isinstance(name, LogLevel):
            return name
        normalized = name.strip().upper()
        if normalized == "WARNING":
            return cls.WARN
        try:
            return cls(normalized)
        except ValueError:
            valid = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown log level {name!r} (expected one of: {valid})") from None


_LEVEL_NUMBERS: dict[LogLevel, int] = {
    LogLevel.TRACE: TRACE_LEVEL_NUM,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


def emit(logger: logging.Logger, level: LogLevel, message: str) -> None:
    """Write one line to logger at the given severity.

    Args:
        logger: Destination logger.
        level: Severity from the resolved directive.
        message: Fully formatted line.
    """
    logger.log(_LEVEL_NUMBERS[level], message)
