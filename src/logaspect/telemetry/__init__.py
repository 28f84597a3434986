"""Loggers used by logaspect.

- call_logger: Destination of intercepted call lines
- system_logger: Operational events (configuration, setup problems)
"""

from logaspect.telemetry.call_logger import configure_call_logger, get_call_logger
from logaspect.telemetry.system_logger import ConsoleFormatter, get_system_logger

__all__ = [
    "ConsoleFormatter",
    "configure_call_logger",
    "get_call_logger",
    "get_system_logger",
]
