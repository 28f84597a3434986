"""Call logger: the sink for intercepted call lines.

get_call_logger() returns the named logger the default interceptor writes to.
Without configuration its records propagate to the root logger like any
library logger; configure_call_logger() installs dedicated handlers.
"""

from __future__ import annotations

__all__ = [
    "configure_call_logger",
    "get_call_logger",
]

import logging
from typing import TYPE_CHECKING

from logaspect.constants import CALL_LOGGER_NAME
from logaspect.telemetry.system_logger import get_system_logger
from logaspect.utils.logging.logger_setup import (
    reset_handlers,
    setup_console_handler,
    setup_jsonl_handler,
)

if TYPE_CHECKING:
    from logaspect.config import LoggingConfig


def get_call_logger(name: str = CALL_LOGGER_NAME) -> logging.Logger:
    """Get the logger intercepted calls are written to.

    Args:
        name: Logger name (default: "logaspect.calls").

    Returns:
        logging.Logger: The named logger.
    """
    return logging.getLogger(name)


def configure_call_logger(config: LoggingConfig) -> logging.Logger:
    """Install console and/or JSONL file handlers on the call logger.

    Existing handlers are closed and replaced, so calling this twice does
    not duplicate output.

    Args:
        config: Sink configuration.

    Returns:
        logging.Logger: The configured call logger.

    Raises:
        PermissionError: If the log directory cannot be created.
        OSError: If the log file cannot be opened.
    """
    logger = get_call_logger(config.logger_name)
    level = config.level.numeric
    logger.setLevel(level)
    reset_handlers(logger)

    if config.console:
        setup_console_handler(logger, level)

    log_file = config.resolved_log_file()
    if log_file is not None:
        setup_jsonl_handler(logger, log_file, level)

    # Dedicated handlers replace root propagation
    logger.propagate = not logger.handlers

    get_system_logger().info(
        {
            "event": "call_logger_configured",
            "logger": config.logger_name,
            "level": config.level.value,
            "console": config.console,
            "log_file": str(log_file) if log_file else None,
            "message": f"Call logging to {config.logger_name} at {config.level.value}",
        }
    )
    return logger
