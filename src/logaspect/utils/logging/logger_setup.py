"""Logger setup utilities for the call logger sink.

Provides:
- setup_console_handler: stderr handler with human-readable lines
- setup_jsonl_handler: file handler writing JSONL with ISO 8601 timestamps
- reset_handlers: close and detach existing handlers
"""

from __future__ import annotations

__all__ = [
    "reset_handlers",
    "setup_console_handler",
    "setup_jsonl_handler",
]

import logging
import sys
from pathlib import Path

from logaspect.telemetry.system_logger import ConsoleFormatter
from logaspect.utils.logging.iso_formatter import ISO8601Formatter


def _ensure_secure_log_directory(log_file: Path) -> None:
    """Create log directory with secure permissions.

    Args:
        log_file: Path to the log file (parent directory will be created).

    Raises:
        PermissionError: If unable to create log directory due to permissions.
        OSError: If directory creation fails for other reasons.
    """
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        # Set owner-only permissions (0o700) - skip on Windows
        if sys.platform != "win32":
            try:
                log_file.parent.chmod(0o700)
            except OSError:
                pass  # Permission changes might fail on some systems
    except PermissionError as e:
        raise PermissionError(f"Cannot create log directory {log_file.parent}: {e}") from e
    except OSError as e:
        raise OSError(f"Failed to create log directory {log_file.parent}: {e}") from e


def reset_handlers(logger: logging.Logger) -> None:
    """Close and remove all handlers of a logger.

    Args:
        logger: Logger to reset.
    """
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


def setup_console_handler(logger: logging.Logger, log_level: int) -> logging.Handler:
    """Attach a stderr handler with ConsoleFormatter.

    Args:
        logger: Logger to attach to.
        log_level: Minimum level the handler writes.

    Returns:
        logging.Handler: The attached handler.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(ConsoleFormatter())
    logger.addHandler(handler)
    return handler


def setup_jsonl_handler(logger: logging.Logger, log_file: Path, log_level: int) -> logging.Handler:
    """Attach a file handler writing JSONL with ISO 8601 timestamps.

    Creates log directory if it doesn't exist with secure permissions (owner-only: 700).

    Args:
        logger: Logger to attach to.
        log_file: Path to the log file.
        log_level: Minimum level the handler writes.

    Returns:
        logging.Handler: The attached handler.

    Raises:
        PermissionError: If unable to create log directory due to permissions
        OSError: If directory creation or file open fails
    """
    _ensure_secure_log_directory(log_file)

    handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    handler.setLevel(log_level)
    handler.setFormatter(ISO8601Formatter())
    logger.addHandler(handler)
    return handler
