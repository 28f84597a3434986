"""Logging utilities and helpers.

This package provides sink infrastructure for logaspect:
- iso_formatter: ISO 8601 timestamp formatting for JSONL logs
- logger_setup: Handler setup for console and JSONL file sinks

Import directly from submodules to avoid circular imports:
    from logaspect.utils.logging.logger_setup import setup_call_logger
"""

__all__: list[str] = []  # Direct submodule imports required (see docstring)
