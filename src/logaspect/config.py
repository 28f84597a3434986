"""Sink configuration for logaspect.

Directives decide which calls are logged and at what severity. This module
configures where those lines go: logger name, threshold, console output and
an optional JSONL file.

Example usage:
    # Load from config file and install handlers
    config = LoggingConfig.load_from_file(config_path)
    configure_call_logger(config)

    # Save configuration
    config.save_to_file(config_path)
"""

from __future__ import annotations

__all__ = [
    "LoggingConfig",
]

import json
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from logaspect.constants import CALL_LOGGER_NAME
from logaspect.exceptions import ConfigurationError
from logaspect.levels import LogLevel


class LoggingConfig(BaseModel):
    """Call logger sink settings.

    Attributes:
        logger_name: Logger the interceptor writes to.
        level: Threshold of the installed handlers. Lines from directives
            below this severity are dropped by the sink, not by the interceptor.
        console: Write human-readable lines to stderr.
        log_file: JSONL file for call lines (None disables file output).
            "~" is expanded.
    """

    logger_name: str = Field(default=CALL_LOGGER_NAME, min_length=1)
    level: LogLevel = LogLevel.TRACE
    console: bool = True
    log_file: str | None = None

    @field_validator("level", mode="before")
    @classmethod
    def _parse_level(cls, value: object) -> object:
        if isinstance(value, str):
            return LogLevel.parse(value)
        return value

    def resolved_log_file(self) -> Path | None:
        """Return log_file as an absolute path, or None if unset."""
        if not self.log_file:
            return None
        return Path(self.log_file).expanduser()

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to JSON file.

        Creates parent directories if they don't exist.

        Args:
            config_path: Path where the config JSON file should be saved.

        Raises:
            ConfigurationError: If the file cannot be written.
        """
        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(config_path, "w", encoding="utf-8") as f:
                json.dump(self.model_dump(mode="json"), f, indent=2)
        except OSError as e:
            raise ConfigurationError(f"Could not write config file {config_path}: {e}") from e

    @classmethod
    def load_from_file(cls, config_path: Path) -> LoggingConfig:
        """Load configuration from JSON file.

        Args:
            config_path: Path to the config JSON file.

        Returns:
            LoggingConfig instance with loaded configuration.

        Raises:
            ConfigurationError: If the file is missing, not JSON, or invalid.
        """
        if not config_path.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in config file {config_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Could not read config file {config_path}: {e}") from e

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            errors = []
            for error in e.errors():
                loc = ".".join(str(x) for x in error["loc"])
                errors.append(f"  - {loc}: {error['msg']}")
            raise ConfigurationError(
                f"Invalid configuration in {config_path}:\n" + "\n".join(errors)
            ) from e
