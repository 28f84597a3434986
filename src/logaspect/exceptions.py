"""Custom exceptions for logaspect.

This module contains all custom exceptions used throughout the package.

Call-path failures (propagate to the caller of the intercepted function):
    - SerializationFailure: Arguments or result could not be rendered as JSON

Setup failures:
    - ConfigurationError: Sink configuration is missing or invalid

Exceptions raised by the intercepted function itself are never wrapped;
they reach the caller unchanged.

Usage:
    from logaspect.exceptions import SerializationFailure
"""

from __future__ import annotations

__all__ = [
    "ConfigurationError",
    "LogAspectError",
    "SerializationFailure",
]

from typing import Literal

SerializationPhase = Literal["arguments", "result", "changed_arguments"]


class LogAspectError(Exception):
    """Base exception for all logaspect errors."""


class SerializationFailure(LogAspectError):
    """The JSON encoder could not render a value for a log line.

    Raised instead of emitting a partial or placeholder line. The original
    encoder error is chained as __cause__.

    When phase is "result" or "changed_arguments" the intercepted call has
    already completed successfully; its result is lost to the caller.

    Attributes:
        phase: Which line failed ("arguments", "result", "changed_arguments").
               None when raised by the encoder outside an interception.
        label: Execution label of the intercepted call (e.g. "Greeter.greet: ").
    """

    def __init__(
        self,
        message: str,
        *,
        phase: SerializationPhase | None = None,
        label: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.phase = phase
        self.label = label

    def with_context(self, phase: SerializationPhase, label: str) -> SerializationFailure:
        """Return a copy of this failure annotated with interception context.

        Args:
            phase: Log line that failed to serialize.
            label: Execution label of the intercepted call.

        Returns:
            New SerializationFailure sharing this one's cause.
        """
        failure = SerializationFailure(
            f"{label}failed to serialize {phase.replace('_', ' ')}: {self.message}",
            phase=phase,
            label=label,
        )
        failure.__cause__ = self.__cause__
        return failure

    def __repr__(self) -> str:
        parts = [f"SerializationFailure({self.message!r}"]
        if self.phase is not None:
            parts.append(f", phase={self.phase!r}")
        if self.label is not None:
            parts.append(f", label={self.label!r}")
        parts.append(")")
        return "".join(parts)

    def __str__(self) -> str:
        return self.message


class ConfigurationError(LogAspectError):
    """Sink configuration is invalid or incomplete.

    Raised when:
    - Config file does not exist
    - Config file contains invalid JSON
    - Config file fails Pydantic validation
    - Config file cannot be written
    """
