"""Logging directives and endpoint-handler marks.

A LoggingDirective is attached to a function or a class by @logged (see
weaving.py). Classes that handle inbound HTTP requests are marked with
@controller so their intercepted calls also log the request line.

Resolution order for one call: the method's own directive, then the
directive of the class that declares the method.
"""

from __future__ import annotations

__all__ = [
    "LoggingDirective",
    "controller",
    "get_directive",
    "is_endpoint_handler",
    "resolve_directive",
]

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

from logaspect.constants import DIRECTIVE_ATTR, ENDPOINT_ATTR
from logaspect.levels import LogLevel

T = TypeVar("T", bound=type)


class LoggingDirective(BaseModel):
    """Request to log calls at a given severity.

    Attributes:
        level: Severity of every line emitted for the call.
    """

    model_config = ConfigDict(frozen=True)

    level: LogLevel = LogLevel.INFO


def get_directive(target: Any) -> LoggingDirective | None:
    """Get the directive declared directly on a function or class.

    Class directives are looked up in the class's own namespace only, so a
    subclass does not inherit its parent's directive.

    Args:
        target: Function, class or None.

    Returns:
        LoggingDirective | None: Declared directive, if any.
    """
    if target is None:
        return None
    if isinstance(target, type):
        directive = target.__dict__.get(DIRECTIVE_ATTR)
    else:
        directive = getattr(target, DIRECTIVE_ATTR, None)
    return directive if isinstance(directive, LoggingDirective) else None


def resolve_directive(func: Any, owner: type | None) -> LoggingDirective | None:
    """Resolve the directive in effect for a call.

    Args:
        func: The called function.
        owner: Class declaring the function (None for module-level functions).

    Returns:
        LoggingDirective | None: Method directive if present, else the
        owner's, else None (the call is not intercepted).
    """
    return get_directive(func) or get_directive(owner)


def controller(cls: T) -> T:
    """Mark a class as an HTTP endpoint handler.

    Intercepted calls on its methods log "Received request ..." first when
    a request is active.

    Example:
        >>> @controller
        ... @logged(level=LogLevel.INFO)
        ... class GreetingController:
        ...     def greet(self, name: str) -> str:
        ...         return f"Hello, {name}"
    """
    if not isinstance(cls, type):
        raise TypeError(f"@controller can only be applied to classes, got {type(cls).__name__}")
    setattr(cls, ENDPOINT_ATTR, True)
    return cls


def is_endpoint_handler(cls: type | None) -> bool:
    """Check whether a class is marked with @controller."""
    if cls is None:
        return False
    return bool(cls.__dict__.get(ENDPOINT_ATTR, False))
