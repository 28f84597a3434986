"""Call interceptor: logs entry, exit, timing and argument changes.

For every intercepted call the interceptor emits, at the directive's
severity and in this order:

1. "Received request <protocol> <method> <uri>" (endpoint handlers with an
   active request only)
2. "<Type>.<method>: Executing with args <json>"
3. "<Type>.<method>: Finished. Execution time <n>ms with result <json>"
4. "<Type>.<method>: Arguments have changed <json>" (only if the live
   argument list no longer equals the pre-call snapshot)

If the wrapped call raises, lines 3 and 4 are not emitted and the exception
reaches the caller unchanged. Serialization problems raise
SerializationFailure; see exceptions.py.

All state is local to one invocation. The same interceptor can be used from
any number of threads and tasks concurrently.
"""

from __future__ import annotations

__all__ = [
    "ArgumentSnapshot",
    "CallInterceptor",
    "Invocation",
    "InvocationContext",
    "get_call_interceptor",
    "set_call_interceptor",
]

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, cast

from logaspect.constants import (
    ARGUMENTS_CHANGED_PREFIX,
    EXECUTING_PREFIX,
    FINISHED_PREFIX,
    REQUEST_PREFIX,
)
from logaspect.directive import LoggingDirective, is_endpoint_handler
from logaspect.exceptions import SerializationFailure, SerializationPhase
from logaspect.levels import emit
from logaspect.request_context import InboundRequest
from logaspect.serialization import JsonEncoder, get_default_encoder
from logaspect.telemetry.call_logger import get_call_logger


def _current_millis() -> int:
    """Wall clock in milliseconds."""
    return time.time_ns() // 1_000_000


@dataclass
class Invocation:
    """One pending call of an intercepted function.

    args and kwargs are live: proceed() calls the target with whatever they
    hold at that moment, and the interceptor compares them against the
    pre-call snapshot once the call returns. The bound instance or class of
    a method is part of call, not of args.

    Attributes:
        call: Callable that runs the wrapped function (already bound to its
              instance or class for methods).
        method_name: Name of the invoked function.
        declaring_type: Class that declares the function, None for
                        module-level functions.
        args: Positional arguments.
        kwargs: Keyword arguments.
        module: Module of the function, names module-level functions.
    """

    call: Callable[..., Any]
    method_name: str
    declaring_type: type | None = None
    args: list[Any] = field(default_factory=list)
    kwargs: dict[str, Any] = field(default_factory=dict)
    module: str | None = None

    @property
    def type_name(self) -> str:
        """Simple name of the declaring class, or of the module."""
        if self.declaring_type is not None:
            return self.declaring_type.__name__
        if self.module:
            return self.module.rsplit(".", 1)[-1]
        return "<module>"

    def arguments(self) -> list[Any]:
        """Argument list as logged: positionals, then a kwargs object if any."""
        if self.kwargs:
            return [*self.args, dict(self.kwargs)]
        return list(self.args)

    def proceed(self) -> Any:
        """Run the wrapped call with the current arguments."""
        return self.call(*self.args, **self.kwargs)


@dataclass(frozen=True)
class ArgumentSnapshot:
    """Shallow copy of an invocation's arguments taken before the call.

    Only the list and dict structure is copied; mutable argument objects
    stay shared with the live invocation.
    """

    args: tuple[Any, ...]
    kwargs: dict[str, Any]

    @classmethod
    def take(cls, invocation: Invocation) -> ArgumentSnapshot:
        return cls(args=tuple(invocation.args), kwargs=dict(invocation.kwargs))

    def differs_from(self, invocation: Invocation) -> bool:
        """Element-wise value comparison against the live arguments.

        Length differences count as a change.
        """
        return list(self.args) != list(invocation.args) or self.kwargs != invocation.kwargs


@dataclass
class InvocationContext:
    """Per-call state held by the interceptor between entry and exit."""

    invocation: Invocation
    directive: LoggingDirective
    label: str
    snapshot: ArgumentSnapshot
    start_ms: int = 0


class CallInterceptor:
    """Wraps calls with entry/exit logging.

    Never alters arguments, return values or exceptions of the wrapped call.
    """

    def __init__(
        self,
        *,
        logger: logging.Logger | None = None,
        encoder: JsonEncoder | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        """Initialize interceptor.

        Args:
            logger: Sink for call lines (default: the "logaspect.calls" logger).
            encoder: JSON encoder for arguments and results.
            clock: Millisecond wall clock (injectable for tests).
        """
        self.logger = logger or get_call_logger()
        self.encoder = encoder or get_default_encoder()
        self.clock = clock or _current_millis

    def intercept(
        self,
        invocation: Invocation,
        directive: LoggingDirective,
        request: InboundRequest | None = None,
    ) -> Any:
        """Run a synchronous invocation with logging.

        Args:
            invocation: Pending call.
            directive: Resolved directive (method-level, else class-level).
            request: Request being handled, if any.

        Returns:
            The wrapped call's result, unchanged.

        Raises:
            SerializationFailure: If a log line cannot be serialized.
            Exception: Whatever the wrapped call raises, unchanged.
        """
        context = self._before(invocation, directive, request)
        result = invocation.proceed()
        return self._after(context, result)

    async def intercept_async(
        self,
        invocation: Invocation,
        directive: LoggingDirective,
        request: InboundRequest | None = None,
    ) -> Any:
        """Run an invocation whose call returns an awaitable.

        Same protocol as intercept(); the only suspension is awaiting the
        wrapped coroutine.
        """
        context = self._before(invocation, directive, request)
        result = await cast(Awaitable[Any], invocation.proceed())
        return self._after(context, result)

    def _before(
        self,
        invocation: Invocation,
        directive: LoggingDirective,
        request: InboundRequest | None,
    ) -> InvocationContext:
        if request is not None and is_endpoint_handler(invocation.declaring_type):
            emit(self.logger, directive.level, REQUEST_PREFIX + request.describe())

        label = f"{invocation.type_name}.{invocation.method_name}: "
        context = InvocationContext(
            invocation=invocation,
            directive=directive,
            label=label,
            snapshot=ArgumentSnapshot.take(invocation),
        )

        args_json = self._to_json(invocation.arguments(), "arguments", label)
        emit(self.logger, directive.level, label + EXECUTING_PREFIX + args_json)

        context.start_ms = self.clock()
        return context

    def _after(self, context: InvocationContext, result: Any) -> Any:
        elapsed_ms = self.clock() - context.start_ms
        level = context.directive.level
        label = context.label

        result_json = self._to_json(result, "result", label)
        emit(
            self.logger,
            level,
            f"{label}{FINISHED_PREFIX}{elapsed_ms}ms with result {result_json}",
        )

        invocation = context.invocation
        if context.snapshot.differs_from(invocation):
            changed_json = self._to_json(invocation.arguments(), "changed_arguments", label)
            emit(self.logger, level, label + ARGUMENTS_CHANGED_PREFIX + changed_json)

        return result

    def _to_json(self, value: Any, phase: SerializationPhase, label: str) -> str:
        try:
            return self.encoder.encode(value)
        except SerializationFailure as e:
            raise e.with_context(phase, label) from e.__cause__


# Module-level default - created on first use
_call_interceptor: CallInterceptor | None = None


def get_call_interceptor() -> CallInterceptor:
    """Get the process-wide interceptor used by woven callables.

    Returns:
        CallInterceptor: Shared instance, created on first call.
    """
    global _call_interceptor

    if _call_interceptor is None:
        _call_interceptor = CallInterceptor()
    return _call_interceptor


def set_call_interceptor(interceptor: CallInterceptor | None) -> None:
    """Replace the process-wide interceptor.

    Args:
        interceptor: New default, or None to recreate it on next use.
    """
    global _call_interceptor
    _call_interceptor = interceptor
