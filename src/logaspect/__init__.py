"""logaspect: entry/exit logging for functions, methods and endpoint handlers.

Usage:
    from logaspect import LogLevel, controller, logged

    @controller
    @logged(level=LogLevel.INFO)
    class GreetingController:
        def greet(self, name: str) -> str:
            return f"Hello, {name}"
"""

from logaspect.config import LoggingConfig
from logaspect.directive import (
    LoggingDirective,
    controller,
    get_directive,
    is_endpoint_handler,
    resolve_directive,
)
from logaspect.exceptions import ConfigurationError, LogAspectError, SerializationFailure
from logaspect.interceptor import (
    ArgumentSnapshot,
    CallInterceptor,
    Invocation,
    InvocationContext,
    get_call_interceptor,
    set_call_interceptor,
)
from logaspect.levels import LogLevel, emit
from logaspect.middleware import RequestContextMiddleware, install_request_context
from logaspect.request_context import (
    InboundRequest,
    clear_current_request,
    get_current_request,
    reset_current_request,
    set_current_request,
)
from logaspect.serialization import JsonEncoder, get_default_encoder
from logaspect.telemetry import configure_call_logger, get_call_logger
from logaspect.weaving import AsyncLoggedMethod, LoggedMethod, logged, weave_class

__version__ = "0.1.0"

__all__ = [
    # Directives
    "LogLevel",
    "LoggingDirective",
    "controller",
    "get_directive",
    "is_endpoint_handler",
    "logged",
    "resolve_directive",
    "weave_class",
    "AsyncLoggedMethod",
    "LoggedMethod",
    # Interception
    "ArgumentSnapshot",
    "CallInterceptor",
    "Invocation",
    "InvocationContext",
    "emit",
    "get_call_interceptor",
    "set_call_interceptor",
    # Request context
    "InboundRequest",
    "RequestContextMiddleware",
    "clear_current_request",
    "get_current_request",
    "install_request_context",
    "reset_current_request",
    "set_current_request",
    # Serialization
    "JsonEncoder",
    "get_default_encoder",
    # Sink
    "LoggingConfig",
    "configure_call_logger",
    "get_call_logger",
    # Errors
    "ConfigurationError",
    "LogAspectError",
    "SerializationFailure",
]
