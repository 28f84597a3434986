"""Weaving the call interceptor into classes and functions.

@logged attaches a LoggingDirective and wraps the target so that every call
runs through a CallInterceptor:

    @logged(level=LogLevel.DEBUG)
    def load_user(user_id: int) -> User: ...

    @controller
    @logged(LogLevel.INFO)
    class GreetingController:
        def greet(self, name: str) -> str: ...

        @logged(level=LogLevel.TRACE)   # method directive wins
        def ping(self) -> str: ...

On a class, every public function, staticmethod and classmethod declared in
the class body is woven. Methods already woven by their own @logged are left
alone, so each call is intercepted exactly once.

Wrappers keep the wrapped signature, so woven functions and bound methods can
be registered as FastAPI routes directly. Coroutine functions get async
wrappers.
"""

from __future__ import annotations

__all__ = [
    "AsyncLoggedMethod",
    "LoggedMethod",
    "logged",
    "weave_class",
]

import functools
import inspect
from types import MethodType
from typing import Any, Callable, Literal, TypeVar, overload

from logaspect.constants import DIRECTIVE_ATTR
from logaspect.directive import LoggingDirective, is_endpoint_handler, resolve_directive
from logaspect.interceptor import CallInterceptor, Invocation, get_call_interceptor
from logaspect.levels import LogLevel
from logaspect.request_context import InboundRequest, get_current_request

T = TypeVar("T")

MethodKind = Literal["function", "static", "class"]


def _signature_of(func: Callable[..., Any]) -> inspect.Signature | None:
    try:
        return inspect.signature(func)
    except (TypeError, ValueError):
        # Builtins and some C callables have no introspectable signature
        return None


class LoggedMethod:
    """Descriptor wrapping one function with the call interceptor.

    Records its declaring class through __set_name__ (or the owner passed by
    weave_class). Attribute access through an instance yields a bound method,
    through the class the plain wrapper.

    Attributes:
        __func__: The wrapped function.
    """

    def __init__(
        self,
        func: Callable[..., Any] | staticmethod | classmethod,
        *,
        directive: LoggingDirective | None = None,
        interceptor: CallInterceptor | None = None,
        owner: type | None = None,
    ) -> None:
        """Initialize descriptor.

        Args:
            func: Function, staticmethod or classmethod to wrap.
            directive: Method-level directive (None when woven from a class).
            interceptor: Interceptor to use instead of the process-wide one.
            owner: Declaring class, when known up front.

        Raises:
            TypeError: If func is not callable.
        """
        kind: MethodKind = "function"
        if isinstance(func, staticmethod):
            kind = "static"
            func = func.__func__
        elif isinstance(func, classmethod):
            kind = "class"
            func = func.__func__
        if not callable(func):
            raise TypeError(f"@logged can only be applied to classes and callables, got {type(func).__name__}")

        if directive is not None:
            setattr(func, DIRECTIVE_ATTR, directive)

        self.__func__ = func
        self._kind = kind
        self._signature = _signature_of(func)
        self._owner = owner
        self._interceptor = interceptor
        self._wrapper = self._build_wrapper()
        functools.update_wrapper(self, func)

    @property
    def owner(self) -> type | None:
        """Declaring class, None for module-level functions."""
        return self._owner

    @property
    def interceptor(self) -> CallInterceptor | None:
        """Interceptor bound by the decorator, None to use the process-wide one."""
        return self._interceptor

    @interceptor.setter
    def interceptor(self, interceptor: CallInterceptor | None) -> None:
        self._interceptor = interceptor

    @property
    def wrapper(self) -> Callable[..., Any]:
        """The intercepting function (unbound)."""
        return self._wrapper

    def __set_name__(self, owner: type, name: str) -> None:
        if self._owner is None:
            self._owner = owner

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if self._kind == "static":
            return self._wrapper
        if self._kind == "class":
            return MethodType(self._wrapper, owner if owner is not None else type(instance))
        if instance is None:
            return self._wrapper
        return MethodType(self._wrapper, instance)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._wrapper(*args, **kwargs)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.__func__.__qualname__}>"

    def _binds_first_argument(self) -> bool:
        # Plain functions only receive self when they live in a class
        if self._kind == "class":
            return True
        return self._kind == "function" and self._owner is not None

    def _normalize_arguments(
        self,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> tuple[list[Any], dict[str, Any]]:
        """Bind a call to the signature so it is logged as a positional list.

        Arguments passed by keyword move to their positional slot and omitted
        defaults are filled in. Keyword-only arguments stay keywords. Calls
        that do not bind are left as they are; running them raises the usual
        TypeError.
        """
        if self._signature is None:
            return list(args), dict(kwargs)
        try:
            bound = self._signature.bind(*args, **kwargs)
        except TypeError:
            return list(args), dict(kwargs)
        bound.apply_defaults()
        return list(bound.args), dict(bound.kwargs)

    def _prepare(
        self,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> tuple[CallInterceptor, Invocation, LoggingDirective | None, InboundRequest | None]:
        func = self.__func__
        call: Callable[..., Any] = func
        call_args, call_kwargs = self._normalize_arguments(args, kwargs)
        if self._binds_first_argument() and call_args:
            call = functools.partial(func, call_args[0])
            call_args = call_args[1:]

        invocation = Invocation(
            call=call,
            method_name=func.__name__,
            declaring_type=self._owner,
            args=call_args,
            kwargs=call_kwargs,
            module=func.__module__,
        )
        directive = resolve_directive(func, self._owner)
        request = get_current_request() if is_endpoint_handler(self._owner) else None
        interceptor = self._interceptor or get_call_interceptor()
        return interceptor, invocation, directive, request

    def _build_wrapper(self) -> Callable[..., Any]:
        func = self.__func__

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            interceptor, invocation, directive, request = self._prepare(args, kwargs)
            if directive is None:
                return func(*args, **kwargs)
            return interceptor.intercept(invocation, directive, request)

        return wrapper


class AsyncLoggedMethod(LoggedMethod):
    """LoggedMethod for coroutine functions.

    __call__ is itself a coroutine function so frameworks that inspect the
    callable (FastAPI) await it instead of running it in a thread.
    """

    async def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return await self._wrapper(*args, **kwargs)

    def _build_wrapper(self) -> Callable[..., Any]:
        func = self.__func__

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            interceptor, invocation, directive, request = self._prepare(args, kwargs)
            if directive is None:
                return await func(*args, **kwargs)
            return await interceptor.intercept_async(invocation, directive, request)

        return wrapper


def _make_logged_method(
    func: Any,
    *,
    directive: LoggingDirective | None,
    interceptor: CallInterceptor | None,
    owner: type | None = None,
) -> LoggedMethod:
    target = func.__func__ if isinstance(func, (staticmethod, classmethod)) else func
    cls = AsyncLoggedMethod if inspect.iscoroutinefunction(target) else LoggedMethod
    return cls(func, directive=directive, interceptor=interceptor, owner=owner)


def weave_class(
    cls: type[T],
    directive: LoggingDirective,
    interceptor: CallInterceptor | None = None,
) -> type[T]:
    """Attach a class-level directive and weave the class's public methods.

    Args:
        cls: Class to weave (modified in place).
        directive: Class-level directive.
        interceptor: Interceptor to use instead of the process-wide one.

    Returns:
        The same class.
    """
    for name, value in list(cls.__dict__.items()):
        if name.startswith("_") or isinstance(value, LoggedMethod):
            continue
        if isinstance(value, (staticmethod, classmethod)) or inspect.isfunction(value):
            woven = _make_logged_method(value, directive=None, interceptor=interceptor, owner=cls)
            setattr(cls, name, woven)

    setattr(cls, DIRECTIVE_ATTR, directive)
    return cls


@overload
def logged(target: type[T]) -> type[T]: ...


@overload
def logged(target: Callable[..., Any]) -> LoggedMethod: ...


@overload
def logged(
    target: LogLevel | str | None = None,
    *,
    level: LogLevel | str = ...,
    interceptor: CallInterceptor | None = ...,
) -> Callable[[Any], Any]: ...


def logged(
    target: Any = None,
    *,
    level: LogLevel | str = LogLevel.INFO,
    interceptor: CallInterceptor | None = None,
) -> Any:
    """Log calls to a class's methods or to a single function.

    Usable bare (@logged), with a level (@logged(LogLevel.WARN),
    @logged(level="debug")), and with a specific interceptor.

    Args:
        target: Class or callable when used bare; a level when called with
                one positional argument.
        level: Severity of the emitted lines.
        interceptor: Interceptor to use instead of the process-wide one.

    Returns:
        The woven class, a LoggedMethod, or a decorator.

    Raises:
        TypeError: If applied to something that is neither a class nor callable.
        ValueError: If level is not a known severity.
    """
    if isinstance(target, (LogLevel, str)):
        level = target
        target = None

    directive = LoggingDirective(level=LogLevel.parse(level))

    def apply(obj: Any) -> Any:
        if isinstance(obj, type):
            return weave_class(obj, directive, interceptor)
        if isinstance(obj, LoggedMethod):
            setattr(obj.__func__, DIRECTIVE_ATTR, directive)
            if interceptor is not None:
                obj.interceptor = interceptor
            return obj
        if not callable(obj) and not isinstance(obj, (staticmethod, classmethod)):
            raise TypeError(f"@logged can only be applied to classes and callables, got {type(obj).__name__}")
        return _make_logged_method(obj, directive=directive, interceptor=interceptor)

    if target is None:
        return apply
    return apply(target)
