"""Context variable for the inbound HTTP request being handled.

The interceptor itself takes the request as an explicit parameter. Woven
endpoint-handler methods read it from here, where RequestContextMiddleware
binds it for the lifetime of one request.

Context variables are scoped per async task and are copied into the worker
thread Starlette uses for sync endpoints, so concurrent requests never see
each other's values.
"""

from __future__ import annotations

__all__ = [
    "InboundRequest",
    "clear_current_request",
    "current_request_var",
    "get_current_request",
    "reset_current_request",
    "set_current_request",
]

from contextvars import ContextVar, Token
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict


class InboundRequest(BaseModel):
    """Protocol, method and URI of the request an endpoint is handling.

    Attributes:
        protocol: Protocol and version (e.g. "HTTP/1.1").
        method: HTTP method (e.g. "GET").
        uri: Request path without query string (e.g. "/greet").
    """

    model_config = ConfigDict(frozen=True)

    protocol: str
    method: str
    uri: str

    @classmethod
    def from_scope(cls, scope: Mapping[str, Any]) -> InboundRequest:
        """Build from an ASGI HTTP connection scope.

        Args:
            scope: ASGI scope with "http_version", "method" and "path".

        Returns:
            InboundRequest for the scope.
        """
        http_version = scope.get("http_version") or "1.1"
        return cls(
            protocol=f"HTTP/{http_version}",
            method=scope.get("method", ""),
            uri=scope.get("path", ""),
        )

    def describe(self) -> str:
        """Return "<protocol> <method> <uri>"."""
        return f"{self.protocol} {self.method} {self.uri}"


current_request_var: ContextVar[InboundRequest | None] = ContextVar("current_request", default=None)
"""Request being handled by the current task/thread, if any."""


def get_current_request() -> InboundRequest | None:
    """Get the request bound to the current context.

    Returns:
        InboundRequest | None: Active request, None outside request handling.
    """
    return current_request_var.get()


def set_current_request(request: InboundRequest | None) -> Token[InboundRequest | None]:
    """Bind a request to the current context.

    Args:
        request: Request to bind, or None to unbind.

    Returns:
        Token for reset_current_request() to restore the previous value.
    """
    return current_request_var.set(request)


def reset_current_request(token: Token[InboundRequest | None]) -> None:
    """Restore the value that was bound before set_current_request().

    Args:
        token: Token returned by set_current_request().
    """
    current_request_var.reset(token)


def clear_current_request() -> None:
    """Unbind any request from the current context.

    Useful for cleanup in tests.
    """
    current_request_var.set(None)
