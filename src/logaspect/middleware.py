"""Request context middleware for FastAPI/Starlette applications.

Binds the InboundRequest of each HTTP request to the current context for
the duration of the request, so woven @controller methods can log
"Received request ..." lines. The binding is always reset in a finally
block, regardless of success or failure.
"""

from __future__ import annotations

__all__ = [
    "RequestContextMiddleware",
    "install_request_context",
]

from starlette.applications import Starlette
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from logaspect.request_context import (
    InboundRequest,
    reset_current_request,
    set_current_request,
)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware that exposes the current request to intercepted calls."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Bind request details, process request, and restore context.

        Args:
            request: Incoming request.
            call_next: Next middleware/handler.

        Returns:
            Response from downstream middleware/handler.
        """
        token = set_current_request(InboundRequest.from_scope(request.scope))
        try:
            return await call_next(request)
        finally:
            reset_current_request(token)


def install_request_context(app: Starlette) -> Starlette:
    """Add RequestContextMiddleware to an application.

    Args:
        app: FastAPI or Starlette application.

    Returns:
        The same application.
    """
    app.add_middleware(RequestContextMiddleware)
    return app
