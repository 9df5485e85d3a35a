"""
BrandAgent Backend - Request ID Middleware
============================================

What:  Assigns a short ID to each request and returns it in X-Request-ID.
Why:   Every log line and every error body from one request shares the ID,
       so a client-reported error can be found in the server log.
How:   Client-supplied X-Request-ID wins; otherwise the first 8 chars of a
       UUID4. Stored in a ContextVar (coroutine-local) and request.state.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# ── Context Variable ──────────────────────────────────────────────────────
# What: Coroutine-local storage for the current request ID
# Why ContextVar: concurrent requests share one thread under asyncio;
# threading.local would hand every request the same value
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Propagates or generates the request correlation ID."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # Why 8 chars: plenty for correlating one service's logs, and readable
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        # Why both: ContextVar for loggers and error handlers, request.state for routes
        request.state.request_id = rid

        response = await call_next(request)
        # Clients quote this header in bug reports
        response.headers["X-Request-ID"] = rid
        return response
