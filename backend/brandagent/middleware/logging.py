"""
BrandAgent Backend - Request Logging Middleware
=================================================

What:  One access-log line per HTTP request on the `brandagent.access` logger.
How:   Measures wall time around call_next and picks the level from the status:
       5xx → ERROR, 4xx → WARNING, otherwise INFO.

Privacy:
    Logs method, path, status, duration, client IP and request ID.
    Never logs request bodies (passwords, submission payloads) or the
    Authorization header.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from brandagent.middleware.request_id import request_id_var

logger = logging.getLogger("brandagent.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Structured access logging with request-ID correlation."""

    # Probed every few seconds by orchestrators; too noisy to log
    SKIP_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.SKIP_PATHS:
            return await call_next(request)

        # Why perf_counter: monotonic and high resolution; time.time() can jump
        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        path = request.url.path
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        # Why by status: alerting keys off severity. 5xx is ours to fix, 4xx
        # is usually the client's
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
