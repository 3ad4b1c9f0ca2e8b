"""
StackIt Backend - Request Logging Middleware
=============================================

What:  One access-log line per API request: method, path, status, duration,
       request ID, client IP and, for authenticated calls, whether a bearer
       token was presented.
How:   Log level follows the status code (see _level_for). Health checks and
       the interactive docs are not logged.

Privacy:
    Request bodies and the token itself are never logged (passwords,
    bearer tokens). Query strings are dropped from the logged path.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from stackit.middleware.request_id import request_id_var

logger = logging.getLogger("stackit.access")

UNLOGGED_PATHS = frozenset({"/health", "/docs", "/redoc", "/openapi.json"})


def _level_for(status: int) -> int:
    # 5xx → ERROR, 4xx → WARNING, rest → INFO
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in UNLOGGED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000

        client_ip = request.client.host if request.client else "unknown"
        authenticated = request.headers.get("Authorization", "").startswith("Bearer ")
        rid = request_id_var.get("")

        logger.log(
            _level_for(response.status_code),
            "%s %s %d %.1fms [%s] from %s%s",
            request.method,
            path,
            response.status_code,
            duration_ms,
            rid,
            client_ip,
            " (bearer)" if authenticated else "",
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": response.status_code,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
                "authenticated": authenticated,
            },
        )
        return response
