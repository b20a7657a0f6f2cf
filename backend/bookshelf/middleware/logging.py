"""
Bookshelf API — Access Log Middleware
======================================

What:  One access-log line per request under the `bookshelf.access` logger.
How:   Records method, path, status, duration and request ID. When the bearer
       guard accepted the request, the caller's user id is appended, so a
       write can be traced back to the token that made it.
When:  Inside RequestIDMiddleware, outside content negotiation, so 406/415
       rejections are logged too.

Level by status:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

Never logged: request bodies, the Authorization header, token values.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from bookshelf.middleware.request_id import request_id_var

logger = logging.getLogger("bookshelf.access")

# Polled by orchestrators every few seconds
QUIET_PATHS = frozenset({"/health"})


def level_for_status(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        principal = getattr(request.state, "principal", None)
        user = f"user={principal.user_id}" if principal else "anonymous"

        logger.log(
            level_for_status(response.status_code),
            "%s %s → %d in %.1fms [%s] %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request_id_var.get(""),
            user,
        )
        return response
