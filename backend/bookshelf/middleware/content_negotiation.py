"""
Bookshelf API — JSON:API Content-Negotiation Middleware
========================================================

What:  Enforces the JSON:API media type on every request under the API
       prefix and stamps it onto every response leaving that prefix.
How:   `negotiate()` is the pure per-request decision; the middleware applies
       it, short-circuits with an empty-bodied error response, or forwards
       the request and overwrites the response Content-Type.
Who:   Registered in main.create_app() for settings.api_prefix.
When:  Before authentication and routing; after Request ID and logging.

Rules:
    1. Accept missing or not exactly application/vnd.api+json → 406
    2. POST/PATCH with Content-Type missing or not exactly
       application/vnd.api+json                               → 415
    3. Otherwise forward; response Content-Type is always
       application/vnd.api+json, including error responses.
"""

import logging
from typing import Mapping, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from bookshelf.exceptions import NegotiationError
from bookshelf.responses import JSONAPI_MEDIA_TYPE, error_response

logger = logging.getLogger(__name__)

# Methods that carry a request document
METHODS_WITH_BODY = {"POST", "PATCH"}


def negotiate(method: str, headers: Mapping[str, str]) -> Optional[NegotiationError]:
    """
    Decide whether a request speaks JSON:API.

    Args:
        method:  HTTP method
        headers: case-insensitive header mapping (Starlette Headers)

    Returns:
        None when the request may proceed, otherwise the NegotiationError
        describing the rejection.
    """
    if headers.get("accept") != JSONAPI_MEDIA_TYPE:
        return NegotiationError.not_acceptable()
    if method.upper() in METHODS_WITH_BODY and headers.get("content-type") != JSONAPI_MEDIA_TYPE:
        return NegotiationError.unsupported_media_type()
    return None


class ContentNegotiationMiddleware(BaseHTTPMiddleware):
    """
    Applies `negotiate()` to every request whose path starts with `path_prefix`.

    Requests outside the prefix (health checks, docs) pass through untouched.
    """

    def __init__(self, app: ASGIApp, path_prefix: str = ""):
        super().__init__(app)
        self.path_prefix = path_prefix

    def _in_scope(self, path: str) -> bool:
        if not self.path_prefix:
            return True
        return path == self.path_prefix or path.startswith(self.path_prefix + "/")

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not self._in_scope(request.url.path):
            return await call_next(request)

        rejection = negotiate(request.method, request.headers)
        if rejection is not None:
            logger.info(
                "%s %s rejected with %d: bad %s header",
                request.method,
                request.url.path,
                rejection.status_code,
                rejection.header,
            )
            return error_response(rejection.status_code, rejection.error_objects())

        response = await call_next(request)
        response.headers["content-type"] = JSONAPI_MEDIA_TYPE
        return response
