"""
Bookshelf API — JSON:API Response Helpers
==========================================

What:  The JSON:API media type and the response class every JSON:API
       route and error handler answers with.
Who:   Used by routes (default_response_class), exception handlers in
       main.py, and the content-negotiation middleware.
"""

from typing import Any, Dict, List, Optional

from starlette.responses import JSONResponse, Response

JSONAPI_MEDIA_TYPE = "application/vnd.api+json"


class JsonApiResponse(JSONResponse):
    """JSONResponse that declares the JSON:API media type."""

    media_type = JSONAPI_MEDIA_TYPE


def error_response(
    status_code: int,
    errors: List[Dict[str, Any]],
    headers: Optional[Dict[str, str]] = None,
) -> Response:
    """
    Build a JSON:API error response.

    An empty error list yields an empty body (used for 406/415), still
    carrying the JSON:API Content-Type.
    """
    if not errors:
        response = Response(status_code=status_code, headers=headers)
        response.headers["content-type"] = JSONAPI_MEDIA_TYPE
        return response
    return JsonApiResponse(
        status_code=status_code,
        content={"errors": errors},
        headers=headers,
    )
