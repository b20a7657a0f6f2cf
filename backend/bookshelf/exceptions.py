"""
Bookshelf API — Custom Exception Hierarchy
============================================

What:  Application-specific exceptions for every failure the API reports.
How:   Each exception carries a message, an optional context dict, the HTTP
       status it maps to, and the JSON:API error objects it renders as.
       Global exception handlers (registered in main.py) catch these and
       return JSON:API error documents.
Who:   Raised by services, repositories, auth and middleware.
When:  During request processing; every one of them is terminal for the request.

Exception Hierarchy:
    BookshelfError (base)              → 500
    ├── NegotiationError               → 406 / 415 (empty body)
    ├── MalformedDocumentError         → 400
    ├── UnauthorizedError              → 401
    ├── NotFoundError                  → 404
    ├── ConflictError                  → 409
    ├── ValidationError                → 422 (one error object per violation)
    └── DatabaseError                  → 500

Error object shape (JSON:API):
    {"title": "...", "details": "...", "source": {"pointer": "/data/..."}}
"""

from typing import Any, Dict, List, Optional


class BookshelfError(Exception):
    """
    Base exception for all Bookshelf application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500
    title: str = "Server Error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    def error_objects(self) -> List[Dict[str, Any]]:
        """JSON:API error objects rendered in the response body."""
        return [{"title": self.title, "details": self.message}]


class NegotiationError(BookshelfError):
    """
    Raised when a request does not speak the JSON:API media type.

    HTTP:    406 Not Acceptable (bad Accept) or
             415 Unsupported Media Type (bad Content-Type on POST/PATCH)
    Body:    empty; only the stamped Content-Type header is required.
    """

    def __init__(self, status_code: int, message: str, header: str):
        super().__init__(message=message, context={"header": header})
        self.status_code = status_code
        self.header = header

    @classmethod
    def not_acceptable(cls) -> "NegotiationError":
        return cls(406, "Not Acceptable", header="accept")

    @classmethod
    def unsupported_media_type(cls) -> "NegotiationError":
        return cls(415, "Unsupported Media Type", header="content-type")

    def error_objects(self) -> List[Dict[str, Any]]:
        return []


class MalformedDocumentError(BookshelfError):
    """
    Raised when a write request body is not a parseable JSON document.

    HTTP:    400 Bad Request
    """

    status_code = 400
    title = "Malformed Document"

    def __init__(
        self,
        message: str = "The request body must be a valid JSON document.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UnauthorizedError(BookshelfError):
    """
    Raised by the auth collaborator when no valid bearer token is presented.

    HTTP:    401 Unauthorized (with WWW-Authenticate: Bearer)

    Attributes:
        reason: machine-readable cause (missing_token, invalid_token,
                revoked_token, expired_token), logged only
    """

    status_code = 401
    title = "Unauthenticated"

    def __init__(
        self,
        reason: str = "invalid_token",
        message: str = "Unauthenticated.",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["reason"] = reason
        super().__init__(message=message, context=ctx)
        self.reason = reason


class NotFoundError(BookshelfError):
    """
    Raised when a requested resource does not exist.

    When:    show/update/delete with an unknown (or non-numeric) author id.
    HTTP:    404 Not Found
    """

    status_code = 404
    title = "Not Found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(BookshelfError):
    """
    Raised when a document contradicts the addressed resource.

    When:    PATCH body `data.id` differs from the id in the URL.
    HTTP:    409 Conflict
    """

    status_code = 409
    title = "Conflict"

    def __init__(
        self,
        message: str,
        pointer: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.pointer = pointer

    def error_objects(self) -> List[Dict[str, Any]]:
        error: Dict[str, Any] = {"title": self.title, "details": self.message}
        if self.pointer:
            error["source"] = {"pointer": self.pointer}
        return [error]


class ValidationError(BookshelfError):
    """
    Raised when a write document fails the Author validation rules.

    HTTP:    422 Unprocessable Entity

    Attributes:
        errors: ordered list of (pointer, message) pairs, one per violation.
                Callers must not assume a single entry.

    Example response:
        {
            "errors": [{
                "title": "Validation Error",
                "details": "The data.attributes.name field is required.",
                "source": {"pointer": "/data/attributes/name"}
            }]
        }
    """

    status_code = 422
    title = "Validation Error"

    def __init__(
        self,
        errors: List[tuple],
        context: Optional[Dict[str, Any]] = None,
    ):
        self.errors = list(errors)
        ctx = context or {}
        ctx["pointers"] = [pointer for pointer, _ in self.errors]
        super().__init__(message="The given data was invalid.", context=ctx)

    def error_objects(self) -> List[Dict[str, Any]]:
        return [
            {
                "title": self.title,
                "details": message,
                "source": {"pointer": pointer},
            }
            for pointer, message in self.errors
        ]


class DatabaseError(BookshelfError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the original
    exception type and query context are logged server-side only.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
