"""
Catalog API — Custom Exception Hierarchy
==========================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services and the access guard; caught by global handlers.

Exception Hierarchy:
    CatalogError (base)
    ├── ValidationError      → 400 Bad Request (client can fix)
    ├── UnauthorizedError    → 401 Unauthorized
    ├── NotFoundError        → 404 Not Found
    ├── ConflictError        → 409 Conflict (uniqueness violation)
    └── DatabaseError        → 500 Internal Server Error

Response body shape (all handlers):
    {"status": "error", "message": "...", "errors": [...]}   # errors optional
"""

from typing import Any, Dict, List, Optional


class CatalogError(Exception):
    """
    Base exception for all Catalog API application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        errors:   Optional list of field-level details returned to the client
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        errors: Optional[List[Dict[str, Any]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.errors = errors
        self.context = context or {}
        super().__init__(self.message)

    def to_response(self) -> Dict[str, Any]:
        """Client-facing body. Context never leaves the server."""
        body: Dict[str, Any] = {"status": "error", "message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationError(CatalogError):
    """
    Raised when client input fails validation.

    When:    Malformed identifiers, empty update payloads, already-registered
             email addresses, schema violations.
    HTTP:    400 Bad Request

    Example response:
        {
            "status": "error",
            "message": "Invalid category ID(s)",
            "errors": [{"field": ["categories"], "message": "'abc' is not a valid ID"}]
        }
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, errors=errors, context=ctx)
        self.field = field


class UnauthorizedError(CatalogError):
    """
    Raised when a request lacks valid credentials.

    When:    Missing or invalid bearer token, wrong email/password on login.
    HTTP:    401 Unauthorized

    One message covers several causes: an expired token, a bad signature
    and a garbled token all read "Invalid Token", and an unknown email reads
    the same as a wrong password.
    """

    status_code = 401

    def __init__(
        self,
        message: str = "Unauthorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(CatalogError):
    """
    Raised when a requested or referenced resource does not exist.

    When:    GET /category/{id} for an absent id, product create with a
             category id that resolves to nothing.
    HTTP:    404 Not Found
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(
            message=message or f"{resource} Not Found",
            errors=errors,
            context=ctx,
        )


class ConflictError(CatalogError):
    """
    Raised when a write would violate a uniqueness invariant.

    When:    Creating a category or product whose name is already taken,
             either caught by the pre-check or by the unique index at flush.
    HTTP:    409 Conflict
    """

    status_code = 409

    def __init__(
        self,
        resource: str = "Resource",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        super().__init__(message=f"{resource} Already Exists", context=ctx)


class DatabaseError(CatalogError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic.
        Detailed error info (SQL, constraint names) is logged server-side only.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
