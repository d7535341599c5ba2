"""
Malls API Backend — Exception Taxonomy
========================================

What:  Application-specific exceptions, each classified by an HTTP status code.
How:   Every exception carries a message, a numeric status_code and an optional
       context dict. A single handler registered in main.py renders all of
       them into the same JSON shape.
Who:   Raised by services, validation and the authorization gate.

Exception Hierarchy:
    MallsApiError (base)                       → status label derived from code
    ├── ValidationError                        → 400 Bad Request
    │   ├── AlreadyRegisteredError             → 400 (duplicate email)
    │   ├── InvalidPasswordError               → 400 (login password mismatch)
    │   └── DuplicateAssociationError          → 400 (store already in mall)
    ├── InvalidTokenError                      → 400 (bad signature / expired)
    ├── AuthenticationError                    → 401 (no token)
    ├── ForbiddenError                         → 403 (not an admin)
    ├── NotFoundError                          → 404 (entity, malformed id, route)
    └── DatabaseError                          → 503 (storage unavailable)

Response shape:
    {
        "status": "Bad Request",
        "statusCode": 400,
        "message": "Store already exists in mall",
        "details": {"mall_id": "...", "store_id": "..."},
        "request_id": "a1b2c3d4"
    }
"""

from typing import Any, Dict, Optional


STATUS_LABELS = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
}


def status_label(status_code: int) -> str:
    """Maps a numeric status code to its classification label."""
    return STATUS_LABELS.get(status_code, "Error")


class MallsApiError(Exception):
    """
    Base exception for all Malls API errors.

    Attributes:
        message:      User-facing error description (safe to return in API response)
        status_code:  HTTP status code used by the global handler
        context:      Extra detail; returned as "details" for 4xx errors only
    """

    status_code: int = 400

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        self.message = message
        self.context = context or {}
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    @property
    def status(self) -> str:
        return status_label(self.status_code)


class ValidationError(MallsApiError):
    """
    Raised when client input fails validation.

    HTTP: 400 Bad Request. `field` names the first failing field so the
    client can point at it.
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AlreadyRegisteredError(ValidationError):
    """Registration with an email that is already bound to a user."""

    def __init__(self, email: Optional[str] = None):
        super().__init__(message="User is already registered", field="email")
        self.email = email


class InvalidPasswordError(ValidationError):
    """Login attempt whose password does not match the stored hash."""

    def __init__(self):
        super().__init__(message="Invalid password", field="password")


class DuplicateAssociationError(ValidationError):
    """
    Raised when a store is added to a mall that already carries it.

    The association state is left exactly as it was before the call.
    """

    def __init__(self, mall_id: str, store_id: str):
        super().__init__(
            message="Store already exists in mall",
            context={"mall_id": mall_id, "store_id": store_id},
        )


class InvalidTokenError(MallsApiError):
    """
    Raised when an x-auth-token is present but cannot be verified.

    Covers bad signatures, malformed tokens, expired tokens and payloads
    missing the user id. HTTP: 400 Bad Request.
    """

    status_code = 400

    def __init__(self, message: str = "Invalid token."):
        super().__init__(message=message)


class AuthenticationError(MallsApiError):
    """Raised when a protected route is called without a token. HTTP: 401."""

    status_code = 401

    def __init__(self, message: str = "Access Denied. No token provided"):
        super().__init__(message=message)


class ForbiddenError(MallsApiError):
    """Raised when an authenticated caller lacks the admin role. HTTP: 403."""

    status_code = 403

    def __init__(self, message: str = "Access denied. You must be an admin"):
        super().__init__(message=message)


class NotFoundError(MallsApiError):
    """
    Raised when a requested resource does not exist.

    HTTP: 404 Not Found. Also used for identifiers that are not valid UUIDs,
    since such an id can never resolve to a record.
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"{resource} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(MallsApiError):
    """
    Raised when database operations fail unexpectedly.

    HTTP: 503 Service Unavailable. The message returned to the client is always
    generic; the context (operation, error type) is logged server-side only.
    """

    status_code = 503

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
