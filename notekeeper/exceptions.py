"""
NoteKeeper Backend: Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for every failure the API reports.
Why:   Services raise typed errors; global handlers (registered in main.py)
       turn them into HTTP responses, so routes contain no try/except.
How:   Each exception carries a user-facing message and an optional context
       dict that is logged but never returned to the client.

Exception Hierarchy:
    NoteKeeperError (base)
    ├── ValidationError   → 400 Bad Request, {"errors": [...]}
    ├── AuthError         → 401 Unauthorized
    ├── ForbiddenError    → 401 by default (settings.forbidden_status_code)
    ├── NotFoundError     → 404 Not Found
    └── StorageError      → 500 Internal Server Error (generic message)
"""

from typing import Any, Dict, List, Optional


class NoteKeeperError(Exception):
    """
    Base exception for all NoteKeeper application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NoteKeeperError):
    """
    Raised when client input fails one or more declared constraints.

    Unlike a single-field error, this carries every violation found so the
    client can fix all fields in one round trip.

    Example response:
        {
            "errors": [
                {"field": "title", "message": "Enter a valid title",
                 "value": "ab", "location": "body"}
            ]
        }
    """

    def __init__(
        self,
        errors: List[Dict[str, Any]],
        message: str = "Validation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["fields"] = [e.get("field") for e in errors]
        super().__init__(message=message, context=ctx)
        self.errors = errors

    @property
    def fields(self) -> List[str]:
        return [e["field"] for e in self.errors]


class AuthError(NoteKeeperError):
    """
    Raised when a protected operation has no usable credential.

    Covers a missing header, an undecodable or expired token, and a token
    without a user identity. The request never reaches the store.
    """

    def __init__(
        self,
        message: str = "Please authenticate using a valid token",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(NoteKeeperError):
    """Raised when an authenticated caller mutates a note it does not own."""

    def __init__(
        self,
        message: str = "Not Allowed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(NoteKeeperError):
    """
    Raised when a requested resource does not exist.

    The store returns None for missing records; the service converts that
    into NotFoundError so the HTTP mapping stays out of the business logic.
    """

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


class StorageError(NoteKeeperError):
    """
    Raised when the note store fails to read or write.

    Security Note:
        The message returned to the client is always generic. The original
        driver error and the failing operation are kept in `context` and
        logged server-side only.
    """

    def __init__(
        self,
        message: str = "A storage error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
