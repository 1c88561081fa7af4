"""Domain exceptions for the application.

These exceptions are raised by guards and services and converted to
structured ``{"error": ..., "status": ...}`` responses by the exception
handlers, so they never escape the HTTP boundary as tracebacks.
"""

from typing import Any


class AppException(Exception):
    """Base exception for all application errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for clients
        status_code: HTTP status code for the response
        details: Additional error details
    """

    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class BadRequestError(AppException):
    """Raised for malformed client input.

    Example:
        raise BadRequestError("Invalid permissions data")
    """

    message = "Bad request"
    error_code = "bad_request"
    status_code = 400


class UnauthorizedError(AppException):
    """Raised when no valid session accompanies the request."""

    message = "Unauthorized"
    error_code = "unauthorized"
    status_code = 401


class ForbiddenError(AppException):
    """Raised when the caller may not perform the operation."""

    message = "Forbidden"
    error_code = "forbidden"
    status_code = 403


class AccountInactiveError(ForbiddenError):
    """Raised when the caller's profile exists but has been disabled."""

    message = "Account is inactive"
    error_code = "account_inactive"


class InsufficientPermissionError(ForbiddenError):
    """Raised when the access decision denies an authenticated caller.

    Deliberately carries no details: a denied caller learns only that
    the operation is forbidden, not which permission was missing.
    """

    message = "Forbidden: Insufficient permissions"
    error_code = "insufficient_permission"


class NotFoundError(AppException):
    """Raised when a requested resource is not found.

    Example:
        raise NotFoundError("User not found", resource="user_profile")
    """

    message = "Resource not found"
    error_code = "not_found"
    status_code = 404

    def __init__(
        self,
        message: str | None = None,
        resource: str | None = None,
        resource_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if resource:
            details["resource"] = resource
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message=message, details=details, **kwargs)


class ProfileNotFoundError(NotFoundError):
    """Raised when a session is valid but no profile is attached to it."""

    message = "User profile not found"
    error_code = "profile_not_found"


class InternalLookupError(AppException):
    """Raised when the identity/profile store cannot be read."""

    message = "Internal server error"
    error_code = "lookup_failed"
    status_code = 500
