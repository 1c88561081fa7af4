"""Error handling module with structured error responses."""

from tooldash.core.errors.exceptions import (
    AccountInactiveError,
    AppException,
    BadRequestError,
    ForbiddenError,
    InsufficientPermissionError,
    InternalLookupError,
    NotFoundError,
    ProfileNotFoundError,
    UnauthorizedError,
)
from tooldash.core.errors.handlers import (
    ErrorResponse,
    FieldError,
    error_response,
    register_exception_handlers,
)


__all__ = [
    "AccountInactiveError",
    "AppException",
    "BadRequestError",
    "ErrorResponse",
    "FieldError",
    "ForbiddenError",
    "InsufficientPermissionError",
    "InternalLookupError",
    "NotFoundError",
    "ProfileNotFoundError",
    "UnauthorizedError",
    "error_response",
    "register_exception_handlers",
]
