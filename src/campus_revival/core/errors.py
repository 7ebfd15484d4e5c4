"""
Service Errors

Exception hierarchy raised by the service layer. Each error carries a
human-readable message, a machine-readable error code and the HTTP status
the routers translate it into.
"""

from fastapi import HTTPException


class ServiceError(Exception):
    """Base exception for service errors."""

    def __init__(self, message: str, error_code: str, status_code: int = 400):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)


class ValidationError(ServiceError):
    """Raised when input is missing or malformed."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message=message, error_code="VALIDATION_ERROR", status_code=400)


class NotFoundError(ServiceError):
    """Raised when a resource does not exist (or is not visible to the caller)."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message=message, error_code="NOT_FOUND", status_code=404)


class ConflictError(ServiceError):
    """Raised when a write would violate a uniqueness rule."""

    def __init__(self, message: str, error_code: str = "CONFLICT"):
        super().__init__(message=message, error_code=error_code, status_code=400)


class AlreadyAdoptedBySomeoneError(ConflictError):
    """Raised when the school is no longer available for adoption."""

    def __init__(self):
        super().__init__(
            message="School is already adopted by another user",
            error_code="ALREADY_ADOPTED",
        )


class AlreadyAdoptedByYouError(ConflictError):
    """Raised when the caller already holds an adoption for this school."""

    def __init__(self):
        super().__init__(
            message="You have already adopted this school",
            error_code="DUPLICATE_ADOPTION",
        )


class AuthError(ServiceError):
    """Base class for authentication failures (HTTP 401)."""

    def __init__(self, message: str, error_code: str):
        super().__init__(message=message, error_code=error_code, status_code=401)


class InvalidTokenError(AuthError):
    def __init__(self, message: str = "Not authorized, token failed"):
        super().__init__(message=message, error_code="INVALID_TOKEN")


class ExpiredTokenError(AuthError):
    def __init__(self):
        super().__init__(message="Not authorized, token expired", error_code="TOKEN_EXPIRED")


class RevokedTokenError(AuthError):
    def __init__(self):
        super().__init__(message="Not authorized, token revoked", error_code="TOKEN_REVOKED")


class InvalidCredentialsError(AuthError):
    def __init__(self):
        super().__init__(message="Invalid credentials", error_code="INVALID_CREDENTIALS")


class ForbiddenError(ServiceError):
    """Raised when the caller lacks the required role."""

    def __init__(self, message: str = "Admin access required"):
        super().__init__(message=message, error_code="FORBIDDEN", status_code=403)


def to_http_exception(e: ServiceError) -> HTTPException:
    """Convert a service error to an HTTPException with a structured detail."""
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(e, AuthError) else None
    return HTTPException(
        status_code=e.status_code,
        detail={
            "error": e.message,
            "code": e.error_code,
        },
        headers=headers,
    )


__all__ = [
    "ServiceError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "AlreadyAdoptedBySomeoneError",
    "AlreadyAdoptedByYouError",
    "AuthError",
    "InvalidTokenError",
    "ExpiredTokenError",
    "RevokedTokenError",
    "InvalidCredentialsError",
    "ForbiddenError",
    "to_http_exception",
]
