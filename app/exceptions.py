"""Domain errors raised by the service layer.

Each error carries the HTTP status it maps to; the application turns any
``ServiceError`` into a ``{"success": false, "error": ...}`` envelope.
"""

from fastapi import status


class ServiceError(Exception):
    """Base class for errors reported to the caller as a failed result."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthorizedError(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class ForbiddenError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Insufficient permissions"


class InvalidOperationError(ForbiddenError):
    """A business rule forbids the operation regardless of the caller's role."""

    default_message = "Operation not allowed"


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "User not found"


class DataIntegrityError(ServiceError):
    """Stored data violates an invariant (e.g. verified user without verifier)."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Data integrity violation"


class VerifiedUserDataIntegrityError(DataIntegrityError):
    default_message = "Verified user has no resolvable verifier"


class UpstreamError(ServiceError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Backing store unavailable"
