"""
Base exception classes for application-wide error handling.

Exception Hierarchy:
    BaseApplicationError (base)
    ├── ValidationError - Input validation failures
    ├── NotFoundError - Resource not found
    ├── PermissionDeniedError - Authorization failures
    ├── ConflictError - State conflicts (duplicates, invalid transitions)
    └── ExternalServiceError - Storage or other backing-service failures

Each class carries the HTTP status it maps to, so that
core.exception_handler can render any of them raised from a view.

Usage:
    from core.exceptions import NotFoundError

    raise NotFoundError("Conversation not found", error_code="CONVERSATION_NOT_FOUND")

    try:
        ...
    except BaseApplicationError as e:
        return Response(e.to_dict(), status=e.status_code)

Note:
    These exceptions are for domain/business logic errors.
    DRF handles API-layer exceptions (serialization, authentication, etc.).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (field errors, ids, etc.)
    """

    default_error_code: str = "APPLICATION_ERROR"
    status_code: int = 400

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Example:
            {
                "error": "Conversation not found",
                "error_code": "CONVERSATION_NOT_FOUND",
                "details": {"conversation_id": "..."}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised when input validation fails.

    Example:
        raise ValidationError(
            "File size must be less than 10MB",
            error_code="FILE_TOO_LARGE",
            details={"max_bytes": 10485760},
        )
    """

    default_error_code: str = "VALIDATION_ERROR"


class NotFoundError(BaseApplicationError):
    """Raised when a requested resource does not exist."""

    default_error_code: str = "NOT_FOUND"
    status_code: int = 404


class PermissionDeniedError(BaseApplicationError):
    """
    Raised when the user may not perform an operation.

    For authentication failures (missing/invalid token), use DRF's
    AuthenticationFailed. Use this for authorization failures such as
    posting into a conversation the user is not part of.
    """

    default_error_code: str = "PERMISSION_DENIED"
    status_code: int = 403


class ConflictError(BaseApplicationError):
    """
    Raised when an operation conflicts with current resource state.

    Example:
        if StorageService.exists(bucket, path) and not upsert:
            raise ConflictError("The resource already exists", error_code="OBJECT_EXISTS")
    """

    default_error_code: str = "CONFLICT"
    status_code: int = 409


class ExternalServiceError(BaseApplicationError):
    """
    Raised when a backing service (object storage, etc.) call fails.

    Log the original error for debugging but don't expose internal
    details to clients in production.
    """

    default_error_code: str = "EXTERNAL_SERVICE_ERROR"
    status_code: int = 502
