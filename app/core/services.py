"""
Base service layer patterns for business logic encapsulation.

This module provides the two building blocks every domain service uses:
- ServiceResult: Result wrapper for expected success/failure outcomes
- BaseService: Base class with logging, transaction and validation helpers

Service Layer Philosophy:
    Views handle HTTP concerns, models handle data, services handle logic.
    Expected failures (validation, business rules) come back as a
    ServiceResult; unexpected failures propagate as exceptions.

Usage:
    from core.services import BaseService, ServiceResult

    class FriendService(BaseService):
        @classmethod
        def send_request(cls, sender, receiver_id) -> ServiceResult[FriendRequest]:
            if sender.id == receiver_id:
                return ServiceResult.failure(
                    "You cannot send a friend request to yourself",
                    error_code="SAME_USER",
                )

            with cls.atomic():
                friend_request = FriendRequest.objects.create(...)

            cls.get_logger().info(f"Friend request {friend_request.id} sent")
            return ServiceResult.success(friend_request)

    # In a view
    result = FriendService.send_request(request.user, receiver_id)
    if result.success:
        return Response(FriendRequestSerializer(result.data).data, status=201)
    return Response(result.to_response(), status=result.http_status)

Related:
    - core.exceptions: For unexpected/exceptional errors
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Generator
    from typing import Any

T = TypeVar("T")

# Error codes whose failures map onto a specific HTTP status.
# Anything not listed is treated as a 400 Bad Request.
ERROR_CODE_STATUS: dict[str, int] = {
    "NOT_FOUND": 404,
    "USER_NOT_FOUND": 404,
    "CONVERSATION_NOT_FOUND": 404,
    "MESSAGE_NOT_FOUND": 404,
    "POST_NOT_FOUND": 404,
    "REQUEST_NOT_FOUND": 404,
    "SCHEDULE_NOT_FOUND": 404,
    "NOTIFICATION_NOT_FOUND": 404,
    "OBJECT_NOT_FOUND": 404,
    "PERMISSION_DENIED": 403,
    "NOT_PARTICIPANT": 403,
    "NOT_RECEIVER": 403,
    "NOT_OWNER": 403,
    "EMAIL_EXISTS": 409,
    "ALREADY_FRIENDS": 409,
    "REQUEST_ALREADY_PENDING": 409,
    "REQUEST_NOT_PENDING": 409,
    "ALREADY_LIKED": 409,
    "ALREADY_ENROLLED": 409,
    "OBJECT_EXISTS": 409,
    "EXTERNAL_SERVICE_ERROR": 502,
}


@dataclass
class ServiceResult(Generic[T]):
    """
    Standard result wrapper for service operations.

    Attributes:
        success: Whether the operation succeeded
        data: Result data if successful (None if failed)
        error: Error message if failed (None if successful)
        error_code: Machine-readable error code for client handling
        errors: Field-level errors for validation failures

    Usage:
        return ServiceResult.success(message)
        return ServiceResult.failure("Not a participant", "NOT_PARTICIPANT")

        result = MessageService.send_message(conversation, user, "hi")
        if result:
            message = result.data
    """

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: str | None = None
    errors: dict[str, list[str]] | None = field(default=None)

    @classmethod
    def success(cls, data: T) -> ServiceResult[T]:
        """Create a successful result carrying ``data``."""
        return cls(success=True, data=data)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        errors: dict[str, list[str]] | None = None,
    ) -> ServiceResult[T]:
        """
        Create a failed result.

        Args:
            error: Human-readable error message
            error_code: Machine-readable error code for client handling
            errors: Field-level errors (for validation failures)

        Example:
            return ServiceResult.failure(
                "Validation failed",
                error_code="VALIDATION_ERROR",
                errors={"semester": ["Semester must be between 1 and 12"]},
            )
        """
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            errors=errors,
        )

    @classmethod
    def from_exception(cls, exc: Exception, error_code: str | None = None) -> ServiceResult[T]:
        """
        Create a failed result from an exception.

        Application errors keep their own error code; anything else falls
        back to the exception class name.
        """
        code = error_code or getattr(exc, "error_code", None)
        message = getattr(exc, "message", None) or str(exc)
        return cls(
            success=False,
            error=message,
            error_code=code or exc.__class__.__name__.upper(),
        )

    @property
    def http_status(self) -> int:
        """HTTP status a view should answer with for this result."""
        if self.success:
            return 200
        return ERROR_CODE_STATUS.get(self.error_code or "", 400)

    def to_response(self) -> dict[str, Any]:
        """
        Convert to API response format.

        Returns:
            Dict with success status and data or error details
        """
        if self.success:
            return {"success": True, "data": self.data}

        response: dict[str, Any] = {
            "success": False,
            "error": self.error,
        }
        if self.error_code:
            response["error_code"] = self.error_code
        if self.errors:
            response["errors"] = self.errors
        return response

    def __bool__(self) -> bool:
        return self.success


class BaseService:
    """
    Base class for service layer classes.

    Services are stateless: use @classmethod and keep no instance state.
    Return ServiceResult for expected failures and raise for the rest.

    Usage:
        class NotificationService(BaseService):
            @classmethod
            def mark_all_as_read(cls, user) -> int:
                with cls.atomic():
                    count = Notification.objects.filter(...).update(is_read=True)
                cls.get_logger().info(f"Marked {count} notifications read")
                return count
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """Get a logger named after the service class."""
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Execute operations in a database transaction.

        All database operations within this context manager are rolled back
        together if any of them fails. Callbacks registered with
        ``transaction.on_commit`` inside the block run after it commits.
        """
        with transaction.atomic():
            yield

    @classmethod
    def handle_exception(
        cls,
        exc: Exception,
        context: str = "",
        log_level: int = logging.ERROR,
    ) -> ServiceResult:
        """
        Log an exception and convert it to a failed ServiceResult.

        Args:
            exc: The caught exception
            context: Additional context for the log line
            log_level: Logging level (default ERROR)

        Example:
            try:
                stored = StorageService.upload(...)
            except ExternalServiceError as e:
                return cls.handle_exception(e, "avatar upload")
        """
        message = f"{context}: {exc}" if context else str(exc)
        cls.get_logger().log(log_level, message, exc_info=True)
        return ServiceResult.from_exception(exc)

    @classmethod
    def validate_required(cls, **kwargs: Any) -> ServiceResult | None:
        """
        Validate that required fields are provided.

        Returns a failure result if any field is None or a blank string,
        otherwise None.

        Example:
            validation = cls.validate_required(email=email, password=password)
            if validation is not None:
                return validation
        """
        errors: dict[str, list[str]] = {}
        for field_name, value in kwargs.items():
            if value is None or (isinstance(value, str) and not value.strip()):
                errors[field_name] = ["This field is required."]

        if errors:
            return ServiceResult.failure(
                "Missing required fields",
                error_code="VALIDATION_ERROR",
                errors=errors,
            )
        return None
