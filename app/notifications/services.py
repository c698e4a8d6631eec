"""
Notification service layer.

This module provides NotificationService, the single entry point for
creating notifications. Other apps (friends, posts) call it directly, or
through notifications.tasks.create_notification_task when the caller
should not wait.

Architecture:
    - Services are stateless (use class methods)
    - Expected failures return ServiceResult.failure
    - Every created notification is pushed on the "notifications" topic
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.contrib.auth import get_user_model

from core.services import BaseService, ServiceResult
from notifications.models import Notification, NotificationType
from notifications.serializers import NotificationSerializer
from realtime.broadcast import publish_change
from realtime.constants import REALTIME_CONFIG

if TYPE_CHECKING:
    from authentication.models import User


class NotificationService(BaseService):
    """
    Service for notification operations.

    Methods:
        create_notification: Create and push a notification
        list_for_user: User's notifications, newest first
        mark_as_read: Mark a single notification as read
        mark_all_as_read: Mark all of a user's notifications as read
        get_unread_count: Badge count
    """

    @classmethod
    def create_notification(
        cls,
        user: User,
        type: str,
        title: str,
        message: str,
        data: dict | None = None,
    ) -> ServiceResult[Notification]:
        """
        Create a notification and push it to its recipient.

        Args:
            user: Recipient
            type: One of NotificationType
            title: Short headline
            message: Body text
            data: Optional payload for the client

        Returns:
            ServiceResult with the Notification, or INVALID_TYPE
        """
        if type not in NotificationType.values:
            return ServiceResult.failure(
                f"Unknown notification type '{type}'", error_code="INVALID_TYPE"
            )

        validation = cls.validate_required(title=title, message=message)
        if validation is not None:
            return validation

        with cls.atomic():
            notification = Notification.objects.create(
                user=user,
                type=type,
                title=title,
                message=message,
                data=data or {},
            )
            publish_change(
                "notifications",
                table="notifications",
                event_type=REALTIME_CONFIG.INSERT,
                new=NotificationSerializer(notification).data,
                user_ids=[user.id],
            )

        cls.get_logger().info(
            f"Created {type} notification {notification.id} for user {user.id}"
        )
        return ServiceResult.success(notification)

    @classmethod
    def create_for_user_id(
        cls,
        user_id,
        type: str,
        title: str,
        message: str,
        data: dict | None = None,
    ) -> ServiceResult[Notification]:
        user = get_user_model().objects.filter(id=user_id).first()
        if user is None:
            return ServiceResult.failure("User not found", error_code="USER_NOT_FOUND")
        return cls.create_notification(user, type, title, message, data)

    @classmethod
    def list_for_user(cls, user: User):
        return Notification.objects.filter(user=user).order_by("-created_at")

    @classmethod
    def mark_as_read(
        cls,
        notification: Notification,
        user: User,
    ) -> ServiceResult[Notification]:
        """
        Mark a single notification as read.

        Idempotent; fails with NOT_OWNER for someone else's notification.
        """
        if notification.user_id != user.id:
            cls.get_logger().warning(
                f"User {user.id} attempted to mark notification {notification.id} "
                f"owned by user {notification.user_id}"
            )
            return ServiceResult.failure(
                "Cannot mark notification you don't own",
                error_code="NOT_OWNER",
            )

        if not notification.is_read:
            notification.is_read = True
            notification.save(update_fields=["is_read", "updated_at"])
            cls.get_logger().debug(f"Marked notification {notification.id} as read")

        return ServiceResult.success(notification)

    @classmethod
    def mark_all_as_read(cls, user: User) -> ServiceResult[int]:
        count = Notification.objects.filter(user=user, is_read=False).update(is_read=True)
        cls.get_logger().info(f"Marked {count} notifications as read for user {user.id}")
        return ServiceResult.success(count)

    @classmethod
    def get_unread_count(cls, user: User) -> int:
        return Notification.objects.filter(user=user, is_read=False).count()
