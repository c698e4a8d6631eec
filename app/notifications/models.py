"""
Notification models.

Notifications are in-app inbox entries. Each one is pushed to its owner on
the "notifications" realtime topic when it is created.

Usage:
    from notifications.models import Notification, NotificationType

    Notification.objects.filter(user=user, is_read=False).count()
"""

from django.conf import settings
from django.db import models

from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel


class NotificationType(models.TextChoices):
    """Kinds of notification shown in the inbox."""

    FRIEND_REQUEST = "friend_request", "Friend Request"
    POST_MENTION = "post_mention", "Post Mention"
    ANNOUNCEMENT = "announcement", "Announcement"
    SCHEDULE_CHANGE = "schedule_change", "Schedule Change"
    POST_LIKE = "post_like", "Post Like"
    POST_COMMENT = "post_comment", "Post Comment"


class Notification(UUIDPrimaryKeyMixin, BaseModel):
    """
    A single inbox notification.

    Fields:
        user: Recipient
        type: NotificationType
        title: Short headline
        message: Body text
        data: Free-form payload for the client (ids to navigate to, etc.)
        is_read: Read flag
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
    )
    type = models.CharField(max_length=30, choices=NotificationType.choices)
    title = models.CharField(max_length=200)
    message = models.TextField()
    data = models.JSONField(default=dict, blank=True)
    is_read = models.BooleanField(default=False, db_index=True)

    class Meta(BaseModel.Meta):
        db_table = "notifications_notification"
        indexes = [
            models.Index(fields=["user", "is_read"], name="notif_user_read_idx"),
            models.Index(fields=["user", "-created_at"], name="notif_user_created_idx"),
        ]

    def __str__(self):
        return f"{self.get_type_display()} for {self.user_id}: {self.title}"
