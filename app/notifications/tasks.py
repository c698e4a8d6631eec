"""
Celery tasks for notifications.

Tasks:
    create_notification_task: Create a notification outside the request

Usage:
    from notifications.tasks import create_notification_task

    create_notification_task.delay(
        str(post.author_id), "post_like", "New like", f"{name} liked your post",
        {"post_id": str(post.id)},
    )
"""

from __future__ import annotations

import logging

from celery import shared_task
from django.db import OperationalError

from notifications.services import NotificationService

logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    autoretry_for=(OperationalError,),
    retry_backoff=True,
    retry_kwargs={"max_retries": 3},
)
def create_notification_task(
    self,
    user_id: str,
    type: str,
    title: str,
    message: str,
    data: dict | None = None,
) -> str | None:
    """
    Create a notification for ``user_id``.

    Database outages are retried with backoff; business failures (unknown
    user or type) are logged and not retried.

    Returns:
        The notification id, or None if it was not created
    """
    result = NotificationService.create_for_user_id(user_id, type, title, message, data)
    if not result.success:
        logger.warning(
            f"Notification for user {user_id} not created: {result.error} ({result.error_code})"
        )
        return None
    return str(result.data.id)
