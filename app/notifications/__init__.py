"""
Notifications app for the in-app inbox.

This app provides:
- Notification model (friend requests, likes, comments, announcements, ...)
- NotificationService for creating notifications and read bookkeeping
- Celery task for creating notifications outside the request
- REST API for listing and managing notifications

New notifications are pushed to their recipient on the "notifications"
realtime topic.

Usage:
    from notifications.services import NotificationService

    result = NotificationService.create_notification(
        user=receiver,
        type="friend_request",
        title="New friend request",
        message=f"{sender_name} sent you a friend request",
        data={"request_id": str(friend_request.id)},
    )
"""
