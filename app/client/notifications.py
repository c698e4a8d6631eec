"""
Notifications store.

The inbox is loaded once; pushed notifications are prepended and raise
the unread count.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from client.base import BaseStore
from client.exceptions import CampusAPIError

if TYPE_CHECKING:
    from client.models import ChangeEvent


class NotificationsStore(BaseStore):
    channel_prefix = "notifications"

    def __init__(self, backend, realtime, self_id):
        super().__init__(backend, realtime, self_id)
        self.notifications: list[dict] = []
        self.unread_count = 0

    async def start(self) -> None:
        await self.listen("notifications", self._on_notification)
        await self.load()

    async def load(self) -> None:
        try:
            self.notifications = list(await self.backend.list_notifications())
        except CampusAPIError as e:
            self.fail("loading notifications", e)
        else:
            self.unread_count = sum(1 for n in self.notifications if not n.get("is_read"))
        finally:
            self.loading = False

    async def mark_as_read(self, notification_id: str) -> bool:
        try:
            await self.backend.mark_notification_read(notification_id)
        except CampusAPIError as e:
            self.fail("marking notification as read", e)
            return False
        for notification in self.notifications:
            if str(notification["id"]) == str(notification_id) and not notification["is_read"]:
                notification["is_read"] = True
                self.unread_count = max(0, self.unread_count - 1)
        return True

    async def mark_all_as_read(self) -> bool:
        try:
            await self.backend.mark_all_notifications_read()
        except CampusAPIError as e:
            self.fail("marking notifications as read", e)
            return False
        for notification in self.notifications:
            notification["is_read"] = True
        self.unread_count = 0
        return True

    async def create(
        self, user_id: str, type: str, title: str, message: str, data: dict | None = None
    ) -> bool:
        """Raise a notification for another user."""
        try:
            await self.backend.create_notification(user_id, type, title, message, data=data)
        except CampusAPIError as e:
            self.fail("creating notification", e)
            return False
        return True

    async def _on_notification(self, event: ChangeEvent) -> None:
        if event.event_type != "INSERT":
            return
        if any(str(n["id"]) == str(event.new["id"]) for n in self.notifications):
            return
        self.notifications.insert(0, event.new)
        if not event.new.get("is_read"):
            self.unread_count += 1
