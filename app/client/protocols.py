"""
Protocol definitions for the client's collaborators.

Stores depend on these protocols rather than on CampusAPI and
RealtimeClient directly, so tests can drive them with in-memory fakes.

Available Protocols:
    MessagingBackend: Conversations, messages, read tracking and typing
    FeedBackend: Feed, posts, likes and comments
    FriendsBackend: Friend requests and friendships
    NotificationsBackend: Notification inbox
    RealtimeChannels: Named listeners on realtime topics

Usage:
    from client.protocols import MessagingBackend

    async def unread_total(backend: MessagingBackend) -> int:
        conversations = await backend.list_conversations()
        return sum(c.unread_count for c in conversations)
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from client.models import (
        Attachment,
        ChangeEvent,
        Conversation,
        Message,
        TypingIndicator,
    )

ChangeCallback = Callable[["ChangeEvent"], Awaitable[None]]


@runtime_checkable
class MessagingBackend(Protocol):
    async def list_conversations(self) -> list[Conversation]: ...

    async def get_messages(
        self, conversation_id: str, offset: int = 0, limit: int = 50
    ) -> list[Message]: ...

    async def send_message(
        self,
        conversation_id: str,
        content: str,
        attachment: Attachment | None = None,
        reply_to_id: str | None = None,
    ) -> Message: ...

    async def create_direct_conversation(self, user_id: str) -> Conversation: ...

    async def mark_read(self, conversation_id: str) -> None: ...

    async def set_typing(self, conversation_id: str, is_typing: bool) -> TypingIndicator: ...


@runtime_checkable
class FeedBackend(Protocol):
    async def get_feed(self, offset: int = 0, limit: int = 20) -> list[dict]: ...

    async def create_post(
        self, content: str, image: Attachment | None = None, is_announcement: bool = False
    ) -> dict: ...

    async def like_post(self, post_id: str) -> dict: ...

    async def unlike_post(self, post_id: str) -> dict: ...

    async def add_comment(self, post_id: str, content: str) -> dict: ...


@runtime_checkable
class FriendsBackend(Protocol):
    async def list_friends(self) -> list[dict]: ...

    async def list_friend_requests(self) -> list[dict]: ...

    async def list_sent_requests(self) -> list[dict]: ...

    async def send_friend_request(self, receiver_id: str) -> dict: ...

    async def accept_friend_request(self, request_id: str) -> dict: ...

    async def reject_friend_request(self, request_id: str) -> dict: ...

    async def remove_friend(self, friend_id: str) -> None: ...


@runtime_checkable
class NotificationsBackend(Protocol):
    async def list_notifications(self) -> list[dict]: ...

    async def mark_notification_read(self, notification_id: str) -> dict: ...

    async def mark_all_notifications_read(self) -> int: ...

    async def create_notification(
        self, user_id: str, type: str, title: str, message: str, data: dict | None = None
    ) -> dict: ...


@runtime_checkable
class RealtimeChannels(Protocol):
    """
    Named listeners on realtime topics.

    Registering a name that already exists replaces the old listener.
    """

    async def channel(self, name: str, topic: str, callback: ChangeCallback) -> None: ...

    async def remove_channel(self, name: str) -> None: ...
