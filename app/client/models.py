"""
Client-side records mirrored from the backend.

Each dataclass is built from the JSON the REST API and the realtime feed
return (``from_dict``). The client never owns these rows; it replaces them
with whatever the backend sends next.

Records:
    Profile: Compact profile embedded in other rows
    Message: A chat message
    Participant: A member of a conversation
    Conversation: A conversation with participants, last message and unread count
    TypingIndicator: Whether a user is typing in a conversation
    ChangeEvent: A realtime change frame
    Attachment: A file to upload with a message or post
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_timestamp(value) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


# =============================================================================
# Messaging records
# =============================================================================


@dataclass
class Profile:
    id: str
    full_name: str = ""
    email: str | None = None
    avatar_url: str | None = None
    is_faculty: bool = False

    @classmethod
    def from_dict(cls, data: dict | None) -> Profile | None:
        if not data:
            return None
        return cls(
            id=str(data["id"]),
            full_name=data.get("full_name") or "",
            email=data.get("email"),
            avatar_url=data.get("avatar_url"),
            is_faculty=bool(data.get("is_faculty", False)),
        )


@dataclass
class Message:
    """
    A delivered message.

    ``id`` and ``created_at`` come from the backend and are authoritative.
    """

    id: str
    conversation_id: str
    sender_id: str
    content: str = ""
    attachment_url: str | None = None
    attachment_type: str | None = None
    reply_to_id: str | None = None
    is_edited: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    sender: Profile | None = None

    @classmethod
    def from_dict(cls, data: dict) -> Message:
        return cls(
            id=str(data["id"]),
            conversation_id=str(data["conversation_id"]),
            sender_id=str(data["sender_id"]),
            content=data.get("content") or "",
            attachment_url=data.get("attachment_url"),
            attachment_type=data.get("attachment_type"),
            reply_to_id=str(data["reply_to_id"]) if data.get("reply_to_id") else None,
            is_edited=bool(data.get("is_edited", False)),
            created_at=parse_timestamp(data.get("created_at")),
            updated_at=parse_timestamp(data.get("updated_at")),
            sender=Profile.from_dict(data.get("sender")),
        )


@dataclass
class Participant:
    user_id: str
    conversation_id: str
    last_read_at: datetime | None = None
    is_active: bool = True
    profile: Profile | None = None

    @classmethod
    def from_dict(cls, data: dict) -> Participant:
        return cls(
            user_id=str(data["user_id"]),
            conversation_id=str(data["conversation_id"]),
            last_read_at=parse_timestamp(data.get("last_read_at")),
            is_active=bool(data.get("is_active", True)),
            profile=Profile.from_dict(data.get("profile")),
        )


@dataclass
class Conversation:
    """
    A conversation as shown in the conversation list.

    ``unread_count`` starts at the backend's count and is then kept up to
    date locally until the next full reload.
    """

    id: str
    name: str | None = None
    is_group: bool = False
    created_by_id: str | None = None
    participants: list[Participant] = field(default_factory=list)
    last_message: Message | None = None
    unread_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: dict) -> Conversation:
        last_message = data.get("last_message")
        return cls(
            id=str(data["id"]),
            name=data.get("name"),
            is_group=bool(data.get("is_group", False)),
            created_by_id=str(data["created_by_id"]) if data.get("created_by_id") else None,
            participants=[Participant.from_dict(p) for p in data.get("participants") or []],
            last_message=Message.from_dict(last_message) if last_message else None,
            unread_count=int(data.get("unread_count") or 0),
            created_at=parse_timestamp(data.get("created_at")),
            updated_at=parse_timestamp(data.get("updated_at")),
        )

    @property
    def last_activity(self) -> datetime:
        candidates = [self.updated_at or EPOCH]
        if self.last_message is not None and self.last_message.created_at is not None:
            candidates.append(self.last_message.created_at)
        return max(candidates)

    def display_name(self, self_id: str | None = None) -> str:
        """Group name, or the other participant's name for a direct chat."""
        if self.is_group:
            return self.name or "Group"
        for participant in self.participants:
            if participant.user_id != self_id and participant.profile is not None:
                return participant.profile.full_name
        return self.name or "Conversation"


@dataclass
class TypingIndicator:
    conversation_id: str
    user_id: str
    is_typing: bool
    full_name: str = ""
    updated_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: dict) -> TypingIndicator:
        return cls(
            conversation_id=str(data["conversation_id"]),
            user_id=str(data["user_id"]),
            is_typing=bool(data.get("is_typing", False)),
            full_name=data.get("full_name") or "",
            updated_at=parse_timestamp(data.get("updated_at")),
        )


# =============================================================================
# Transport records
# =============================================================================


@dataclass
class ChangeEvent:
    """
    A row change pushed on the realtime feed.

    ``new`` is empty for DELETE, ``old`` is empty unless the backend sent
    the previous row.
    """

    topic: str
    table: str
    event_type: str
    new: dict[str, Any] = field(default_factory=dict)
    old: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, frame: dict) -> ChangeEvent:
        return cls(
            topic=frame["topic"],
            table=frame.get("table") or frame["topic"],
            event_type=frame["event_type"],
            new=frame.get("new") or {},
            old=frame.get("old") or {},
        )


@dataclass
class Attachment:
    """A file picked for upload."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"
