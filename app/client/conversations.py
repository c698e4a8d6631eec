"""
Conversation list cache.

Holds the current user's conversations keyed by id. ``load()`` is a full
reload from the backend (participants, last message and unread count come
back with each conversation); between reloads pushed messages update the
last message and unread count in place.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from client.models import Conversation, Message
    from client.protocols import MessagingBackend

logger = logging.getLogger(__name__)


class ConversationListCache:
    def __init__(self, backend: MessagingBackend):
        self.backend = backend
        self._conversations: dict[str, Conversation] = {}
        self.loaded = False

    async def load(self) -> list[Conversation]:
        conversations = await self.backend.list_conversations()
        self._conversations = {c.id: c for c in conversations}
        self.loaded = True
        logger.debug(f"Loaded {len(conversations)} conversations")
        return self.conversations

    @property
    def conversations(self) -> list[Conversation]:
        """Most recently active first."""
        return sorted(self._conversations.values(), key=lambda c: c.last_activity, reverse=True)

    def get(self, conversation_id: str) -> Conversation | None:
        return self._conversations.get(str(conversation_id))

    def __contains__(self, conversation_id) -> bool:
        return str(conversation_id) in self._conversations

    def __len__(self) -> int:
        return len(self._conversations)

    def upsert(self, conversation: Conversation) -> None:
        self._conversations[conversation.id] = conversation

    def apply_new_message(self, message: Message, self_id: str | None) -> bool:
        """
        Record ``message`` as its conversation's latest.

        Messages from other users increment the unread count; a message
        already recorded as the last one is not counted twice. A message
        older than the current last message is counted but does not
        replace it.

        Returns:
            False when the conversation is not in the cache
        """
        conversation = self._conversations.get(message.conversation_id)
        if conversation is None:
            return False
        last = conversation.last_message
        if last is not None and last.id == message.id:
            return True

        if message.sender_id != self_id:
            conversation.unread_count += 1
        if (
            last is not None
            and last.created_at is not None
            and message.created_at is not None
            and message.created_at < last.created_at
        ):
            return True

        conversation.last_message = message
        if message.created_at is not None:
            conversation.updated_at = message.created_at
        return True

    def reset_unread(self, conversation_id: str) -> None:
        conversation = self.get(conversation_id)
        if conversation is not None:
            conversation.unread_count = 0

    def total_unread(self) -> int:
        return sum(c.unread_count for c in self._conversations.values())
