"""
Messaging store.

Ties the conversation list, the message windows, typing indicators and
the composers together and keeps them in sync with the realtime feed:

- "messages" INSERT: prepended to the window and recorded as the
  conversation's last message (unread +1 when from someone else). A push
  for a conversation the list does not know triggers a full reload.
- "typing_indicators" INSERT/UPDATE: merged per user.

Usage:
    store = MessagingStore(api, realtime, self_id=user_id)
    await store.start()
    await store.open_conversation(conversation_id)
    composer = store.composer(conversation_id)
    await composer.type("Hello")
    await composer.send()
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from client.base import BaseStore
from client.composer import MessageComposer
from client.conversations import ConversationListCache
from client.exceptions import CampusAPIError
from client.messages import MessageWindowCache
from client.models import Message, TypingIndicator
from client.typing_indicators import LocalTypingState, TypingIndicatorMerge

if TYPE_CHECKING:
    from client.models import ChangeEvent, Conversation
    from client.protocols import MessagingBackend, RealtimeChannels


class MessagingStore(BaseStore):
    """
    Client-side messaging state.

    Attributes:
        conversations: ConversationListCache
        windows: MessageWindowCache
        typing: TypingIndicatorMerge of other users' typing
    """

    channel_prefix = "messaging"

    def __init__(
        self,
        backend: MessagingBackend,
        realtime: RealtimeChannels,
        self_id: str,
        page_size: int = 50,
        typing_timeout: float = 3.0,
    ):
        super().__init__(backend, realtime, self_id)
        self.typing_timeout = typing_timeout
        self.conversations = ConversationListCache(backend)
        self.windows = MessageWindowCache(backend, page_size=page_size)
        self.typing = TypingIndicatorMerge()
        self._composers: dict[str, MessageComposer] = {}

    async def start(self) -> None:
        await self.listen("messages", self._on_message)
        await self.listen("typing_indicators", self._on_typing)
        await self.refresh()

    async def refresh(self) -> None:
        """Full reload of the conversation list."""
        try:
            await self.conversations.load()
        except CampusAPIError as e:
            self.fail("loading conversations", e)
        finally:
            self.loading = False

    # =========================================================================
    # Push handlers
    # =========================================================================

    async def _on_message(self, event: ChangeEvent) -> None:
        if event.event_type != "INSERT":
            return
        message = Message.from_dict(event.new)
        self.get_logger().debug(f"Pushed message {message.id} in {message.conversation_id}")

        if not self.windows.prepend(message):
            return
        if not self.conversations.apply_new_message(message, self.self_id):
            await self.refresh()

    async def _on_typing(self, event: ChangeEvent) -> None:
        if event.event_type not in ("INSERT", "UPDATE"):
            return
        self.typing.apply(TypingIndicator.from_dict(event.new))

    # =========================================================================
    # Operations
    # =========================================================================

    async def open_conversation(self, conversation_id: str) -> list[Message]:
        """Load the newest page of a conversation and mark it read."""
        try:
            page = await self.windows.load(conversation_id)
        except CampusAPIError as e:
            self.fail("loading messages", e)
            page = []
        await self.mark_as_read(conversation_id)
        return page

    async def load_more(self, conversation_id: str) -> list[Message]:
        try:
            return await self.windows.load_more(conversation_id)
        except CampusAPIError as e:
            self.fail("loading messages", e)
            return []

    async def mark_as_read(self, conversation_id: str) -> bool:
        try:
            await self.backend.mark_read(conversation_id)
        except CampusAPIError as e:
            self.fail("marking messages as read", e)
            return False
        self.conversations.reset_unread(conversation_id)
        return True

    async def create_direct_conversation(self, user_id: str) -> Conversation | None:
        """Get or create the direct conversation with ``user_id``, then reload the list."""
        try:
            conversation = await self.backend.create_direct_conversation(user_id)
        except CampusAPIError as e:
            self.fail("creating conversation", e)
            return None
        await self.refresh()
        return self.conversations.get(conversation.id) or conversation

    def composer(self, conversation_id: str) -> MessageComposer:
        if conversation_id not in self._composers:
            self._composers[conversation_id] = MessageComposer(
                self.backend,
                conversation_id,
                self.windows,
                self.conversations,
                typing=LocalTypingState(self.backend, conversation_id, self.typing_timeout),
                self_id=self.self_id,
            )
        return self._composers[conversation_id]

    def messages(self, conversation_id: str) -> list[Message]:
        return self.windows.messages(conversation_id)

    def typing_text(self, conversation_id: str) -> str | None:
        return self.typing.describe(conversation_id, exclude=self.self_id)

    def total_unread(self) -> int:
        return self.conversations.total_unread()

    async def close(self) -> None:
        for composer in self._composers.values():
            if composer.typing is not None:
                composer.typing.cancel()
        await super().close()
