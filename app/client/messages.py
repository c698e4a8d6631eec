"""
Per-conversation message windows.

Each window is newest first. Loading offset 0 replaces the window, larger
offsets append older messages; pushed messages are prepended. There is no
gap detection: while subscribed, pushes are assumed to arrive in order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from client.models import Message
    from client.protocols import MessagingBackend


class MessageWindowCache:
    def __init__(self, backend: MessagingBackend, page_size: int = 50):
        self.backend = backend
        self.page_size = page_size
        self._windows: dict[str, list[Message]] = {}
        self._has_more: dict[str, bool] = {}

    async def load(
        self, conversation_id: str, offset: int = 0, limit: int | None = None
    ) -> list[Message]:
        """
        Fetch one page and merge it into the window.

        Returns:
            The fetched page
        """
        limit = limit or self.page_size
        page = await self.backend.get_messages(conversation_id, offset=offset, limit=limit)

        if offset == 0:
            self._windows[conversation_id] = list(page)
        else:
            window = self._windows.setdefault(conversation_id, [])
            known = {m.id for m in window}
            window.extend(m for m in page if m.id not in known)
        self._has_more[conversation_id] = len(page) >= limit
        return page

    async def load_more(self, conversation_id: str) -> list[Message]:
        return await self.load(conversation_id, offset=len(self.messages(conversation_id)))

    def prepend(self, message: Message) -> bool:
        """
        Put a new message at the top of its window.

        Returns:
            False when the message is already in the window
        """
        window = self._windows.setdefault(message.conversation_id, [])
        if any(m.id == message.id for m in window):
            return False
        window.insert(0, message)
        return True

    def messages(self, conversation_id: str) -> list[Message]:
        return list(self._windows.get(conversation_id, []))

    def has_more(self, conversation_id: str) -> bool:
        return self._has_more.get(conversation_id, True)

    def clear(self, conversation_id: str) -> None:
        self._windows.pop(conversation_id, None)
        self._has_more.pop(conversation_id, None)
