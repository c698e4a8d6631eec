"""
Typing indicators.

TypingIndicatorMerge keeps, per conversation, the users currently typing,
fed by upsert-style pushes (last write wins per user). LocalTypingState
drives the current user's own flag: every keystroke sends "typing" and
restarts a timer that sends "not typing" once the user pauses.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from client.exceptions import CampusAPIError

if TYPE_CHECKING:
    from client.models import TypingIndicator
    from client.protocols import MessagingBackend

logger = logging.getLogger(__name__)


class TypingIndicatorMerge:
    def __init__(self):
        self._typers: dict[str, dict[str, TypingIndicator]] = {}

    def apply(self, indicator: TypingIndicator) -> None:
        """Upsert a typing user, or drop them when they stopped."""
        typers = self._typers.setdefault(indicator.conversation_id, {})
        typers.pop(indicator.user_id, None)
        if indicator.is_typing:
            typers[indicator.user_id] = indicator

    def typers(self, conversation_id: str, exclude: str | None = None) -> list[TypingIndicator]:
        return [
            indicator
            for user_id, indicator in self._typers.get(conversation_id, {}).items()
            if user_id != exclude
        ]

    def describe(self, conversation_id: str, exclude: str | None = None) -> str | None:
        """``"Alice is typing..."``, ``"3 people are typing..."`` or None."""
        typers = self.typers(conversation_id, exclude=exclude)
        if not typers:
            return None
        if len(typers) == 1:
            return f"{typers[0].full_name} is typing..."
        return f"{len(typers)} people are typing..."

    def clear(self, conversation_id: str) -> None:
        self._typers.pop(conversation_id, None)


class LocalTypingState:
    """
    The current user's typing flag in one conversation.

    Attributes:
        is_typing: Last flag sent
        timeout: Seconds without a keystroke before "not typing" is sent
    """

    def __init__(self, backend: MessagingBackend, conversation_id: str, timeout: float = 3.0):
        self.backend = backend
        self.conversation_id = conversation_id
        self.timeout = timeout
        self.is_typing = False
        self._timer: asyncio.Task | None = None

    async def keystroke(self) -> None:
        self.cancel()
        await self._send(True)
        self._timer = asyncio.create_task(self._expire())

    async def stop(self) -> None:
        self.cancel()
        await self._send(False)

    def cancel(self) -> None:
        """Cancel the pending timer without sending anything."""
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    async def _expire(self) -> None:
        await asyncio.sleep(self.timeout)
        self._timer = None
        await self._send(False)

    async def _send(self, is_typing: bool) -> None:
        self.is_typing = is_typing
        try:
            await self.backend.set_typing(self.conversation_id, is_typing)
        except CampusAPIError as e:
            logger.error(f"Error setting typing indicator: {e}")
