"""
Base class for client stores.

A store owns some client-side state, keeps it in sync through realtime
listeners and catches backend errors at the call site.

Usage:
    class FeedStore(BaseStore):
        channel_prefix = "feed"

        async def start(self):
            await self.listen("posts", self._on_post)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from client.exceptions import CampusAPIError
    from client.protocols import ChangeCallback, RealtimeChannels


class BaseStore:
    """
    Common store plumbing.

    Attributes:
        loading: True until the first load finished
        last_error: Message of the last failed backend call, or None
    """

    channel_prefix = "store"

    def __init__(self, backend, realtime: RealtimeChannels, self_id: str | None = None):
        self.backend = backend
        self.realtime = realtime
        self.self_id = str(self_id) if self_id is not None else None
        self.loading = True
        self.last_error: str | None = None
        self._channels: list[str] = []

    @classmethod
    def get_logger(cls) -> logging.Logger:
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    def channel_name(self, topic: str) -> str:
        return f"{self.channel_prefix}:{topic}:{self.self_id or 'anonymous'}"

    async def listen(self, topic: str, callback: ChangeCallback) -> None:
        name = self.channel_name(topic)
        await self.realtime.channel(name, topic, callback)
        if name not in self._channels:
            self._channels.append(name)

    def fail(self, action: str, error: CampusAPIError) -> str:
        """Log a failed call and remember its message."""
        self.get_logger().error(f"Error {action}: {error}")
        self.last_error = str(error)
        return self.last_error

    async def close(self) -> None:
        """Remove every realtime listener of this store."""
        for name in self._channels:
            await self.realtime.remove_channel(name)
        self._channels.clear()
