"""
Realtime change-feed client.

One WebSocket to ``/ws/realtime/`` carries every topic. Stores register
named listeners with ``channel(name, topic, callback)``; the socket
subscribes to a topic when its first listener appears and unsubscribes
when the last one goes away.

Frames (see realtime.consumers on the backend):
    out: {"type": "subscribe" | "unsubscribe", "topic": ...}, {"type": "ping"}
    in:  {"type": "change", "topic", "table", "event_type", "new", "old"},
         subscribed / unsubscribed / pong / error

There is no reconnect or resume; a closed socket stays closed until
``connect()`` is called again, which re-subscribes every listened topic.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging

import aiohttp

from client.config import ClientConfig
from client.models import ChangeEvent
from client.protocols import ChangeCallback

logger = logging.getLogger(__name__)


class RealtimeClient:
    """
    Named listeners multiplexed over one WebSocket.

    Attributes:
        listeners: channel name -> (topic, callback)
    """

    def __init__(
        self,
        ws_url: str | None = None,
        token: str | None = None,
        session: aiohttp.ClientSession | None = None,
    ):
        self.ws_url = ws_url
        self.token = token
        self.listeners: dict[str, tuple[str, ChangeCallback]] = {}
        self._session = session
        self._owns_session = session is None
        self._ws = None
        self._reader: asyncio.Task | None = None

    @classmethod
    def from_config(cls, config: ClientConfig, session=None) -> RealtimeClient:
        return cls(config.ws_url, config.token, session=session)

    @property
    def connected(self) -> bool:
        return self._ws is not None and not self._ws.closed

    def topics(self) -> set[str]:
        return {topic for topic, _ in self.listeners.values()}

    def _has_listener(self, topic: str) -> bool:
        return any(listened == topic for listened, _ in self.listeners.values())

    # =========================================================================
    # Connection
    # =========================================================================

    async def connect(self) -> None:
        """Open the socket, start reading and subscribe every listened topic."""
        if self._session is None:
            self._session = aiohttp.ClientSession()
        protocols = ("jwt", self.token) if self.token else ()
        self._ws = await self._session.ws_connect(self.ws_url, protocols=protocols)
        self._reader = asyncio.create_task(self._read_loop())
        logger.info(f"Connected to {self.ws_url}")

        for topic in sorted(self.topics()):
            await self._send({"type": "subscribe", "topic": topic})

    async def close(self) -> None:
        """Drop every listener and close the socket."""
        self.listeners.clear()
        if self._reader is not None:
            self._reader.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._reader
            self._reader = None
        if self._ws is not None:
            await self._ws.close()
            self._ws = None
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None

    async def _send(self, frame: dict) -> None:
        if not self.connected:
            logger.debug(f"Not connected, deferring {frame}")
            return
        await self._ws.send_json(frame)

    async def _read_loop(self) -> None:
        async for msg in self._ws:
            if msg.type == aiohttp.WSMsgType.TEXT:
                try:
                    frame = msg.json()
                except ValueError:
                    logger.error(f"Ignoring non-JSON realtime frame: {msg.data!r}")
                    continue
                await self.dispatch(frame)
            elif msg.type == aiohttp.WSMsgType.ERROR:
                logger.error(f"Realtime socket error: {self._ws.exception()}")
                break
        logger.info("Realtime socket closed")

    async def ping(self) -> None:
        await self._send({"type": "ping"})

    # =========================================================================
    # Channels
    # =========================================================================

    async def channel(self, name: str, topic: str, callback: ChangeCallback) -> None:
        """
        Register ``callback`` for changes on ``topic`` under ``name``.

        An existing channel with the same name is removed first.
        """
        if name in self.listeners:
            await self.remove_channel(name)

        first = not self._has_listener(topic)
        self.listeners[name] = (topic, callback)
        if first:
            await self._send({"type": "subscribe", "topic": topic})

    async def remove_channel(self, name: str) -> None:
        entry = self.listeners.pop(name, None)
        if entry is None:
            return
        topic, _ = entry
        if not self._has_listener(topic):
            await self._send({"type": "unsubscribe", "topic": topic})

    async def dispatch(self, frame: dict) -> None:
        """
        Route one incoming frame to the listeners of its topic.

        A listener that raises is logged and skipped; the remaining
        listeners and later frames are still delivered.
        """
        frame_type = frame.get("type")
        if frame_type == "change":
            try:
                event = ChangeEvent.from_dict(frame)
            except KeyError as e:
                logger.error(f"Malformed change frame, missing {e}: {frame}")
                return
            for name, (topic, callback) in list(self.listeners.items()):
                if topic != event.topic:
                    continue
                try:
                    await callback(event)
                except Exception:
                    logger.exception(f"Listener {name} failed on {event.topic} {event.event_type}")
        elif frame_type == "error":
            logger.warning(f"Realtime error: {frame.get('message')}")
        else:
            logger.debug(f"Realtime frame: {frame_type}")
