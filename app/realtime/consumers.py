"""
WebSocket consumer for the realtime change feed.

Consumers:
    RealtimeConsumer: One connection per client, many topic subscriptions

Authentication:
    JWTAuthMiddleware attaches the user to self.scope["user"]; anonymous
    connections are closed with code 4001.

Channel Groups:
    Global topics use a group named after the topic ("posts").
    Per-user topics use "<topic>.<user_id>" so a client only hears about
    rows that concern it.

Message Types (from client):
    - subscribe:   {"type": "subscribe", "topic": "messages"}
    - unsubscribe: {"type": "unsubscribe", "topic": "messages"}
    - ping:        {"type": "ping"}

Message Types (to client):
    - subscribed / unsubscribed: {"type": ..., "topic": ...}
    - change: {"type": "change", "topic", "table", "event_type", "new", "old"}
    - pong
    - error: {"type": "error", "message": ...}
"""

from __future__ import annotations

import logging

from channels.generic.websocket import AsyncJsonWebsocketConsumer
from django.contrib.auth.models import AnonymousUser

from realtime.broadcast import group_name
from realtime.constants import REALTIME_CONFIG

logger = logging.getLogger(__name__)


class RealtimeConsumer(AsyncJsonWebsocketConsumer):
    """
    WebSocket consumer multiplexing topic subscriptions.

    Attributes:
        topics: Topics this connection is subscribed to (one group
            membership per topic)
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.topics: set[str] = set()

    async def connect(self):
        user = self.scope.get("user")

        if not user or isinstance(user, AnonymousUser):
            logger.warning("Rejected unauthenticated realtime connection")
            await self.close(code=REALTIME_CONFIG.CLOSE_UNAUTHENTICATED)
            return

        subprotocols = self.scope.get("subprotocols") or []
        await self.accept(subprotocol="jwt" if "jwt" in subprotocols else None)
        logger.info(f"User {user.id} connected to realtime feed")

    async def disconnect(self, close_code):
        user = self.scope.get("user")
        for topic in list(self.topics):
            await self.channel_layer.group_discard(
                self._group_for(topic), self.channel_name
            )
        self.topics.clear()
        if user and not isinstance(user, AnonymousUser):
            logger.info(f"User {user.id} disconnected from realtime feed ({close_code})")

    async def receive_json(self, content):
        """
        Handle incoming client frames.

        Args:
            content: Parsed JSON frame from client
        """
        message_type = content.get("type") if isinstance(content, dict) else None

        if message_type == "ping":
            await self.send_json({"type": "pong"})
        elif message_type == "subscribe":
            await self._handle_subscribe(content.get("topic"))
        elif message_type == "unsubscribe":
            await self._handle_unsubscribe(content.get("topic"))
        else:
            await self.send_json(
                {
                    "type": "error",
                    "message": f"Unknown message type: {message_type}",
                }
            )

    def _group_for(self, topic: str) -> str:
        return group_name(topic, self.scope["user"].id)

    async def _handle_subscribe(self, topic):
        if topic not in REALTIME_CONFIG.TOPICS:
            await self.send_json({"type": "error", "message": f"Unknown topic: {topic}"})
            return

        if topic not in self.topics:
            await self.channel_layer.group_add(self._group_for(topic), self.channel_name)
            self.topics.add(topic)
            logger.debug(f"User {self.scope['user'].id} subscribed to {topic}")

        await self.send_json({"type": "subscribed", "topic": topic})

    async def _handle_unsubscribe(self, topic):
        if topic not in REALTIME_CONFIG.TOPICS:
            await self.send_json({"type": "error", "message": f"Unknown topic: {topic}"})
            return

        if topic in self.topics:
            await self.channel_layer.group_discard(self._group_for(topic), self.channel_name)
            self.topics.discard(topic)

        await self.send_json({"type": "unsubscribed", "topic": topic})

    async def realtime_change(self, event):
        """
        Handle realtime.change events from the channel layer.

        Sends the change to the WebSocket client.
        """
        await self.send_json(
            {
                "type": "change",
                "topic": event["topic"],
                "table": event["table"],
                "event_type": event["event_type"],
                "new": event["new"],
                "old": event["old"],
            }
        )
