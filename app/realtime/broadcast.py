"""
Publishing row changes to realtime subscribers.

Services call publish_change inside their transaction; delivery is
deferred with transaction.on_commit so that subscribers never hear about
rows that were rolled back. Outside a transaction the change is sent
immediately.

Usage:
    from realtime.broadcast import publish_change

    publish_change(
        "messages",
        table="messages",
        event_type=REALTIME_CONFIG.INSERT,
        new=MessageSerializer(message).data,
        user_ids=[p.user_id for p in participants],
    )
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.core.serializers.json import DjangoJSONEncoder
from django.db import transaction

from realtime.constants import REALTIME_CONFIG

if TYPE_CHECKING:
    from collections.abc import Iterable
    from typing import Any

logger = logging.getLogger(__name__)


def group_name(topic: str, user_id=None) -> str:
    """
    Channel layer group for a topic.

    Global topics have one group; per-user topics have one group per user.
    """
    if topic in REALTIME_CONFIG.GLOBAL_TOPICS:
        return topic
    if user_id is None:
        raise ValueError(f"Topic '{topic}' requires a user id")
    return f"{topic}.{user_id}"


def _plain(data: dict[str, Any] | None) -> dict[str, Any]:
    # Serializer output may hold UUIDs, datetimes and ReturnDicts
    return json.loads(json.dumps(data or {}, cls=DjangoJSONEncoder))


def _send(groups: list[str], event: dict[str, Any]) -> None:
    channel_layer = get_channel_layer()
    if channel_layer is None:
        logger.warning("No channel layer configured; dropping realtime change")
        return
    for group in groups:
        async_to_sync(channel_layer.group_send)(group, event)
    logger.debug(
        f"Published {event['event_type']} on {event['topic']} to {len(groups)} group(s)"
    )


def publish_change(
    topic: str,
    table: str,
    event_type: str,
    new: dict[str, Any] | None = None,
    old: dict[str, Any] | None = None,
    user_ids: Iterable | None = None,
) -> None:
    """
    Queue a change event for delivery after the current transaction commits.

    Args:
        topic: One of REALTIME_CONFIG.TOPICS
        table: Name of the changed table (as seen by clients)
        event_type: INSERT, UPDATE or DELETE
        new: Row after the change
        old: Row before the change (UPDATE/DELETE)
        user_ids: Recipients for per-user topics; ignored for global topics
    """
    if topic not in REALTIME_CONFIG.TOPICS:
        raise ValueError(f"Unknown realtime topic '{topic}'")

    if topic in REALTIME_CONFIG.GLOBAL_TOPICS:
        groups = [group_name(topic)]
    else:
        groups = [group_name(topic, user_id) for user_id in dict.fromkeys(user_ids or [])]
    if not groups:
        return

    event = {
        "type": "realtime.change",
        "topic": topic,
        "table": table,
        "event_type": event_type,
        "new": _plain(new),
        "old": _plain(old),
    }
    transaction.on_commit(lambda: _send(groups, event))
