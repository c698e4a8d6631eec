"""
Tests for ConversationListCache.
"""

import asyncio

from client.conversations import ConversationListCache
from client.tests.fakes import OTHER_ID, SELF_ID, at, make_conversation, make_message


def loaded_cache(backend, *conversations):
    backend.conversations = {c.id: c for c in conversations}
    cache = ConversationListCache(backend)
    asyncio.run(cache.load())
    return cache


class TestLoad:
    def test_orders_by_last_activity(self, backend):
        quiet = make_conversation("c-quiet", minutes=5)
        busy = make_conversation("c-busy", minutes=0)
        busy.last_message = make_message("m1", "c-busy", minutes=10)

        cache = loaded_cache(backend, quiet, busy)

        assert [c.id for c in cache.conversations] == ["c-busy", "c-quiet"]
        assert cache.loaded is True

    def test_reload_replaces_everything(self, backend):
        cache = loaded_cache(backend, make_conversation("c1"))
        backend.conversations = {"c2": make_conversation("c2")}

        asyncio.run(cache.load())

        assert "c1" not in cache
        assert "c2" in cache
        assert len(cache) == 1


class TestApplyNewMessage:
    def test_message_from_other_user_counts_as_unread(self, backend):
        cache = loaded_cache(backend, make_conversation("c1", unread=2))
        message = make_message("m1", "c1", sender_id=OTHER_ID, minutes=30)

        assert cache.apply_new_message(message, SELF_ID) is True

        conversation = cache.get("c1")
        assert conversation.unread_count == 3
        assert conversation.last_message is message
        assert conversation.updated_at == at(30)

    def test_own_message_does_not_count(self, backend):
        cache = loaded_cache(backend, make_conversation("c1"))

        cache.apply_new_message(make_message("m1", "c1", sender_id=SELF_ID), SELF_ID)

        assert cache.get("c1").unread_count == 0

    def test_same_message_twice_counts_once(self, backend):
        """
        A message already recorded as the last one is not counted again.

        Why it matters: A push can repeat a row the client already has.
        """
        cache = loaded_cache(backend, make_conversation("c1"))
        message = make_message("m1", "c1")

        cache.apply_new_message(message, SELF_ID)
        cache.apply_new_message(message, SELF_ID)

        assert cache.get("c1").unread_count == 1

    def test_older_message_does_not_replace_last(self, backend):
        """
        A message older than the current last message leaves the preview alone.

        Why it matters: Pushes and send responses can land out of order; the
        list must keep showing the newest message.
        """
        cache = loaded_cache(backend, make_conversation("c1"))
        newest = make_message("m2", "c1", sender_id=OTHER_ID, minutes=61)
        cache.apply_new_message(newest, SELF_ID)

        cache.apply_new_message(make_message("m1", "c1", sender_id=OTHER_ID, minutes=60), SELF_ID)

        conversation = cache.get("c1")
        assert conversation.last_message is newest
        assert conversation.updated_at == at(61)
        assert conversation.unread_count == 2

    def test_unknown_conversation(self, backend):
        cache = loaded_cache(backend, make_conversation("c1"))

        assert cache.apply_new_message(make_message("m1", "c-missing"), SELF_ID) is False

    def test_new_message_moves_conversation_to_top(self, backend):
        cache = loaded_cache(
            backend, make_conversation("c1", minutes=0), make_conversation("c2", minutes=5)
        )

        cache.apply_new_message(make_message("m1", "c1", minutes=10), SELF_ID)

        assert [c.id for c in cache.conversations] == ["c1", "c2"]


class TestUnreadTotals:
    def test_reset_and_total(self, backend):
        cache = loaded_cache(
            backend,
            make_conversation("c1", unread=2),
            make_conversation("c2", unread=3),
        )

        cache.reset_unread("c1")
        cache.reset_unread("c-missing")

        assert cache.get("c1").unread_count == 0
        assert cache.total_unread() == 3
