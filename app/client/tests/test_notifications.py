"""
Tests for NotificationsStore.
"""

import asyncio

import pytest

from client.notifications import NotificationsStore
from client.tests.fakes import OTHER_ID, SELF_ID, change_frame


@pytest.fixture
def inbox(backend, realtime):
    backend.notifications = [
        {"id": "n2", "type": "message", "title": "New message", "is_read": False},
        {"id": "n1", "type": "friend_request", "title": "Friend request", "is_read": True},
    ]
    store = NotificationsStore(backend, realtime, SELF_ID)
    asyncio.run(store.start())
    return store


class TestNotificationsStore:
    def test_load_counts_unread(self, inbox, realtime):
        assert realtime.topics() == {"notifications"}
        assert inbox.unread_count == 1
        assert inbox.loading is False

    def test_mark_unread_as_read(self, inbox):
        asyncio.run(inbox.mark_as_read("n2"))

        assert inbox.unread_count == 0

    def test_mark_read_notification_again_keeps_count(self, inbox):
        """
        Marking an already read notification leaves the count alone.

        Why it matters: The badge would otherwise go down for nothing.
        """
        asyncio.run(inbox.mark_as_read("n1"))

        assert inbox.unread_count == 1

    def test_mark_all(self, inbox, backend):
        asyncio.run(inbox.mark_all_as_read())

        assert inbox.unread_count == 0
        assert all(n["is_read"] for n in inbox.notifications)

    def test_failed_mark_all_keeps_state(self, inbox, backend):
        backend.fail("mark_all_notifications_read")

        assert asyncio.run(inbox.mark_all_as_read()) is False
        assert inbox.unread_count == 1

    def test_push_prepends_once(self, inbox, realtime):
        row = {"id": "n3", "type": "post_like", "title": "New like", "is_read": False}

        async def scenario():
            await realtime.dispatch(change_frame("notifications", "INSERT", row))
            await realtime.dispatch(change_frame("notifications", "INSERT", row))

        asyncio.run(scenario())

        assert [n["id"] for n in inbox.notifications] == ["n3", "n2", "n1"]
        assert inbox.unread_count == 2

    def test_create(self, inbox, backend):
        assert asyncio.run(inbox.create(OTHER_ID, "message", "Hello", "From Alice")) is True
        assert backend.called("create_notification") == [
            (OTHER_ID, "message", "Hello", "From Alice", None)
        ]
