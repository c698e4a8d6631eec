"""
Tests for FriendsStore.
"""

import asyncio

import pytest

from client.exceptions import (
    ALREADY_FRIENDS_MESSAGE,
    ALREADY_SENT_MESSAGE,
    SEND_REQUEST_FAILED_MESSAGE,
    CampusAPIError,
)
from client.friends import FriendsStore
from client.tests.fakes import OTHER_ID, SELF_ID, THIRD_ID, change_frame


@pytest.fixture
def friends(backend, realtime):
    backend.requests = [
        {"id": "fr-in", "sender_id": OTHER_ID, "receiver_id": SELF_ID, "status": "pending"}
    ]
    store = FriendsStore(backend, realtime, SELF_ID)
    asyncio.run(store.start())
    return store


class TestLoading:
    def test_start_loads_everything(self, friends, realtime):
        assert realtime.topics() == {"friend_requests", "friendships"}
        assert friends.loading is False
        assert friends.friends == []
        assert [r["id"] for r in friends.requests] == ["fr-in"]
        assert friends.sent_requests == []


class TestSendRequest:
    def test_success_reloads_sent(self, friends):
        assert asyncio.run(friends.send_request(THIRD_ID)) is None
        assert friends.has_pending_request_sent(THIRD_ID)
        assert friends.has_pending_request(THIRD_ID)

    @pytest.mark.parametrize(
        "backend_message,expected",
        [
            ("Friend request already pending", ALREADY_SENT_MESSAGE),
            ('duplicate key value violates unique constraint "friend_requests"', ALREADY_SENT_MESSAGE),
            ("You are already friends", ALREADY_FRIENDS_MESSAGE),
            ("Database error", SEND_REQUEST_FAILED_MESSAGE),
        ],
    )
    def test_failure_messages(self, friends, backend, backend_message, expected):
        backend.fail("send_friend_request", CampusAPIError(backend_message, status=409))

        assert asyncio.run(friends.send_request(THIRD_ID)) == expected
        assert friends.last_error == backend_message


class TestTransitions:
    def test_accept(self, friends):
        assert friends.pending_request_id(OTHER_ID) == "fr-in"

        assert asyncio.run(friends.accept("fr-in")) is True

        assert friends.requests == []
        assert friends.is_friend(OTHER_ID)
        assert friends.pending_request_id(OTHER_ID) is None

    def test_reject(self, friends):
        assert asyncio.run(friends.reject("fr-in")) is True

        assert friends.requests == []
        assert not friends.is_friend(OTHER_ID)

    def test_failed_accept_keeps_request(self, friends, backend):
        backend.fail("accept_friend_request")

        assert asyncio.run(friends.accept("fr-in")) is False
        assert friends.has_pending_request_received(OTHER_ID)

    def test_remove(self, friends, backend):
        backend.friends = [{"user_id": SELF_ID, "friend_id": THIRD_ID}]
        asyncio.run(friends.load_friends())

        assert asyncio.run(friends.remove(THIRD_ID)) is True
        assert not friends.is_friend(THIRD_ID)
        assert backend.called("remove_friend") == [(THIRD_ID,)]


class TestPushes:
    def test_request_insert_reloads_requests(self, friends, realtime, backend):
        backend.requests.append(
            {"id": "fr-2", "sender_id": THIRD_ID, "receiver_id": SELF_ID, "status": "pending"}
        )

        asyncio.run(realtime.dispatch(change_frame("friend_requests", "INSERT", {"id": "fr-2"})))

        assert friends.pending_request_id(THIRD_ID) == "fr-2"
        assert len(backend.called("list_friends")) == 1

    def test_request_update_reloads_friends(self, friends, realtime, backend):
        backend.friends = [{"user_id": SELF_ID, "friend_id": THIRD_ID}]

        asyncio.run(
            realtime.dispatch(
                change_frame("friend_requests", "UPDATE", {"id": "fr-out", "status": "accepted"})
            )
        )

        assert friends.is_friend(THIRD_ID)

    def test_friendship_delete_reloads_friends(self, friends, realtime, backend):
        backend.friends = [{"user_id": SELF_ID, "friend_id": OTHER_ID}]
        asyncio.run(friends.load_friends())
        backend.friends = []

        asyncio.run(realtime.dispatch(change_frame("friendships", "DELETE", old={"id": "f1"})))

        assert not friends.is_friend(OTHER_ID)
