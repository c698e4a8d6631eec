"""
Tests for FriendService.

Covers the request lifecycle (send, accept, reject), friendship removal
and the realtime events each transition publishes.
"""

import uuid

import pytest

from friends.models import FriendRequest, FriendRequestStatus, Friendship
from friends.services import FriendService
from friends.tests.factories import FriendRequestFactory
from notifications.models import Notification, NotificationType


# =============================================================================
# TestSendRequest
# =============================================================================


@pytest.mark.django_db
class TestSendRequest:
    """Tests for FriendService.send_request()."""

    def test_send_creates_pending_request(self, user, other_user):
        result = FriendService.send_request(user, other_user.id)

        assert result.success
        assert result.data.status == FriendRequestStatus.PENDING
        assert result.data.receiver == other_user

    def test_send_notifies_receiver(self, user, other_user):
        """
        The receiver gets a friend_request notification naming the sender.

        Why it matters: Requests are otherwise invisible until the friends
        screen is opened.
        """
        FriendService.send_request(user, other_user.id)

        notification = Notification.objects.get(user=other_user)
        assert notification.type == NotificationType.FRIEND_REQUEST
        assert notification.message == "Alice Rahman sent you a friend request"
        assert notification.data["sender_id"] == str(user.id)

    def test_send_publishes_to_both_users(
        self, user, other_user, published, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            result = FriendService.send_request(user, other_user.id)

        groups, event = published[0]
        assert groups == [f"friend_requests.{user.id}", f"friend_requests.{other_user.id}"]
        assert event["event_type"] == "INSERT"
        assert event["new"]["id"] == str(result.data.id)
        assert event["new"]["status"] == "pending"

    def test_send_to_self_fails(self, user):
        result = FriendService.send_request(user, user.id)

        assert result.error_code == "SAME_USER"

    def test_send_to_unknown_user_fails(self, user):
        result = FriendService.send_request(user, uuid.uuid4())

        assert result.error_code == "USER_NOT_FOUND"

    def test_send_when_already_friends_fails(self, user, other_user, friendship):
        result = FriendService.send_request(user, other_user.id)

        assert result.error_code == "ALREADY_FRIENDS"
        assert "already friends" in result.error

    def test_send_when_pending_in_either_direction_fails(self, user, other_user, pending_request):
        """
        A pending request blocks a new one from either side.

        Why it matters: The client maps "already pending" to its own message.
        """
        result = FriendService.send_request(user, other_user.id)

        assert result.error_code == "REQUEST_ALREADY_PENDING"
        assert result.error == "Friend request already pending"
        assert result.http_status == 409
        assert FriendRequest.objects.count() == 1

    def test_send_after_rejection_is_allowed(self, user, other_user):
        FriendRequestFactory(sender=user, receiver=other_user, status=FriendRequestStatus.REJECTED)

        result = FriendService.send_request(user, other_user.id)

        assert result.success


# =============================================================================
# TestAcceptRequest
# =============================================================================


@pytest.mark.django_db
class TestAcceptRequest:
    """Tests for FriendService.accept_request()."""

    def test_accept_creates_friendship_both_ways(self, user, other_user, pending_request):
        result = FriendService.accept_request(pending_request.id, user)

        assert result.success
        assert result.data.status == FriendRequestStatus.ACCEPTED
        assert FriendService.are_friends(user.id, other_user.id)
        assert FriendService.are_friends(other_user.id, user.id)
        assert Friendship.objects.count() == 2

    def test_accept_publishes_update_and_friendships(
        self, user, other_user, pending_request, published, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            FriendService.accept_request(pending_request.id, user)

        topics = [event["topic"] for _, event in published]
        assert topics == ["friend_requests", "friendships", "friendships"]

        _, update = published[0]
        assert update["event_type"] == "UPDATE"
        assert update["old"]["status"] == "pending"
        assert update["new"]["status"] == "accepted"

    def test_only_receiver_can_accept(self, other_user, pending_request):
        result = FriendService.accept_request(pending_request.id, other_user)

        assert result.error_code == "NOT_RECEIVER"
        assert result.http_status == 403
        assert not Friendship.objects.exists()

    def test_accept_twice_fails(self, user, pending_request):
        FriendService.accept_request(pending_request.id, user)

        result = FriendService.accept_request(pending_request.id, user)

        assert result.error_code == "REQUEST_NOT_PENDING"

    def test_accept_unknown_request(self, user):
        result = FriendService.accept_request(uuid.uuid4(), user)

        assert result.error_code == "REQUEST_NOT_FOUND"
        assert result.http_status == 404


# =============================================================================
# TestRejectRequest / TestRemoveFriend / Queries
# =============================================================================


@pytest.mark.django_db
class TestRejectRequest:
    def test_reject_marks_rejected_without_friendship(self, user, pending_request):
        result = FriendService.reject_request(pending_request.id, user)

        assert result.data.status == FriendRequestStatus.REJECTED
        assert not Friendship.objects.exists()
        assert list(FriendService.get_pending_requests(user)) == []


@pytest.mark.django_db
class TestRemoveFriend:
    def test_remove_deletes_both_rows(
        self, user, other_user, friendship, published, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            result = FriendService.remove_friend(user, other_user.id)

        assert result.data == 2
        assert not Friendship.objects.exists()
        assert {event["event_type"] for _, event in published} == {"DELETE"}
        assert published[0][1]["new"] == {}

    def test_remove_non_friend_fails(self, user, other_user):
        result = FriendService.remove_friend(user, other_user.id)

        assert result.error_code == "NOT_FOUND"


@pytest.mark.django_db
class TestQueries:
    def test_friends_are_listed_by_name(self, user, other_user, third_user):
        FriendService.accept_request(
            FriendRequestFactory(sender=third_user, receiver=user).id, user
        )
        FriendService.accept_request(
            FriendRequestFactory(sender=other_user, receiver=user).id, user
        )

        names = [f.friend.profile.full_name for f in FriendService.get_friends(user)]
        assert names == ["Bob Karim", "Chitra Das"]
        assert set(FriendService.get_friend_ids(user)) == {other_user.id, third_user.id}

    def test_pending_and_sent_requests(self, user, other_user, pending_request):
        assert list(FriendService.get_pending_requests(user)) == [pending_request]
        assert list(FriendService.get_sent_requests(other_user)) == [pending_request]
        assert list(FriendService.get_sent_requests(user)) == []
