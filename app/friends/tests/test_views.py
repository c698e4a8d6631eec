"""
Tests for the friends API.

/api/v1/friends/
"""

import pytest
from rest_framework import status

from friends.models import FriendRequest

FRIENDS_URL = "/api/v1/friends/"
REQUESTS_URL = "/api/v1/friends/requests/"


@pytest.mark.django_db
class TestFriendRequestEndpoints:
    def test_send_request_returns_201(self, authenticated_client, other_user):
        response = authenticated_client.post(
            REQUESTS_URL, {"receiver_id": str(other_user.id)}, format="json"
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["receiver_id"] == str(other_user.id)
        assert response.data["receiver"]["full_name"] == "Bob Karim"

    def test_duplicate_request_returns_409_with_message(
        self, authenticated_client, other_user, pending_request
    ):
        response = authenticated_client.post(
            REQUESTS_URL, {"receiver_id": str(other_user.id)}, format="json"
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data["error"] == "Friend request already pending"

    def test_list_received_requests(self, authenticated_client, pending_request):
        response = authenticated_client.get(REQUESTS_URL)

        assert [r["id"] for r in response.data] == [str(pending_request.id)]
        assert response.data[0]["sender"]["full_name"] == "Bob Karim"

    def test_list_sent_requests(self, other_client, pending_request):
        response = other_client.get(f"{REQUESTS_URL}sent/")

        assert [r["id"] for r in response.data] == [str(pending_request.id)]

    def test_accept_is_a_remote_procedure(self, authenticated_client, pending_request):
        """
        POST .../accept/ performs the whole transition server-side.

        Why it matters: The client only mirrors the returned row.
        """
        response = authenticated_client.post(f"{REQUESTS_URL}{pending_request.id}/accept/")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["status"] == "accepted"

    def test_sender_cannot_accept(self, other_client, pending_request):
        response = other_client.post(f"{REQUESTS_URL}{pending_request.id}/accept/")

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data["error_code"] == "NOT_RECEIVER"

    def test_reject(self, authenticated_client, pending_request):
        response = authenticated_client.post(f"{REQUESTS_URL}{pending_request.id}/reject/")

        assert response.data["status"] == "rejected"
        assert FriendRequest.objects.get(id=pending_request.id).status == "rejected"


@pytest.mark.django_db
class TestFriendEndpoints:
    def test_list_friends(self, authenticated_client, other_user, friendship):
        response = authenticated_client.get(FRIENDS_URL)

        assert response.status_code == status.HTTP_200_OK
        assert [f["friend_id"] for f in response.data] == [str(other_user.id)]

    def test_remove_friend(self, authenticated_client, other_user, friendship):
        response = authenticated_client.delete(f"{FRIENDS_URL}{other_user.id}/")

        assert response.status_code == status.HTTP_204_NO_CONTENT

    def test_remove_non_friend_returns_404(self, authenticated_client, other_user):
        response = authenticated_client.delete(f"{FRIENDS_URL}{other_user.id}/")

        assert response.status_code == status.HTTP_404_NOT_FOUND
