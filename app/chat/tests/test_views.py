"""
Tests for the chat API.

/api/v1/chat/conversations/
"""

import uuid

import pytest
from rest_framework import status

from chat.models import Message
from chat.tests.factories import MessageFactory, TypingIndicatorFactory

CONVERSATIONS_URL = "/api/v1/chat/conversations/"


@pytest.mark.django_db
class TestConversationEndpoints:
    def test_list(self, authenticated_client, other_user, conversation):
        MessageFactory(conversation=conversation, sender=other_user, content="Hey")

        response = authenticated_client.get(CONVERSATIONS_URL)

        assert response.status_code == status.HTTP_200_OK
        [listed] = response.data
        assert listed["id"] == str(conversation.id)
        assert listed["unread_count"] == 1
        assert listed["last_message"]["content"] == "Hey"
        assert {p["profile"]["full_name"] for p in listed["participants"]} == {
            "Alice Rahman",
            "Bob Karim",
        }

    def test_direct_is_get_or_create(self, authenticated_client, other_user):
        """
        POST direct/ twice returns the same conversation.

        Why it matters: The client opens a chat from a profile page without
        checking whether one exists.
        """
        first = authenticated_client.post(
            f"{CONVERSATIONS_URL}direct/", {"user_id": str(other_user.id)}, format="json"
        )
        second = authenticated_client.post(
            f"{CONVERSATIONS_URL}direct/", {"user_id": str(other_user.id)}, format="json"
        )

        assert first.status_code == status.HTTP_200_OK
        assert first.data["id"] == second.data["id"]

    def test_direct_with_self_returns_400(self, authenticated_client, user):
        response = authenticated_client.post(
            f"{CONVERSATIONS_URL}direct/", {"user_id": str(user.id)}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "SAME_USER"

    def test_retrieve_unknown_returns_404(self, authenticated_client):
        response = authenticated_client.get(f"{CONVERSATIONS_URL}{uuid.uuid4()}/")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_retrieve_as_outsider_returns_403(self, authenticated_client, outsider_conversation):
        response = authenticated_client.get(f"{CONVERSATIONS_URL}{outsider_conversation.id}/")

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data["error_code"] == "NOT_PARTICIPANT"

    def test_participants(self, authenticated_client, group_conversation):
        response = authenticated_client.get(
            f"{CONVERSATIONS_URL}{group_conversation.id}/participants/"
        )

        assert len(response.data) == 3

    def test_requires_authentication(self, api_client):
        response = api_client.get(CONVERSATIONS_URL)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestMessageEndpoints:
    def test_send_json(self, authenticated_client, conversation):
        response = authenticated_client.post(
            f"{CONVERSATIONS_URL}{conversation.id}/messages/", {"content": "Hi"}, format="json"
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["content"] == "Hi"
        assert response.data["sender"]["full_name"] == "Alice Rahman"

    def test_send_multipart_attachment(self, authenticated_client, conversation, pdf_attachment):
        response = authenticated_client.post(
            f"{CONVERSATIONS_URL}{conversation.id}/messages/",
            {"attachment": pdf_attachment},
            format="multipart",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["attachment_type"] == "file"

    def test_send_empty_returns_400(self, authenticated_client, conversation):
        response = authenticated_client.post(
            f"{CONVERSATIONS_URL}{conversation.id}/messages/", {"content": ""}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "EMPTY_CONTENT"
        assert not Message.objects.exists()

    def test_list_is_paged(self, authenticated_client, user, conversation):
        MessageFactory.create_batch(3, conversation=conversation, sender=user)

        response = authenticated_client.get(
            f"{CONVERSATIONS_URL}{conversation.id}/messages/", {"offset": 0, "limit": 2}
        )

        assert response.data["count"] == 3
        assert len(response.data["results"]) == 2

    def test_read_resets_unread(self, authenticated_client, other_user, conversation):
        MessageFactory(conversation=conversation, sender=other_user)

        response = authenticated_client.post(f"{CONVERSATIONS_URL}{conversation.id}/read/")
        listed = authenticated_client.get(CONVERSATIONS_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["last_read_at"] is not None
        assert listed.data[0]["unread_count"] == 0


@pytest.mark.django_db
class TestTypingEndpoints:
    def test_set_typing(self, authenticated_client, conversation):
        response = authenticated_client.post(
            f"{CONVERSATIONS_URL}{conversation.id}/typing/", {"is_typing": True}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["is_typing"] is True

    def test_list_typers_excludes_self(self, authenticated_client, user, other_user, conversation):
        TypingIndicatorFactory(conversation=conversation, user=user)
        TypingIndicatorFactory(conversation=conversation, user=other_user)

        response = authenticated_client.get(f"{CONVERSATIONS_URL}{conversation.id}/typing/")

        assert [t["user_id"] for t in response.data] == [str(other_user.id)]
