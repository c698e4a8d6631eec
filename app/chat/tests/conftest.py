"""
Test configuration and fixtures for chat tests.

Usage:
    def test_example(conversation, authenticated_client):
        response = authenticated_client.get(f"/api/v1/chat/conversations/{conversation.id}/")
        assert response.status_code == 200
"""

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from chat.services import ConversationService
from chat.tests.factories import direct_conversation


@pytest.fixture
def conversation(user, other_user):
    """Direct conversation between ``user`` and ``other_user``."""
    return direct_conversation(user, other_user)


@pytest.fixture
def group_conversation(user, other_user, third_user):
    return ConversationService.create_group(user, "Study Group", [other_user, third_user]).data


@pytest.fixture
def outsider_conversation(other_user, third_user):
    """A conversation ``user`` does not take part in."""
    return direct_conversation(other_user, third_user)


@pytest.fixture
def pdf_attachment():
    return SimpleUploadedFile("notes.pdf", b"%PDF-1.4", content_type="application/pdf")
