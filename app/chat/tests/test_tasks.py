"""
Tests for chat celery tasks and management commands.
"""

from io import StringIO

import pytest
from django.core.management import CommandError, call_command
from freezegun import freeze_time

from chat.models import Conversation
from chat.tasks import purge_stale_typing_indicators
from chat.tests.factories import TypingIndicatorFactory


@pytest.mark.django_db
class TestPurgeStaleTypingIndicators:
    def test_task_returns_deleted_count(self, user, conversation):
        with freeze_time("2024-10-01 10:00:00"):
            TypingIndicatorFactory(conversation=conversation, user=user, is_typing=False)

        with freeze_time("2024-10-01 10:01:00"):
            deleted = purge_stale_typing_indicators.apply().get()

        assert deleted == 1


@pytest.mark.django_db
class TestCreateGroupConversationCommand:
    def test_creates_group(self, user, other_user, third_user):
        out = StringIO()

        call_command(
            "create_group_conversation",
            "CSE 5-2",
            user.email,
            other_user.email,
            third_user.email,
            stdout=out,
        )

        conversation = Conversation.objects.get(is_group=True)
        assert conversation.name == "CSE 5-2"
        assert conversation.participants.count() == 3
        assert str(conversation.id) in out.getvalue()

    def test_unknown_email_fails(self, user):
        with pytest.raises(CommandError, match="Unknown users: ghost@eastdelta.edu.bd"):
            call_command("create_group_conversation", "Ghosts", user.email, "ghost@eastdelta.edu.bd")

    def test_group_of_one_fails(self, user):
        with pytest.raises(CommandError, match="at least one other member"):
            call_command("create_group_conversation", "Solo", user.email, user.email)
