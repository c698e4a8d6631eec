"""
Factory Boy factories for chat models.

Usage:
    from chat.tests.factories import MessageFactory, direct_conversation

    conversation = direct_conversation(alice, bob)
    message = MessageFactory(conversation=conversation, sender=bob)
"""

import factory

from authentication.tests.factories import UserFactory
from chat.models import Conversation, Message, Participant, TypingIndicator
from chat.services import ConversationService


class ConversationFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Conversation

    is_group = False
    created_by = factory.SubFactory(UserFactory)


class ParticipantFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Participant

    conversation = factory.SubFactory(ConversationFactory)
    user = factory.SubFactory(UserFactory)


class MessageFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Message

    conversation = factory.SubFactory(ConversationFactory)
    sender = factory.SubFactory(UserFactory)
    content = factory.Sequence(lambda n: f"Message {n}")


class TypingIndicatorFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = TypingIndicator

    conversation = factory.SubFactory(ConversationFactory)
    user = factory.SubFactory(UserFactory)
    is_typing = True


def direct_conversation(user, other):
    """The direct conversation between two users, created through the service."""
    return ConversationService.create_direct_conversation(user, other.id).data
