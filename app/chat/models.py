"""
Chat models for conversations, participants, messages and typing.

This module defines:
- Conversation: A direct (1:1) or group conversation
- DirectConversationPair: Uniqueness of direct conversations per user pair
- Participant: A user's membership in a conversation, with read tracking
- Message: A message with optional attachment and reply target
- TypingIndicator: Ephemeral "is typing" flag per (conversation, user)

Unread count invariant:
    unread(conversation, user) = messages in the conversation created after
    the participant's last_read_at and not sent by the user. A participant
    that never read counts every message not sent by them.

Related files:
    - services.py: ConversationService, MessageService, TypingService
    - serializers.py: API and realtime payloads
"""

from __future__ import annotations

from django.conf import settings
from django.db import models
from django.db.models import F, Q

from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel


class AttachmentType(models.TextChoices):
    """Kind of file attached to a message, derived from its MIME type."""

    IMAGE = "image", "Image"
    FILE = "file", "File"
    VIDEO = "video", "Video"


class Conversation(UUIDPrimaryKeyMixin, BaseModel):
    """
    A conversation between two or more users.

    ``updated_at`` moves forward on every new message and is what the
    conversation list is ordered by.

    Fields:
        name: Display name (groups only)
        is_group: Group conversation flag
        created_by: User who created the conversation
    """

    name = models.CharField(max_length=100, blank=True, null=True)
    is_group = models.BooleanField(default=False)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_conversations",
    )

    class Meta:
        db_table = "chat_conversation"
        ordering = ["-updated_at"]

    def __str__(self) -> str:
        if self.is_group:
            return f"Group: {self.name or self.id}"
        return f"Direct: {self.id}"

    def get_active_participants(self):
        return self.participants.filter(is_active=True).select_related("user__profile")

    def get_active_participant_for_user(self, user) -> Participant | None:
        return self.participants.filter(user=user, is_active=True).first()


class DirectConversationPair(models.Model):
    """
    Enforces uniqueness of direct conversations between two users.

    Pairs are stored in canonical order (lower user id first), so there is
    one direct conversation per pair regardless of who started it.
    """

    conversation = models.OneToOneField(
        Conversation,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name="direct_pair",
    )
    user_lower = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="+",
    )
    user_higher = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="+",
    )

    class Meta:
        db_table = "chat_direct_conversation_pair"
        constraints = [
            models.UniqueConstraint(
                fields=["user_lower", "user_higher"],
                name="unique_direct_conversation_pair",
            ),
            models.CheckConstraint(
                condition=Q(user_lower_id__lt=F("user_higher_id")),
                name="user_lower_less_than_higher",
            ),
        ]

    def __str__(self) -> str:
        return f"DirectPair({self.user_lower_id}, {self.user_higher_id})"


class Participant(UUIDPrimaryKeyMixin, BaseModel):
    """
    A user's membership in a conversation.

    Fields:
        conversation: The conversation
        user: The member
        last_read_at: When the user last opened the conversation
        is_active: False once the user has left
    """

    conversation = models.ForeignKey(
        Conversation,
        on_delete=models.CASCADE,
        related_name="participants",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="chat_participations",
    )
    last_read_at = models.DateTimeField(null=True, blank=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "chat_participant"
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["conversation", "user"],
                name="unique_conversation_participant",
            ),
        ]
        indexes = [
            models.Index(fields=["user", "is_active"], name="chat_participant_user_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.user_id} in {self.conversation_id}"


class Message(UUIDPrimaryKeyMixin, BaseModel):
    """
    A message in a conversation.

    Messages are immutable once delivered; ``is_edited`` is reserved for
    edit metadata.

    Fields:
        conversation: Conversation the message belongs to
        sender: Author
        content: Text (may be blank when an attachment is present)
        attachment_url: Public URL in the messages bucket
        attachment_type: image, file or video
        reply_to: Message this one replies to (same conversation)
        is_edited: Edit flag
    """

    conversation = models.ForeignKey(
        Conversation,
        on_delete=models.CASCADE,
        related_name="messages",
    )
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="chat_messages",
    )
    content = models.TextField(blank=True)
    attachment_url = models.URLField(max_length=500, blank=True, null=True)
    attachment_type = models.CharField(
        max_length=10,
        choices=AttachmentType.choices,
        blank=True,
        null=True,
    )
    reply_to = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="replies",
    )
    is_edited = models.BooleanField(default=False)

    class Meta(BaseModel.Meta):
        db_table = "chat_message"
        indexes = [
            models.Index(
                fields=["conversation", "-created_at"],
                name="chat_msg_conv_created_idx",
            ),
        ]

    def __str__(self) -> str:
        preview = self.content[:50] if self.content else f"[{self.attachment_type}]"
        return f"{self.sender_id}: {preview}"


class TypingIndicator(UUIDPrimaryKeyMixin, BaseModel):
    """
    Whether a user is typing in a conversation.

    One row per (conversation, user), overwritten on every change
    (last write wins). ``updated_at`` tells how fresh the flag is.
    """

    conversation = models.ForeignKey(
        Conversation,
        on_delete=models.CASCADE,
        related_name="typing_indicators",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="typing_indicators",
    )
    is_typing = models.BooleanField(default=False)

    class Meta:
        db_table = "chat_typing_indicator"
        constraints = [
            models.UniqueConstraint(
                fields=["conversation", "user"],
                name="unique_typing_indicator",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.user_id} typing={self.is_typing} in {self.conversation_id}"
