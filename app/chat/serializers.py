"""
Serializers for chat API.

Read serializers double as realtime payloads: MessageSerializer is what a
"messages" INSERT carries, TypingIndicatorSerializer what a
"typing_indicators" event carries.

Serializers:
    ParticipantSerializer: Member with profile and read position
    MessageSerializer: Message with sender profile
    ConversationSerializer: Conversation with participants, last message
        and the requesting user's unread count
    MessageCreateSerializer: Send request (multipart for attachments)
    DirectConversationSerializer: Direct conversation request
    TypingSerializer / TypingIndicatorSerializer: Typing state
"""

from rest_framework import serializers

from authentication.serializers import ProfileSummarySerializer
from chat.constants import MESSAGE_CONFIG
from chat.models import Conversation, Message, Participant, TypingIndicator


class ParticipantSerializer(serializers.ModelSerializer):
    conversation_id = serializers.UUIDField(read_only=True)
    user_id = serializers.UUIDField(read_only=True)
    profile = ProfileSummarySerializer(source="user.profile", read_only=True)

    class Meta:
        model = Participant
        fields = [
            "id",
            "conversation_id",
            "user_id",
            "profile",
            "last_read_at",
            "is_active",
        ]
        read_only_fields = fields


class MessageSerializer(serializers.ModelSerializer):
    """
    Message with its sender's profile.

    ``created_at`` and ``id`` are authoritative; clients replace any local
    placeholder with this row.
    """

    conversation_id = serializers.UUIDField(read_only=True)
    sender_id = serializers.UUIDField(read_only=True)
    reply_to_id = serializers.UUIDField(read_only=True, allow_null=True)
    sender = ProfileSummarySerializer(source="sender.profile", read_only=True)

    class Meta:
        model = Message
        fields = [
            "id",
            "conversation_id",
            "sender_id",
            "sender",
            "content",
            "attachment_url",
            "attachment_type",
            "reply_to_id",
            "is_edited",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ConversationSerializer(serializers.ModelSerializer):
    """
    Conversation as shown in the conversation list.

    ``participants``, ``last_message`` and ``unread_count`` come from the
    attributes ConversationService.list_for_user attaches; for a single
    conversation ConversationService.with_summary attaches the same.
    """

    created_by_id = serializers.UUIDField(read_only=True, allow_null=True)
    participants = ParticipantSerializer(source="active_participants", many=True, read_only=True)
    last_message = MessageSerializer(read_only=True, allow_null=True)
    unread_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Conversation
        fields = [
            "id",
            "name",
            "is_group",
            "created_by_id",
            "participants",
            "last_message",
            "unread_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class MessageCreateSerializer(serializers.Serializer):
    content = serializers.CharField(
        max_length=MESSAGE_CONFIG.MAX_CONTENT_LENGTH,
        required=False,
        allow_blank=True,
        default="",
        trim_whitespace=False,
    )
    attachment = serializers.FileField(required=False, write_only=True)
    reply_to_id = serializers.UUIDField(required=False, allow_null=True)


class DirectConversationSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()


class TypingSerializer(serializers.Serializer):
    is_typing = serializers.BooleanField()


class TypingIndicatorSerializer(serializers.ModelSerializer):
    conversation_id = serializers.UUIDField(read_only=True)
    user_id = serializers.UUIDField(read_only=True)
    full_name = serializers.CharField(source="user.profile.full_name", read_only=True)

    class Meta:
        model = TypingIndicator
        fields = ["id", "conversation_id", "user_id", "full_name", "is_typing", "updated_at"]
        read_only_fields = fields
