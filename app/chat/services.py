"""
Chat service layer for business logic.

This module provides services for chat operations:
- ConversationService: Direct/group creation, conversation list with
  unread counts
- MessageService: Sending (with attachments), the message window, read
  tracking
- TypingService: Typing indicator upserts and staleness

Architecture:
    - Services are stateless (use class methods)
    - All methods return ServiceResult for expected failures
    - Changes are pushed through realtime.broadcast after commit

Usage:
    from chat.services import ConversationService, MessageService

    result = ConversationService.create_direct_conversation(user, other_user.id)
    if result.success:
        conversation = result.data

    result = MessageService.send_message(conversation, user, "Hello!")
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from django.contrib.auth import get_user_model
from django.db import IntegrityError
from django.db.models import Count, OuterRef, Prefetch, Q, Subquery
from django.utils import timezone
from django.utils.text import get_valid_filename

from chat.constants import MESSAGE_CONFIG, TYPING_CONFIG
from chat.models import (
    Conversation,
    DirectConversationPair,
    Message,
    Participant,
    TypingIndicator,
)
from chat.serializers import MessageSerializer, TypingIndicatorSerializer
from core.services import BaseService, ServiceResult
from realtime.broadcast import publish_change
from realtime.constants import REALTIME_CONFIG
from storage.constants import STORAGE_CONFIG
from storage.services import StorageService, timestamp_ms
from storage.validators import attachment_kind

if TYPE_CHECKING:
    from django.core.files import File

    from authentication.models import User


def active_participants_prefetch() -> Prefetch:
    return Prefetch(
        "participants",
        queryset=Participant.objects.filter(is_active=True).select_related("user__profile"),
        to_attr="active_participants",
    )


# =============================================================================
# Conversation Service
# =============================================================================


class ConversationService(BaseService):
    """
    Service for conversation lifecycle operations.

    Methods:
        get_for_participant: Load a conversation the user takes part in
        create_direct_conversation: Get or create the direct conversation
            between two users (remote procedure)
        create_group: Create a group conversation (admin tooling)
        list_for_user: Conversation list with last message and unread count
        with_summary: Attach list data to a single conversation
    """

    @classmethod
    def get_for_participant(cls, conversation_id, user: User) -> ServiceResult[Conversation]:
        """
        Error codes:
            CONVERSATION_NOT_FOUND: No such conversation
            NOT_PARTICIPANT: User is not an active participant
        """
        conversation = Conversation.objects.filter(id=conversation_id).first()
        if conversation is None:
            return ServiceResult.failure(
                "Conversation not found", error_code="CONVERSATION_NOT_FOUND"
            )
        if conversation.get_active_participant_for_user(user) is None:
            return ServiceResult.failure(
                "You are not a participant in this conversation",
                error_code="NOT_PARTICIPANT",
            )
        return ServiceResult.success(conversation)

    @classmethod
    def create_direct_conversation(cls, user: User, other_user_id) -> ServiceResult[Conversation]:
        """
        Return the direct conversation between two users, creating it if needed.

        Direct conversations are unique per user pair regardless of who
        starts them.

        Error codes:
            SAME_USER: Cannot create a direct conversation with yourself
            USER_NOT_FOUND: No active user with ``other_user_id``
        """
        if str(user.id) == str(other_user_id):
            return ServiceResult.failure(
                "Cannot create a direct conversation with yourself",
                error_code="SAME_USER",
            )

        other = get_user_model().objects.filter(id=other_user_id, is_active=True).first()
        if other is None:
            return ServiceResult.failure("User not found", error_code="USER_NOT_FOUND")

        user_lower, user_higher = (user, other) if user.id < other.id else (other, user)

        existing = cls._find_direct_pair(user_lower, user_higher)
        if existing is not None:
            cls.get_logger().debug(
                f"Found existing direct conversation {existing.conversation_id} "
                f"between users {user_lower.id} and {user_higher.id}"
            )
            return ServiceResult.success(existing.conversation)

        try:
            with cls.atomic():
                conversation = Conversation.objects.create(is_group=False, created_by=user)
                DirectConversationPair.objects.create(
                    conversation=conversation,
                    user_lower=user_lower,
                    user_higher=user_higher,
                )
                Participant.objects.bulk_create(
                    [
                        Participant(conversation=conversation, user=user_lower),
                        Participant(conversation=conversation, user=user_higher),
                    ]
                )
        except IntegrityError:
            # Another request created the pair first
            existing = cls._find_direct_pair(user_lower, user_higher)
            if existing is None:
                raise
            return ServiceResult.success(existing.conversation)

        cls.get_logger().info(
            f"Created direct conversation {conversation.id} "
            f"between users {user_lower.id} and {user_higher.id}"
        )
        return ServiceResult.success(conversation)

    @classmethod
    def _find_direct_pair(cls, user_lower: User, user_higher: User) -> DirectConversationPair | None:
        return (
            DirectConversationPair.objects.select_related("conversation")
            .filter(user_lower=user_lower, user_higher=user_higher)
            .first()
        )

    @classmethod
    def create_group(cls, creator: User, name: str, members) -> ServiceResult[Conversation]:
        """
        Create a group conversation with ``creator`` and ``members``.

        Used by the admin site and management tooling; clients never create
        groups.
        """
        validation = cls.validate_required(name=name)
        if validation is not None:
            return validation

        users = {creator.id: creator}
        for member in members:
            users.setdefault(member.id, member)
        if len(users) < 2:
            return ServiceResult.failure(
                "A group needs at least one other member",
                error_code="NOT_ENOUGH_MEMBERS",
            )

        with cls.atomic():
            conversation = Conversation.objects.create(
                name=name.strip(), is_group=True, created_by=creator
            )
            Participant.objects.bulk_create(
                [Participant(conversation=conversation, user=u) for u in users.values()]
            )

        cls.get_logger().info(
            f"Created group conversation {conversation.id} with {len(users)} participants"
        )
        return ServiceResult.success(conversation)

    @classmethod
    def _unread_counts(cls, user: User, last_read: dict) -> dict:
        """Unread count per conversation id, in one grouped query."""
        if not last_read:
            return {}
        window = Q()
        for conversation_id, read_at in last_read.items():
            if read_at is None:
                window |= Q(conversation_id=conversation_id)
            else:
                window |= Q(conversation_id=conversation_id, created_at__gt=read_at)
        rows = (
            Message.objects.filter(window)
            .exclude(sender=user)
            .values("conversation_id")
            .annotate(unread=Count("id"))
            .order_by()
        )
        return {row["conversation_id"]: row["unread"] for row in rows}

    @classmethod
    def _last_messages(cls, conversation_ids) -> dict:
        latest_ids = list(
            Conversation.objects.filter(id__in=list(conversation_ids))
            .annotate(
                last_message_id=Subquery(
                    Message.objects.filter(conversation=OuterRef("pk"))
                    .order_by("-created_at", "-id")
                    .values("id")[:1]
                )
            )
            .values_list("id", "last_message_id")
        )
        messages = Message.objects.select_related("sender__profile").in_bulk(
            [message_id for _, message_id in latest_ids if message_id is not None]
        )
        return {
            conversation_id: messages[message_id]
            for conversation_id, message_id in latest_ids
            if message_id in messages
        }

    @classmethod
    def list_for_user(cls, user: User) -> list[Conversation]:
        """
        The user's conversations, most recently active first.

        Each conversation carries ``active_participants`` (with profiles),
        ``last_message`` (or None) and ``unread_count``.
        """
        last_read = dict(
            Participant.objects.filter(user=user, is_active=True).values_list(
                "conversation_id", "last_read_at"
            )
        )
        conversations = list(
            Conversation.objects.filter(id__in=list(last_read)).prefetch_related(
                active_participants_prefetch()
            )
        )
        latest = cls._last_messages(last_read)
        unread = cls._unread_counts(user, last_read)

        for conversation in conversations:
            conversation.last_message = latest.get(conversation.id)
            conversation.unread_count = unread.get(conversation.id, 0)

        def last_activity(conversation):
            if conversation.last_message is not None:
                return max(conversation.updated_at, conversation.last_message.created_at)
            return conversation.updated_at

        conversations.sort(key=last_activity, reverse=True)
        return conversations

    @classmethod
    def with_summary(cls, conversation: Conversation, user: User) -> Conversation:
        conversation.active_participants = list(conversation.get_active_participants())
        conversation.last_message = (
            conversation.messages.select_related("sender__profile").order_by("-created_at").first()
        )
        conversation.unread_count = MessageService.get_unread_count(conversation, user)
        return conversation


# =============================================================================
# Message Service
# =============================================================================


class MessageService(BaseService):
    """
    Service for message operations.

    Methods:
        send_message: Send a message, optionally with an attachment
        message_queryset: Messages of a conversation, newest first
        mark_as_read: Update last_read_at for user
        get_unread_count: Get count of unread messages
    """

    @classmethod
    def upload_attachment(cls, conversation: Conversation, attachment_file: File):
        """
        Store an attachment at ``<conversation_id>/<timestamp>-<filename>``.

        Returns:
            (public_url, attachment_type)
        """
        filename = get_valid_filename(attachment_file.name or "file")
        stored = StorageService.upload(
            STORAGE_CONFIG.MESSAGES,
            f"{conversation.id}/{timestamp_ms()}-{filename}",
            attachment_file,
            upsert=False,
        )
        return stored.public_url, attachment_kind(getattr(attachment_file, "content_type", None))

    @classmethod
    def send_message(
        cls,
        conversation: Conversation,
        sender: User,
        content: str,
        attachment_file: File | None = None,
        reply_to_id=None,
    ) -> ServiceResult[Message]:
        """
        Send a message to a conversation.

        The attachment is uploaded before the row is written; if the write
        fails the uploaded object stays in the bucket.

        Args:
            conversation: Target conversation
            sender: User sending the message
            content: Message text (may be blank with an attachment)
            attachment_file: Optional uploaded file
            reply_to_id: Optional id of a message in the same conversation

        Returns:
            ServiceResult with new Message

        Error codes:
            NOT_PARTICIPANT: User is not active in conversation
            EMPTY_CONTENT: No text and no attachment
            CONTENT_TOO_LONG: Text longer than MESSAGE_CONFIG.MAX_CONTENT_LENGTH
            INVALID_REPLY: Reply target not in this conversation
        """
        if conversation.get_active_participant_for_user(sender) is None:
            return ServiceResult.failure(
                "You are not a participant in this conversation",
                error_code="NOT_PARTICIPANT",
            )

        content = content.strip() if content else ""
        if not content and attachment_file is None:
            return ServiceResult.failure(
                "Message content cannot be empty",
                error_code="EMPTY_CONTENT",
            )
        if len(content) > MESSAGE_CONFIG.MAX_CONTENT_LENGTH:
            return ServiceResult.failure(
                f"Message cannot be longer than {MESSAGE_CONFIG.MAX_CONTENT_LENGTH} characters",
                error_code="CONTENT_TOO_LONG",
            )

        reply_to = None
        if reply_to_id:
            reply_to = Message.objects.filter(id=reply_to_id, conversation=conversation).first()
            if reply_to is None:
                return ServiceResult.failure(
                    "Reply target not found in this conversation",
                    error_code="INVALID_REPLY",
                )

        attachment_url = attachment_type = None
        if attachment_file is not None:
            attachment_url, attachment_type = cls.upload_attachment(conversation, attachment_file)

        with cls.atomic():
            message = Message.objects.create(
                conversation=conversation,
                sender=sender,
                content=content,
                attachment_url=attachment_url,
                attachment_type=attachment_type,
                reply_to=reply_to,
            )
            # Moves updated_at forward for list ordering
            conversation.save(update_fields=["updated_at"])

            recipients = list(
                conversation.participants.filter(is_active=True).values_list("user_id", flat=True)
            )
            publish_change(
                "messages",
                table="messages",
                event_type=REALTIME_CONFIG.INSERT,
                new=MessageSerializer(message).data,
                user_ids=recipients,
            )

        cls.get_logger().debug(
            f"User {sender.id} sent message {message.id} to conversation {conversation.id}"
        )
        return ServiceResult.success(message)

    @classmethod
    def message_queryset(cls, conversation: Conversation):
        return (
            Message.objects.filter(conversation=conversation)
            .select_related("sender__profile")
            .order_by("-created_at", "-id")
        )

    @classmethod
    def mark_as_read(cls, conversation: Conversation, user: User) -> ServiceResult[Participant]:
        """
        Mark conversation as read for a user.

        Error codes:
            NOT_PARTICIPANT: User is not in this conversation
        """
        participant = conversation.get_active_participant_for_user(user)
        if not participant:
            return ServiceResult.failure(
                "You are not a participant in this conversation",
                error_code="NOT_PARTICIPANT",
            )

        participant.last_read_at = timezone.now()
        participant.save(update_fields=["last_read_at", "updated_at"])

        cls.get_logger().debug(f"User {user.id} marked conversation {conversation.id} as read")
        return ServiceResult.success(participant)

    @classmethod
    def get_unread_count(cls, conversation: Conversation, user: User) -> int:
        """
        Get count of unread messages for a user in a conversation.

        Returns:
            Number of unread messages (0 if user is not a participant)
        """
        participant = conversation.get_active_participant_for_user(user)
        if not participant:
            return 0

        queryset = conversation.messages.exclude(sender=user)
        if participant.last_read_at:
            queryset = queryset.filter(created_at__gt=participant.last_read_at)
        return queryset.count()


# =============================================================================
# Typing Service
# =============================================================================


class TypingService(BaseService):
    """
    Service for typing indicators.

    Methods:
        set_typing: Upsert a user's typing flag and push it
        active_typers: Fresh typing rows of a conversation
        purge_stale: Clear rows nobody refreshed
    """

    @classmethod
    def _publish(cls, indicator: TypingIndicator, event_type: str) -> None:
        others = list(
            Participant.objects.filter(conversation_id=indicator.conversation_id, is_active=True)
            .exclude(user_id=indicator.user_id)
            .values_list("user_id", flat=True)
        )
        publish_change(
            "typing_indicators",
            table="typing_indicators",
            event_type=event_type,
            new=TypingIndicatorSerializer(indicator).data,
            user_ids=others,
        )

    @classmethod
    def set_typing(
        cls,
        conversation: Conversation,
        user: User,
        is_typing: bool,
    ) -> ServiceResult[TypingIndicator]:
        """
        Record whether ``user`` is typing (last write wins).

        Pushes INSERT for a first row and UPDATE afterwards, to the other
        participants only.
        """
        if conversation.get_active_participant_for_user(user) is None:
            return ServiceResult.failure(
                "You are not a participant in this conversation",
                error_code="NOT_PARTICIPANT",
            )

        with cls.atomic():
            indicator, created = TypingIndicator.objects.update_or_create(
                conversation=conversation,
                user=user,
                defaults={"is_typing": is_typing},
            )
            cls._publish(
                indicator, REALTIME_CONFIG.INSERT if created else REALTIME_CONFIG.UPDATE
            )

        return ServiceResult.success(indicator)

    @classmethod
    def stale_before(cls):
        return timezone.now() - timedelta(seconds=TYPING_CONFIG.STALE_AFTER_SECONDS)

    @classmethod
    def active_typers(cls, conversation: Conversation, exclude: User | None = None):
        queryset = TypingIndicator.objects.filter(
            conversation=conversation,
            is_typing=True,
            updated_at__gte=cls.stale_before(),
        ).select_related("user__profile")
        if exclude is not None:
            queryset = queryset.exclude(user=exclude)
        return queryset.order_by("updated_at")

    @classmethod
    def purge_stale(cls) -> int:
        """
        Delete typing rows older than TYPING_CONFIG.STALE_AFTER_SECONDS.

        Rows still flagged as typing are pushed as not typing first, so
        clients drop typers whose app went away mid-sentence.

        Returns:
            Number of rows deleted
        """
        stale = TypingIndicator.objects.filter(updated_at__lt=cls.stale_before())
        with cls.atomic():
            for indicator in stale.filter(is_typing=True).select_related("user__profile"):
                indicator.is_typing = False
                cls._publish(indicator, REALTIME_CONFIG.UPDATE)
            deleted, _ = stale.delete()

        if deleted:
            cls.get_logger().info(f"Purged {deleted} stale typing indicators")
        return deleted
