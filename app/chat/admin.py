"""
Django admin configuration for chat models.

Provides admin interfaces for:
- Conversation management
- Participant viewing
- Message moderation
"""

from django.contrib import admin

from chat.models import Conversation, Message, Participant


class ParticipantInline(admin.TabularInline):
    """Inline display of participants in conversation admin."""

    model = Participant
    extra = 0
    readonly_fields = ["last_read_at", "created_at"]
    raw_id_fields = ["user"]


@admin.register(Conversation)
class ConversationAdmin(admin.ModelAdmin):
    list_display = ["id", "name", "is_group", "created_by", "created_at", "updated_at"]
    list_filter = ["is_group", "created_at"]
    search_fields = ["name", "participants__user__email"]
    raw_id_fields = ["created_by"]
    readonly_fields = ["created_at", "updated_at"]
    inlines = [ParticipantInline]


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    """Admin interface for message moderation."""

    list_display = ["id", "conversation", "sender", "attachment_type", "created_at"]
    list_filter = ["attachment_type", "is_edited", "created_at"]
    search_fields = ["content", "sender__email"]
    raw_id_fields = ["conversation", "sender", "reply_to"]
    readonly_fields = ["created_at", "updated_at"]
