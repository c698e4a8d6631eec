"""
Serializers for notifications.
"""

from rest_framework import serializers

from notifications.models import Notification, NotificationType


class NotificationSerializer(serializers.ModelSerializer):
    """
    Read serializer for Notification; also the realtime payload.

    Usage:
        serializer = NotificationSerializer(notifications, many=True)
    """

    user_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Notification
        fields = [
            "id",
            "user_id",
            "type",
            "title",
            "message",
            "data",
            "is_read",
            "created_at",
        ]
        read_only_fields = fields


class NotificationCreateSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    type = serializers.ChoiceField(choices=NotificationType.choices)
    title = serializers.CharField(max_length=200)
    message = serializers.CharField()
    data = serializers.JSONField(required=False)


class UnreadCountSerializer(serializers.Serializer):
    unread_count = serializers.IntegerField()


class MarkAllReadResponseSerializer(serializers.Serializer):
    marked_count = serializers.IntegerField()
