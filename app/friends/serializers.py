"""
Serializers for friend requests and friendships.

Both embed the compact profile of the users involved, which is what the
friends screen renders.
"""

from rest_framework import serializers

from authentication.serializers import ProfileSummarySerializer
from friends.models import FriendRequest, Friendship


class FriendRequestSerializer(serializers.ModelSerializer):
    """Friend request with sender and receiver profiles; also the realtime payload."""

    sender_id = serializers.UUIDField(read_only=True)
    receiver_id = serializers.UUIDField(read_only=True)
    sender = ProfileSummarySerializer(source="sender.profile", read_only=True)
    receiver = ProfileSummarySerializer(source="receiver.profile", read_only=True)

    class Meta:
        model = FriendRequest
        fields = [
            "id",
            "sender_id",
            "receiver_id",
            "sender",
            "receiver",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class FriendshipSerializer(serializers.ModelSerializer):
    user_id = serializers.UUIDField(read_only=True)
    friend_id = serializers.UUIDField(read_only=True)
    friend = ProfileSummarySerializer(source="friend.profile", read_only=True)

    class Meta:
        model = Friendship
        fields = ["id", "user_id", "friend_id", "friend", "created_at"]
        read_only_fields = fields


class SendFriendRequestSerializer(serializers.Serializer):
    receiver_id = serializers.UUIDField()
