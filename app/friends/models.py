"""
Friend models.

- FriendRequest: A request from one user to another, pending until the
  receiver accepts or rejects it
- Friendship: One direction of an accepted friendship; accepting a request
  writes both (a -> b) and (b -> a)

Usage:
    from friends.models import FriendRequest, FriendRequestStatus, Friendship

    friend_ids = Friendship.objects.filter(user=user).values_list("friend_id", flat=True)
"""

from django.conf import settings
from django.db import models

from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel


class FriendRequestStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    ACCEPTED = "accepted", "Accepted"
    REJECTED = "rejected", "Rejected"


class FriendRequest(UUIDPrimaryKeyMixin, BaseModel):
    """
    A friend request.

    Fields:
        sender: User who sent the request
        receiver: User who may accept or reject it
        status: pending, accepted or rejected
    """

    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_friend_requests",
    )
    receiver = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="received_friend_requests",
    )
    status = models.CharField(
        max_length=10,
        choices=FriendRequestStatus.choices,
        default=FriendRequestStatus.PENDING,
        db_index=True,
    )

    class Meta(BaseModel.Meta):
        db_table = "friends_friend_request"
        indexes = [
            models.Index(fields=["receiver", "status"], name="friendreq_receiver_idx"),
            models.Index(fields=["sender", "status"], name="friendreq_sender_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=~models.Q(sender=models.F("receiver")),
                name="friendreq_not_self",
            ),
        ]

    def __str__(self):
        return f"{self.sender_id} -> {self.receiver_id} ({self.status})"

    @property
    def is_pending(self) -> bool:
        return self.status == FriendRequestStatus.PENDING


class Friendship(UUIDPrimaryKeyMixin, BaseModel):
    """One direction of a friendship between ``user`` and ``friend``."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="friendships",
    )
    friend = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="+",
    )

    class Meta(BaseModel.Meta):
        db_table = "friends_friendship"
        constraints = [
            models.UniqueConstraint(fields=["user", "friend"], name="friendship_unique_pair"),
        ]

    def __str__(self):
        return f"{self.user_id} <-> {self.friend_id}"
