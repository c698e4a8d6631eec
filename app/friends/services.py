"""
Friend service layer.

FriendService owns the friend request lifecycle:

    send_request -> pending -> accept_request -> accepted (+ 2 friendship rows)
                            -> reject_request -> rejected

Every state change is pushed to both users: "friend_requests" for request
rows and "friendships" for friendship rows. Clients reload their lists on
these events.

Related files:
    - models.py: FriendRequest, Friendship
    - notifications/services.py: friend_request notification for the receiver
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.contrib.auth import get_user_model
from django.db.models import Q

from core.services import BaseService, ServiceResult
from friends.models import FriendRequest, FriendRequestStatus, Friendship
from friends.serializers import FriendRequestSerializer, FriendshipSerializer
from notifications.models import NotificationType
from notifications.services import NotificationService
from realtime.broadcast import publish_change
from realtime.constants import REALTIME_CONFIG

if TYPE_CHECKING:
    from authentication.models import User


def display_name(user: User) -> str:
    profile = getattr(user, "profile", None)
    if profile is not None and profile.full_name:
        return profile.full_name
    return user.email


class FriendService(BaseService):
    """
    Service for friend requests and friendships.

    Methods:
        send_request: Send a request to another user
        accept_request: Receiver accepts; creates the friendship
        reject_request: Receiver rejects
        remove_friend: Delete a friendship (both directions)
        are_friends: Friendship check
        get_friends / get_pending_requests / get_sent_requests: Queries
    """

    @classmethod
    def are_friends(cls, user_id, other_id) -> bool:
        return Friendship.objects.filter(user_id=user_id, friend_id=other_id).exists()

    @classmethod
    def pending_between(cls, user_id, other_id) -> FriendRequest | None:
        """The pending request between two users, in either direction."""
        return (
            FriendRequest.objects.filter(status=FriendRequestStatus.PENDING)
            .filter(
                Q(sender_id=user_id, receiver_id=other_id)
                | Q(sender_id=other_id, receiver_id=user_id)
            )
            .first()
        )

    @classmethod
    def _publish_request(cls, friend_request: FriendRequest, event_type: str, old=None) -> None:
        publish_change(
            "friend_requests",
            table="friend_requests",
            event_type=event_type,
            new=FriendRequestSerializer(friend_request).data,
            old=old,
            user_ids=[friend_request.sender_id, friend_request.receiver_id],
        )

    @classmethod
    def send_request(cls, sender: User, receiver_id) -> ServiceResult[FriendRequest]:
        """
        Send a friend request.

        Fails with:
            SAME_USER: sender and receiver are the same user
            USER_NOT_FOUND: no active receiver
            ALREADY_FRIENDS: the users are already friends
            REQUEST_ALREADY_PENDING: a pending request exists in either direction
        """
        if str(sender.id) == str(receiver_id):
            return ServiceResult.failure(
                "You cannot send a friend request to yourself",
                error_code="SAME_USER",
            )

        receiver = get_user_model().objects.filter(id=receiver_id, is_active=True).first()
        if receiver is None:
            return ServiceResult.failure("User not found", error_code="USER_NOT_FOUND")

        if cls.are_friends(sender.id, receiver.id):
            return ServiceResult.failure("You are already friends", error_code="ALREADY_FRIENDS")

        if cls.pending_between(sender.id, receiver.id) is not None:
            return ServiceResult.failure(
                "Friend request already pending",
                error_code="REQUEST_ALREADY_PENDING",
            )

        with cls.atomic():
            friend_request = FriendRequest.objects.create(sender=sender, receiver=receiver)
            cls._publish_request(friend_request, REALTIME_CONFIG.INSERT)
            NotificationService.create_notification(
                receiver,
                NotificationType.FRIEND_REQUEST,
                "New friend request",
                f"{display_name(sender)} sent you a friend request",
                {"request_id": str(friend_request.id), "sender_id": str(sender.id)},
            )

        cls.get_logger().info(
            f"Friend request {friend_request.id} sent from {sender.id} to {receiver.id}"
        )
        return ServiceResult.success(friend_request)

    @classmethod
    def _get_request_for_receiver(cls, request_id, user: User) -> ServiceResult[FriendRequest]:
        friend_request = (
            FriendRequest.objects.select_for_update()
            .select_related("sender", "receiver")
            .filter(id=request_id)
            .first()
        )
        if friend_request is None:
            return ServiceResult.failure(
                "Friend request not found", error_code="REQUEST_NOT_FOUND"
            )
        if friend_request.receiver_id != user.id:
            cls.get_logger().warning(
                f"User {user.id} tried to answer friend request {request_id} "
                f"addressed to {friend_request.receiver_id}"
            )
            return ServiceResult.failure(
                "Only the receiver can respond to this request",
                error_code="NOT_RECEIVER",
            )
        if not friend_request.is_pending:
            return ServiceResult.failure(
                f"Friend request is already {friend_request.status}",
                error_code="REQUEST_NOT_PENDING",
            )
        return ServiceResult.success(friend_request)

    @classmethod
    def accept_request(cls, request_id, user: User) -> ServiceResult[FriendRequest]:
        """
        Accept a pending request addressed to ``user``.

        Marks the request accepted and writes both friendship rows in one
        transaction.
        """
        with cls.atomic():
            lookup = cls._get_request_for_receiver(request_id, user)
            if not lookup.success:
                return lookup
            friend_request = lookup.data
            old = FriendRequestSerializer(friend_request).data

            friend_request.status = FriendRequestStatus.ACCEPTED
            friend_request.save(update_fields=["status", "updated_at"])

            pair = (friend_request.sender_id, friend_request.receiver_id)
            friendships = [
                Friendship.objects.get_or_create(user_id=a, friend_id=b)[0]
                for a, b in (pair, pair[::-1])
            ]

            cls._publish_request(friend_request, REALTIME_CONFIG.UPDATE, old=old)
            for friendship in friendships:
                publish_change(
                    "friendships",
                    table="friendships",
                    event_type=REALTIME_CONFIG.INSERT,
                    new=FriendshipSerializer(friendship).data,
                    user_ids=list(pair),
                )

        cls.get_logger().info(f"Friend request {friend_request.id} accepted")
        return ServiceResult.success(friend_request)

    @classmethod
    def reject_request(cls, request_id, user: User) -> ServiceResult[FriendRequest]:
        with cls.atomic():
            lookup = cls._get_request_for_receiver(request_id, user)
            if not lookup.success:
                return lookup
            friend_request = lookup.data
            old = FriendRequestSerializer(friend_request).data

            friend_request.status = FriendRequestStatus.REJECTED
            friend_request.save(update_fields=["status", "updated_at"])
            cls._publish_request(friend_request, REALTIME_CONFIG.UPDATE, old=old)

        cls.get_logger().info(f"Friend request {friend_request.id} rejected")
        return ServiceResult.success(friend_request)

    @classmethod
    def remove_friend(cls, user: User, friend_id) -> ServiceResult[int]:
        """
        Remove a friendship in both directions.

        Returns:
            ServiceResult with the number of rows deleted, or NOT_FOUND
            when the users are not friends
        """
        with cls.atomic():
            friendships = list(
                Friendship.objects.filter(
                    Q(user_id=user.id, friend_id=friend_id)
                    | Q(user_id=friend_id, friend_id=user.id)
                )
            )
            if not friendships:
                return ServiceResult.failure("Friendship not found", error_code="NOT_FOUND")

            for friendship in friendships:
                publish_change(
                    "friendships",
                    table="friendships",
                    event_type=REALTIME_CONFIG.DELETE,
                    old={
                        "id": friendship.id,
                        "user_id": friendship.user_id,
                        "friend_id": friendship.friend_id,
                    },
                    user_ids=[user.id, friend_id],
                )
            deleted, _ = Friendship.objects.filter(
                id__in=[f.id for f in friendships]
            ).delete()

        cls.get_logger().info(f"Friendship between {user.id} and {friend_id} removed")
        return ServiceResult.success(deleted)

    @classmethod
    def get_friends(cls, user: User):
        return (
            Friendship.objects.filter(user=user)
            .select_related("friend__profile")
            .order_by("friend__profile__full_name")
        )

    @classmethod
    def get_friend_ids(cls, user: User) -> list:
        return list(Friendship.objects.filter(user=user).values_list("friend_id", flat=True))

    @classmethod
    def get_pending_requests(cls, user: User):
        """Pending requests received by ``user``, newest first."""
        return (
            FriendRequest.objects.filter(receiver=user, status=FriendRequestStatus.PENDING)
            .select_related("sender__profile", "receiver__profile")
            .order_by("-created_at")
        )

    @classmethod
    def get_sent_requests(cls, user: User):
        """Pending requests sent by ``user``, newest first."""
        return (
            FriendRequest.objects.filter(sender=user, status=FriendRequestStatus.PENDING)
            .select_related("sender__profile", "receiver__profile")
            .order_by("-created_at")
        )
