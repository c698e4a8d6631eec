"""
Friends store.

Request transitions happen on the backend (remote procedures); the store
mirrors the results and reloads on pushes:

- "friend_requests" INSERT: reload received and sent requests
- "friend_requests" UPDATE: reload requests and friends
- "friendships" INSERT/DELETE: reload friends
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from client.base import BaseStore
from client.exceptions import CampusAPIError, friend_request_error_message

if TYPE_CHECKING:
    from client.models import ChangeEvent


class FriendsStore(BaseStore):
    """
    Attributes:
        friends: Friendship rows of the current user
        requests: Pending requests received
        sent_requests: Pending requests sent
    """

    channel_prefix = "friends"

    def __init__(self, backend, realtime, self_id):
        super().__init__(backend, realtime, self_id)
        self.friends: list[dict] = []
        self.requests: list[dict] = []
        self.sent_requests: list[dict] = []

    async def start(self) -> None:
        await self.listen("friend_requests", self._on_request)
        await self.listen("friendships", self._on_friendship)
        await self.refresh()

    async def refresh(self) -> None:
        await self.load_friends()
        await self.load_requests()
        await self.load_sent_requests()
        self.loading = False

    async def load_friends(self) -> None:
        try:
            self.friends = list(await self.backend.list_friends())
        except CampusAPIError as e:
            self.fail("loading friends", e)

    async def load_requests(self) -> None:
        try:
            self.requests = list(await self.backend.list_friend_requests())
        except CampusAPIError as e:
            self.fail("loading friend requests", e)

    async def load_sent_requests(self) -> None:
        try:
            self.sent_requests = list(await self.backend.list_sent_requests())
        except CampusAPIError as e:
            self.fail("loading sent requests", e)

    # =========================================================================
    # Transitions
    # =========================================================================

    async def send_request(self, receiver_id: str) -> str | None:
        """
        Send a friend request.

        Returns:
            None on success, otherwise the message to display
        """
        try:
            await self.backend.send_friend_request(receiver_id)
        except CampusAPIError as e:
            self.fail("sending friend request", e)
            return friend_request_error_message(e)
        await self.load_sent_requests()
        return None

    async def accept(self, request_id: str) -> bool:
        try:
            await self.backend.accept_friend_request(request_id)
        except CampusAPIError as e:
            self.fail("accepting friend request", e)
            return False
        self._drop_request(request_id)
        await self.load_friends()
        await self.load_sent_requests()
        return True

    async def reject(self, request_id: str) -> bool:
        try:
            await self.backend.reject_friend_request(request_id)
        except CampusAPIError as e:
            self.fail("rejecting friend request", e)
            return False
        self._drop_request(request_id)
        return True

    async def remove(self, friend_id: str) -> bool:
        try:
            await self.backend.remove_friend(friend_id)
        except CampusAPIError as e:
            self.fail("removing friend", e)
            return False
        friend_id = str(friend_id)
        self.friends = [f for f in self.friends if str(f["friend_id"]) != friend_id]
        return True

    def _drop_request(self, request_id: str) -> None:
        request_id = str(request_id)
        self.requests = [r for r in self.requests if str(r["id"]) != request_id]

    # =========================================================================
    # Queries
    # =========================================================================

    def is_friend(self, user_id: str) -> bool:
        return any(str(f["friend_id"]) == str(user_id) for f in self.friends)

    def has_pending_request_sent(self, user_id: str) -> bool:
        return any(str(r["receiver_id"]) == str(user_id) for r in self.sent_requests)

    def has_pending_request_received(self, user_id: str) -> bool:
        return any(str(r["sender_id"]) == str(user_id) for r in self.requests)

    def has_pending_request(self, user_id: str) -> bool:
        return self.has_pending_request_sent(user_id) or self.has_pending_request_received(user_id)

    def pending_request_id(self, user_id: str) -> str | None:
        """Id of the request ``user_id`` sent to the current user, if any."""
        for request in self.requests:
            if str(request["sender_id"]) == str(user_id):
                return str(request["id"])
        return None

    # =========================================================================
    # Push handlers
    # =========================================================================

    async def _on_request(self, event: ChangeEvent) -> None:
        if event.event_type == "INSERT":
            await self.load_requests()
            await self.load_sent_requests()
        elif event.event_type == "UPDATE":
            await self.load_requests()
            await self.load_sent_requests()
            await self.load_friends()

    async def _on_friendship(self, event: ChangeEvent) -> None:
        if event.event_type in ("INSERT", "DELETE"):
            await self.load_friends()
