"""
REST transport for the Campus Connect API.

CampusAPI implements every backend protocol of client.protocols over one
aiohttp ClientSession. Calls are awaited one at a time by the stores and
carry no client-side timeout.

Error handling:
    Any non-2xx response raises CampusAPIError built from the response body.
    Network failures (aiohttp.ClientError) are re-raised as CampusAPIError
    with status None and error_code "NETWORK_ERROR".

Usage:
    async with CampusAPI(ClientConfig.from_env()) as api:
        conversations = await api.list_conversations()
"""

from __future__ import annotations

import logging

import aiohttp

from client.config import ClientConfig
from client.exceptions import CampusAPIError
from client.models import Attachment, Conversation, Message, TypingIndicator

logger = logging.getLogger(__name__)


def attachment_form(fields: dict, file_field: str, attachment: Attachment) -> aiohttp.FormData:
    form = aiohttp.FormData()
    for name, value in fields.items():
        if value is not None:
            form.add_field(name, str(value))
    form.add_field(
        file_field,
        attachment.content,
        filename=attachment.filename,
        content_type=attachment.content_type,
    )
    return form


class CampusAPI:
    """
    aiohttp client for /api/v1.

    The session is created lazily and closed by ``close()`` (or by leaving
    the ``async with`` block) unless it was passed in.
    """

    def __init__(self, config: ClientConfig, session: aiohttp.ClientSession | None = None):
        self.config = config
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> CampusAPI:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(headers=self._headers())
        return self._session

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.config.token:
            headers["Authorization"] = f"Bearer {self.config.token}"
        return headers

    async def close(self) -> None:
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None

    async def _request(self, method: str, path: str, **kwargs):
        url = f"{self.config.base_url}/{path.lstrip('/')}"
        try:
            async with self.session.request(method, url, **kwargs) as response:
                if response.status == 204:
                    return None
                try:
                    payload = await response.json(content_type=None)
                except ValueError:
                    payload = await response.text()
                if response.status >= 400:
                    error = CampusAPIError.from_payload(response.status, payload)
                    logger.debug(f"{method} {path} failed with {response.status}: {error}")
                    raise error
                return payload
        except aiohttp.ClientError as e:
            raise CampusAPIError(str(e) or "Network error", error_code="NETWORK_ERROR") from e

    # =========================================================================
    # Messaging
    # =========================================================================

    async def list_conversations(self) -> list[Conversation]:
        data = await self._request("GET", "chat/conversations/")
        return [Conversation.from_dict(row) for row in data]

    async def get_conversation(self, conversation_id: str) -> Conversation:
        data = await self._request("GET", f"chat/conversations/{conversation_id}/")
        return Conversation.from_dict(data)

    async def get_messages(
        self, conversation_id: str, offset: int = 0, limit: int = 50
    ) -> list[Message]:
        data = await self._request(
            "GET",
            f"chat/conversations/{conversation_id}/messages/",
            params={"offset": offset, "limit": limit},
        )
        return [Message.from_dict(row) for row in data["results"]]

    async def send_message(
        self,
        conversation_id: str,
        content: str,
        attachment: Attachment | None = None,
        reply_to_id: str | None = None,
    ) -> Message:
        path = f"chat/conversations/{conversation_id}/messages/"
        if attachment is not None:
            form = attachment_form(
                {"content": content, "reply_to_id": reply_to_id}, "attachment", attachment
            )
            data = await self._request("POST", path, data=form)
        else:
            body = {"content": content}
            if reply_to_id:
                body["reply_to_id"] = reply_to_id
            data = await self._request("POST", path, json=body)
        return Message.from_dict(data)

    async def create_direct_conversation(self, user_id: str) -> Conversation:
        data = await self._request(
            "POST", "chat/conversations/direct/", json={"user_id": str(user_id)}
        )
        return Conversation.from_dict(data)

    async def mark_read(self, conversation_id: str) -> None:
        await self._request("POST", f"chat/conversations/{conversation_id}/read/")

    async def set_typing(self, conversation_id: str, is_typing: bool) -> TypingIndicator:
        data = await self._request(
            "POST",
            f"chat/conversations/{conversation_id}/typing/",
            json={"is_typing": is_typing},
        )
        return TypingIndicator.from_dict(data)

    # =========================================================================
    # Feed
    # =========================================================================

    async def get_feed(self, offset: int = 0, limit: int = 20) -> list[dict]:
        data = await self._request("GET", "posts/", params={"offset": offset, "limit": limit})
        return data["results"]

    async def create_post(
        self, content: str, image: Attachment | None = None, is_announcement: bool = False
    ) -> dict:
        if image is not None:
            form = attachment_form(
                {"content": content, "is_announcement": str(is_announcement).lower()},
                "image",
                image,
            )
            return await self._request("POST", "posts/", data=form)
        return await self._request(
            "POST", "posts/", json={"content": content, "is_announcement": is_announcement}
        )

    async def like_post(self, post_id: str) -> dict:
        return await self._request("POST", f"posts/{post_id}/like/")

    async def unlike_post(self, post_id: str) -> dict:
        return await self._request("DELETE", f"posts/{post_id}/like/")

    async def add_comment(self, post_id: str, content: str) -> dict:
        return await self._request("POST", f"posts/{post_id}/comments/", json={"content": content})

    async def get_comments(self, post_id: str) -> list[dict]:
        return await self._request("GET", f"posts/{post_id}/comments/")

    # =========================================================================
    # Friends
    # =========================================================================

    async def list_friends(self) -> list[dict]:
        return await self._request("GET", "friends/")

    async def list_friend_requests(self) -> list[dict]:
        return await self._request("GET", "friends/requests/")

    async def list_sent_requests(self) -> list[dict]:
        return await self._request("GET", "friends/requests/sent/")

    async def send_friend_request(self, receiver_id: str) -> dict:
        return await self._request(
            "POST", "friends/requests/", json={"receiver_id": str(receiver_id)}
        )

    async def accept_friend_request(self, request_id: str) -> dict:
        return await self._request("POST", f"friends/requests/{request_id}/accept/")

    async def reject_friend_request(self, request_id: str) -> dict:
        return await self._request("POST", f"friends/requests/{request_id}/reject/")

    async def remove_friend(self, friend_id: str) -> None:
        await self._request("DELETE", f"friends/{friend_id}/")

    # =========================================================================
    # Notifications
    # =========================================================================

    async def list_notifications(self, limit: int = 100) -> list[dict]:
        data = await self._request("GET", "notifications/", params={"limit": limit})
        return data["results"]

    async def mark_notification_read(self, notification_id: str) -> dict:
        return await self._request("POST", f"notifications/{notification_id}/read/")

    async def mark_all_notifications_read(self) -> int:
        data = await self._request("POST", "notifications/read-all/")
        return data["marked_count"]

    async def create_notification(
        self, user_id: str, type: str, title: str, message: str, data: dict | None = None
    ) -> dict:
        body = {"user_id": str(user_id), "type": type, "title": title, "message": message}
        if data is not None:
            body["data"] = data
        return await self._request("POST", "notifications/", json=body)
