"""
Optimistic message composer.

Sending clears the input at once and performs a single remote write. The
returned row is authoritative: it goes to the top of the message window
and becomes the conversation's last message. On failure the text and
attachment are put back and an error is shown; nothing is retried.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from client.exceptions import CampusAPIError

if TYPE_CHECKING:
    from client.conversations import ConversationListCache
    from client.messages import MessageWindowCache
    from client.models import Attachment, Message
    from client.protocols import MessagingBackend
    from client.typing_indicators import LocalTypingState

logger = logging.getLogger(__name__)

SEND_FAILED_MESSAGE = "Failed to send message. Please try again."


class MessageComposer:
    """
    Input state of one conversation.

    Attributes:
        draft_text: Text in the input box
        attachment: Picked file, if any
        reply_to_id: Message being replied to, if any
        error: Error shown under the input, if any
        sending: True while a send is in flight
    """

    def __init__(
        self,
        backend: MessagingBackend,
        conversation_id: str,
        windows: MessageWindowCache,
        conversations: ConversationListCache,
        typing: LocalTypingState | None = None,
        self_id: str | None = None,
    ):
        self.backend = backend
        self.conversation_id = conversation_id
        self.windows = windows
        self.conversations = conversations
        self.typing = typing
        self.self_id = self_id

        self.draft_text = ""
        self.attachment: Attachment | None = None
        self.reply_to_id: str | None = None
        self.error: str | None = None
        self.sending = False

    async def type(self, text: str) -> None:
        self.draft_text = text
        if self.typing is not None:
            await self.typing.keystroke()

    def attach(self, attachment: Attachment | None) -> None:
        self.attachment = attachment
        self.error = None

    async def send(self) -> Message | None:
        """
        Send the draft.

        Returns:
            The stored message, or None when nothing was sent
        """
        text = self.draft_text.strip()
        attachment = self.attachment
        if self.sending or (not text and attachment is None):
            return None

        reply_to_id = self.reply_to_id
        self.sending = True
        self.draft_text = ""
        self.attachment = None
        self.reply_to_id = None
        self.error = None

        try:
            if self.typing is not None:
                await self.typing.stop()

            try:
                message = await self.backend.send_message(
                    self.conversation_id, text, attachment=attachment, reply_to_id=reply_to_id
                )
            except CampusAPIError as e:
                logger.error(f"Error sending message to {self.conversation_id}: {e}")
                self.error = SEND_FAILED_MESSAGE
                self.draft_text = text
                self.attachment = attachment
                self.reply_to_id = reply_to_id
                return None

            # A push may already have delivered the row
            if self.windows.prepend(message):
                self.conversations.apply_new_message(message, self.self_id)
            return message
        finally:
            self.sending = False
