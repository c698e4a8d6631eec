"""
Client exceptions.

CampusAPIError is the only error the transport raises: non-2xx responses
and network failures alike. Stores catch it at the call site, log it and
expose the message as ``last_error``.
"""

from __future__ import annotations


class CampusAPIError(Exception):
    """
    A failed backend call.

    Attributes:
        message: Human readable error text from the backend
        status: HTTP status, or None when the request never got a response
        error_code: Machine readable code (e.g. "REQUEST_ALREADY_PENDING")
        errors: Field errors of a validation failure
    """

    def __init__(
        self,
        message: str,
        status: int | None = None,
        error_code: str | None = None,
        errors: dict | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.error_code = error_code
        self.errors = errors or {}

    def __str__(self) -> str:
        return self.message

    @classmethod
    def from_payload(cls, status: int, payload) -> CampusAPIError:
        """
        Build an error from a response body.

        Understands the service error shape (``{"error", "error_code"}``),
        DRF's ``{"detail"}`` and DRF field errors.
        """
        if not isinstance(payload, dict):
            return cls(str(payload) or f"Request failed with status {status}", status=status)

        if "error" in payload:
            return cls(
                payload["error"],
                status=status,
                error_code=payload.get("error_code"),
                errors=payload.get("errors") or payload.get("details"),
            )
        if "detail" in payload:
            return cls(str(payload["detail"]), status=status, error_code=payload.get("code"))

        for field, messages in payload.items():
            first = messages[0] if isinstance(messages, list) and messages else messages
            return cls(
                f"{field}: {first}",
                status=status,
                error_code="VALIDATION_ERROR",
                errors=payload,
            )
        return cls(f"Request failed with status {status}", status=status)


ALREADY_SENT_MESSAGE = "You have already sent a friend request to this user."
ALREADY_FRIENDS_MESSAGE = "You are already friends with this user."
SEND_REQUEST_FAILED_MESSAGE = "Failed to send friend request. Please try again."


def friend_request_error_message(error: Exception) -> str:
    """Display text for a failed friend request, by substring of the error."""
    text = str(error)
    if "already pending" in text or "duplicate key" in text:
        return ALREADY_SENT_MESSAGE
    if "already friends" in text:
        return ALREADY_FRIENDS_MESSAGE
    return SEND_REQUEST_FAILED_MESSAGE
