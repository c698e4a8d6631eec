"""
Constants for the realtime change feed.
"""

from typing import Final


class REALTIME_CONFIG:
    """Topics, event types and WebSocket close codes."""

    # Topics every authenticated client may follow
    GLOBAL_TOPICS: Final[tuple[str, ...]] = ("posts", "post_comments")

    # Topics scoped to the subscribing user
    USER_TOPICS: Final[tuple[str, ...]] = (
        "friend_requests",
        "friendships",
        "messages",
        "typing_indicators",
        "notifications",
    )

    TOPICS: Final[tuple[str, ...]] = GLOBAL_TOPICS + USER_TOPICS

    INSERT: Final[str] = "INSERT"
    UPDATE: Final[str] = "UPDATE"
    DELETE: Final[str] = "DELETE"

    CLOSE_UNAUTHENTICATED: Final[int] = 4001
