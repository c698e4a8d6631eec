"""
Constants for the posts app.
"""

from typing import Final


class POST_CONFIG:
    """Feed paging and content limits."""

    FEED_PAGE_SIZE: Final[int] = 20
    FEED_MAX_PAGE_SIZE: Final[int] = 100

    MAX_CONTENT_LENGTH: Final[int] = 2000
    MAX_COMMENT_LENGTH: Final[int] = 500
