"""
Constants and configuration for chat module features.

This module centralizes configuration values for:
- Message operations (content limits, window paging)
- Typing indicators (staleness)

Import example:
    from chat.constants import MESSAGE_CONFIG, TYPING_CONFIG
"""

from typing import Final


# =============================================================================
# Message Configuration
# =============================================================================


class MESSAGE_CONFIG:
    """Configuration for message operations."""

    # Content limits
    MAX_CONTENT_LENGTH: Final[int] = 1000  # Characters

    # Message window paging (newest first)
    PAGE_SIZE: Final[int] = 50
    MAX_PAGE_SIZE: Final[int] = 100


# =============================================================================
# Typing Configuration
# =============================================================================


class TYPING_CONFIG:
    """Configuration for typing indicators."""

    # Rows not refreshed for this long no longer count as typing
    STALE_AFTER_SECONDS: Final[int] = 10

    # Client-side timeout after the last keystroke
    CLIENT_TIMEOUT_SECONDS: Final[int] = 3
