"""
Constants for the storage app.
"""

from typing import Final


class STORAGE_CONFIG:
    """Bucket names and upload limits."""

    AVATARS: Final[str] = "avatars"
    POSTS: Final[str] = "posts"
    MESSAGES: Final[str] = "messages"
    BUCKETS: Final[tuple[str, ...]] = (AVATARS, POSTS, MESSAGES)

    # Buckets whose objects are written in place when the path exists
    UPSERT_BUCKETS: Final[tuple[str, ...]] = (AVATARS, POSTS)

    IMAGE_MAX_MB: Final[int] = 10
    DOCUMENT_MAX_MB: Final[int] = 50

    IMAGE_TYPES: Final[tuple[str, ...]] = (
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/gif",
        "image/webp",
    )
    DOCUMENT_TYPES: Final[tuple[str, ...]] = (
        "image/*",
        "video/*",
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    )
