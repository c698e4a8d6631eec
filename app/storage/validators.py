"""
Upload validators for the storage buckets.

Two families of uploads exist:
- Images (avatars, post images): at most 10MB, jpeg/jpg/png/gif/webp
- Documents (message attachments): at most 50MB, any image or video,
  PDF or Word

Validation trusts the declared content type of the upload; the declared
type is also what decides the attachment kind shown in a conversation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.core.exceptions import ValidationError as DjangoValidationError

from core.exceptions import ValidationError
from core.validators import validate_content_type, validate_file_size
from storage.constants import STORAGE_CONFIG

if TYPE_CHECKING:
    from django.core.files import File


def _run(validators, file: File) -> None:
    size_check, type_check = validators
    try:
        size_check(file)
    except DjangoValidationError as e:
        raise ValidationError(e.messages[0], error_code="FILE_TOO_LARGE") from e
    try:
        type_check(file)
    except DjangoValidationError as e:
        raise ValidationError(e.messages[0], error_code="INVALID_FILE_TYPE") from e


def validate_image(file: File) -> None:
    """
    Validate an avatar or post image.

    Raises:
        ValidationError: FILE_TOO_LARGE or INVALID_FILE_TYPE
    """
    _run(
        (
            validate_file_size(max_mb=STORAGE_CONFIG.IMAGE_MAX_MB),
            validate_content_type(list(STORAGE_CONFIG.IMAGE_TYPES)),
        ),
        file,
    )


def validate_document(file: File) -> None:
    """
    Validate a message attachment.

    Raises:
        ValidationError: FILE_TOO_LARGE or INVALID_FILE_TYPE
    """
    _run(
        (
            validate_file_size(max_mb=STORAGE_CONFIG.DOCUMENT_MAX_MB),
            validate_content_type(list(STORAGE_CONFIG.DOCUMENT_TYPES)),
        ),
        file,
    )


def attachment_kind(content_type: str | None) -> str:
    """Map a MIME type to a message attachment kind (image, video or file)."""
    content_type = (content_type or "").lower()
    if content_type.startswith("image/"):
        return "image"
    if content_type.startswith("video/"):
        return "video"
    return "file"


BUCKET_VALIDATORS = {
    STORAGE_CONFIG.AVATARS: validate_image,
    STORAGE_CONFIG.POSTS: validate_image,
    STORAGE_CONFIG.MESSAGES: validate_document,
}
