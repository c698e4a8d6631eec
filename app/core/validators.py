"""
Custom validators for uploads and registration input.

Usage:
    from core.validators import validate_file_size, validate_content_type

    validate_file_size(max_mb=10)(uploaded_file)
    validate_content_type(["image/jpeg", "image/png"])(uploaded_file)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.core.exceptions import ValidationError

if TYPE_CHECKING:
    from django.core.files import File


def validate_file_size(max_mb: int = 10):
    """
    Validator factory for file size limits.

    Args:
        max_mb: Maximum file size in megabytes
    """

    def validator(file: File):
        max_bytes = max_mb * 1024 * 1024
        if file.size > max_bytes:
            raise ValidationError(
                f"File size must be less than {max_mb}MB. "
                f"Current size: {file.size / 1024 / 1024:.1f}MB"
            )

    return validator


def validate_content_type(allowed: list[str]):
    """
    Validator factory for MIME type limits.

    Entries ending in ``/*`` match a whole family (``image/*``).
    """

    def validator(file: File):
        content_type = (getattr(file, "content_type", None) or "").lower()
        for pattern in allowed:
            if pattern.endswith("/*") and content_type.startswith(pattern[:-1]):
                return
            if content_type == pattern:
                return
        raise ValidationError(
            f"File type '{content_type or 'unknown'}' is not allowed. "
            f"Allowed: {', '.join(allowed)}"
        )

    return validator


def validate_email_domain(domain: str):
    """Validator factory requiring addresses of the form ``user@<domain>``."""

    def validator(value: str):
        local, _, host = (value or "").strip().rpartition("@")
        if not local or host.lower() != domain.lower():
            raise ValidationError(f"Please use your university email (@{domain})")

    return validator
