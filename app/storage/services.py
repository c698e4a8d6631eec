"""
Object storage service for avatars, post images and message attachments.

Objects live in Django's default storage under ``<bucket>/<path>``:
- Local development: FileSystemStorage under MEDIA_ROOT
- Production: S3 via django-storages (USE_S3_STORAGE=True)

Every stored object has a public URL built from STORAGE_PUBLIC_BASE_URL,
so rows (profiles, posts, messages) keep a plain URL string rather than a
file field.

Usage:
    from storage.services import StorageService

    stored = StorageService.upload(
        "avatars", f"{user.id}/avatar-{stamp}.jpg", uploaded_file, upsert=True
    )
    profile.avatar_url = stored.public_url
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from botocore.exceptions import BotoCoreError, ClientError
from django.conf import settings
from django.core.files.storage import default_storage

from core.exceptions import ConflictError, ExternalServiceError, ValidationError
from core.services import BaseService
from storage.constants import STORAGE_CONFIG
from storage.validators import BUCKET_VALIDATORS

if TYPE_CHECKING:
    from django.core.files import File

STORAGE_ERRORS = (OSError, BotoCoreError, ClientError)


@dataclass(frozen=True)
class StoredObject:
    """Result of an upload: the object's path inside its bucket and its URL."""

    bucket: str
    path: str
    public_url: str


def timestamp_ms() -> int:
    """Milliseconds since the epoch, used to make object paths unique."""
    return int(time.time() * 1000)


class StorageService(BaseService):
    """
    Bucket-style API over Django's default storage.

    Methods:
        upload: Validate and store a file, returning its public URL
        public_url: Public URL for an object path
        exists: Whether an object exists
        remove: Delete objects from a bucket
    """

    @classmethod
    def check_bucket(cls, bucket: str) -> None:
        if bucket not in STORAGE_CONFIG.BUCKETS:
            raise ValidationError(
                f"Unknown bucket '{bucket}'",
                error_code="INVALID_BUCKET",
                details={"buckets": list(STORAGE_CONFIG.BUCKETS)},
            )

    @classmethod
    def object_key(cls, bucket: str, path: str) -> str:
        path = path.strip().lstrip("/")
        if not path or ".." in path.split("/"):
            raise ValidationError("Invalid object path", error_code="INVALID_PATH")
        return f"{bucket}/{path}"

    @classmethod
    def public_url(cls, bucket: str, path: str) -> str:
        cls.check_bucket(bucket)
        key = cls.object_key(bucket, path)
        base_url = settings.STORAGE_PUBLIC_BASE_URL
        if base_url:
            return f"{base_url.rstrip('/')}/{key}"
        return default_storage.url(key)

    @classmethod
    def exists(cls, bucket: str, path: str) -> bool:
        cls.check_bucket(bucket)
        return default_storage.exists(cls.object_key(bucket, path))

    @classmethod
    def upload(
        cls,
        bucket: str,
        path: str,
        file: File,
        upsert: bool = False,
    ) -> StoredObject:
        """
        Validate and store ``file`` at ``path`` inside ``bucket``.

        Args:
            bucket: One of avatars, posts, messages
            path: Object path inside the bucket
            file: Uploaded file (size and content_type are validated)
            upsert: Overwrite an existing object instead of failing

        Raises:
            ValidationError: INVALID_BUCKET, INVALID_PATH, FILE_TOO_LARGE,
                INVALID_FILE_TYPE
            ConflictError: OBJECT_EXISTS when the path is taken and upsert
                is False
            ExternalServiceError: The storage backend failed
        """
        cls.check_bucket(bucket)
        key = cls.object_key(bucket, path)
        BUCKET_VALIDATORS[bucket](file)

        logger = cls.get_logger()
        try:
            if default_storage.exists(key):
                if not upsert:
                    raise ConflictError(
                        "The resource already exists",
                        error_code="OBJECT_EXISTS",
                        details={"bucket": bucket, "path": path},
                    )
                default_storage.delete(key)
            saved_key = default_storage.save(key, file)
        except STORAGE_ERRORS as e:
            logger.error(f"Upload to {key} failed: {e}", exc_info=True)
            raise ExternalServiceError(
                "Storage upload failed",
                error_code="STORAGE_ERROR",
                details={"bucket": bucket, "path": path},
            ) from e

        stored_path = saved_key[len(bucket) + 1 :]
        logger.info(f"Stored {saved_key} ({file.size} bytes)")
        return StoredObject(
            bucket=bucket,
            path=stored_path,
            public_url=cls.public_url(bucket, stored_path),
        )

    @classmethod
    def remove(cls, bucket: str, paths: list[str]) -> list[str]:
        """
        Delete objects from a bucket.

        Missing objects are skipped.

        Returns:
            The paths that existed and were removed
        """
        cls.check_bucket(bucket)
        removed = []
        for path in paths:
            key = cls.object_key(bucket, path)
            try:
                if default_storage.exists(key):
                    default_storage.delete(key)
                    removed.append(path)
            except STORAGE_ERRORS as e:
                cls.get_logger().error(f"Delete of {key} failed: {e}", exc_info=True)
                raise ExternalServiceError(
                    "Storage delete failed",
                    error_code="STORAGE_ERROR",
                    details={"bucket": bucket, "path": path},
                ) from e
        if removed:
            cls.get_logger().info(f"Removed {len(removed)} object(s) from {bucket}")
        return removed
