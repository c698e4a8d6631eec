"""
Tests for StorageService and the bucket validators.

Uploads go to the FileSystemStorage under the temporary MEDIA_ROOT set
in config.test_settings.
"""

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from core.exceptions import ConflictError, ValidationError
from storage.services import StorageService
from storage.validators import attachment_kind


def image(name="photo.jpg", content_type="image/jpeg", content=b"image-bytes"):
    return SimpleUploadedFile(name, content, content_type=content_type)


class TestAttachmentKind:
    """Tests for attachment_kind()."""

    @pytest.mark.parametrize(
        "content_type, kind",
        [
            ("image/png", "image"),
            ("IMAGE/JPEG", "image"),
            ("video/mp4", "video"),
            ("application/pdf", "file"),
            (None, "file"),
        ],
    )
    def test_kind_from_content_type(self, content_type, kind):
        assert attachment_kind(content_type) == kind


class TestUpload:
    """Tests for StorageService.upload()."""

    def test_upload_returns_path_and_public_url(self):
        """
        Uploads answer with the bucket path and a public URL.

        Why it matters: Rows store only the URL string.
        """
        stored = StorageService.upload("posts", "user-1/post-1.jpg", image())

        assert stored.bucket == "posts"
        assert stored.path == "user-1/post-1.jpg"
        assert stored.public_url == "http://testserver/media/posts/user-1/post-1.jpg"
        assert StorageService.exists("posts", "user-1/post-1.jpg")

    def test_upload_to_taken_path_without_upsert_conflicts(self):
        """
        Without upsert an existing object is never overwritten.

        Why it matters: Message attachments are uploaded without upsert.
        """
        StorageService.upload("messages", "conv/a.pdf", image("a.pdf", "application/pdf"))

        with pytest.raises(ConflictError) as exc_info:
            StorageService.upload("messages", "conv/a.pdf", image("a.pdf", "application/pdf"))

        assert exc_info.value.error_code == "OBJECT_EXISTS"

    def test_upload_with_upsert_replaces_object(self):
        StorageService.upload("avatars", "u/avatar.jpg", image(content=b"old"))

        stored = StorageService.upload("avatars", "u/avatar.jpg", image(content=b"new"), upsert=True)

        assert stored.path == "u/avatar.jpg"

    def test_unknown_bucket_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            StorageService.upload("secrets", "a.jpg", image())

        assert exc_info.value.error_code == "INVALID_BUCKET"

    def test_path_traversal_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            StorageService.upload("posts", "../etc/passwd.jpg", image())

        assert exc_info.value.error_code == "INVALID_PATH"

    def test_image_bucket_rejects_pdf(self):
        with pytest.raises(ValidationError) as exc_info:
            StorageService.upload("posts", "u/doc.pdf", image("doc.pdf", "application/pdf"))

        assert exc_info.value.error_code == "INVALID_FILE_TYPE"

    def test_messages_bucket_accepts_video(self):
        stored = StorageService.upload("messages", "c/clip.mp4", image("clip.mp4", "video/mp4"))

        assert stored.path == "c/clip.mp4"

    def test_image_over_ten_megabytes_is_rejected(self):
        big = image(content=b"0" * (10 * 1024 * 1024 + 1))

        with pytest.raises(ValidationError) as exc_info:
            StorageService.upload("avatars", "u/big.jpg", big)

        assert exc_info.value.error_code == "FILE_TOO_LARGE"


class TestRemove:
    def test_remove_returns_only_existing_paths(self):
        StorageService.upload("posts", "u/one.jpg", image())

        removed = StorageService.remove("posts", ["u/one.jpg", "u/missing.jpg"])

        assert removed == ["u/one.jpg"]
        assert not StorageService.exists("posts", "u/one.jpg")
