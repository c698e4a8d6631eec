"""
Test configuration and fixtures for post tests.
"""

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from posts.tests.factories import PostFactory


@pytest.fixture
def post(other_user):
    """A post by ``other_user``."""
    return PostFactory(author=other_user, content="Library closes early today")


@pytest.fixture
def own_post(user):
    return PostFactory(author=user, content="Study group at 5")


@pytest.fixture
def post_image():
    return SimpleUploadedFile("post.png", b"png-bytes", content_type="image/png")
