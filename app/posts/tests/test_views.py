"""
Tests for the posts API.

/api/v1/posts/
"""

import pytest
from freezegun import freeze_time
from rest_framework import status

from friends.tests.factories import make_friends
from posts.models import PostLike
from posts.tests.factories import PostFactory

POSTS_URL = "/api/v1/posts/"


@pytest.mark.django_db
class TestFeedEndpoint:
    def test_feed_is_offset_limit_paginated(self, authenticated_client, user):
        for day in range(1, 4):
            with freeze_time(f"2024-10-0{day}"):
                PostFactory(author=user, content=f"day {day}")

        response = authenticated_client.get(POSTS_URL, {"offset": 1, "limit": 1})

        assert response.status_code == status.HTTP_200_OK
        assert response.data["count"] == 3
        assert [p["content"] for p in response.data["results"]] == ["day 2"]

    def test_feed_marks_liked_posts(self, authenticated_client, user, other_user, post):
        make_friends(user, other_user)
        PostLike.objects.create(post=post, user=user)

        response = authenticated_client.get(POSTS_URL)

        assert response.data["results"][0]["liked_by_me"] is True

    def test_feed_filters_announcements(self, authenticated_client, user, other_user):
        PostFactory(author=user)
        announcement = PostFactory(author=other_user, is_announcement=True)

        response = authenticated_client.get(POSTS_URL, {"is_announcement": "true"})

        assert [p["id"] for p in response.data["results"]] == [str(announcement.id)]

    def test_post_outside_feed_is_404(self, authenticated_client, post):
        response = authenticated_client.get(f"{POSTS_URL}{post.id}/")

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestCreatePostEndpoint:
    def test_create_json(self, authenticated_client):
        response = authenticated_client.post(POSTS_URL, {"content": "Hi"}, format="json")

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["content"] == "Hi"
        assert response.data["likes_count"] == 0

    def test_create_multipart_with_image(self, authenticated_client, post_image, user):
        response = authenticated_client.post(
            POSTS_URL, {"content": "Photo", "image": post_image}, format="multipart"
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert f"/posts/{user.id}/" in response.data["image_url"]

    def test_student_announcement_is_forbidden(self, authenticated_client):
        response = authenticated_client.post(
            POSTS_URL, {"content": "Exam", "is_announcement": True}, format="json"
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestLikeEndpoint:
    def test_like_then_unlike(self, authenticated_client, post):
        liked = authenticated_client.post(f"{POSTS_URL}{post.id}/like/")
        unliked = authenticated_client.delete(f"{POSTS_URL}{post.id}/like/")

        assert liked.status_code == status.HTTP_200_OK
        assert liked.data["likes_count"] == 1
        assert liked.data["liked_by_me"] is True
        assert unliked.data["likes_count"] == 0
        assert unliked.data["liked_by_me"] is False

    def test_double_like_returns_409(self, authenticated_client, post):
        authenticated_client.post(f"{POSTS_URL}{post.id}/like/")

        response = authenticated_client.post(f"{POSTS_URL}{post.id}/like/")

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data["error_code"] == "ALREADY_LIKED"

    def test_like_unknown_post_returns_404(self, authenticated_client):
        response = authenticated_client.post(
            f"{POSTS_URL}00000000-0000-0000-0000-000000000000/like/"
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestCommentsEndpoint:
    def test_add_and_list_comments(self, authenticated_client, post):
        created = authenticated_client.post(
            f"{POSTS_URL}{post.id}/comments/", {"content": "Thanks!"}, format="json"
        )
        listed = authenticated_client.get(f"{POSTS_URL}{post.id}/comments/")

        assert created.status_code == status.HTTP_201_CREATED
        assert created.data["author"]["full_name"] == "Alice Rahman"
        assert [c["content"] for c in listed.data] == ["Thanks!"]

    def test_comment_too_long_returns_400(self, authenticated_client, post):
        response = authenticated_client.post(
            f"{POSTS_URL}{post.id}/comments/", {"content": "x" * 501}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
