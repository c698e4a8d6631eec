"""
Post service layer.

- FeedService: The feed a user sees (own posts, friends' posts and
  announcements, newest first)
- PostService: Creating posts, likes and comments

Realtime:
    posts          INSERT on create, UPDATE when counters change
    post_comments  INSERT on every new comment

Counters are updated with F() expressions so concurrent likes from
different users never lose an increment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.db.models import F, IntegerField, Q
from django.db.models.functions import Greatest

from core.services import BaseService, ServiceResult
from friends.services import FriendService, display_name
from notifications.models import NotificationType
from notifications.services import NotificationService
from posts.constants import POST_CONFIG
from posts.models import Post, PostComment, PostLike
from posts.serializers import PostCommentSerializer, PostSerializer
from realtime.broadcast import publish_change
from realtime.constants import REALTIME_CONFIG
from storage.constants import STORAGE_CONFIG
from storage.services import StorageService, timestamp_ms

if TYPE_CHECKING:
    from django.core.files import File

    from authentication.models import User


class FeedService(BaseService):
    """Read side of the feed."""

    @classmethod
    def feed_queryset(cls, user: User):
        author_ids = [user.id, *FriendService.get_friend_ids(user)]
        return (
            Post.objects.filter(Q(author_id__in=author_ids) | Q(is_announcement=True))
            .select_related("author__profile")
            .order_by("-created_at")
        )

    @classmethod
    def get_feed(cls, user: User, offset: int = 0, limit: int = POST_CONFIG.FEED_PAGE_SIZE) -> list[Post]:
        """
        One page of the user's feed.

        Args:
            user: Viewer
            offset: Number of posts to skip
            limit: Page size (capped at FEED_MAX_PAGE_SIZE)
        """
        offset = max(offset, 0)
        limit = min(max(limit, 1), POST_CONFIG.FEED_MAX_PAGE_SIZE)
        return list(cls.feed_queryset(user)[offset : offset + limit])

    @classmethod
    def liked_post_ids(cls, user: User, posts) -> set:
        return set(
            PostLike.objects.filter(user=user, post__in=list(posts)).values_list(
                "post_id", flat=True
            )
        )


class PostService(BaseService):
    """
    Write side of the feed.

    Methods:
        create_post: New post, optionally with an image
        like / unlike: Toggle a like and its counter
        add_comment: New comment and counter
        get_comments: Comments of a post, oldest first
    """

    @classmethod
    def get_post(cls, post_id) -> ServiceResult[Post]:
        post = Post.objects.select_related("author__profile").filter(id=post_id).first()
        if post is None:
            return ServiceResult.failure("Post not found", error_code="POST_NOT_FOUND")
        return ServiceResult.success(post)

    @classmethod
    def _publish_counts(cls, post: Post) -> None:
        post.refresh_from_db(fields=["likes_count", "comments_count", "updated_at"])
        publish_change(
            "posts",
            table="posts",
            event_type=REALTIME_CONFIG.UPDATE,
            new=PostSerializer(post).data,
        )

    @classmethod
    def create_post(
        cls,
        author: User,
        content: str,
        image_file: File | None = None,
        is_announcement: bool = False,
    ) -> ServiceResult[Post]:
        """
        Create a post.

        The image goes to the posts bucket at
        ``<user_id>/post-<timestamp>.jpg``. Only faculty and staff may
        publish announcements.
        """
        validation = cls.validate_required(content=content)
        if validation is not None:
            return validation

        if is_announcement and not (author.is_staff or author.profile.is_faculty):
            return ServiceResult.failure(
                "Only faculty can post announcements",
                error_code="PERMISSION_DENIED",
            )

        image_url = None
        if image_file is not None:
            stored = StorageService.upload(
                STORAGE_CONFIG.POSTS,
                f"{author.id}/post-{timestamp_ms()}.jpg",
                image_file,
                upsert=True,
            )
            image_url = stored.public_url

        with cls.atomic():
            post = Post.objects.create(
                author=author,
                content=content.strip(),
                image_url=image_url,
                is_announcement=is_announcement,
            )
            publish_change(
                "posts",
                table="posts",
                event_type=REALTIME_CONFIG.INSERT,
                new=PostSerializer(post).data,
            )

        cls.get_logger().info(f"User {author.id} created post {post.id}")
        return ServiceResult.success(post)

    @classmethod
    def like(cls, post: Post, user: User) -> ServiceResult[Post]:
        """Like a post; a second like by the same user fails with ALREADY_LIKED."""
        with cls.atomic():
            _, created = PostLike.objects.get_or_create(post=post, user=user)
            if not created:
                return ServiceResult.failure(
                    "You already liked this post", error_code="ALREADY_LIKED"
                )
            Post.objects.filter(id=post.id).update(likes_count=F("likes_count") + 1)
            cls._publish_counts(post)

            if post.author_id != user.id:
                NotificationService.create_notification(
                    post.author,
                    NotificationType.POST_LIKE,
                    "New like",
                    f"{display_name(user)} liked your post",
                    {"post_id": str(post.id), "user_id": str(user.id)},
                )

        cls.get_logger().debug(f"User {user.id} liked post {post.id}")
        return ServiceResult.success(post)

    @classmethod
    def unlike(cls, post: Post, user: User) -> ServiceResult[Post]:
        """Remove a like; the counter never drops below zero."""
        with cls.atomic():
            deleted, _ = PostLike.objects.filter(post=post, user=user).delete()
            if not deleted:
                return ServiceResult.failure(
                    "You have not liked this post", error_code="NOT_LIKED"
                )
            Post.objects.filter(id=post.id).update(
                likes_count=Greatest(F("likes_count") - 1, 0, output_field=IntegerField())
            )
            cls._publish_counts(post)

        cls.get_logger().debug(f"User {user.id} unliked post {post.id}")
        return ServiceResult.success(post)

    @classmethod
    def add_comment(cls, post: Post, author: User, content: str) -> ServiceResult[PostComment]:
        validation = cls.validate_required(content=content)
        if validation is not None:
            return validation

        with cls.atomic():
            comment = PostComment.objects.create(
                post=post, author=author, content=content.strip()
            )
            Post.objects.filter(id=post.id).update(comments_count=F("comments_count") + 1)
            publish_change(
                "post_comments",
                table="post_comments",
                event_type=REALTIME_CONFIG.INSERT,
                new=PostCommentSerializer(comment).data,
            )
            cls._publish_counts(post)

            if post.author_id != author.id:
                NotificationService.create_notification(
                    post.author,
                    NotificationType.POST_COMMENT,
                    "New comment",
                    f"{display_name(author)} commented on your post",
                    {"post_id": str(post.id), "comment_id": str(comment.id)},
                )

        cls.get_logger().info(f"User {author.id} commented on post {post.id}")
        return ServiceResult.success(comment)

    @classmethod
    def get_comments(cls, post: Post):
        return (
            PostComment.objects.filter(post=post)
            .select_related("author__profile")
            .order_by("created_at")
        )
