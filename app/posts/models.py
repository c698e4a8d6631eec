"""
Post models.

- Post: A feed entry, optionally with an image and optionally an
  announcement (shown to everyone, not only friends)
- PostLike: One like per user per post
- PostComment: A comment on a post

``likes_count`` and ``comments_count`` are denormalized counters kept in
step by PostService so the feed never has to aggregate.
"""

from django.conf import settings
from django.db import models

from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel


class Post(UUIDPrimaryKeyMixin, BaseModel):
    """
    A post on the campus feed.

    Fields:
        author: User who wrote the post
        content: Post text
        image_url: Public URL of the image in the posts bucket
        is_announcement: Visible to every user
        likes_count: Number of PostLike rows
        comments_count: Number of PostComment rows
    """

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="posts",
    )
    content = models.TextField()
    image_url = models.URLField(max_length=500, blank=True, null=True)
    is_announcement = models.BooleanField(default=False, db_index=True)
    likes_count = models.PositiveIntegerField(default=0)
    comments_count = models.PositiveIntegerField(default=0)

    class Meta(BaseModel.Meta):
        db_table = "posts_post"
        indexes = [
            models.Index(fields=["author", "-created_at"], name="post_author_created_idx"),
        ]

    def __str__(self):
        return f"Post {self.id} by {self.author_id}"


class PostLike(UUIDPrimaryKeyMixin, BaseModel):
    post = models.ForeignKey(Post, on_delete=models.CASCADE, related_name="likes")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="post_likes",
    )

    class Meta(BaseModel.Meta):
        db_table = "posts_post_like"
        constraints = [
            models.UniqueConstraint(fields=["post", "user"], name="post_like_unique_pair"),
        ]

    def __str__(self):
        return f"{self.user_id} likes {self.post_id}"


class PostComment(UUIDPrimaryKeyMixin, BaseModel):
    post = models.ForeignKey(Post, on_delete=models.CASCADE, related_name="comments")
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="post_comments",
    )
    content = models.TextField()

    class Meta:
        db_table = "posts_post_comment"
        # Conversation order
        ordering = ["created_at"]

    def __str__(self):
        return f"Comment {self.id} on {self.post_id}"
