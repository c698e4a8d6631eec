"""
Serializers for posts, likes and comments.

PostSerializer reports ``liked_by_me`` from the ``liked_post_ids`` set in
its context; without it the flag is False. FeedService builds that set in
one query per page.
"""

from rest_framework import serializers

from authentication.serializers import ProfileSummarySerializer
from posts.constants import POST_CONFIG
from posts.models import Post, PostComment


class PostCommentSerializer(serializers.ModelSerializer):
    """Comment with its author's profile; also the realtime payload."""

    post_id = serializers.UUIDField(read_only=True)
    author_id = serializers.UUIDField(read_only=True)
    author = ProfileSummarySerializer(source="author.profile", read_only=True)

    class Meta:
        model = PostComment
        fields = ["id", "post_id", "author_id", "author", "content", "created_at"]
        read_only_fields = fields


class PostSerializer(serializers.ModelSerializer):
    author_id = serializers.UUIDField(read_only=True)
    author = ProfileSummarySerializer(source="author.profile", read_only=True)
    liked_by_me = serializers.SerializerMethodField()

    class Meta:
        model = Post
        fields = [
            "id",
            "author_id",
            "author",
            "content",
            "image_url",
            "is_announcement",
            "likes_count",
            "comments_count",
            "liked_by_me",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_liked_by_me(self, obj) -> bool:
        return obj.id in self.context.get("liked_post_ids", ())


class PostCreateSerializer(serializers.Serializer):
    content = serializers.CharField(max_length=POST_CONFIG.MAX_CONTENT_LENGTH)
    image = serializers.FileField(required=False, write_only=True)
    is_announcement = serializers.BooleanField(required=False, default=False)


class CommentCreateSerializer(serializers.Serializer):
    content = serializers.CharField(max_length=POST_CONFIG.MAX_COMMENT_LENGTH)
