"""
Django admin configuration for posts.
"""

from django.contrib import admin

from posts.models import Post, PostComment, PostLike


class PostCommentInline(admin.TabularInline):
    model = PostComment
    extra = 0
    raw_id_fields = ("author",)
    readonly_fields = ("created_at",)


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = ("id", "author", "is_announcement", "likes_count", "comments_count", "created_at")
    list_filter = ("is_announcement", "created_at")
    search_fields = ("content", "author__email")
    raw_id_fields = ("author",)
    readonly_fields = ("likes_count", "comments_count", "created_at", "updated_at")
    inlines = [PostCommentInline]


@admin.register(PostLike)
class PostLikeAdmin(admin.ModelAdmin):
    list_display = ("post", "user", "created_at")
    raw_id_fields = ("post", "user")
