"""
Post views.

ViewSets:
    PostViewSet: Feed, post creation, likes and comments
"""

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.pagination import OffsetLimitPagination
from posts.constants import POST_CONFIG
from posts.filters import PostFilter
from posts.serializers import (
    CommentCreateSerializer,
    PostCommentSerializer,
    PostCreateSerializer,
    PostSerializer,
)
from posts.services import FeedService, PostService


class FeedPagination(OffsetLimitPagination):
    default_limit = POST_CONFIG.FEED_PAGE_SIZE
    max_limit = POST_CONFIG.FEED_MAX_PAGE_SIZE


@extend_schema_view(
    list=extend_schema(
        operation_id="get_feed",
        summary="Get feed",
        description=(
            "Own posts, friends' posts and announcements, newest first. "
            "Page with ?offset=&limit=."
        ),
        tags=["Posts"],
    ),
    retrieve=extend_schema(operation_id="get_post", summary="Get post", tags=["Posts"]),
)
class PostViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for the feed.

    Provides:
    - list: GET / - Feed page
    - create: POST / - New post (multipart for an image)
    - retrieve: GET /{id}/ - Post detail
    - like: POST|DELETE /{id}/like/ - Like / unlike
    - comments: GET|POST /{id}/comments/ - Comments, oldest first / add
    """

    permission_classes = [IsAuthenticated]
    serializer_class = PostSerializer
    pagination_class = FeedPagination
    parser_classes = [MultiPartParser, FormParser, JSONParser]
    filter_backends = [DjangoFilterBackend]
    filterset_class = PostFilter
    lookup_value_regex = "[0-9a-f-]{36}"

    def get_queryset(self):
        return FeedService.feed_queryset(self.request.user)

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["liked_post_ids"] = getattr(self, "_liked_post_ids", set())
        return context

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        self._liked_post_ids = FeedService.liked_post_ids(request.user, page)
        serializer = self.get_serializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    def retrieve(self, request, *args, **kwargs):
        post = self.get_object()
        self._liked_post_ids = FeedService.liked_post_ids(request.user, [post])
        return Response(self.get_serializer(post).data)

    @extend_schema(
        operation_id="create_post",
        summary="Create post",
        request=PostCreateSerializer,
        responses={201: PostSerializer, 403: OpenApiResponse(description="Announcement not allowed")},
        tags=["Posts"],
    )
    def create(self, request):
        serializer = PostCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = PostService.create_post(
            request.user,
            data["content"],
            image_file=data.get("image"),
            is_announcement=data["is_announcement"],
        )
        if not result.success:
            return Response(result.to_response(), status=result.http_status)
        return Response(PostSerializer(result.data).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="like_post",
        summary="Like or unlike a post",
        request=None,
        responses={
            200: PostSerializer,
            404: OpenApiResponse(description="Post not found"),
            409: OpenApiResponse(description="Already liked"),
        },
        tags=["Posts"],
    )
    @action(detail=True, methods=["post", "delete"])
    def like(self, request, pk=None):
        lookup = PostService.get_post(pk)
        if not lookup.success:
            return Response(lookup.to_response(), status=lookup.http_status)

        if request.method == "DELETE":
            result = PostService.unlike(lookup.data, request.user)
        else:
            result = PostService.like(lookup.data, request.user)
        if not result.success:
            return Response(result.to_response(), status=result.http_status)

        post = result.data
        post.refresh_from_db()
        liked = request.method != "DELETE"
        context = {"liked_post_ids": {post.id} if liked else set()}
        return Response(PostSerializer(post, context=context).data)

    @extend_schema(
        operation_id="post_comments",
        summary="List or add comments",
        request=CommentCreateSerializer,
        responses={200: PostCommentSerializer(many=True), 201: PostCommentSerializer},
        tags=["Posts"],
    )
    @action(detail=True, methods=["get", "post"])
    def comments(self, request, pk=None):
        lookup = PostService.get_post(pk)
        if not lookup.success:
            return Response(lookup.to_response(), status=lookup.http_status)
        post = lookup.data

        if request.method == "GET":
            comments = PostService.get_comments(post)
            return Response(PostCommentSerializer(comments, many=True).data)

        serializer = CommentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = PostService.add_comment(post, request.user, serializer.validated_data["content"])
        if not result.success:
            return Response(result.to_response(), status=result.http_status)
        return Response(
            PostCommentSerializer(result.data).data, status=status.HTTP_201_CREATED
        )
