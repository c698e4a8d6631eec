"""
Notification views.

ViewSets:
    NotificationViewSet: Inbox list, create, unread count, mark read
"""

from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from notifications.models import Notification
from notifications.serializers import (
    MarkAllReadResponseSerializer,
    NotificationCreateSerializer,
    NotificationSerializer,
    UnreadCountSerializer,
)
from notifications.services import NotificationService


@extend_schema_view(
    list=extend_schema(
        operation_id="list_notifications",
        summary="List notifications",
        description="List the user's notifications, newest first. Filter with ?is_read=.",
        tags=["Notifications"],
    ),
    retrieve=extend_schema(
        operation_id="get_notification",
        summary="Get notification",
        tags=["Notifications"],
    ),
)
class NotificationViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for notification operations.

    Provides:
    - list: GET / - List user's notifications
    - retrieve: GET /{id}/ - Notification detail
    - create: POST / - Create a notification for any user
    - unread_count: GET /unread-count/ - Badge count
    - read: POST /{id}/read/ - Mark single as read
    - read_all: POST /read-all/ - Mark all as read
    """

    permission_classes = [IsAuthenticated]
    serializer_class = NotificationSerializer
    lookup_value_regex = "[0-9a-f-]{36}"

    def get_queryset(self):
        queryset = NotificationService.list_for_user(self.request.user)

        is_read = self.request.query_params.get("is_read")
        if is_read is not None:
            queryset = queryset.filter(is_read=is_read.lower() == "true")

        return queryset

    @extend_schema(
        operation_id="create_notification",
        summary="Create notification",
        request=NotificationCreateSerializer,
        responses={201: NotificationSerializer},
        tags=["Notifications"],
    )
    def create(self, request):
        serializer = NotificationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = NotificationService.create_for_user_id(
            data["user_id"],
            data["type"],
            data["title"],
            data["message"],
            data.get("data"),
        )
        if not result.success:
            return Response(result.to_response(), status=result.http_status)
        return Response(
            NotificationSerializer(result.data).data,
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        operation_id="get_unread_notification_count",
        summary="Get unread notification count",
        responses={200: UnreadCountSerializer},
        tags=["Notifications"],
    )
    @action(detail=False, methods=["get"], url_path="unread-count")
    def unread_count(self, request):
        count = NotificationService.get_unread_count(request.user)
        return Response(UnreadCountSerializer({"unread_count": count}).data)

    @extend_schema(
        operation_id="mark_notification_read",
        summary="Mark notification as read",
        responses={
            200: NotificationSerializer,
            404: OpenApiResponse(description="Notification not found"),
        },
        tags=["Notifications"],
    )
    @action(detail=True, methods=["post"])
    def read(self, request, pk=None):
        """
        Mark single notification as read.

        Returns 404 if the notification doesn't exist or belongs to another user.
        """
        try:
            notification = Notification.objects.get(pk=pk, user=request.user)
        except Notification.DoesNotExist:
            return Response(
                {"error": "Notification not found", "error_code": "NOTIFICATION_NOT_FOUND"},
                status=status.HTTP_404_NOT_FOUND,
            )

        result = NotificationService.mark_as_read(notification, request.user)
        if not result.success:
            return Response(result.to_response(), status=result.http_status)

        return Response(self.get_serializer(result.data).data)

    @extend_schema(
        operation_id="mark_all_notifications_read",
        summary="Mark all notifications as read",
        responses={200: MarkAllReadResponseSerializer},
        tags=["Notifications"],
    )
    @action(detail=False, methods=["post"], url_path="read-all")
    def read_all(self, request):
        result = NotificationService.mark_all_as_read(request.user)
        return Response(MarkAllReadResponseSerializer({"marked_count": result.data}).data)
