"""
Friend views.

Endpoints:
    GET    /                       - Friends of the current user
    DELETE /{friend_id}/           - Remove a friend
    GET    /requests/              - Pending requests received
    POST   /requests/              - Send a request
    GET    /requests/sent/         - Pending requests sent
    POST   /requests/{id}/accept/  - Accept (remote procedure)
    POST   /requests/{id}/reject/  - Reject
"""

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from friends.serializers import (
    FriendRequestSerializer,
    FriendshipSerializer,
    SendFriendRequestSerializer,
)
from friends.services import FriendService


class FriendListView(generics.ListAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = FriendshipSerializer
    pagination_class = None

    @extend_schema(summary="List friends", tags=["Friends"])
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)

    def get_queryset(self):
        return FriendService.get_friends(self.request.user)


class FriendDetailView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Remove a friend",
        tags=["Friends"],
        responses={204: None, 404: OpenApiResponse(description="Not friends")},
    )
    def delete(self, request, friend_id):
        result = FriendService.remove_friend(request.user, friend_id)
        if not result.success:
            return Response(result.to_response(), status=result.http_status)
        return Response(status=status.HTTP_204_NO_CONTENT)


class FriendRequestListView(APIView):
    """
    Received requests (GET) and sending a new one (POST).
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List pending requests received",
        tags=["Friends"],
        responses={200: FriendRequestSerializer(many=True)},
    )
    def get(self, request):
        requests = FriendService.get_pending_requests(request.user)
        return Response(FriendRequestSerializer(requests, many=True).data)

    @extend_schema(
        summary="Send a friend request",
        tags=["Friends"],
        request=SendFriendRequestSerializer,
        responses={
            201: FriendRequestSerializer,
            409: OpenApiResponse(description="Already friends or request pending"),
        },
    )
    def post(self, request):
        serializer = SendFriendRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = FriendService.send_request(
            request.user, serializer.validated_data["receiver_id"]
        )
        if not result.success:
            return Response(result.to_response(), status=result.http_status)
        return Response(
            FriendRequestSerializer(result.data).data, status=status.HTTP_201_CREATED
        )


class SentFriendRequestListView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List pending requests sent",
        tags=["Friends"],
        responses={200: FriendRequestSerializer(many=True)},
    )
    def get(self, request):
        requests = FriendService.get_sent_requests(request.user)
        return Response(FriendRequestSerializer(requests, many=True).data)


class AcceptFriendRequestView(APIView):
    """Accept a request addressed to the current user."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Accept a friend request",
        tags=["Friends"],
        request=None,
        responses={200: FriendRequestSerializer},
    )
    def post(self, request, request_id):
        result = FriendService.accept_request(request_id, request.user)
        if not result.success:
            return Response(result.to_response(), status=result.http_status)
        return Response(FriendRequestSerializer(result.data).data)


class RejectFriendRequestView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Reject a friend request",
        tags=["Friends"],
        request=None,
        responses={200: FriendRequestSerializer},
    )
    def post(self, request, request_id):
        result = FriendService.reject_request(request_id, request.user)
        if not result.success:
            return Response(result.to_response(), status=result.http_status)
        return Response(FriendRequestSerializer(result.data).data)
