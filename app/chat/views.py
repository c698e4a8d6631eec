"""
ViewSets for chat API.

URL Structure:
    /api/v1/chat/conversations/                      GET
    /api/v1/chat/conversations/direct/               POST (remote procedure)
    /api/v1/chat/conversations/{id}/                 GET
    /api/v1/chat/conversations/{id}/participants/    GET
    /api/v1/chat/conversations/{id}/messages/        GET, POST
    /api/v1/chat/conversations/{id}/read/            POST
    /api/v1/chat/conversations/{id}/typing/          GET, POST

Design Decisions:
    - Every conversation-scoped action loads the conversation through
      ConversationService.get_for_participant (404 / 403)
    - Messages are paged by offset/limit, newest first
    - Sending accepts multipart so that an attachment rides along
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from chat.pagination import MessagePagination
from chat.serializers import (
    ConversationSerializer,
    DirectConversationSerializer,
    MessageCreateSerializer,
    MessageSerializer,
    ParticipantSerializer,
    TypingIndicatorSerializer,
    TypingSerializer,
)
from chat.services import ConversationService, MessageService, TypingService


@extend_schema_view(
    list=extend_schema(
        operation_id="list_conversations",
        summary="List conversations",
        description="Conversations with participants, last message and unread count.",
        tags=["Chat - Conversations"],
    ),
    retrieve=extend_schema(
        operation_id="get_conversation",
        summary="Get conversation",
        tags=["Chat - Conversations"],
    ),
)
class ConversationViewSet(viewsets.GenericViewSet):
    """
    ViewSet for conversations and their messages.

    list:
        All conversations of the current user, most recently active first.

    direct:
        Get or create the direct conversation with another user.

    messages:
        GET one page of the message window; POST a new message.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = ConversationSerializer
    parser_classes = [MultiPartParser, FormParser, JSONParser]
    lookup_value_regex = "[0-9a-f-]{36}"

    def _load(self, request, pk):
        return ConversationService.get_for_participant(pk, request.user)

    def list(self, request):
        conversations = ConversationService.list_for_user(request.user)
        return Response(ConversationSerializer(conversations, many=True).data)

    def retrieve(self, request, pk=None):
        result = self._load(request, pk)
        if not result.success:
            return Response(result.to_response(), status=result.http_status)
        conversation = ConversationService.with_summary(result.data, request.user)
        return Response(ConversationSerializer(conversation).data)

    @extend_schema(
        operation_id="create_direct_conversation",
        summary="Get or create a direct conversation",
        request=DirectConversationSerializer,
        responses={200: ConversationSerializer, 400: OpenApiResponse(description="Same user")},
        tags=["Chat - Conversations"],
    )
    @action(detail=False, methods=["post"])
    def direct(self, request):
        serializer = DirectConversationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = ConversationService.create_direct_conversation(
            request.user, serializer.validated_data["user_id"]
        )
        if not result.success:
            return Response(result.to_response(), status=result.http_status)

        conversation = ConversationService.with_summary(result.data, request.user)
        return Response(ConversationSerializer(conversation).data)

    @extend_schema(
        operation_id="list_participants",
        summary="List participants",
        responses={200: ParticipantSerializer(many=True)},
        tags=["Chat - Conversations"],
    )
    @action(detail=True, methods=["get"])
    def participants(self, request, pk=None):
        result = self._load(request, pk)
        if not result.success:
            return Response(result.to_response(), status=result.http_status)
        participants = result.data.get_active_participants()
        return Response(ParticipantSerializer(participants, many=True).data)

    @extend_schema(
        operation_id="conversation_messages",
        summary="List or send messages",
        description=(
            "GET: newest first, paged with ?offset=&limit= (default 50). "
            "POST: multipart with content, attachment and reply_to_id."
        ),
        request=MessageCreateSerializer,
        responses={200: MessageSerializer(many=True), 201: MessageSerializer},
        tags=["Chat - Messages"],
    )
    @action(detail=True, methods=["get", "post"], pagination_class=MessagePagination)
    def messages(self, request, pk=None):
        result = self._load(request, pk)
        if not result.success:
            return Response(result.to_response(), status=result.http_status)
        conversation = result.data

        if request.method == "GET":
            page = self.paginate_queryset(MessageService.message_queryset(conversation))
            return self.get_paginated_response(MessageSerializer(page, many=True).data)

        serializer = MessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        sent = MessageService.send_message(
            conversation,
            request.user,
            data.get("content", ""),
            attachment_file=data.get("attachment"),
            reply_to_id=data.get("reply_to_id"),
        )
        if not sent.success:
            return Response(sent.to_response(), status=sent.http_status)
        return Response(MessageSerializer(sent.data).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="mark_conversation_read",
        summary="Mark conversation as read",
        request=None,
        responses={200: ParticipantSerializer},
        tags=["Chat - Conversations"],
    )
    @action(detail=True, methods=["post"])
    def read(self, request, pk=None):
        result = self._load(request, pk)
        if not result.success:
            return Response(result.to_response(), status=result.http_status)

        marked = MessageService.mark_as_read(result.data, request.user)
        if not marked.success:
            return Response(marked.to_response(), status=marked.http_status)
        return Response(ParticipantSerializer(marked.data).data)

    @extend_schema(
        operation_id="conversation_typing",
        summary="Typing indicators",
        description="GET: who is typing now. POST: set own typing flag.",
        request=TypingSerializer,
        responses={200: TypingIndicatorSerializer(many=True)},
        tags=["Chat - Typing"],
    )
    @action(detail=True, methods=["get", "post"])
    def typing(self, request, pk=None):
        result = self._load(request, pk)
        if not result.success:
            return Response(result.to_response(), status=result.http_status)
        conversation = result.data

        if request.method == "GET":
            typers = TypingService.active_typers(conversation, exclude=request.user)
            return Response(TypingIndicatorSerializer(typers, many=True).data)

        serializer = TypingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        updated = TypingService.set_typing(
            conversation, request.user, serializer.validated_data["is_typing"]
        )
        if not updated.success:
            return Response(updated.to_response(), status=updated.http_status)
        return Response(TypingIndicatorSerializer(updated.data).data)
