"""
Authentication views.

This module provides API views for:
- Registration with a campus email
- JWT login/refresh (SimpleJWT views, wired in urls.py)
- The current user's profile (read/update, avatar upload)
- Public profiles, profile search and the department list

Related files:
    - serializers.py: Request/response serialization
    - services.py: Business logic (AuthService)
    - urls.py: URL routing
"""

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import generics, status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.models import Department
from authentication.serializers import (
    DepartmentSerializer,
    ProfileSerializer,
    ProfileUpdateSerializer,
    RegisterSerializer,
)
from authentication.services import AuthService


class RegisterView(APIView):
    """
    Register a new account.

    POST /api/v1/auth/register/

    Returns:
        201 {"profile": {...}, "access": "...", "refresh": "..."}
    """

    permission_classes = [AllowAny]

    @extend_schema(
        summary="Register with a campus email",
        tags=["Auth"],
        request=RegisterSerializer,
        responses={201: ProfileSerializer},
    )
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AuthService.register(**serializer.validated_data)
        if not result.success:
            return Response(result.to_response(), status=result.http_status)

        user = result.data
        refresh = RefreshToken.for_user(user)
        return Response(
            {
                "profile": ProfileSerializer(user.profile).data,
                "access": str(refresh.access_token),
                "refresh": str(refresh),
            },
            status=status.HTTP_201_CREATED,
        )


class ProfileView(APIView):
    """
    The current user's profile.

    GET:   Retrieve profile (with department)
    PATCH: Update fields; send ``avatar`` as multipart to replace the avatar
    """

    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    @extend_schema(summary="Get current user's profile", tags=["Auth - Profile"],
                   responses={200: ProfileSerializer})
    def get(self, request):
        result = AuthService.get_profile(request.user.id)
        if not result.success:
            return Response(result.to_response(), status=result.http_status)
        return Response(ProfileSerializer(result.data).data)

    @extend_schema(
        summary="Update profile",
        tags=["Auth - Profile"],
        request=ProfileUpdateSerializer,
        responses={200: ProfileSerializer},
    )
    def patch(self, request):
        serializer = ProfileUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        fields = dict(serializer.validated_data)
        avatar = fields.pop("avatar", None)
        result = AuthService.update_profile(request.user, fields, avatar_file=avatar)
        if not result.success:
            return Response(result.to_response(), status=result.http_status)
        return Response(ProfileSerializer(result.data).data)


class ProfileDetailView(APIView):
    """Public profile of any user."""

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Get a profile", tags=["Auth - Profile"],
                   responses={200: ProfileSerializer})
    def get(self, request, user_id):
        result = AuthService.get_profile(user_id)
        if not result.success:
            return Response(result.to_response(), status=result.http_status)
        return Response(ProfileSerializer(result.data).data)


class ProfileSearchView(APIView):
    """
    Search profiles by name or email.

    GET /api/v1/auth/profiles/search/?q=<query>
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Search profiles",
        tags=["Auth - Profile"],
        parameters=[OpenApiParameter("q", str, description="At least 2 characters")],
        responses={200: ProfileSerializer(many=True)},
    )
    def get(self, request):
        profiles = AuthService.search_profiles(
            request.query_params.get("q", ""), exclude_user=request.user
        )
        return Response(ProfileSerializer(profiles, many=True).data)


@extend_schema(summary="List departments", tags=["Auth"])
class DepartmentListView(generics.ListAPIView):
    permission_classes = [AllowAny]
    serializer_class = DepartmentSerializer
    queryset = Department.objects.all()
    pagination_class = None
