"""
URL configuration for the Campus Connect backend.

The `urlpatterns` list routes URLs to views. This is the root URL configuration
that includes all app-specific routes.

URL Structure:
    /                              - ReDoc API documentation
    /admin/                        - Django admin interface
    /health/                       - Health check endpoint (for load balancers, Docker)
    /schema/                       - OpenAPI schema (YAML)
    /api/v1/auth/                  - Authentication endpoints
        register/                  - Campus email registration
        token/                     - Obtain JWT pair
        token/refresh/             - Refresh JWT access token
        profile/                   - Current user's profile (GET/PATCH)
        profiles/search/           - Profile search (?q=)
        profiles/{id}/             - Public profile
        departments/               - Department list
    /api/v1/storage/               - Bucket uploads
        {bucket}/                  - Upload an object (POST multipart)
        {bucket}/{path}            - Remove an object (DELETE)
    /api/v1/posts/                 - Feed, likes, comments
    /api/v1/friends/               - Friend requests and friendships
        requests/{id}/accept/      - Accept friend request (remote procedure)
    /api/v1/chat/                  - Messaging
        conversations/             - Conversation list with unread counts
        conversations/direct/      - Get or create a direct conversation (remote procedure)
        conversations/{id}/        - Conversation detail
        conversations/{id}/participants/ - Participant list
        conversations/{id}/messages/ - Message window / send
        conversations/{id}/read/   - Mark conversation as read
        conversations/{id}/typing/ - Typing indicators
    /api/v1/notifications/         - Notifications
    /api/v1/schedules/             - Class schedules
    /ws/realtime/                  - Realtime change feed (WebSocket, see realtime.routing)

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from core.views import health_check

# =============================================================================
# API v1 Routes
# =============================================================================
# All routes here are prefixed with /api/v1/ automatically
api_v1_patterns = [
    # Authentication and profiles
    path("auth/", include("authentication.urls")),
    # Storage buckets
    path("storage/", include("storage.urls")),
    # Feed
    path("posts/", include("posts.urls")),
    # Friends
    path("friends/", include("friends.urls")),
    # Chat
    path("chat/", include("chat.urls")),
    # Notifications
    path("notifications/", include("notifications.urls")),
    # Schedules
    path("schedules/", include("schedules.urls")),
]

urlpatterns = [
    # Documentation
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    # Admin
    path("admin/", admin.site.urls),
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    # API v1
    path("api/v1/", include(api_v1_patterns)),
]

# =============================================================================
# Admin Site Customization
# =============================================================================
admin.site.site_header = "Campus Connect Admin"
admin.site.site_title = "Campus Connect"
admin.site.index_title = "Campus Connect administration"
