"""
URL configuration for chat API.

URL Structure:
    /conversations/                        GET
    /conversations/direct/                 POST
    /conversations/{id}/                   GET
    /conversations/{id}/participants/      GET
    /conversations/{id}/messages/          GET, POST
    /conversations/{id}/read/              POST
    /conversations/{id}/typing/            GET, POST

All URLs are prefixed with /api/v1/chat/ in the main URL configuration.
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from chat.views import ConversationViewSet

router = DefaultRouter()
router.register(r"conversations", ConversationViewSet, basename="conversation")

app_name = "chat"

urlpatterns = [
    path("", include(router.urls)),
]
