"""
URL configuration for friends API.

Routes:
    /                          - Friend list (GET)
    /{friend_id}/              - Remove friend (DELETE)
    /requests/                 - Received requests (GET) / send (POST)
    /requests/sent/            - Sent requests (GET)
    /requests/{id}/accept/     - Accept (POST)
    /requests/{id}/reject/     - Reject (POST)
"""

from django.urls import path

from friends.views import (
    AcceptFriendRequestView,
    FriendDetailView,
    FriendListView,
    FriendRequestListView,
    RejectFriendRequestView,
    SentFriendRequestListView,
)

app_name = "friends"

urlpatterns = [
    path("", FriendListView.as_view(), name="friend-list"),
    path("requests/", FriendRequestListView.as_view(), name="request-list"),
    path("requests/sent/", SentFriendRequestListView.as_view(), name="request-sent"),
    path(
        "requests/<uuid:request_id>/accept/",
        AcceptFriendRequestView.as_view(),
        name="request-accept",
    ),
    path(
        "requests/<uuid:request_id>/reject/",
        RejectFriendRequestView.as_view(),
        name="request-reject",
    ),
    path("<uuid:friend_id>/", FriendDetailView.as_view(), name="friend-detail"),
]
