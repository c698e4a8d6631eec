"""
URL configuration for authentication app.

URL structure:
    /api/v1/auth/register/            - Campus email registration
    /api/v1/auth/token/               - Obtain JWT pair (email + password)
    /api/v1/auth/token/refresh/       - Refresh access token
    /api/v1/auth/profile/             - Current user's profile (GET/PATCH)
    /api/v1/auth/profiles/search/     - Profile search (?q=)
    /api/v1/auth/profiles/{user_id}/  - Public profile
    /api/v1/auth/departments/         - Department list
"""

from django.urls import path
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from authentication.views import (
    DepartmentListView,
    ProfileDetailView,
    ProfileSearchView,
    ProfileView,
    RegisterView,
)

app_name = "authentication"

urlpatterns = [
    path("register/", RegisterView.as_view(), name="register"),
    path("token/", TokenObtainPairView.as_view(), name="token-obtain"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token-refresh"),
    path("profile/", ProfileView.as_view(), name="profile"),
    path("profiles/search/", ProfileSearchView.as_view(), name="profile-search"),
    path("profiles/<uuid:user_id>/", ProfileDetailView.as_view(), name="profile-detail"),
    path("departments/", DepartmentListView.as_view(), name="departments"),
]
