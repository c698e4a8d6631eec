"""
Tests for authentication API views.

Covers:
- RegisterView: Sign-up returns profile and JWT pair
- Token endpoints: Email/password login
- ProfileView: GET/PATCH the current profile
- ProfileSearchView, ProfileDetailView, DepartmentListView
"""

import pytest
from rest_framework import status

# =============================================================================
# URL Constants
# =============================================================================

REGISTER_URL = "/api/v1/auth/register/"
TOKEN_URL = "/api/v1/auth/token/"
PROFILE_URL = "/api/v1/auth/profile/"
SEARCH_URL = "/api/v1/auth/profiles/search/"
DEPARTMENTS_URL = "/api/v1/auth/departments/"


@pytest.mark.django_db
class TestRegisterView:
    """
    Tests for RegisterView.

    POST /api/v1/auth/register/
    """

    def test_register_returns_profile_and_tokens(self, api_client, registration_data):
        """
        A successful sign-up logs the user in immediately.

        Why it matters: The client goes straight to the feed after sign-up.
        """
        response = api_client.post(REGISTER_URL, registration_data, format="json")

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["profile"]["email"] == registration_data["email"]
        assert response.data["profile"]["department"]["code"] == "CSE"
        assert response.data["access"]
        assert response.data["refresh"]

    def test_register_validation_failure_returns_400(self, api_client, registration_data):
        registration_data["email"] = "someone@gmail.com"

        response = api_client.post(REGISTER_URL, registration_data, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "VALIDATION_ERROR"
        assert "email" in response.data["errors"]

    def test_register_duplicate_returns_409(self, api_client, registration_data, user):
        registration_data["email"] = user.email

        response = api_client.post(REGISTER_URL, registration_data, format="json")

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data["error_code"] == "EMAIL_EXISTS"


@pytest.mark.django_db
class TestTokenObtain:
    def test_login_with_email_and_password(self, api_client, user):
        response = api_client.post(
            TOKEN_URL, {"email": user.email, "password": "TestPass123!"}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert "access" in response.data

    def test_login_with_wrong_password_returns_401(self, api_client, user):
        response = api_client.post(
            TOKEN_URL, {"email": user.email, "password": "wrong"}, format="json"
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestProfileView:
    """
    Tests for ProfileView.

    GET/PATCH /api/v1/auth/profile/
    """

    def test_get_returns_own_profile(self, authenticated_client, user):
        response = authenticated_client.get(PROFILE_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["id"] == str(user.id)
        assert response.data["full_name"] == "Alice Rahman"

    def test_get_requires_authentication(self, api_client):
        response = api_client.get(PROFILE_URL)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_patch_updates_fields(self, authenticated_client):
        response = authenticated_client.patch(
            PROFILE_URL, {"bio": "CSE student", "section": "3"}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["bio"] == "CSE student"
        assert response.data["section"] == "3"

    def test_patch_with_avatar_sets_avatar_url(self, authenticated_client, avatar_file, user):
        response = authenticated_client.patch(
            PROFILE_URL, {"avatar": avatar_file}, format="multipart"
        )

        assert response.status_code == status.HTTP_200_OK
        assert f"/avatars/{user.id}/" in response.data["avatar_url"]

    def test_patch_invalid_semester_returns_400(self, authenticated_client):
        response = authenticated_client.patch(PROFILE_URL, {"semester": 20}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestProfileLookup:
    def test_search_returns_matches(self, authenticated_client, other_user):
        response = authenticated_client.get(SEARCH_URL, {"q": "Bob"})

        assert response.status_code == status.HTTP_200_OK
        assert [p["id"] for p in response.data] == [str(other_user.id)]

    def test_public_profile(self, authenticated_client, other_user):
        response = authenticated_client.get(f"/api/v1/auth/profiles/{other_user.id}/")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["full_name"] == "Bob Karim"

    def test_unknown_profile_returns_404(self, authenticated_client):
        response = authenticated_client.get(
            "/api/v1/auth/profiles/00000000-0000-0000-0000-000000000000/"
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["error_code"] == "USER_NOT_FOUND"

    def test_department_list_is_public(self, api_client, department):
        response = api_client.get(DEPARTMENTS_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]["code"] == "CSE"
