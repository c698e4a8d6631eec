"""
Test configuration and fixtures for authentication tests.

The project-wide ``user``, ``other_user`` and ``authenticated_client``
fixtures come from the root conftest.

Usage:
    def test_example(authenticated_client):
        response = authenticated_client.get('/api/v1/auth/profile/')
        assert response.status_code == 200
"""

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from authentication.tests.factories import DepartmentFactory, UserFactory


@pytest.fixture
def department(db):
    return DepartmentFactory()


@pytest.fixture
def faculty_user(db):
    return UserFactory(profile__full_name="Dr. Rahman", profile__is_faculty=True)


@pytest.fixture
def registration_data():
    """Valid registration payload."""
    return {
        "email": "new.student@eastdelta.edu.bd",
        "password": "secret1",
        "full_name": "New Student",
        "department_code": "CSE",
        "semester": 5,
        "section": "2",
    }


@pytest.fixture
def avatar_file():
    return SimpleUploadedFile("avatar.jpg", b"\xff\xd8\xff\xe0jpeg-bytes", content_type="image/jpeg")
