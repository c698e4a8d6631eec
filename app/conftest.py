"""
Root pytest configuration for the Django project.

This module configures pytest-django and provides project-wide fixtures.
App-specific fixtures are defined in each app's tests/conftest.py.
"""

from unittest.mock import patch

import pytest
from rest_framework.test import APIClient


def pytest_configure():
    """Adjust settings that should never apply to tests."""
    from django.conf import settings

    # Disable throttling during tests to prevent rate limit failures
    settings.REST_FRAMEWORK["DEFAULT_THROTTLE_CLASSES"] = []
    settings.REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {}


def pytest_collection_modifyitems(items):
    """
    Auto-mark tests based on filename patterns.

    Mapping:
    - test_integration.py → e2e (full user journey workflows)
    - test_views.py, test_services.py, test_tasks.py, test_consumers.py → integration
    - test_models.py, test_serializers.py, test_validators.py, etc. → unit
    - Unmatched files → integration (safe default for Django)

    Explicit markers on test functions/classes take precedence.
    """
    e2e_patterns = ["test_integration.py"]

    integration_patterns = [
        "test_views.py",
        "test_services.py",
        "test_tasks.py",
        "test_consumers.py",
        "test_broadcast.py",
        "test_commands.py",
    ]

    unit_patterns = [
        "test_models.py",
        "test_serializers.py",
        "test_validators.py",
        "test_managers.py",
        "test_signals.py",
        "test_sample_data.py",
        "test_exceptions.py",
        "test_config.py",
        # Client stores run against an in-memory backend
        "test_conversations.py",
        "test_messages.py",
        "test_typing_indicators.py",
        "test_composer.py",
        "test_store.py",
        "test_realtime_client.py",
        "test_feed.py",
        "test_friends.py",
        "test_notifications.py",
    ]

    for item in items:
        existing_markers = {m.name for m in item.iter_markers()}
        if existing_markers & {"unit", "integration", "e2e"}:
            continue

        filename = str(item.fspath).split("/")[-1]

        if any(pattern in filename for pattern in e2e_patterns):
            item.add_marker(pytest.mark.e2e)
        elif any(pattern in filename for pattern in integration_patterns):
            item.add_marker(pytest.mark.integration)
        elif any(pattern in filename for pattern in unit_patterns):
            item.add_marker(pytest.mark.unit)
        else:
            item.add_marker(pytest.mark.integration)


# =============================================================================
# Project-wide Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    """Unauthenticated DRF test client."""
    return APIClient()


@pytest.fixture
def user(db):
    """A student with a filled-in profile."""
    from authentication.tests.factories import UserFactory

    return UserFactory(profile__full_name="Alice Rahman")


@pytest.fixture
def other_user(db):
    from authentication.tests.factories import UserFactory

    return UserFactory(profile__full_name="Bob Karim")


@pytest.fixture
def third_user(db):
    from authentication.tests.factories import UserFactory

    return UserFactory(profile__full_name="Chitra Das")


@pytest.fixture
def authenticated_client(user):
    """API client authenticated as ``user``."""
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def other_client(other_user):
    """API client authenticated as ``other_user``."""
    client = APIClient()
    client.force_authenticate(user=other_user)
    return client


@pytest.fixture
def published():
    """
    Realtime changes handed to the channel layer, as ``(groups, event)`` pairs.

    Changes are sent on commit; wrap the call under test in
    ``django_capture_on_commit_callbacks(execute=True)``.
    """
    sent = []
    with patch("realtime.broadcast._send", side_effect=lambda groups, event: sent.append((groups, event))):
        yield sent
