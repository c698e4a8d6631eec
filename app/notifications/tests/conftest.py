"""
Test configuration and fixtures for notification tests.

Usage:
    def test_example(unread_notification, authenticated_client):
        response = authenticated_client.get('/api/v1/notifications/')
        assert response.status_code == 200
"""

import pytest

from notifications.tests.factories import NotificationFactory


@pytest.fixture
def unread_notification(user):
    return NotificationFactory(user=user)


@pytest.fixture
def read_notification(user):
    return NotificationFactory(user=user, is_read=True)


@pytest.fixture
def others_notification(other_user):
    return NotificationFactory(user=other_user)
