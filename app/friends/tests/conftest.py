"""
Test configuration and fixtures for friend tests.
"""

import pytest

from friends.tests.factories import FriendRequestFactory, make_friends


@pytest.fixture
def pending_request(user, other_user):
    """A pending request from ``other_user`` to ``user``."""
    return FriendRequestFactory(sender=other_user, receiver=user)


@pytest.fixture
def friendship(user, other_user):
    return make_friends(user, other_user)
