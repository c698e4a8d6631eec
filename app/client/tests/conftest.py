"""
Fixtures for client tests.

Client tests need no database; scenarios are coroutines driven with
``asyncio.run``.
"""

import pytest

from client.realtime import RealtimeClient
from client.tests.fakes import FakeBackend, FakeSession


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def ws_session():
    return FakeSession()


@pytest.fixture
def realtime(ws_session):
    """A RealtimeClient that is not connected; pushes are fed with ``dispatch``."""
    return RealtimeClient("ws://testserver/ws/realtime/", "access-token", session=ws_session)
