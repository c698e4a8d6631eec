"""
WebSocket URL routing for the realtime change feed.

URL Patterns:
    ws/realtime/ - The single change-feed connection

Authentication:
    JWT token is passed as query parameter ?token=<jwt_access_token> or as
    the "jwt" subprotocol; see realtime.middleware.
"""

from django.urls import path

from realtime import consumers

websocket_urlpatterns = [
    path("ws/realtime/", consumers.RealtimeConsumer.as_asgi()),
]
