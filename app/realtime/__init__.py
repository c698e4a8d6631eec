"""
Realtime app: the change feed clients subscribe to over WebSocket.

One WebSocket per client carries any number of topic subscriptions.
Services publish row changes with realtime.broadcast.publish_change after
their transaction commits; the consumer forwards them as "change" frames.

Topics:
    posts, post_comments                       - everyone
    friend_requests, friendships, messages,
    typing_indicators, notifications           - only the affected users

Related files:
    - consumers.py: RealtimeConsumer (subscribe/unsubscribe/ping)
    - middleware.py: JWT authentication for WebSocket connections
    - broadcast.py: publish_change for services
    - routing.py: ws/realtime/
"""
