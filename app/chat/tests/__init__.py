"""
Tests for chat app.

- test_services.py: Conversation, message, read tracking and typing services
- test_views.py: REST endpoints under /api/v1/chat/
- test_tasks.py: Typing clean-up task and management command
"""
