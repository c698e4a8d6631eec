"""
Tests for authentication app.

- test_services.py: Registration, profile updates and profile search
- test_views.py: Auth and profile endpoints
"""
