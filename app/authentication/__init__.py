"""
Authentication application.

This app provides campus-email registration, JWT login and student/faculty
profiles.

Key components:
    - User model: Custom email-based user authentication
    - Profile model: Campus profile (department, semester, section, avatar)
    - Department model: Academic departments
    - AuthService: Registration, profile updates and profile search

Usage:
    from authentication.models import User, Profile
    from authentication.services import AuthService
"""
