"""
Authentication models.

This module defines the identity models of the campus network:
- User: Custom user model with email-based authentication (slim, auth-focused)
- Profile: Student/faculty profile data (OneToOne with User)
- Department: Academic department a profile belongs to

Related files:
    - managers.py: Custom user manager for email-based creation
    - services.py: AuthService business logic
    - signals.py: Auto-create profile on user creation

Security:
    - User passwords hashed with Django's PBKDF2
    - Sign-up restricted to the campus email domain (see AuthService.register)
"""

import uuid

from django.conf import settings
from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from authentication.constants import REGISTRATION_CONFIG
from authentication.managers import UserManager
from core.models import BaseModel


class User(AbstractBaseUser, PermissionsMixin):
    """
    Custom User model using email as the primary identifier.

    Profile data (name, department, avatar) lives in the Profile model.
    The UUID primary key is the user id every other table references and
    the id realtime subscriptions are filtered by.

    Usage:
        user = User.objects.create_user(
            email="student@eastdelta.edu.bd",
            password="secret1",
        )
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )
    email = models.EmailField(
        unique=True,
        db_index=True,
        max_length=254,
        help_text="User's email address (primary identifier)",
    )
    is_active = models.BooleanField(
        default=True,
        help_text="Whether this user account is active. Deselect instead of deleting.",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Whether the user can access the admin site.",
    )
    date_joined = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["-date_joined"]

    def __str__(self):
        return self.email

    def get_full_name(self):
        """Return the profile's full name, falling back to the email."""
        try:
            return self.profile.full_name or self.email
        except Profile.DoesNotExist:
            return self.email

    def get_short_name(self):
        return self.email.split("@")[0]


class Department(BaseModel):
    """
    Academic department (CSE, EEE, BBA, ...).

    Fields:
        code: Short unique code used at sign-up
        name: Display name
    """

    code = models.CharField(max_length=10, unique=True)
    name = models.CharField(max_length=150)

    class Meta:
        db_table = "authentication_department"
        ordering = ["code"]

    def __str__(self):
        return f"{self.code} - {self.name}"


class Profile(BaseModel):
    """
    Campus profile for a user.

    Fields:
        user: OneToOne link to User (also serves as primary key)
        full_name: Display name
        student_id: Institutional student id (blank for faculty)
        department: Department the user belongs to
        semester: Current semester (1-12)
        section: Section within the semester ("1".."4")
        avatar_url: Public URL of the avatar in the avatars bucket
        bio: Free-form biography
        is_faculty: Faculty members may publish announcements
        is_active: Whether the profile is shown in search

    Note:
        Profile is automatically created via signals when a User is created.
    """

    class Section(models.TextChoices):
        ONE = "1", "Section 1"
        TWO = "2", "Section 2"
        THREE = "3", "Section 3"
        FOUR = "4", "Section 4"

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
        primary_key=True,
    )
    full_name = models.CharField(max_length=150, blank=True)
    student_id = models.CharField(max_length=30, blank=True, null=True)
    department = models.ForeignKey(
        Department,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="profiles",
    )
    semester = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[
            MinValueValidator(REGISTRATION_CONFIG.MIN_SEMESTER),
            MaxValueValidator(REGISTRATION_CONFIG.MAX_SEMESTER),
        ],
    )
    section = models.CharField(
        max_length=1,
        choices=Section.choices,
        blank=True,
        null=True,
    )
    avatar_url = models.URLField(max_length=500, blank=True, null=True)
    bio = models.TextField(blank=True, null=True)
    is_faculty = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "authentication_profile"
        verbose_name = "profile"
        verbose_name_plural = "profiles"
        indexes = [
            models.Index(fields=["full_name"], name="auth_profile_name_idx"),
        ]

    def __str__(self):
        return self.full_name or str(self.user)

    @property
    def email(self):
        return self.user.email
