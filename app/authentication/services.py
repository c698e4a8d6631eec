"""
Authentication service layer.

AuthService holds the business logic behind registration and profiles:
- register: Campus-email sign-up with profile data
- get_profile: Profile lookup including department
- update_profile: Field updates plus avatar upload to the avatars bucket
- search_profiles: Name/email search used to find friends

Related files:
    - models.py: User, Profile, Department
    - views.py: HTTP layer
    - storage/services.py: Avatar uploads
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import Q

from authentication.constants import DEPARTMENTS, REGISTRATION_CONFIG, SEARCH_CONFIG
from authentication.models import Department, Profile, User
from core.exceptions import BaseApplicationError
from core.services import BaseService, ServiceResult
from core.validators import validate_email_domain
from storage.constants import STORAGE_CONFIG
from storage.services import StorageService, timestamp_ms

if TYPE_CHECKING:
    from typing import Any

    from django.core.files import File

# Profile fields a user may change directly
EDITABLE_PROFILE_FIELDS = (
    "full_name",
    "student_id",
    "semester",
    "section",
    "bio",
)


class AuthService(BaseService):
    """Registration and profile management."""

    @classmethod
    def resolve_department(cls, code: str | None) -> Department | None:
        """
        Find a department by code, creating the known ones on first use.

        Returns None for an empty or unknown code.
        """
        if not code:
            return None
        code = code.strip().upper()
        department = Department.objects.filter(code=code).first()
        if department or code not in DEPARTMENTS:
            return department
        department, _ = Department.objects.get_or_create(
            code=code, defaults={"name": DEPARTMENTS[code]}
        )
        return department

    @classmethod
    def _validate_profile_fields(cls, fields: dict[str, Any]) -> dict[str, list[str]]:
        errors: dict[str, list[str]] = {}

        full_name = fields.get("full_name")
        if "full_name" in fields and (
            len((full_name or "").strip()) < REGISTRATION_CONFIG.MIN_FULL_NAME_LENGTH
        ):
            errors["full_name"] = ["Name must be at least 2 characters"]

        semester = fields.get("semester")
        if semester is not None and not (
            REGISTRATION_CONFIG.MIN_SEMESTER <= semester <= REGISTRATION_CONFIG.MAX_SEMESTER
        ):
            errors["semester"] = ["Semester must be between 1 and 12"]

        section = fields.get("section")
        if section is not None and section not in REGISTRATION_CONFIG.SECTIONS:
            errors["section"] = ["Section must be 1, 2, 3, or 4"]

        return errors

    @classmethod
    def _validate_registration(
        cls,
        email: str,
        password: str,
        full_name: str,
        semester: int | None,
        section: str | None,
    ) -> dict[str, list[str]]:
        errors: dict[str, list[str]] = {}

        try:
            validate_email_domain(settings.CAMPUS_EMAIL_DOMAIN)(email)
        except DjangoValidationError as e:
            errors["email"] = e.messages

        if len(password or "") < REGISTRATION_CONFIG.MIN_PASSWORD_LENGTH:
            errors["password"] = [
                f"Password must be at least {REGISTRATION_CONFIG.MIN_PASSWORD_LENGTH} characters"
            ]

        errors.update(
            cls._validate_profile_fields(
                {"full_name": full_name, "semester": semester, "section": section}
            )
        )
        return errors

    @classmethod
    def register(
        cls,
        email: str,
        password: str,
        full_name: str,
        department_code: str | None = None,
        semester: int | None = None,
        section: str | None = None,
        student_id: str | None = None,
        is_faculty: bool = False,
    ) -> ServiceResult[User]:
        """
        Create a user and fill in their profile.

        Returns:
            ServiceResult with the new user, or a failure with
            VALIDATION_ERROR, INVALID_DEPARTMENT or EMAIL_EXISTS
        """
        email = (email or "").strip().lower()
        errors = cls._validate_registration(email, password, full_name, semester, section)
        if errors:
            return ServiceResult.failure(
                "Validation failed", error_code="VALIDATION_ERROR", errors=errors
            )

        department = cls.resolve_department(department_code)
        if department_code and department is None:
            return ServiceResult.failure(
                f"Unknown department '{department_code}'",
                error_code="INVALID_DEPARTMENT",
            )

        if User.objects.filter(email__iexact=email).exists():
            return ServiceResult.failure(
                "User already registered", error_code="EMAIL_EXISTS"
            )

        with cls.atomic():
            user = User.objects.create_user(email=email, password=password)
            profile = user.profile
            profile.full_name = full_name.strip()
            profile.department = department
            profile.semester = semester
            profile.section = section
            profile.student_id = student_id or None
            profile.is_faculty = is_faculty
            profile.is_active = True
            profile.save()

        cls.get_logger().info(f"Registered user {user.id}")
        return ServiceResult.success(user)

    @classmethod
    def get_profile(cls, user_id) -> ServiceResult[Profile]:
        profile = (
            Profile.objects.select_related("user", "department")
            .filter(user_id=user_id)
            .first()
        )
        if profile is None:
            return ServiceResult.failure("Profile not found", error_code="USER_NOT_FOUND")
        return ServiceResult.success(profile)

    @classmethod
    def upload_avatar(cls, user: User, avatar_file: File) -> str:
        """
        Store an avatar in the avatars bucket and return its public URL.

        Each upload gets a fresh timestamped path so clients never see a
        cached old image.
        """
        stored = StorageService.upload(
            STORAGE_CONFIG.AVATARS,
            f"{user.id}/avatar-{timestamp_ms()}.jpg",
            avatar_file,
            upsert=True,
        )
        return stored.public_url

    @classmethod
    def update_profile(
        cls,
        user: User,
        fields: dict[str, Any],
        avatar_file: File | None = None,
    ) -> ServiceResult[Profile]:
        """
        Update profile fields and optionally the avatar.

        ``department_code`` in ``fields`` is resolved to a department.
        The avatar is uploaded before the row is saved; a failed save
        leaves the uploaded object in place. A rejected or failed upload
        returns a failure and nothing is saved.
        """
        profile = user.profile
        errors = cls._validate_profile_fields(fields)
        if errors:
            return ServiceResult.failure(
                "Validation failed", error_code="VALIDATION_ERROR", errors=errors
            )

        if "department_code" in fields:
            department = cls.resolve_department(fields["department_code"])
            if fields["department_code"] and department is None:
                return ServiceResult.failure(
                    f"Unknown department '{fields['department_code']}'",
                    error_code="INVALID_DEPARTMENT",
                )
            profile.department = department

        for name in EDITABLE_PROFILE_FIELDS:
            if name in fields:
                setattr(profile, name, fields[name])

        if avatar_file is not None:
            try:
                profile.avatar_url = cls.upload_avatar(user, avatar_file)
            except BaseApplicationError as e:
                return cls.handle_exception(
                    e, f"Avatar upload for user {user.id}", log_level=logging.WARNING
                )

        profile.save()
        cls.get_logger().info(f"Updated profile for user {user.id}")
        return ServiceResult.success(profile)

    @classmethod
    def search_profiles(cls, query: str, exclude_user: User | None = None):
        """
        Case-insensitive substring search on full name or email.

        Queries shorter than two characters return nothing.

        Returns:
            List of at most 20 active profiles, ordered by name
        """
        query = (query or "").strip()
        if len(query) < SEARCH_CONFIG.MIN_QUERY_LENGTH:
            return []

        queryset = (
            Profile.objects.select_related("user", "department")
            .filter(is_active=True)
            .filter(Q(full_name__icontains=query) | Q(user__email__icontains=query))
        )
        if exclude_user is not None:
            queryset = queryset.exclude(user=exclude_user)
        return list(queryset.order_by("full_name")[: SEARCH_CONFIG.MAX_RESULTS])
