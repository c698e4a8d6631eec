"""
Serializers for authentication models.

This module provides DRF serializers for:
- Registration (request validation only; rules live in AuthService)
- Profile (read), profile updates and the compact profile summary embedded
  in posts, comments, friend requests and conversations
- Department (read)

Security:
    - Password fields are write-only
"""

from rest_framework import serializers

from authentication.models import Department, Profile


class DepartmentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Department
        fields = ["id", "code", "name"]
        read_only_fields = fields


class ProfileSerializer(serializers.ModelSerializer):
    """
    Full profile including department code/name.

    ``id`` is the user id so that clients can use one id for both.
    """

    id = serializers.UUIDField(source="user_id", read_only=True)
    email = serializers.EmailField(source="user.email", read_only=True)
    department = DepartmentSerializer(read_only=True)

    class Meta:
        model = Profile
        fields = [
            "id",
            "email",
            "full_name",
            "student_id",
            "department",
            "semester",
            "section",
            "avatar_url",
            "bio",
            "is_faculty",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProfileSummarySerializer(serializers.ModelSerializer):
    """Compact profile embedded in other resources."""

    id = serializers.UUIDField(source="user_id", read_only=True)
    email = serializers.EmailField(source="user.email", read_only=True)

    class Meta:
        model = Profile
        fields = ["id", "email", "full_name", "avatar_url", "is_faculty"]
        read_only_fields = fields


class RegisterSerializer(serializers.Serializer):
    """
    Registration request.

    Domain checks (campus email, semester range, section) are applied by
    AuthService.register so that every entry point shares them.
    """

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    full_name = serializers.CharField(max_length=150)
    department_code = serializers.CharField(max_length=10, required=False, allow_blank=True)
    semester = serializers.IntegerField(required=False, allow_null=True)
    section = serializers.CharField(max_length=1, required=False, allow_null=True)
    student_id = serializers.CharField(max_length=30, required=False, allow_blank=True)
    is_faculty = serializers.BooleanField(required=False, default=False)


class ProfileUpdateSerializer(serializers.Serializer):
    """Partial profile update, optionally with a new avatar (multipart)."""

    full_name = serializers.CharField(max_length=150, required=False)
    student_id = serializers.CharField(
        max_length=30, required=False, allow_blank=True, allow_null=True
    )
    department_code = serializers.CharField(
        max_length=10, required=False, allow_blank=True, allow_null=True
    )
    semester = serializers.IntegerField(required=False, allow_null=True)
    section = serializers.CharField(max_length=1, required=False, allow_null=True)
    bio = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    avatar = serializers.FileField(required=False, write_only=True)
