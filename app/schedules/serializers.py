"""
Serializers for courses, class slots and enrollments.
"""

from rest_framework import serializers

from schedules.models import Course, Schedule, UserSchedule
from schedules.sample_data import color_for


class CourseSerializer(serializers.ModelSerializer):
    department_code = serializers.CharField(source="department.code", read_only=True, default=None)

    class Meta:
        model = Course
        fields = ["id", "code", "title", "department_code", "credits"]
        read_only_fields = fields


class ScheduleSerializer(serializers.ModelSerializer):
    """Class slot with its course, instructor name and display colours."""

    course = CourseSerializer(read_only=True)
    instructor_name = serializers.CharField(
        source="instructor.profile.full_name", read_only=True, default=None
    )
    colors = serializers.SerializerMethodField()

    class Meta:
        model = Schedule
        fields = [
            "id",
            "course",
            "instructor_name",
            "semester",
            "section",
            "day_of_week",
            "start_time",
            "end_time",
            "room",
            "academic_year",
            "colors",
        ]
        read_only_fields = fields

    def get_colors(self, obj) -> dict:
        return color_for(obj.course.code)


class UserScheduleSerializer(serializers.ModelSerializer):
    schedule = ScheduleSerializer(read_only=True)
    enrolled_at = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = UserSchedule
        fields = ["id", "schedule", "enrolled_at"]
        read_only_fields = fields


class CohortQuerySerializer(serializers.Serializer):
    semester = serializers.IntegerField(required=False, min_value=1, max_value=12)
    section = serializers.CharField(required=False, max_length=1)
