"""
Schedule models.

- Course: A course offered by a department
- Schedule: One weekly class slot of a course for a semester/section
- UserSchedule: A user's enrollment in a slot

Usage:
    from schedules.models import Schedule

    Schedule.objects.filter(semester=5, section="2", day_of_week=1)
"""

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from authentication.constants import REGISTRATION_CONFIG
from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel


class Course(UUIDPrimaryKeyMixin, BaseModel):
    code = models.CharField(max_length=20, unique=True)
    title = models.CharField(max_length=200)
    department = models.ForeignKey(
        "authentication.Department",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="courses",
    )
    credits = models.PositiveSmallIntegerField(null=True, blank=True)

    class Meta:
        db_table = "schedules_course"
        ordering = ["code"]

    def __str__(self):
        return f"{self.code} {self.title}"


class Schedule(UUIDPrimaryKeyMixin, BaseModel):
    """
    A weekly class slot.

    Fields:
        course: Course taught
        instructor: Faculty user teaching the slot
        semester / section: Cohort the slot is for
        day_of_week: 0 = Sunday ... 6 = Saturday
        start_time / end_time: Local class times
        room: Room label
        academic_year: e.g. "2024-2025"
    """

    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name="schedules")
    instructor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="taught_schedules",
    )
    semester = models.PositiveSmallIntegerField(
        validators=[
            MinValueValidator(REGISTRATION_CONFIG.MIN_SEMESTER),
            MaxValueValidator(REGISTRATION_CONFIG.MAX_SEMESTER),
        ]
    )
    section = models.CharField(max_length=1)
    day_of_week = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(0), MaxValueValidator(6)]
    )
    start_time = models.TimeField()
    end_time = models.TimeField()
    room = models.CharField(max_length=50, blank=True, null=True)
    academic_year = models.CharField(max_length=20)

    class Meta:
        db_table = "schedules_schedule"
        ordering = ["day_of_week", "start_time"]
        indexes = [
            models.Index(fields=["semester", "section"], name="schedule_cohort_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_time__gt=models.F("start_time")),
                name="schedule_ends_after_start",
            ),
        ]

    def __str__(self):
        return f"{self.course_id} day {self.day_of_week} {self.start_time:%H:%M}"


class UserSchedule(UUIDPrimaryKeyMixin, BaseModel):
    """A user's enrollment in a class slot; ``created_at`` is the enrollment time."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="enrollments",
    )
    schedule = models.ForeignKey(
        Schedule,
        on_delete=models.CASCADE,
        related_name="enrollments",
    )

    class Meta(BaseModel.Meta):
        db_table = "schedules_user_schedule"
        constraints = [
            models.UniqueConstraint(fields=["user", "schedule"], name="user_schedule_unique"),
        ]

    def __str__(self):
        return f"{self.user_id} in {self.schedule_id}"
