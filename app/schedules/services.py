"""
Schedule service layer.

ScheduleService answers "what are my classes" and "what can I enroll
in", and groups slots by weekday for the timetable view.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.services import BaseService, ServiceResult
from schedules.models import Schedule, UserSchedule

if TYPE_CHECKING:
    from authentication.models import User


class ScheduleService(BaseService):
    """
    Methods:
        get_user_schedule: Enrollments of a user, optionally for one cohort
        get_available_schedules: Slots offered to a semester/section
        enroll / unenroll: Manage enrollments
        is_enrolled: Enrollment check
        group_by_day: Weekday -> slots ordered by start time
    """

    @classmethod
    def get_user_schedule(cls, user: User, semester: int | None = None, section: str | None = None):
        queryset = UserSchedule.objects.filter(user=user).select_related(
            "schedule__course__department", "schedule__instructor__profile"
        )
        if semester is not None:
            queryset = queryset.filter(schedule__semester=semester)
        if section:
            queryset = queryset.filter(schedule__section=section)
        return queryset.order_by("schedule__day_of_week", "schedule__start_time")

    @classmethod
    def get_available_schedules(cls, semester: int, section: str):
        return (
            Schedule.objects.filter(semester=semester, section=section)
            .select_related("course__department", "instructor__profile")
            .order_by("day_of_week", "start_time")
        )

    @classmethod
    def is_enrolled(cls, user: User, schedule_id) -> bool:
        return UserSchedule.objects.filter(user=user, schedule_id=schedule_id).exists()

    @classmethod
    def enroll(cls, user: User, schedule_id) -> ServiceResult[UserSchedule]:
        """
        Enroll ``user`` in a class slot.

        Error codes:
            SCHEDULE_NOT_FOUND: No such slot
            ALREADY_ENROLLED: User is already enrolled
        """
        schedule = Schedule.objects.filter(id=schedule_id).first()
        if schedule is None:
            return ServiceResult.failure("Schedule not found", error_code="SCHEDULE_NOT_FOUND")

        with cls.atomic():
            enrollment, created = UserSchedule.objects.get_or_create(user=user, schedule=schedule)
        if not created:
            return ServiceResult.failure(
                "You are already enrolled in this class", error_code="ALREADY_ENROLLED"
            )

        cls.get_logger().info(f"User {user.id} enrolled in schedule {schedule.id}")
        return ServiceResult.success(enrollment)

    @classmethod
    def unenroll(cls, user: User, schedule_id) -> ServiceResult[None]:
        deleted, _ = UserSchedule.objects.filter(user=user, schedule_id=schedule_id).delete()
        if not deleted:
            return ServiceResult.failure(
                "You are not enrolled in this class", error_code="NOT_FOUND"
            )
        cls.get_logger().info(f"User {user.id} left schedule {schedule_id}")
        return ServiceResult.success(None)

    @classmethod
    def group_by_day(cls, entries) -> dict[int, list]:
        """
        Group slots (or enrollments) by day_of_week, each day sorted by start time.

        Days without classes are omitted.
        """
        days: dict[int, list] = {}
        for entry in entries:
            schedule = getattr(entry, "schedule", entry)
            days.setdefault(schedule.day_of_week, []).append(entry)
        for day_entries in days.values():
            day_entries.sort(key=lambda e: getattr(e, "schedule", e).start_time)
        return dict(sorted(days.items()))
