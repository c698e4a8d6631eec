"""
Tests for ScheduleService.
"""

import uuid

import pytest

from schedules.models import UserSchedule
from schedules.services import ScheduleService
from schedules.tests.factories import UserScheduleFactory


@pytest.mark.django_db
class TestEnrollment:
    def test_enroll(self, user, monday_class):
        result = ScheduleService.enroll(user, monday_class.id)

        assert result.success
        assert ScheduleService.is_enrolled(user, monday_class.id)

    def test_enroll_twice_fails(self, user, monday_class):
        ScheduleService.enroll(user, monday_class.id)

        result = ScheduleService.enroll(user, monday_class.id)

        assert result.error_code == "ALREADY_ENROLLED"
        assert result.http_status == 409
        assert UserSchedule.objects.count() == 1

    def test_enroll_unknown_slot(self, user):
        result = ScheduleService.enroll(user, uuid.uuid4())

        assert result.error_code == "SCHEDULE_NOT_FOUND"

    def test_unenroll(self, user, monday_class):
        UserScheduleFactory(user=user, schedule=monday_class)

        assert ScheduleService.unenroll(user, monday_class.id).success
        assert not ScheduleService.is_enrolled(user, monday_class.id)

    def test_unenroll_when_not_enrolled(self, user, monday_class):
        result = ScheduleService.unenroll(user, monday_class.id)

        assert result.error_code == "NOT_FOUND"


@pytest.mark.django_db
class TestQueries:
    def test_user_schedule_is_filtered_by_cohort(self, user, monday_class, other_cohort_class):
        UserScheduleFactory(user=user, schedule=monday_class)
        UserScheduleFactory(user=user, schedule=other_cohort_class)

        everything = ScheduleService.get_user_schedule(user)
        cohort = ScheduleService.get_user_schedule(user, semester=5, section="2")

        assert everything.count() == 2
        assert [e.schedule for e in cohort] == [monday_class]

    def test_available_schedules_for_cohort(
        self, monday_class, wednesday_class, other_cohort_class
    ):
        available = list(ScheduleService.get_available_schedules(5, "2"))

        assert available == [monday_class, wednesday_class]


class TestGroupByDay:
    """
    Tests for ScheduleService.group_by_day().

    Why it matters: The timetable screen renders one block per weekday in
    start-time order.
    """

    @pytest.mark.django_db
    def test_groups_sorted_by_day_and_start(
        self, monday_class, monday_early_class, wednesday_class
    ):
        groups = ScheduleService.group_by_day([wednesday_class, monday_class, monday_early_class])

        assert list(groups) == [1, 3]
        assert groups[1] == [monday_early_class, monday_class]
        assert groups[3] == [wednesday_class]

    @pytest.mark.django_db
    def test_accepts_enrollments(self, user, monday_class):
        enrollment = UserScheduleFactory(user=user, schedule=monday_class)

        assert ScheduleService.group_by_day([enrollment]) == {1: [enrollment]}

    def test_empty(self):
        assert ScheduleService.group_by_day([]) == {}
