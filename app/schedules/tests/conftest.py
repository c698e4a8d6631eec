"""
Test configuration and fixtures for schedule tests.
"""

from datetime import time

import pytest

from schedules.tests.factories import CourseFactory, ScheduleFactory


@pytest.fixture
def database_course():
    return CourseFactory(code="CSE301", title="Database Systems")


@pytest.fixture
def monday_class(database_course):
    return ScheduleFactory(course=database_course, day_of_week=1, start_time=time(9, 30))


@pytest.fixture
def monday_early_class():
    return ScheduleFactory(
        course=CourseFactory(code="CSE330", title="Web Engineering"),
        day_of_week=1,
        start_time=time(8, 0),
        end_time=time(9, 30),
    )


@pytest.fixture
def wednesday_class(database_course):
    return ScheduleFactory(
        course=database_course, day_of_week=3, start_time=time(11, 0), end_time=time(12, 30)
    )


@pytest.fixture
def other_cohort_class():
    """A slot for semester 3 section 1."""
    return ScheduleFactory(semester=3, section="1")


@pytest.fixture
def cohort_user(user):
    """``user`` in semester 5, section 2."""
    user.profile.semester = 5
    user.profile.section = "2"
    user.profile.save()
    return user
