"""
Tests for the static sample timetable helpers.
"""

from datetime import time

import pytest

from schedules.sample_data import (
    FALLBACK_COLOR,
    SAMPLE_SCHEDULE,
    color_for,
    course_codes,
    parse_time_range,
    sample_schedule_with_colors,
)


class TestColors:
    def test_known_course(self):
        assert color_for("CSE311")["primary"] == "#059669"

    def test_unknown_course_falls_back_to_gray(self):
        assert color_for("PHY101") == FALLBACK_COLOR


class TestParseTimeRange:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("9:30 AM - 11:00 AM", (time(9, 30), time(11, 0))),
            ("12:30 PM - 2:00 PM", (time(12, 30), time(14, 0))),
            ("3:30 PM - 5:00 PM", (time(15, 30), time(17, 0))),
        ],
    )
    def test_parses(self, value, expected):
        assert parse_time_range(value) == expected

    def test_every_sample_slot_ends_after_it_starts(self):
        for slots in SAMPLE_SCHEDULE.values():
            for slot in slots:
                start, end = parse_time_range(slot["time"])
                assert end > start


class TestSampleSchedule:
    def test_course_codes_in_order_of_appearance(self):
        assert course_codes() == ["CSE301", "CSE311", "CSE330", "CSE350"]

    def test_legend_matches_course_codes(self):
        sample = sample_schedule_with_colors()

        assert [entry["course_code"] for entry in sample["legend"]] == course_codes()
        assert sample["days"]["Friday"][0]["colors"] == color_for("CSE350")
