"""
Static sample timetable and course colour palette.

The sample timetable is what the schedule screen shows for a student who
has not enrolled in any class yet; ``seed_sample_schedule`` loads the same
data into Course/Schedule rows.

Usage:
    from schedules.sample_data import SAMPLE_SCHEDULE, color_for

    for slot in SAMPLE_SCHEDULE["Monday"]:
        colors = color_for(slot["course_code"])
"""

from __future__ import annotations

from datetime import datetime, time

TIME_SLOTS = (
    "8:00 AM",
    "9:30 AM",
    "11:00 AM",
    "12:30 PM",
    "2:00 PM",
    "3:30 PM",
    "5:00 PM",
)

CLASS_COLORS: dict[str, dict[str, str]] = {
    "CSE301": {"primary": "#2563EB", "light": "#DBEAFE", "text": "#1E40AF"},
    "CSE311": {"primary": "#059669", "light": "#D1FAE5", "text": "#047857"},
    "CSE330": {"primary": "#DC2626", "light": "#FEE2E2", "text": "#B91C1C"},
    "CSE350": {"primary": "#7C3AED", "light": "#EDE9FE", "text": "#6D28D9"},
    "EEE201": {"primary": "#EA580C", "light": "#FED7AA", "text": "#C2410C"},
    "EEE301": {"primary": "#0891B2", "light": "#CFFAFE", "text": "#0E7490"},
    "BBA101": {"primary": "#BE185D", "light": "#FCE7F3", "text": "#9D174D"},
    "BBA201": {"primary": "#65A30D", "light": "#ECFCCB", "text": "#4D7C0F"},
    "ENG101": {"primary": "#7C2D12", "light": "#FED7AA", "text": "#92400E"},
    "LAW101": {"primary": "#1F2937", "light": "#F3F4F6", "text": "#374151"},
}

FALLBACK_COLOR: dict[str, str] = {"primary": "#6B7280", "light": "#F3F4F6", "text": "#4B5563"}

SAMPLE_SCHEDULE: dict[str, list[dict[str, str]]] = {
    "Monday": [
        {
            "id": "m1",
            "course_code": "CSE301",
            "title": "Database Systems",
            "time": "9:30 AM - 11:00 AM",
            "room": "Room 405",
            "instructor": "Dr. Rahman",
        },
        {
            "id": "m2",
            "course_code": "CSE311",
            "title": "Algorithms",
            "time": "2:00 PM - 3:30 PM",
            "room": "Room 302",
            "instructor": "Prof. Khan",
        },
    ],
    "Tuesday": [
        {
            "id": "t1",
            "course_code": "CSE330",
            "title": "Web Engineering",
            "time": "8:00 AM - 9:30 AM",
            "room": "Lab 2",
            "instructor": "Ms. Fatima",
        },
        {
            "id": "t2",
            "course_code": "CSE350",
            "title": "Software Engineering",
            "time": "11:00 AM - 12:30 PM",
            "room": "Room 401",
            "instructor": "Dr. Haque",
        },
    ],
    "Wednesday": [
        {
            "id": "w1",
            "course_code": "CSE301",
            "title": "Database Systems Lab",
            "time": "11:00 AM - 12:30 PM",
            "room": "Lab 3",
            "instructor": "Dr. Rahman",
        },
    ],
    "Thursday": [
        {
            "id": "th1",
            "course_code": "CSE311",
            "title": "Algorithms",
            "time": "9:30 AM - 11:00 AM",
            "room": "Room 302",
            "instructor": "Prof. Khan",
        },
        {
            "id": "th2",
            "course_code": "CSE330",
            "title": "Web Engineering Lab",
            "time": "3:30 PM - 5:00 PM",
            "room": "Lab 1",
            "instructor": "Ms. Fatima",
        },
    ],
    "Friday": [
        {
            "id": "f1",
            "course_code": "CSE350",
            "title": "Software Engineering",
            "time": "12:30 PM - 2:00 PM",
            "room": "Room 401",
            "instructor": "Dr. Haque",
        },
    ],
}


def color_for(course_code: str) -> dict[str, str]:
    """Palette entry for a course, or the neutral fallback."""
    return CLASS_COLORS.get(course_code, FALLBACK_COLOR)


def parse_time(value: str) -> time:
    return datetime.strptime(value.strip(), "%I:%M %p").time()


def parse_time_range(value: str) -> tuple[time, time]:
    """Parse ``"9:30 AM - 11:00 AM"`` into start and end times."""
    start, end = value.split(" - ")
    return parse_time(start), parse_time(end)


def course_codes() -> list[str]:
    """Distinct course codes of the sample timetable, in order of appearance."""
    codes: dict[str, None] = {}
    for slots in SAMPLE_SCHEDULE.values():
        for slot in slots:
            codes.setdefault(slot["course_code"], None)
    return list(codes)


def sample_schedule_with_colors() -> dict:
    """The sample timetable with each slot's colours and a legend."""
    return {
        "days": {
            day: [{**slot, "colors": color_for(slot["course_code"])} for slot in slots]
            for day, slots in SAMPLE_SCHEDULE.items()
        },
        "legend": [
            {"course_code": code, "colors": color_for(code)} for code in course_codes()
        ],
        "time_slots": list(TIME_SLOTS),
    }
