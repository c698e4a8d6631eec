"""
Constants for the schedules app.
"""

from typing import Final


class SCHEDULE_CONFIG:
    """Week layout."""

    # day_of_week values: 0 = Sunday ... 6 = Saturday
    DAY_NAMES: Final[tuple[str, ...]] = (
        "Sunday",
        "Monday",
        "Tuesday",
        "Wednesday",
        "Thursday",
        "Friday",
        "Saturday",
    )

    DEFAULT_ACADEMIC_YEAR: Final[str] = "2024-2025"
