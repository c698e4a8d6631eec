"""
Constants for the authentication app.
"""

from typing import Final


class REGISTRATION_CONFIG:
    """Rules applied to campus sign-ups."""

    MIN_PASSWORD_LENGTH: Final[int] = 6
    MIN_FULL_NAME_LENGTH: Final[int] = 2
    MIN_SEMESTER: Final[int] = 1
    MAX_SEMESTER: Final[int] = 12
    SECTIONS: Final[tuple[str, ...]] = ("1", "2", "3", "4")


class SEARCH_CONFIG:
    """Profile search limits."""

    MIN_QUERY_LENGTH: Final[int] = 2
    MAX_RESULTS: Final[int] = 20


# Departments offered at sign-up (code -> display name)
DEPARTMENTS: Final[dict[str, str]] = {
    "CSE": "Computer Science & Engineering",
    "EEE": "Electrical & Electronic Engineering",
    "BBA": "Bachelor of Business Administration",
    "ENG": "English",
    "LAW": "Law",
}
