"""
Tests for the schedules API.

/api/v1/schedules/
"""

import pytest
from rest_framework import status

from schedules.tests.factories import UserScheduleFactory

SCHEDULES_URL = "/api/v1/schedules/"


@pytest.mark.django_db
class TestMySchedule:
    def test_grouped_by_weekday(
        self, authenticated_client, user, monday_class, monday_early_class, wednesday_class
    ):
        for slot in (wednesday_class, monday_class, monday_early_class):
            UserScheduleFactory(user=user, schedule=slot)

        response = authenticated_client.get(SCHEDULES_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["count"] == 3
        days = response.data["days"]
        assert [d["day_name"] for d in days] == ["Monday", "Wednesday"]
        assert [c["schedule"]["course"]["code"] for c in days[0]["classes"]] == [
            "CSE330",
            "CSE301",
        ]
        assert days[0]["classes"][1]["schedule"]["colors"]["primary"] == "#2563EB"

    def test_empty(self, authenticated_client):
        response = authenticated_client.get(SCHEDULES_URL)

        assert response.data == {"count": 0, "days": []}

    def test_requires_authentication(self, api_client):
        assert api_client.get(SCHEDULES_URL).status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestAvailableSchedules:
    def test_defaults_to_profile_cohort(
        self, cohort_user, authenticated_client, monday_class, other_cohort_class
    ):
        response = authenticated_client.get(f"{SCHEDULES_URL}available/")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["semester"] == 5
        assert response.data["section"] == "2"
        [monday] = response.data["days"]
        assert [c["id"] for c in monday["classes"]] == [str(monday_class.id)]

    def test_explicit_cohort(self, authenticated_client, other_cohort_class):
        response = authenticated_client.get(
            f"{SCHEDULES_URL}available/", {"semester": 3, "section": "1"}
        )

        assert response.data["days"][0]["classes"][0]["id"] == str(other_cohort_class.id)

    def test_missing_cohort_returns_400(self, authenticated_client):
        response = authenticated_client.get(f"{SCHEDULES_URL}available/")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "VALIDATION_ERROR"


@pytest.mark.django_db
class TestEnrollEndpoint:
    def test_enroll_and_leave(self, authenticated_client, monday_class):
        url = f"{SCHEDULES_URL}{monday_class.id}/enroll/"

        enrolled = authenticated_client.post(url)
        left = authenticated_client.delete(url)

        assert enrolled.status_code == status.HTTP_201_CREATED
        assert enrolled.data["schedule"]["id"] == str(monday_class.id)
        assert left.status_code == status.HTTP_204_NO_CONTENT

    def test_enroll_twice_returns_409(self, authenticated_client, monday_class):
        url = f"{SCHEDULES_URL}{monday_class.id}/enroll/"
        authenticated_client.post(url)

        assert authenticated_client.post(url).status_code == status.HTTP_409_CONFLICT

    def test_leave_unknown_returns_404(self, authenticated_client, monday_class):
        response = authenticated_client.delete(f"{SCHEDULES_URL}{monday_class.id}/enroll/")

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestSampleSchedule:
    def test_sample_has_colours_and_legend(self, authenticated_client):
        response = authenticated_client.get(f"{SCHEDULES_URL}sample/")

        assert response.status_code == status.HTTP_200_OK
        assert list(response.data["days"]) == [
            "Monday",
            "Tuesday",
            "Wednesday",
            "Thursday",
            "Friday",
        ]
        assert response.data["days"]["Monday"][0]["colors"]["primary"] == "#2563EB"
        assert len(response.data["time_slots"]) == 7
