"""
Schedule views.

URL Structure:
    /api/v1/schedules/                    GET    My timetable grouped by weekday
    /api/v1/schedules/available/          GET    Slots for a semester/section
    /api/v1/schedules/{id}/enroll/        POST, DELETE
    /api/v1/schedules/sample/             GET    Static sample timetable
"""

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from schedules.constants import SCHEDULE_CONFIG
from schedules.sample_data import sample_schedule_with_colors
from schedules.serializers import (
    CohortQuerySerializer,
    ScheduleSerializer,
    UserScheduleSerializer,
)
from schedules.services import ScheduleService

COHORT_PARAMETERS = [
    OpenApiParameter("semester", int, description="Semester 1-12"),
    OpenApiParameter("section", str, description="Section 1-4"),
]


def grouped_days(groups, serializer_class):
    return [
        {
            "day_of_week": day,
            "day_name": SCHEDULE_CONFIG.DAY_NAMES[day],
            "classes": serializer_class(entries, many=True).data,
        }
        for day, entries in groups.items()
    ]


class MyScheduleView(APIView):
    """The current user's enrolled classes, one block per weekday."""

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="My timetable", tags=["Schedules"], parameters=COHORT_PARAMETERS)
    def get(self, request):
        query = CohortQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        entries = list(
            ScheduleService.get_user_schedule(
                request.user,
                semester=query.validated_data.get("semester"),
                section=query.validated_data.get("section"),
            )
        )
        groups = ScheduleService.group_by_day(entries)
        return Response(
            {"count": len(entries), "days": grouped_days(groups, UserScheduleSerializer)}
        )


class AvailableScheduleView(APIView):
    """
    Class slots offered to a cohort.

    Without query parameters the semester and section of the caller's
    profile are used.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Available classes", tags=["Schedules"], parameters=COHORT_PARAMETERS)
    def get(self, request):
        query = CohortQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        profile = request.user.profile
        semester = query.validated_data.get("semester", profile.semester)
        section = query.validated_data.get("section", profile.section)
        if semester is None or not section:
            return Response(
                {"error": "semester and section are required", "error_code": "VALIDATION_ERROR"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        schedules = ScheduleService.get_available_schedules(semester, section)
        groups = ScheduleService.group_by_day(schedules)
        return Response(
            {
                "semester": semester,
                "section": section,
                "days": grouped_days(groups, ScheduleSerializer),
            }
        )


class EnrollView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Enroll in a class", tags=["Schedules"], request=None,
                   responses={201: UserScheduleSerializer})
    def post(self, request, schedule_id):
        result = ScheduleService.enroll(request.user, schedule_id)
        if not result.success:
            return Response(result.to_response(), status=result.http_status)
        return Response(UserScheduleSerializer(result.data).data, status=status.HTTP_201_CREATED)

    @extend_schema(summary="Leave a class", tags=["Schedules"], responses={204: None})
    def delete(self, request, schedule_id):
        result = ScheduleService.unenroll(request.user, schedule_id)
        if not result.success:
            return Response(result.to_response(), status=result.http_status)
        return Response(status=status.HTTP_204_NO_CONTENT)


class SampleScheduleView(APIView):
    """Static sample timetable with course colours."""

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Sample timetable", tags=["Schedules"])
    def get(self, request):
        return Response(sample_schedule_with_colors())
