from django.urls import path

from schedules.views import (
    AvailableScheduleView,
    EnrollView,
    MyScheduleView,
    SampleScheduleView,
)

app_name = "schedules"

urlpatterns = [
    path("", MyScheduleView.as_view(), name="my-schedule"),
    path("available/", AvailableScheduleView.as_view(), name="available"),
    path("sample/", SampleScheduleView.as_view(), name="sample"),
    path("<uuid:schedule_id>/enroll/", EnrollView.as_view(), name="enroll"),
]
