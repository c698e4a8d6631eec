"""
Django admin configuration for schedules.
"""

from django.contrib import admin

from schedules.models import Course, Schedule, UserSchedule


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    list_display = ("code", "title", "department", "credits")
    list_filter = ("department",)
    search_fields = ("code", "title")


@admin.register(Schedule)
class ScheduleAdmin(admin.ModelAdmin):
    list_display = ("course", "semester", "section", "day_of_week", "start_time", "end_time", "room")
    list_filter = ("semester", "section", "day_of_week", "academic_year")
    search_fields = ("course__code", "course__title", "room")
    raw_id_fields = ("instructor",)


@admin.register(UserSchedule)
class UserScheduleAdmin(admin.ModelAdmin):
    list_display = ("user", "schedule", "created_at")
    raw_id_fields = ("user", "schedule")
