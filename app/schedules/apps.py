"""Django app configuration for schedules."""

from django.apps import AppConfig


class SchedulesConfig(AppConfig):
    """Configuration for the schedules app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "schedules"
    verbose_name = "Schedules"
