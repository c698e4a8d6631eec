"""Django app configuration for friends."""

from django.apps import AppConfig


class FriendsConfig(AppConfig):
    """Configuration for the friends app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "friends"
    verbose_name = "Friends"
