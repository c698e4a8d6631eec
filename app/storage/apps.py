"""
Django app configuration for storage buckets.
"""

from django.apps import AppConfig


class StorageConfig(AppConfig):
    """Configuration for the storage application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "storage"
    verbose_name = "Storage"
