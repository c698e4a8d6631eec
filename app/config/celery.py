"""
Celery configuration for the Campus Connect backend.

Background work handled here:
- Notification creation that should not block a request
- Periodic clean-up of stale typing indicators (see CELERY_BEAT_SCHEDULE)

Tasks are auto-discovered from all installed Django apps.

For more information, see:
https://docs.celeryq.dev/en/stable/django/first-steps-with-django.html
"""

import os

from celery import Celery

# Set the default Django settings module for the Celery worker
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("config")

# All Celery settings are prefixed with CELERY_ in settings.py
app.config_from_object("django.conf:settings", namespace="CELERY")

app.autodiscover_tasks()
