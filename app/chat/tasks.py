"""
Celery tasks for chat app.

This module defines periodic tasks for:
- Typing indicator cleanup

Related files:
    - services.py: TypingService
    - config/settings.py: CELERY_BEAT_SCHEDULE

Usage:
    from chat.tasks import purge_stale_typing_indicators

    purge_stale_typing_indicators.delay()
"""

import logging

from celery import shared_task
from django.db import OperationalError

from chat.services import TypingService

logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    autoretry_for=(OperationalError,),
    retry_backoff=True,
    retry_kwargs={"max_retries": 3},
)
def purge_stale_typing_indicators(self) -> int:
    """
    Remove typing rows that stopped being refreshed.

    Runs every minute from celery beat.

    Returns:
        Number of rows deleted
    """
    deleted = TypingService.purge_stale()
    logger.debug(f"Typing cleanup removed {deleted} rows")
    return deleted
