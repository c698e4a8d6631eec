"""
Write permissions for storage buckets.

The first folder of an object path names its owner:
- avatars/<user_id>/..., posts/<user_id>/...: the user themselves
- messages/<conversation_id>/...: any active participant of the conversation
"""

import uuid

from storage.constants import STORAGE_CONFIG


def owner_folder(path: str) -> str:
    return path.strip().lstrip("/").split("/", 1)[0]


def can_write(user, bucket: str, path: str) -> bool:
    folder = owner_folder(path)
    if bucket != STORAGE_CONFIG.MESSAGES:
        return folder == str(user.id)

    try:
        conversation_id = uuid.UUID(folder)
    except ValueError:
        return False

    from chat.models import Participant

    return Participant.objects.filter(
        conversation_id=conversation_id,
        user=user,
        is_active=True,
    ).exists()
