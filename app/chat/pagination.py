"""
Pagination classes for chat API.

The message window is paged by offset/limit, newest first: offset 0 is the
latest page and larger offsets walk back in time.
"""

from chat.constants import MESSAGE_CONFIG
from core.pagination import OffsetLimitPagination


class MessagePagination(OffsetLimitPagination):
    """
    Offset/limit pagination for message lists.

    Default: 50 messages per page
    Maximum: 100 messages per page
    """

    default_limit = MESSAGE_CONFIG.PAGE_SIZE
    max_limit = MESSAGE_CONFIG.MAX_PAGE_SIZE
