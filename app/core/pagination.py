"""
Offset/limit pagination shared by the feed and the message window.

Clients page by ``offset`` and ``limit`` query parameters only; there are no
cursors. Each app passes its own default page size via a subclass.
"""

from rest_framework.pagination import LimitOffsetPagination


class OffsetLimitPagination(LimitOffsetPagination):
    """
    Offset/limit pagination.

    Query parameters:
        offset: Number of rows to skip (default 0)
        limit: Page size (default ``default_limit``, capped at ``max_limit``)

    Response format:
        {
            "count": 120,
            "next": "...?limit=20&offset=40",
            "previous": "...?limit=20&offset=0",
            "results": [...]
        }
    """

    default_limit = 20
    max_limit = 100
