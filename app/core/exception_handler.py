"""
DRF exception handler that renders application errors as JSON.

Configured via REST_FRAMEWORK["EXCEPTION_HANDLER"]. DRF's own exceptions
keep their default rendering; BaseApplicationError subclasses raised from a
view become ``{"error", "error_code"[, "details"]}`` with the status the
exception class declares.
"""

import logging

from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.exceptions import BaseApplicationError

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is not None:
        return response

    if isinstance(exc, BaseApplicationError):
        view = context.get("view")
        logger.warning(
            f"{exc.__class__.__name__} in {view.__class__.__name__ if view else 'view'}: {exc}"
        )
        return Response(exc.to_dict(), status=exc.status_code)

    return None
