from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.exceptions import APIException, ValidationError, Throttled
from rest_framework.response import Response
from rest_framework import status
import logging

logger = logging.getLogger("registrations")


class ConflictError(APIException):
    """
    Duplicate team name or member email.

    `duplicates` lists the offending member emails (empty for a name clash).
    """
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists."
    default_code = "conflict"

    def __init__(self, detail=None, duplicates=None):
        super().__init__(detail=detail)
        self.duplicates = list(duplicates or [])


def _message_for(exc, data):
    if isinstance(exc, ValidationError):
        return "Validation failed"
    if isinstance(exc, Throttled):
        return "Too many requests. Please try again later."
    if isinstance(data, dict) and "detail" in data:
        return str(data["detail"])
    return str(getattr(exc, "detail", exc))


def custom_exception_handler(exc, context):
    """
    Wrap DRF + Django exceptions into a consistent response format:

        {"success": false, "status_code": 409, "error": "...", ...}

    Validation errors carry the field-keyed map under "details",
    conflicts carry "duplicates". Success responses (2xx) are not touched.
    """
    response = drf_exception_handler(exc, context)

    # If DRF handled it, wrap it
    if response is not None:
        body = {
            "success": False,
            "status_code": response.status_code,
            "error": _message_for(exc, response.data),
        }
        if isinstance(exc, ValidationError):
            body["details"] = response.data
        elif isinstance(exc, ConflictError):
            body["duplicates"] = exc.duplicates
        elif isinstance(exc, Throttled) and exc.wait is not None:
            body["retry_after"] = int(exc.wait)

        response.data = body
        return response

    # Unhandled exceptions -> 500
    view = context.get("view")
    logger.exception(
        "Unhandled API exception in %s", type(view).__name__ if view else "unknown view",
        exc_info=exc,
    )

    return Response(
        {
            "success": False,
            "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
            "error": "Internal server error. Please try again.",
        },
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
