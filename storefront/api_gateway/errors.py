"""Map every failure raised inside a view onto a status code.

Registered as ``REST_FRAMEWORK["EXCEPTION_HANDLER"]``.
"""

from django.core.exceptions import PermissionDenied
from django.http import Http404, HttpResponse
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.settings import api_settings

from storefront.shopcore.exceptions import BusinessRuleViolation, NotFound
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def flatten_errors(detail, prefix: str = "") -> list[str]:
    """Turn DRF's nested error detail into ``field: reason`` strings."""
    if isinstance(detail, dict):
        out = []
        for field, sub in detail.items():
            if field == api_settings.NON_FIELD_ERRORS_KEY:
                name = prefix
            else:
                name = f"{prefix}.{field}" if prefix else str(field)
            out.extend(flatten_errors(sub, name))
        return out
    if isinstance(detail, list):
        out = []
        for index, sub in enumerate(detail):
            # Lists of dicts come from many=True serializers.
            name = f"{prefix}[{index}]" if isinstance(sub, (dict, list)) else prefix
            out.extend(flatten_errors(sub, name))
        return out
    if prefix:
        return [f"{prefix}: {detail}"]
    return [str(detail)]


def exception_handler(exc, context):
    if isinstance(exc, exceptions.ValidationError):
        message = "; ".join(flatten_errors(exc.detail))
        return Response({"message": message}, status=status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, (NotFound, Http404, exceptions.NotFound)):
        return Response(status=status.HTTP_404_NOT_FOUND)

    if isinstance(exc, BusinessRuleViolation):
        return Response({"message": exc.message}, status=status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, PermissionDenied):
        exc = exceptions.PermissionDenied()

    if isinstance(exc, exceptions.APIException):
        headers = {}
        if getattr(exc, "wait", None):
            headers["Retry-After"] = str(exc.wait)
        return Response({"message": str(exc.detail)}, status=exc.status_code, headers=headers)

    view = context.get("view")
    logger.error(f"Unhandled error in {type(view).__name__}: {exc}", exc_info=exc)
    return Response({"message": str(exc)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


def not_found(request, exception=None):
    """``handler404`` for paths no view matched."""
    return HttpResponse(status=status.HTTP_404_NOT_FOUND)


def server_error(request):
    return HttpResponse(
        b'{"message": "Internal Server Error"}',
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content_type="application/json",
    )
