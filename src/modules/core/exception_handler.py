"""DRF exception handler rendering RFC 7807 problem details.

Wired through ``REST_FRAMEWORK["EXCEPTION_HANDLER"]``.  Business errors
are mapped to an HTTP status by their ``kind`` through ``STATUS_BY_KIND``;
DRF's own ``APIException`` keeps its status; anything else is an
internal failure that is logged in full and reported with a generic
message unless ``DEBUG`` is on.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Dict, Optional

import structlog
from django.conf import settings
from django.core.exceptions import PermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from modules.core.exceptions import BusinessError, ErrorKind, ValidationFailed
from modules.core.middleware import correlation_id_var

logger = structlog.get_logger(__name__)

PROBLEM_CONTENT_TYPE = "application/problem+json"

STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
}

TITLE_BY_KIND: Dict[ErrorKind, str] = {
    ErrorKind.NOT_FOUND: "Resource not found",
    ErrorKind.VALIDATION: "Validation error",
    ErrorKind.CONFLICT: "Duplicate resource",
}

INTERNAL_ERROR_DETAIL = "An unexpected error occurred. Our team has been notified."


def problem_details_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Render any exception raised inside a DRF view as a problem response."""
    request = context.get("request")
    instance = request.path if request is not None else None

    if isinstance(exc, BusinessError):
        return _business_problem(exc, instance)

    if isinstance(exc, Http404):
        exc = exceptions.NotFound()
    elif isinstance(exc, PermissionDenied):
        exc = exceptions.PermissionDenied()

    if isinstance(exc, exceptions.APIException):
        return _api_problem(exc, context, instance)

    logger.error("request.internal_error", path=instance, exc_info=exc)
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    body = _problem(
        status_code,
        "Internal server error",
        str(exc) if settings.DEBUG else INTERNAL_ERROR_DETAIL,
        "INTERNAL_ERROR",
        instance,
    )
    if settings.DEBUG:
        body["exceptionType"] = type(exc).__name__
    return _respond(body, status_code)


def _business_problem(exc: BusinessError, instance: Optional[str]) -> Response:
    status_code = STATUS_BY_KIND[exc.kind]
    body = _problem(
        status_code, TITLE_BY_KIND[exc.kind], exc.message, exc.code, instance
    )
    if isinstance(exc, ValidationFailed) and exc.errors:
        body["errors"] = exc.errors
    logger.warning(
        "request.business_error",
        status_code=status_code,
        code=exc.code,
        detail=exc.message,
        path=instance,
    )
    return _respond(body, status_code)


def _api_problem(
    exc: exceptions.APIException,
    context: Dict[str, Any],
    instance: Optional[str],
) -> Response:
    # DRF's default handler sets auth / Allow / Retry-After headers
    default = exception_handler(exc, context)
    headers = {}
    if default is not None:
        headers = {
            key: value
            for key, value in default.items()
            if key.lower() != "content-type"
        }

    status_code = exc.status_code
    detail = exc.detail if isinstance(exc.detail, str) else HTTPStatus(status_code).phrase
    body = _problem(
        status_code,
        HTTPStatus(status_code).phrase,
        str(detail),
        str(exc.default_code).upper(),
        instance,
    )
    if isinstance(exc.detail, (dict, list)):
        body["errors"] = exc.detail
    logger.warning(
        "request.api_error",
        status_code=status_code,
        code=body["code"],
        path=instance,
    )
    return _respond(body, status_code, headers=headers)


def _problem(
    status_code: int,
    title: str,
    detail: str,
    code: str,
    instance: Optional[str],
) -> Dict[str, Any]:
    return {
        "type": f"https://httpstatuses.com/{status_code}",
        "title": title,
        "status": status_code,
        "detail": detail,
        "instance": instance,
        "code": code,
        "traceId": correlation_id_var.get(),
    }


def _respond(
    body: Dict[str, Any],
    status_code: int,
    headers: Optional[Dict[str, str]] = None,
) -> Response:
    response = Response(body, status=status_code, headers=headers)
    response.content_type = PROBLEM_CONTENT_TYPE
    return response
