"""Liveness endpoint used by load balancers and container orchestrators."""

import time
from typing import Any, Dict

import structlog
from django.conf import settings
from django.db import connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

logger = structlog.get_logger(__name__)


def _check_database(alias: str = "default") -> Dict[str, Any]:
    started = time.monotonic()
    try:
        connection = connections[alias]
        connection.ensure_connection()
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except Exception:
        logger.exception("health.database_unreachable", alias=alias)
        return {"status": "down"}
    return {
        "status": "up",
        "response_time_ms": round((time.monotonic() - started) * 1000, 2),
    }


def health_check(request: HttpRequest) -> JsonResponse:
    services = {"database": _check_database()}
    healthy = all(service["status"] == "up" for service in services.values())
    state = "healthy" if healthy else "unhealthy"

    logger.info("health.checked", status=state)
    return JsonResponse(
        {
            "status": state,
            "version": settings.SPECTACULAR_SETTINGS["VERSION"],
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=200 if healthy else 503,
    )
