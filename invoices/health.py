"""Health check endpoint for load balancers and orchestration."""

import os
import time
from typing import Any, Dict

from django.conf import settings
from django.db import connections
from django.db.utils import OperationalError
from django.http import JsonResponse
from django.utils import timezone

APP_VERSION = os.environ.get("APP_VERSION", "1.0.0")
APP_START_TIME = time.time()


def _get_uptime_formatted() -> Dict[str, Any]:
    """Get uptime in human-readable format and raw seconds."""
    uptime_seconds = int(time.time() - APP_START_TIME)
    days, remainder = divmod(uptime_seconds, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, seconds = divmod(remainder, 60)

    parts = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    parts.append(f"{seconds}s")

    return {"seconds": uptime_seconds, "formatted": " ".join(parts)}


def check_database(alias: str = "default") -> Dict[str, Any]:
    start = time.perf_counter()
    try:
        with connections[alias].cursor() as cursor:
            cursor.execute("SELECT 1")
    except OperationalError as e:
        return {"status": "unavailable", "error": str(e)}
    return {"status": "ok", "response_time_ms": round((time.perf_counter() - start) * 1000, 2)}


def health_check(request):
    """
    Liveness plus a database round trip.
    Returns 503 when the database cannot be reached.
    """
    database = check_database()
    healthy = database["status"] == "ok"
    response = JsonResponse(
        {
            "status": "healthy" if healthy else "unhealthy",
            "version": APP_VERSION,
            "environment": "development" if settings.DEBUG else "production",
            "timestamp": timezone.now().isoformat(),
            "uptime": _get_uptime_formatted(),
            "checks": {"database": database},
        },
        status=200 if healthy else 503,
    )
    # Prevent caching of health status (stale responses cause false failures)
    response["Cache-Control"] = "no-cache, no-store, must-revalidate, max-age=0"
    response["Pragma"] = "no-cache"
    return response
