"""Liveness probe for load balancers and the admin dashboard.

``/health/`` answers 200 only when every backing service responds. The
Socket.IO relay is reported for information and never fails the probe.
"""

from __future__ import annotations

from typing import Any

import redis
from django.conf import settings
from django.db import connection
from django.http import JsonResponse

from alumni_connect.realtime.presence import get_presence_registry

PROBE_TIMEOUT_SECONDS = 0.5


def check_db() -> dict[str, Any]:
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1;")
            cursor.fetchone()
    except Exception as exc:  # noqa: BLE001 - health must degrade, not crash
        return {"ok": False, "error": str(exc)}
    return {"ok": True}


def check_redis() -> dict[str, Any]:
    url = getattr(settings, "REDIS_URL", None)
    if not url:
        return {"ok": False, "error": "REDIS_URL not configured"}
    client = redis.Redis.from_url(
        url,
        socket_timeout=PROBE_TIMEOUT_SECONDS,
        socket_connect_timeout=PROBE_TIMEOUT_SECONDS,
    )
    try:
        client.ping()
    except Exception as exc:  # noqa: BLE001 - health must degrade, not crash
        return {"ok": False, "error": str(exc)}
    return {"ok": True}


CHECKS = {"db": check_db, "redis": check_redis}


def overall_status(components: dict[str, dict[str, Any]]) -> str:
    healthy = [c.get("ok", False) for c in components.values()]
    if all(healthy):
        return "ok"
    return "degraded" if any(healthy) else "down"


def health(request):
    components = {name: check() for name, check in CHECKS.items()}
    status = overall_status(components)
    body = {
        "status": status,
        "components": components,
        "realtime": {"online_users": len(get_presence_registry().online_users())},
    }
    return JsonResponse(body, status=200 if status == "ok" else 503)
