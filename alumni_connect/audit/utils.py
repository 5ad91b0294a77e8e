from __future__ import annotations

import logging

from django.contrib.auth import get_user_model

from .models import AuditLog

logger = logging.getLogger(__name__)


def client_ip(request) -> str:
    if request is None:
        return ""
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR", "")
    if forwarded:
        return forwarded.split(",", 1)[0].strip()
    return request.META.get("REMOTE_ADDR", "")


def log_action(  # noqa: PLR0913
    action: str,
    *,
    actor: object | None = None,
    request=None,
    message: str = "",
    model_name: str = "",
    record_id: int | None = None,
    before: dict | list | None = None,
    after: dict | list | None = None,
) -> AuditLog:
    """Append an entry to the trail; ``request`` fills in ip and user agent."""

    if action not in AuditLog.Action.values:
        msg = f"Unknown audit action: {action!r}"
        raise ValueError(msg)
    user_model = get_user_model()
    actor_user = actor if isinstance(actor, user_model) else None
    user_agent = request.META.get("HTTP_USER_AGENT", "") if request is not None else ""
    entry = AuditLog.objects.create(
        action=action,
        actor=actor_user,
        message=message,
        model_name=model_name,
        record_id=record_id,
        before=before,
        after=after,
        ip_address=client_ip(request),
        user_agent=user_agent[:255],
    )
    logger.debug("audit %s by %s on %s#%s", action, entry.actor_id, model_name, record_id)
    return entry
