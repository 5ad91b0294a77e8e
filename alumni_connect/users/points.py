"""Leaderboard point awards.

Every award is a single ``UPDATE ... SET points = points + n`` so concurrent
requests never lose increments.
"""

from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from django.db.models import F

logger = logging.getLogger(__name__)

CONNECTION_ACCEPTED = 10
JOB_POSTED = 100
JOB_APPLIED = 20
EVENT_REGISTERED = 50
CERTIFICATE_ADDED = 30


def award_points(*user_ids: int, amount: int) -> int:
    """Add ``amount`` (may be negative) to each user; returns rows updated."""

    if not user_ids or amount == 0:
        return 0
    user_model = get_user_model()
    updated = user_model.objects.filter(pk__in=set(user_ids)).update(
        points=F("points") + amount,
    )
    logger.debug("Awarded %s points to users %s", amount, sorted(set(user_ids)))
    return updated


def level_progress(points: int) -> tuple[int, float]:
    """Return (next level target, percent towards it); levels are every 100."""

    next_target = ((max(points, 0) // 100) + 1) * 100
    percent = min((max(points, 0) / next_target) * 100, 100.0)
    return next_target, round(percent, 2)
