from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from django.db import IntegrityError
from django.db import transaction
from django.db.models import Q
from rest_framework.exceptions import NotFound
from rest_framework.exceptions import PermissionDenied
from rest_framework.exceptions import ValidationError

from alumni_connect.users import points

from .models import Connection
from .models import pair_key_for

logger = logging.getLogger(__name__)

User = get_user_model()


def connections_for(user):
    return (
        Connection.objects.filter(Q(requester=user) | Q(recipient=user))
        .select_related("requester", "recipient")
        .order_by("-created_at", "-id")
    )


def request_connection(requester, recipient_id: int) -> Connection:
    if int(recipient_id) == requester.pk:
        msg = "Cannot connect to yourself"
        raise ValidationError({"detail": msg})
    if not User.objects.filter(pk=recipient_id).exists():
        msg = "User not found"
        raise NotFound(msg)

    existing = Connection.objects.filter(
        pair_key=pair_key_for(requester.pk, recipient_id)
    ).first()
    if existing is not None:
        if existing.status == Connection.Status.ACCEPTED:
            msg = "Already connected"
        else:
            msg = "Request already pending"
        raise ValidationError({"detail": msg})

    try:
        with transaction.atomic():
            connection = Connection.objects.create(
                requester=requester,
                recipient_id=recipient_id,
            )
    except IntegrityError:
        # A mirrored request won the race
        msg = "Request already pending"
        raise ValidationError({"detail": msg}) from None
    logger.info("Connection request %s: %s -> %s", connection.pk, requester.pk, recipient_id)
    return connection


def respond_to_connection(user, connection_id: int, status: str) -> Connection | None:
    """Accept or reject a pending request; rejected requests are deleted.

    The row is locked for the duration so two concurrent accepts award the
    points once.
    """

    with transaction.atomic():
        try:
            connection = Connection.objects.select_for_update().get(pk=connection_id)
        except Connection.DoesNotExist:
            msg = "Request not found"
            raise NotFound(msg) from None
        if connection.recipient_id != user.pk:
            msg = "Not authorized"
            raise PermissionDenied(msg)

        if status == Connection.Status.REJECTED:
            connection.delete()
            logger.info("Connection request %s rejected by %s", connection_id, user.pk)
            return None

        if connection.status == Connection.Status.ACCEPTED:
            return connection
        connection.status = Connection.Status.ACCEPTED
        connection.save(update_fields=["status", "updated_at"])
        points.award_points(
            connection.requester_id,
            connection.recipient_id,
            amount=points.CONNECTION_ACCEPTED,
        )
    logger.info("Connection request %s accepted by %s", connection_id, user.pk)
    return connection
