from __future__ import annotations

import logging
import os
import uuid
from typing import TYPE_CHECKING
from typing import Any

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.files.storage import default_storage
from django.db.models import Q
from django.db.transaction import on_commit
from rest_framework.exceptions import NotFound
from rest_framework.exceptions import ValidationError

from alumni_connect.realtime.events.messages import publish_message_created

from .conversations import count_unread_legacy
from .conversations import count_unread_messages
from .conversations import summarize
from .models import Message

if TYPE_CHECKING:  # import for type checking only
    from django.core.files.uploadedfile import UploadedFile
    from django.db.models import QuerySet

    from .conversations import UnreadCounter

logger = logging.getLogger(__name__)

User = get_user_model()

DEFAULT_ATTACHMENT_TYPE = "application/octet-stream"


def _get_partner(partner_id: int):
    try:
        return User.objects.get(pk=partner_id)
    except User.DoesNotExist:
        msg = "User not found"
        raise NotFound(msg) from None


def _conversation_filter(user_id: int, partner_id: int) -> Q:
    return Q(sender_id=user_id, recipient_id=partner_id) | Q(
        sender_id=partner_id, recipient_id=user_id
    )


def unread_counter() -> UnreadCounter:
    if getattr(settings, "MESSAGING_LEGACY_UNREAD_COUNT", False):
        return count_unread_legacy
    return count_unread_messages


def send_message(
    sender,
    recipient_id: int,
    content: str = "",
    attachment: dict[str, Any] | None = None,
) -> Message:
    """Persist a message and relay it to the recipient once committed."""

    content = content or ""
    attachment_url = (attachment or {}).get("url") or ""
    attachment_type = (attachment or {}).get("type") or ""
    if not content.strip() and not attachment_url:
        msg = "Message must have content or an attachment"
        raise ValidationError({"detail": msg})

    recipient = _get_partner(recipient_id)
    if recipient.pk == sender.pk:
        msg = "You cannot message yourself"
        raise ValidationError({"detail": msg})

    message = Message.objects.create(
        sender=sender,
        recipient=recipient,
        content=content,
        attachment_url=attachment_url,
        attachment_type=attachment_type if attachment_url else "",
    )
    logger.info(
        "Message %s stored from user %s to user %s",
        message.pk,
        sender.pk,
        recipient.pk,
    )
    on_commit(lambda: publish_message_created(message))
    return message


def get_conversations(
    user,
    count_unread: UnreadCounter | None = None,
) -> list[dict[str, Any]]:
    messages = (
        Message.objects.filter(Q(sender=user) | Q(recipient=user))
        .only(
            "id",
            "sender_id",
            "recipient_id",
            "content",
            "attachment_url",
            "is_read",
            "created_at",
        )
        .order_by()
    )
    summaries = summarize(
        messages.iterator(),
        user.pk,
        count_unread=count_unread or unread_counter(),
    )
    partners = User.objects.in_bulk([s.partner_id for s in summaries])

    results = []
    for summary in summaries:
        partner = partners.get(summary.partner_id)
        if partner is None:
            continue
        results.append(
            {
                "partner_id": summary.partner_id,
                "partner_name": partner.name,
                "partner_avatar": partner.avatar_url,
                "last_message": summary.last_message,
                "last_message_time": summary.last_message_time,
                "unread_count": summary.unread_count,
            }
        )
    return results


def get_messages(user, partner_id: int) -> QuerySet[Message]:
    # TODO: switch to cursor pagination on (created_at, id) once clients page history
    partner = _get_partner(partner_id)
    return Message.objects.filter(_conversation_filter(user.pk, partner.pk)).order_by(
        "created_at", "id"
    )


def mark_conversation_read(user, partner_id: int) -> int:
    partner = _get_partner(partner_id)
    updated = Message.objects.filter(
        sender=partner,
        recipient=user,
        is_read=False,
    ).update(is_read=True)
    logger.debug("Marked %s messages from %s to %s as read", updated, partner.pk, user.pk)
    return updated


def upload_attachment(user, file: UploadedFile | None) -> dict[str, str]:
    if file is None or not file.size:
        msg = "No file uploaded"
        raise ValidationError({"file": msg})

    max_bytes = getattr(settings, "MESSAGING_ATTACHMENT_MAX_BYTES", 50 * 1024 * 1024)
    if file.size > max_bytes:
        msg = f"File too large (max {max_bytes} bytes)"
        raise ValidationError({"file": msg})

    _, ext = os.path.splitext(file.name or "")
    name = default_storage.save(f"messages/{user.pk}/{uuid.uuid4().hex}{ext.lower()}", file)
    logger.info("User %s uploaded attachment %s (%s bytes)", user.pk, name, file.size)
    return {
        "url": default_storage.url(name),
        "type": getattr(file, "content_type", None) or DEFAULT_ATTACHMENT_TYPE,
    }
