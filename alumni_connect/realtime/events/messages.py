from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Any

from alumni_connect.realtime.presence import forward_to_user

if TYPE_CHECKING:  # import for type checking only
    from alumni_connect.messaging.models import Message

MESSAGE_RECEIVED = "message received"


def build_message_payload(message: Message) -> dict[str, Any]:
    from alumni_connect.messaging.api.serializers import MessageSerializer

    return dict(MessageSerializer(message).data)


def publish_message_created(message: Message) -> int:
    """Relay a freshly committed Message to the recipient's live connections."""

    payload = build_message_payload(message)
    return forward_to_user(message.recipient_id, MESSAGE_RECEIVED, payload)
