"""Collapse a user's message log into per-partner conversation summaries.

Everything here is pure: callers hand in already-fetched messages, so the
grouping and unread rules can be exercised without a database.
"""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

ATTACHMENT_PLACEHOLDER = "📎 Attachment"
EMPTY_MESSAGE_PLACEHOLDER = "Sent a message"


class MessageLike(Protocol):
    pk: int
    sender_id: int
    recipient_id: int
    content: str
    attachment_url: str
    is_read: bool
    created_at: datetime


UnreadCounter = Callable[[Sequence[MessageLike], int], int]


@dataclass(frozen=True)
class ConversationSummary:
    partner_id: int
    last_message: str
    last_message_time: datetime
    unread_count: int


def display_text(message: MessageLike) -> str:
    if message.content:
        return message.content
    if message.attachment_url:
        return ATTACHMENT_PLACEHOLDER
    return EMPTY_MESSAGE_PLACEHOLDER


def _sort_key(message: MessageLike) -> tuple[datetime, int]:
    return (message.created_at, message.pk)


def _unread_from_partner(message: MessageLike, viewer_id: int) -> bool:
    return not message.is_read and message.recipient_id == viewer_id


def count_unread_messages(messages: Sequence[MessageLike], viewer_id: int) -> int:
    """Number of unread messages the partner sent to the viewer."""

    return sum(1 for m in messages if _unread_from_partner(m, viewer_id))


def count_unread_legacy(messages: Sequence[MessageLike], viewer_id: int) -> int:
    """1 when the newest message is unread and from the partner, else 0."""

    if not messages:
        return 0
    newest = max(messages, key=_sort_key)
    return 1 if _unread_from_partner(newest, viewer_id) else 0


def summarize(
    messages: Iterable[MessageLike],
    viewer_id: int,
    count_unread: UnreadCounter = count_unread_messages,
) -> list[ConversationSummary]:
    grouped: dict[int, list[MessageLike]] = {}
    for message in messages:
        if message.sender_id == viewer_id:
            partner_id = message.recipient_id
        elif message.recipient_id == viewer_id:
            partner_id = message.sender_id
        else:
            continue
        # Notes to self never form a conversation
        if partner_id == viewer_id:
            continue
        grouped.setdefault(partner_id, []).append(message)

    summaries = []
    for partner_id, thread in grouped.items():
        last = max(thread, key=_sort_key)
        summaries.append(
            (
                _sort_key(last),
                ConversationSummary(
                    partner_id=partner_id,
                    last_message=display_text(last),
                    last_message_time=last.created_at,
                    unread_count=count_unread(thread, viewer_id),
                ),
            )
        )
    summaries.sort(key=lambda pair: pair[0], reverse=True)
    return [summary for _, summary in summaries]
