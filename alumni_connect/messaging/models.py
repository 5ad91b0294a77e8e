from django.conf import settings
from django.db import models

CURRENT_SCHEMA_VERSION = 1


class Message(models.Model):
    """One chat message between two users.

    Rows are append-only; the only mutation after insert is flipping
    ``is_read`` when the recipient opens the conversation.
    """

    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_messages",
    )
    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="received_messages",
    )
    content = models.TextField(blank=True, default="")
    attachment_url = models.CharField(max_length=1000, blank=True, default="")
    attachment_type = models.CharField(max_length=255, blank=True, default="")
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    schema_version = models.PositiveSmallIntegerField(default=CURRENT_SCHEMA_VERSION)

    class Meta:
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(
                fields=["sender", "recipient", "created_at"],
                name="message_pair_created_idx",
            ),
            models.Index(fields=["recipient", "is_read"], name="message_unread_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.sender_id} -> {self.recipient_id} @ {self.created_at}"

    @property
    def has_attachment(self) -> bool:
        return bool(self.attachment_url)

    @property
    def attachment(self) -> dict[str, str] | None:
        if not self.attachment_url:
            return None
        return {"url": self.attachment_url, "type": self.attachment_type}
