from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


def pair_key_for(user_a_id: int, user_b_id: int) -> str:
    low, high = sorted((int(user_a_id), int(user_b_id)))
    return f"{low}:{high}"


class Connection(models.Model):
    """A network link between two users.

    ``pair_key`` is direction-free, so a request A->B and a request B->A can
    never both exist.
    """

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        ACCEPTED = "accepted", _("Accepted")
        REJECTED = "rejected", _("Rejected")

    requester = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_connections",
    )
    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="received_connections",
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
    )
    pair_key = models.CharField(max_length=64, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.UniqueConstraint(fields=["pair_key"], name="unique_connection_pair"),
        ]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.requester_id} -> {self.recipient_id} ({self.status})"

    def save(self, *args, **kwargs):
        self.pair_key = pair_key_for(self.requester_id, self.recipient_id)
        super().save(*args, **kwargs)

    def other_party_id(self, user_id: int) -> int:
        return self.recipient_id if self.requester_id == user_id else self.requester_id
