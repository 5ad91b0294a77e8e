from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


def event_image_upload_to(instance, filename):  # pragma: no cover - path logic trivial
    return f"events/{instance.organizer_id}/{filename}"


class Event(models.Model):
    class Type(models.TextChoices):
        WEBINAR = "webinar", _("Webinar")
        WORKSHOP = "workshop", _("Workshop")
        MEETUP = "meetup", _("Meetup")

    title = models.CharField(max_length=255)
    description = models.TextField()
    date = models.DateField()
    time = models.CharField(max_length=50)
    location = models.CharField(max_length=255)
    event_type = models.CharField(
        max_length=20,
        choices=Type.choices,
        default=Type.WEBINAR,
    )
    max_participants = models.PositiveIntegerField(null=True, blank=True)
    image = models.FileField(upload_to=event_image_upload_to, blank=True, null=True)
    organizer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="events_organized",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["date", "id"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.title} ({self.date})"

    @property
    def image_url(self) -> str:
        return self.image.url if self.image else ""


class EventRegistration(models.Model):
    event = models.ForeignKey(
        Event,
        on_delete=models.CASCADE,
        related_name="registrations",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="event_registrations",
    )
    registered_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["registered_at", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["event", "user"],
                name="unique_event_registration",
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.user_id} @ event {self.event_id}"
