from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


def certificate_upload_to(instance, filename):  # pragma: no cover - path logic trivial
    return f"certificates/{instance.user_id}/{filename}"


class Certificate(models.Model):
    class Category(models.TextChoices):
        ACADEMIC = "academic", _("Academic")
        PROFESSIONAL = "professional", _("Professional")
        TECHNICAL = "technical", _("Technical")
        WORKSHOP = "workshop", _("Workshop")
        OTHER = "other", _("Other")

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="certificates",
    )
    title = models.CharField(max_length=255)
    category = models.CharField(
        max_length=20,
        choices=Category.choices,
        default=Category.OTHER,
    )
    issuing_organization = models.CharField(max_length=255)
    issue_date = models.DateField()
    file = models.FileField(upload_to=certificate_upload_to)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-issue_date", "-id"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.title} ({self.user_id})"

    @property
    def file_url(self) -> str:
        return self.file.url if self.file else ""
