from django.contrib.auth.models import AbstractUser
from django.db import models
from django.db.models import CharField
from django.db.models import EmailField
from django.utils.translation import gettext_lazy as _


def user_avatar_upload_to(instance, filename):  # pragma: no cover - path logic trivial
    return f"users/avatars/{instance.pk}/{filename}"


def user_id_card_upload_to(instance, filename):  # pragma: no cover - path logic trivial
    return f"users/id_cards/{instance.email}/{filename}"


class User(AbstractUser):
    """
    Alumni Connect account.

    Login is by email; ``username`` is kept for Django admin and defaults to
    the email address at signup.
    """

    class Role(models.TextChoices):
        JUNIOR = "junior", _("Junior")
        SENIOR = "senior", _("Senior")
        TEACHER = "teacher", _("Teacher")
        ADMIN = "admin", _("Admin")

    class VerificationStatus(models.TextChoices):
        PENDING = "pending", _("Pending")
        APPROVED = "approved", _("Approved")
        REJECTED = "rejected", _("Rejected")

    class ProfileVisibility(models.TextChoices):
        PUBLIC = "public", _("Public")
        PRIVATE = "private", _("Private")

    # First and last name do not cover name patterns around the globe
    name = CharField(_("Full Name"), blank=True, max_length=255)
    email = EmailField(_("email address"), unique=True)
    first_name = None  # type: ignore[assignment]
    last_name = None  # type: ignore[assignment]

    role = CharField(max_length=20, choices=Role.choices, default=Role.JUNIOR)

    # Profile
    headline = CharField(max_length=255, blank=True)
    designation = CharField(max_length=255, blank=True)
    batch = CharField(max_length=50, blank=True)
    company = CharField(max_length=255, blank=True)
    location = CharField(max_length=255, blank=True)
    website = models.URLField(max_length=500, blank=True)
    bio = models.TextField(blank=True)
    field_of_study = CharField(max_length=255, blank=True)
    skills = models.JSONField(default=list, blank=True)
    avatar = models.FileField(upload_to=user_avatar_upload_to, blank=True, null=True)

    # Verification
    id_card = models.FileField(upload_to=user_id_card_upload_to, blank=True, null=True)
    is_verified = models.BooleanField(default=False)
    verification_status = CharField(
        max_length=20,
        choices=VerificationStatus.choices,
        default=VerificationStatus.PENDING,
    )

    # Leaderboard
    points = models.IntegerField(default=0)

    # Settings
    email_notifications = models.BooleanField(default=True)
    profile_visibility = CharField(
        max_length=20,
        choices=ProfileVisibility.choices,
        default=ProfileVisibility.PUBLIC,
    )

    # Audit timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["username"]

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:
        return self.name or self.email

    def get_full_name(self) -> str:
        return self.name

    def get_short_name(self) -> str:
        return self.name.split(" ", 1)[0] if self.name else self.email

    @property
    def is_platform_admin(self) -> bool:
        return self.role == self.Role.ADMIN or bool(self.is_staff)

    @property
    def avatar_url(self) -> str:
        return self.avatar.url if self.avatar else ""
