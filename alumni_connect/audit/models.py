from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


class AuditLog(models.Model):
    """Trail of sign-ins and moderation performed on member accounts and content."""

    class Action(models.TextChoices):
        LOGIN = "login", _("Signed in")
        PASSWORD_CHANGED = "password_changed", _("Password changed")
        VERIFICATION = "admin_verification", _("Verification decided")
        ROLE_CHANGED = "admin_role_changed", _("Role changed")
        USER_DELETED = "admin_user_deleted", _("Member removed")
        JOB_DELETED = "admin_job_deleted", _("Job removed")
        EVENT_DELETED = "admin_event_deleted", _("Event removed")
        CERTIFICATE_DELETED = "admin_certificate_deleted", _("Certificate removed")

    action = models.CharField(max_length=40, choices=Action.choices, db_index=True)
    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="audit_entries",
    )
    # Free-text label of the record, kept after the record is gone
    message = models.TextField(blank=True)
    model_name = models.CharField(max_length=150, blank=True)
    record_id = models.BigIntegerField(null=True, blank=True)
    before = models.JSONField(null=True, blank=True)
    after = models.JSONField(null=True, blank=True)
    ip_address = models.CharField(max_length=64, blank=True)
    user_agent = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        who = self.actor_id or "deleted user"
        return f"{self.get_action_display()} by {who}"
