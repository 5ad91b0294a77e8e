import importlib

from django.apps import AppConfig


class AuditConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "alumni_connect.audit"

    def ready(self) -> None:  # pragma: no cover
        importlib.import_module("alumni_connect.audit.signals")
        return super().ready()
