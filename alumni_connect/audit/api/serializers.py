from __future__ import annotations

from django.contrib.auth import get_user_model
from rest_framework import serializers

from alumni_connect.audit.models import AuditLog

User = get_user_model()


class AuditActorSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "name", "email", "role"]


class AuditLogSerializer(serializers.ModelSerializer):
    actor = AuditActorSerializer(allow_null=True)
    action_display = serializers.CharField(source="get_action_display", read_only=True)

    class Meta:
        model = AuditLog
        fields = [
            "id",
            "action",
            "action_display",
            "message",
            "model_name",
            "record_id",
            "before",
            "after",
            "ip_address",
            "user_agent",
            "created_at",
            "actor",
        ]
