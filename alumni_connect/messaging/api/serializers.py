from __future__ import annotations

from rest_framework import serializers

from alumni_connect.messaging.models import Message


class AttachmentSerializer(serializers.Serializer):
    url = serializers.CharField(max_length=1000)
    type = serializers.CharField(
        max_length=255,
        required=False,
        allow_blank=True,
        default="",
    )


class MessageSerializer(serializers.ModelSerializer):
    """Wire shape shared by the HTTP API and the realtime relay."""

    attachment = AttachmentSerializer(read_only=True, allow_null=True)

    class Meta:
        model = Message
        fields = (
            "id",
            "sender",
            "recipient",
            "content",
            "attachment",
            "is_read",
            "created_at",
            "schema_version",
        )
        read_only_fields = fields


class MessageCreateSerializer(serializers.Serializer):
    # Any client-supplied sender is ignored; the sender is the caller
    recipient_id = serializers.IntegerField()
    content = serializers.CharField(required=False, allow_blank=True, default="")
    attachment = AttachmentSerializer(required=False, allow_null=True)


class ConversationSerializer(serializers.Serializer):
    partner_id = serializers.IntegerField()
    partner_name = serializers.CharField()
    partner_avatar = serializers.CharField(allow_blank=True)
    last_message = serializers.CharField()
    last_message_time = serializers.DateTimeField()
    unread_count = serializers.IntegerField()


class AttachmentUploadSerializer(serializers.Serializer):
    file = serializers.FileField(allow_empty_file=True)
