from rest_framework import serializers

from alumni_connect.connections.models import Connection
from alumni_connect.users.api.serializers import UserSummarySerializer


class ConnectionSerializer(serializers.ModelSerializer):
    requester = UserSummarySerializer(read_only=True)
    recipient = UserSummarySerializer(read_only=True)

    class Meta:
        model = Connection
        fields = ["id", "requester", "recipient", "status", "created_at", "updated_at"]
        read_only_fields = fields


class ConnectionRequestSerializer(serializers.Serializer):
    recipient_id = serializers.IntegerField()


class ConnectionRespondSerializer(serializers.Serializer):
    connection_id = serializers.IntegerField()
    status = serializers.ChoiceField(
        choices=[Connection.Status.ACCEPTED, Connection.Status.REJECTED],
    )
