from __future__ import annotations

from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.mixins import ListModelMixin
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from alumni_connect.connections import services
from alumni_connect.connections.models import Connection

from .serializers import ConnectionRequestSerializer
from .serializers import ConnectionRespondSerializer
from .serializers import ConnectionSerializer


@extend_schema_view(list=extend_schema(tags=["Connections"]))
class ConnectionViewSet(ListModelMixin, GenericViewSet):
    permission_classes = [IsAuthenticated]
    serializer_class = ConnectionSerializer
    queryset = Connection.objects.all()
    pagination_class = None

    def get_queryset(self, *args, **kwargs):  # type: ignore[override]
        return services.connections_for(self.request.user)

    @extend_schema(tags=["Connections"], request=ConnectionRequestSerializer)
    @action(detail=False, methods=["post"], url_path="request")
    def send_request(self, request):
        serializer = ConnectionRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        connection = services.request_connection(
            request.user, serializer.validated_data["recipient_id"]
        )
        return Response(
            {
                "message": "Connection request sent",
                "connection": ConnectionSerializer(connection).data,
            },
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(tags=["Connections"], request=ConnectionRespondSerializer)
    @action(detail=False, methods=["post"])
    def respond(self, request):
        serializer = ConnectionRespondSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        connection = services.respond_to_connection(
            request.user, data["connection_id"], data["status"]
        )
        if connection is None:
            return Response({"message": "Request rejected", "connection": None})
        return Response(
            {
                "message": f"Request {connection.status}",
                "connection": ConnectionSerializer(connection).data,
            }
        )
