from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.parsers import FormParser
from rest_framework.parsers import MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from alumni_connect.messaging import services
from alumni_connect.messaging.models import Message

from .serializers import AttachmentUploadSerializer
from .serializers import ConversationSerializer
from .serializers import MessageCreateSerializer
from .serializers import MessageSerializer


@extend_schema(tags=["Messages"])
class MessageViewSet(GenericViewSet):
    """Direct messages for the authenticated user.

    - create: send a message (the sender is always the caller)
    - conversations: one summary per partner, most recent first
    - retrieve: full history with a partner, oldest first
    - read: mark everything the partner sent as read
    - upload: store an attachment and return its ``{url, type}``
    """

    permission_classes = [IsAuthenticated]
    serializer_class = MessageSerializer
    queryset = Message.objects.none()
    lookup_url_kwarg = "partner_id"
    lookup_value_regex = r"\d+"
    pagination_class = None

    @extend_schema(request=MessageCreateSerializer, responses=MessageSerializer)
    def create(self, request):
        serializer = MessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        message = services.send_message(
            request.user,
            data["recipient_id"],
            content=data.get("content", ""),
            attachment=data.get("attachment"),
        )
        return Response(MessageSerializer(message).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses=MessageSerializer(many=True))
    def retrieve(self, request, partner_id=None):
        messages = services.get_messages(request.user, int(partner_id))
        return Response(MessageSerializer(messages, many=True).data)

    @extend_schema(responses=ConversationSerializer(many=True))
    @action(detail=False)
    def conversations(self, request):
        rows = services.get_conversations(request.user)
        return Response(ConversationSerializer(rows, many=True).data)

    @extend_schema(request=None)
    @action(detail=True, methods=["post"])
    def read(self, request, partner_id=None):
        updated = services.mark_conversation_read(request.user, int(partner_id))
        return Response({"updated": updated})

    @extend_schema(request=AttachmentUploadSerializer)
    @action(
        detail=False,
        methods=["post"],
        parser_classes=[MultiPartParser, FormParser],
    )
    def upload(self, request):
        result = services.upload_attachment(request.user, request.FILES.get("file"))
        return Response(result)
