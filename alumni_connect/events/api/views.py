from __future__ import annotations

import logging

from django.db import IntegrityError
from django.db import transaction
from django.db.models import Count
from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import mixins
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.exceptions import ValidationError
from rest_framework.parsers import FormParser
from rest_framework.parsers import JSONParser
from rest_framework.parsers import MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from alumni_connect.events.models import Event
from alumni_connect.events.models import EventRegistration
from alumni_connect.users import points
from alumni_connect.users.api.permissions import IsOwnerOrReadOnly
from alumni_connect.users.api.permissions import is_platform_admin

from .serializers import EventAttendeeSerializer
from .serializers import EventSerializer

logger = logging.getLogger(__name__)


@extend_schema_view(
    list=extend_schema(tags=["Events"]),
    retrieve=extend_schema(tags=["Events"]),
    create=extend_schema(tags=["Events"]),
    destroy=extend_schema(tags=["Events"]),
)
class EventViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.DestroyModelMixin,
    GenericViewSet,
):
    serializer_class = EventSerializer
    queryset = Event.objects.all()
    permission_classes = [IsAuthenticated, IsOwnerOrReadOnly]
    filterset_fields = ["event_type"]
    parser_classes = (JSONParser, MultiPartParser, FormParser)
    pagination_class = None

    def get_queryset(self, *args, **kwargs):  # type: ignore[override]
        return (
            Event.objects.select_related("organizer")
            .annotate(attendees_total=Count("registrations"))
            .order_by("date", "id")
        )

    def perform_create(self, serializer):
        event = serializer.save(organizer=self.request.user)
        logger.info("Event %s created by %s", event.pk, self.request.user.pk)

    @extend_schema(tags=["Events"], request=None, methods=["POST", "DELETE"])
    @action(
        detail=True,
        methods=["post", "delete"],
        permission_classes=[IsAuthenticated],
    )
    def register(self, request, pk=None):
        event = self.get_object()
        if request.method == "DELETE":
            removed, _ = EventRegistration.objects.filter(
                event=event, user=request.user
            ).delete()
            return Response({"message": "Unregistered successfully", "removed": removed})

        with transaction.atomic():
            locked = Event.objects.select_for_update().get(pk=event.pk)
            if EventRegistration.objects.filter(event=locked, user=request.user).exists():
                msg = "Already registered"
                raise ValidationError({"detail": msg})
            if (
                locked.max_participants is not None
                and locked.registrations.count() >= locked.max_participants
            ):
                msg = "Event is full"
                raise ValidationError({"detail": msg})
            try:
                with transaction.atomic():
                    EventRegistration.objects.create(event=locked, user=request.user)
            except IntegrityError:
                msg = "Already registered"
                raise ValidationError({"detail": msg}) from None
        points.award_points(request.user.pk, amount=points.EVENT_REGISTERED)
        return Response(
            {"message": f"Registered successfully (+{points.EVENT_REGISTERED} Points)"},
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(tags=["Events"], responses=EventAttendeeSerializer(many=True))
    @action(detail=True, permission_classes=[IsAuthenticated])
    def attendees(self, request, pk=None):
        event = self.get_object()
        if event.organizer_id != request.user.pk and not is_platform_admin(request.user):
            msg = "Not authorized"
            raise PermissionDenied(msg)
        rows = event.registrations.select_related("user")
        return Response(EventAttendeeSerializer(rows, many=True).data)
