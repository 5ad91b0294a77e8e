from __future__ import annotations

import logging

from drf_spectacular.utils import OpenApiParameter
from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import mixins
from rest_framework.exceptions import ValidationError
from rest_framework.parsers import FormParser
from rest_framework.parsers import MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.viewsets import GenericViewSet

from alumni_connect.certificates.models import Certificate
from alumni_connect.users import points
from alumni_connect.users.api.permissions import IsOwnerOrReadOnly

from .serializers import CertificateSerializer

logger = logging.getLogger(__name__)


@extend_schema_view(
    list=extend_schema(
        tags=["Certificates"],
        parameters=[OpenApiParameter("user", int, description="Another user's id")],
    ),
    create=extend_schema(tags=["Certificates"]),
    destroy=extend_schema(tags=["Certificates"]),
)
class CertificateViewSet(
    mixins.ListModelMixin,
    mixins.CreateModelMixin,
    mixins.DestroyModelMixin,
    GenericViewSet,
):
    serializer_class = CertificateSerializer
    queryset = Certificate.objects.all()
    permission_classes = [IsAuthenticated, IsOwnerOrReadOnly]
    filterset_fields = ["category"]
    parser_classes = (MultiPartParser, FormParser)
    pagination_class = None

    def get_queryset(self, *args, **kwargs):  # type: ignore[override]
        qs = Certificate.objects.order_by("-issue_date", "-id")
        if self.action != "list":
            return qs
        target = self.request.query_params.get("user")
        if target in (None, ""):
            return qs.filter(user=self.request.user)
        if not str(target).isdigit():
            msg = "user must be an integer id"
            raise ValidationError({"user": msg})
        return qs.filter(user_id=int(target))

    def perform_create(self, serializer):
        certificate = serializer.save(user=self.request.user)
        points.award_points(self.request.user.pk, amount=points.CERTIFICATE_ADDED)
        logger.info("Certificate %s added by %s", certificate.pk, self.request.user.pk)

    def perform_destroy(self, instance):
        owner_id = instance.user_id
        instance.file.delete(save=False)
        instance.delete()
        points.award_points(owner_id, amount=-points.CERTIFICATE_ADDED)
