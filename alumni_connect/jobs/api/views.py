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
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from alumni_connect.jobs.models import Job
from alumni_connect.jobs.models import JobApplication
from alumni_connect.users import points
from alumni_connect.users.api.permissions import ROLE_TEACHER
from alumni_connect.users.api.permissions import CanPostJobs
from alumni_connect.users.api.permissions import IsOwnerOrReadOnly
from alumni_connect.users.api.permissions import is_platform_admin

from .serializers import JobApplicantSerializer
from .serializers import JobApplySerializer
from .serializers import JobSerializer

logger = logging.getLogger(__name__)


@extend_schema_view(
    list=extend_schema(tags=["Jobs"]),
    retrieve=extend_schema(tags=["Jobs"]),
    create=extend_schema(tags=["Jobs"]),
    destroy=extend_schema(tags=["Jobs"]),
)
class JobViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.DestroyModelMixin,
    GenericViewSet,
):
    serializer_class = JobSerializer
    queryset = Job.objects.all()
    permission_classes = [IsAuthenticated, CanPostJobs, IsOwnerOrReadOnly]
    filterset_fields = ["job_type", "location", "company"]
    pagination_class = None

    def get_queryset(self, *args, **kwargs):  # type: ignore[override]
        qs = Job.objects.select_related("posted_by").annotate(
            applicants_total=Count("applications")
        )
        if self.action == "list":
            qs = qs.filter(status=Job.Status.ACTIVE)
        return qs.order_by("-created_at", "-id")

    def perform_create(self, serializer):
        job = serializer.save(posted_by=self.request.user)
        points.award_points(self.request.user.pk, amount=points.JOB_POSTED)
        logger.info("Job %s posted by %s", job.pk, self.request.user.pk)

    @extend_schema(tags=["Jobs"], request=JobApplySerializer)
    @action(detail=True, methods=["post"], permission_classes=[IsAuthenticated])
    def apply(self, request, pk=None):
        if getattr(request.user, "role", None) == ROLE_TEACHER:
            msg = "Teachers cannot apply for jobs."
            raise PermissionDenied(msg)
        job = self.get_object()
        serializer = JobApplySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            with transaction.atomic():
                JobApplication.objects.create(
                    job=job,
                    user=request.user,
                    cover_letter=serializer.validated_data.get("cover_letter", ""),
                )
        except IntegrityError:
            msg = "You have already applied for this job"
            raise ValidationError({"detail": msg}) from None
        points.award_points(request.user.pk, amount=points.JOB_APPLIED)
        return Response(
            {"message": f"Applied successfully (+{points.JOB_APPLIED} Points)"},
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(tags=["Jobs"], responses=JobApplicantSerializer(many=True))
    @action(detail=True, permission_classes=[IsAuthenticated])
    def applicants(self, request, pk=None):
        job = self.get_object()
        if job.posted_by_id != request.user.pk and not is_platform_admin(request.user):
            msg = "Not authorized"
            raise PermissionDenied(msg)
        rows = job.applications.select_related("user")
        return Response(JobApplicantSerializer(rows, many=True).data)
