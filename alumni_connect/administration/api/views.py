"""Admin console endpoints.

Everything here requires an admin-role user (or Django staff). Destructive
and privilege-changing actions are written to the audit log.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.db.models import Q
from drf_spectacular.utils import OpenApiParameter
from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import mixins
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework.viewsets import GenericViewSet

from alumni_connect.audit.api.serializers import AuditLogSerializer
from alumni_connect.audit.models import AuditLog
from alumni_connect.audit.utils import log_action
from alumni_connect.certificates.models import Certificate
from alumni_connect.events.api.serializers import EventSerializer
from alumni_connect.events.models import Event
from alumni_connect.jobs.api.serializers import JobSerializer
from alumni_connect.jobs.models import Job
from alumni_connect.users.api.permissions import IsPlatformAdmin
from alumni_connect.users.models import User

from .serializers import AdminCertificateSerializer
from .serializers import AdminUserSerializer
from .serializers import RecentUserSerializer
from .serializers import RoleUpdateSerializer
from .serializers import VerificationDecisionSerializer

if TYPE_CHECKING:
    from django.db.models import QuerySet

logger = logging.getLogger(__name__)

RECENT_USERS = 5


def _members() -> QuerySet[User]:
    return User.objects.exclude(role=User.Role.ADMIN)


def _recent_members() -> list[dict]:
    rows = _members().order_by("-created_at", "-id")[:RECENT_USERS]
    return RecentUserSerializer(rows, many=True).data


class AuditedDestroyMixin(mixins.DestroyModelMixin):
    """Destroy that leaves an audit trail entry."""

    audit_action: str = ""

    def perform_destroy(self, instance):
        record_id = instance.pk
        label = str(instance)
        super().perform_destroy(instance)
        log_action(
            self.audit_action,
            actor=self.request.user,
            request=self.request,
            message=label,
            model_name=instance._meta.label,
            record_id=record_id,
        )
        logger.info(
            "%s: %s#%s by %s",
            self.audit_action,
            instance._meta.label,
            record_id,
            self.request.user.pk,
        )


@extend_schema(tags=["Admin"])
class AdminStatsView(APIView):
    permission_classes = [IsPlatformAdmin]

    def get(self, request):
        return Response(
            {
                "stats": {
                    "total_users": _members().count(),
                    "pending_verifications": User.objects.filter(
                        verification_status=User.VerificationStatus.PENDING
                    ).count(),
                    "total_jobs": Job.objects.count(),
                    "total_events": Event.objects.count(),
                },
                "recent_users": _recent_members(),
            }
        )


@extend_schema(tags=["Admin"])
class AdminAnalyticsView(APIView):
    permission_classes = [IsPlatformAdmin]

    def get(self, request):
        seniors = User.objects.filter(role=User.Role.SENIOR)
        return Response(
            {
                "total_users": _members().count(),
                "students_count": User.objects.filter(role=User.Role.JUNIOR).count(),
                "alumni_count": seniors.count(),
                "teachers_count": User.objects.filter(role=User.Role.TEACHER).count(),
                "verified_alumni": seniors.filter(is_verified=True).count(),
                "pending_alumni": seniors.filter(is_verified=False).count(),
                "recent_users": _recent_members(),
            }
        )


@extend_schema(
    tags=["Admin"],
    parameters=[
        OpenApiParameter("limit", int, description="1 to 100, default 20"),
        OpenApiParameter("action", str, enum=AuditLog.Action.values),
    ],
)
class AdminAuditView(APIView):
    permission_classes = [IsPlatformAdmin]

    def get(self, request):
        try:
            limit = int(request.query_params.get("limit", "20"))
        except (TypeError, ValueError):
            limit = 20
        limit = max(1, min(limit, 100))

        qs = AuditLog.objects.select_related("actor")
        wanted = request.query_params.get("action")
        if wanted:
            if wanted not in AuditLog.Action.values:
                msg = f"Unknown action: {wanted}"
                raise ValidationError({"action": msg})
            qs = qs.filter(action=wanted)

        rows = list(qs[:limit])
        data = AuditLogSerializer(rows, many=True).data
        return Response({"results": data, "limit": limit})


@extend_schema_view(
    list=extend_schema(tags=["Admin"]),
    destroy=extend_schema(tags=["Admin"]),
)
class AdminUserViewSet(mixins.ListModelMixin, AuditedDestroyMixin, GenericViewSet):
    permission_classes = [IsPlatformAdmin]
    serializer_class = AdminUserSerializer
    queryset = User.objects.all()
    pagination_class = None
    audit_action = AuditLog.Action.USER_DELETED

    def get_queryset(self, *args, **kwargs):  # type: ignore[override]
        return _members().order_by("-created_at", "-id")

    @extend_schema(tags=["Admin"], request=RoleUpdateSerializer)
    @action(detail=True, methods=["put"])
    def role(self, request, pk=None):
        user = self.get_object()
        serializer = RoleUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        before = {"role": user.role}
        user.role = serializer.validated_data["role"]
        user.save(update_fields=["role", "updated_at"])
        log_action(
            AuditLog.Action.ROLE_CHANGED,
            actor=request.user,
            request=request,
            model_name="users.User",
            record_id=user.pk,
            before=before,
            after={"role": user.role},
        )
        return Response(AdminUserSerializer(user).data)


@extend_schema_view(list=extend_schema(tags=["Admin"]))
class VerificationViewSet(mixins.ListModelMixin, GenericViewSet):
    permission_classes = [IsPlatformAdmin]
    serializer_class = AdminUserSerializer
    queryset = User.objects.all()
    pagination_class = None

    def get_queryset(self, *args, **kwargs):  # type: ignore[override]
        if self.action == "list":
            return User.objects.filter(
                verification_status=User.VerificationStatus.PENDING
            ).order_by("created_at", "id")
        return User.objects.all()

    @extend_schema(tags=["Admin"], request=VerificationDecisionSerializer)
    def update(self, request, pk=None):
        user = self.get_object()
        serializer = VerificationDecisionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        decision = serializer.validated_data["status"]
        before = {
            "verification_status": user.verification_status,
            "is_verified": user.is_verified,
        }
        user.verification_status = decision
        user.is_verified = decision == User.VerificationStatus.APPROVED
        user.save(update_fields=["verification_status", "is_verified", "updated_at"])
        log_action(
            AuditLog.Action.VERIFICATION,
            actor=request.user,
            request=request,
            model_name="users.User",
            record_id=user.pk,
            before=before,
            after={
                "verification_status": user.verification_status,
                "is_verified": user.is_verified,
            },
        )
        return Response(
            {
                "message": f"User {decision} successfully",
                "user": AdminUserSerializer(user).data,
            }
        )


@extend_schema_view(
    list=extend_schema(tags=["Admin"]),
    destroy=extend_schema(tags=["Admin"]),
)
class AdminJobViewSet(mixins.ListModelMixin, AuditedDestroyMixin, GenericViewSet):
    permission_classes = [IsPlatformAdmin]
    serializer_class = JobSerializer
    queryset = Job.objects.select_related("posted_by").order_by("-created_at", "-id")
    pagination_class = None
    audit_action = AuditLog.Action.JOB_DELETED


@extend_schema_view(
    list=extend_schema(tags=["Admin"]),
    destroy=extend_schema(tags=["Admin"]),
)
class AdminEventViewSet(mixins.ListModelMixin, AuditedDestroyMixin, GenericViewSet):
    permission_classes = [IsPlatformAdmin]
    serializer_class = EventSerializer
    queryset = Event.objects.select_related("organizer").order_by("date", "id")
    pagination_class = None
    audit_action = AuditLog.Action.EVENT_DELETED


@extend_schema_view(
    list=extend_schema(tags=["Admin"]),
    destroy=extend_schema(tags=["Admin"]),
)
class AdminCertificateViewSet(
    mixins.ListModelMixin,
    AuditedDestroyMixin,
    GenericViewSet,
):
    permission_classes = [IsPlatformAdmin]
    serializer_class = AdminCertificateSerializer
    queryset = Certificate.objects.select_related("user").order_by("-created_at", "-id")
    pagination_class = None
    audit_action = AuditLog.Action.CERTIFICATE_DELETED

    def get_queryset(self, *args, **kwargs):  # type: ignore[override]
        qs = super().get_queryset()
        search = self.request.query_params.get("search", "").strip()
        if search:
            qs = qs.filter(Q(title__icontains=search) | Q(user__name__icontains=search))
        return qs
