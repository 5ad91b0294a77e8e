from __future__ import annotations

import logging

from django.conf import settings
from django.db.models import Q
from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import filters
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.mixins import ListModelMixin
from rest_framework.mixins import RetrieveModelMixin
from rest_framework.parsers import FormParser
from rest_framework.parsers import JSONParser
from rest_framework.parsers import MultiPartParser
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from alumni_connect.audit.models import AuditLog
from alumni_connect.audit.utils import log_action
from alumni_connect.certificates.models import Certificate
from alumni_connect.connections.models import Connection
from alumni_connect.events.models import EventRegistration
from alumni_connect.jobs.models import JobApplication
from alumni_connect.users.models import User
from alumni_connect.users.points import level_progress

from .serializers import AvatarSerializer
from .serializers import ChangePasswordSerializer
from .serializers import LeaderboardEntrySerializer
from .serializers import ProfileUpdateSerializer
from .serializers import SettingsSerializer
from .serializers import SkillsSerializer
from .serializers import UserSerializer

logger = logging.getLogger(__name__)


def _network_users():
    return User.objects.filter(is_verified=True).exclude(
        Q(role=User.Role.ADMIN) | Q(is_staff=True)
    )


@extend_schema_view(
    list=extend_schema(tags=["Users"]),
    retrieve=extend_schema(tags=["Users"]),
)
class UserViewSet(RetrieveModelMixin, ListModelMixin, GenericViewSet):
    serializer_class = UserSerializer
    queryset = User.objects.all()
    filter_backends = [filters.SearchFilter]
    search_fields = ["name", "company"]
    # The network directory is returned as a plain list
    pagination_class = None

    def get_queryset(self, *args, **kwargs):  # type: ignore[override]
        if self.action == "list":
            return _network_users().exclude(pk=self.request.user.pk).order_by("name")
        return User.objects.all()

    @extend_schema(tags=["Users"])
    @action(detail=False)
    def me(self, request):
        serializer = UserSerializer(request.user, context={"request": request})
        return Response(status=status.HTTP_200_OK, data=serializer.data)

    @extend_schema(tags=["Users"])
    @action(detail=False)
    def leaderboard(self, request):
        size = getattr(settings, "LEADERBOARD_SIZE", 50)
        rows = _network_users().order_by("-points", "id")[:size]
        data = LeaderboardEntrySerializer(rows, many=True).data
        return Response(data)

    @extend_schema(tags=["Users"])
    @action(detail=False)
    def stats(self, request):
        user = request.user
        next_target, percent = level_progress(user.points)
        return Response(
            {
                "points": user.points,
                "next_level_target": next_target,
                "progress_percentage": percent,
                "certificates": Certificate.objects.filter(user=user).count(),
                "connections": Connection.objects.filter(
                    Q(requester=user) | Q(recipient=user),
                    status=Connection.Status.ACCEPTED,
                ).count(),
                "events_registered": EventRegistration.objects.filter(
                    user=user
                ).count(),
                "jobs_applied": JobApplication.objects.filter(user=user).count(),
            }
        )

    @extend_schema(tags=["Users"], request=ProfileUpdateSerializer)
    @action(detail=False, methods=["put", "patch"])
    def profile(self, request):
        serializer = ProfileUpdateSerializer(
            request.user,
            data=request.data,
            partial=request.method == "PATCH",
        )
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(UserSerializer(request.user, context={"request": request}).data)

    @extend_schema(tags=["Users"], request=AvatarSerializer)
    @action(
        detail=False,
        methods=["put"],
        parser_classes=[MultiPartParser, FormParser],
    )
    def avatar(self, request):
        serializer = AvatarSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = request.user
        if user.avatar:
            user.avatar.delete(save=False)
        user.avatar = serializer.validated_data["image"]
        user.save(update_fields=["avatar", "updated_at"])
        return Response({"avatar_url": user.avatar_url})

    @extend_schema(tags=["Users"], request=SkillsSerializer)
    @action(detail=False, methods=["put"], parser_classes=[JSONParser])
    def skills(self, request):
        serializer = SkillsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        request.user.skills = serializer.validated_data["skills"]
        request.user.save(update_fields=["skills", "updated_at"])
        return Response({"skills": request.user.skills})

    @extend_schema(tags=["Users"], request=SettingsSerializer)
    @action(detail=False, methods=["put"], url_path="settings")
    def update_settings(self, request):
        serializer = SettingsSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)

    @extend_schema(tags=["Users"], request=ChangePasswordSerializer)
    @action(detail=False, methods=["put"], url_path="change-password")
    def change_password(self, request):
        serializer = ChangePasswordSerializer(
            data=request.data, context={"request": request}
        )
        serializer.is_valid(raise_exception=True)
        user = request.user
        user.set_password(serializer.validated_data["new_password"])
        user.save(update_fields=["password"])
        log_action(
            AuditLog.Action.PASSWORD_CHANGED,
            actor=user,
            request=request,
            model_name="users.User",
            record_id=user.pk,
        )
        logger.info("User %s changed their password", user.pk)
        return Response({"message": "Password updated successfully"})
