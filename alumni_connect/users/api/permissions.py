"""Role-based permission classes shared by every API app."""

from collections.abc import Iterable
from typing import Any

from rest_framework.permissions import SAFE_METHODS
from rest_framework.permissions import BasePermission

ROLE_JUNIOR = "junior"
ROLE_SENIOR = "senior"
ROLE_TEACHER = "teacher"
ROLE_ADMIN = "admin"


def _is_authenticated(user) -> bool:
    return bool(user and getattr(user, "is_authenticated", False))


def _user_has_role(user, roles: Iterable[str]) -> bool:
    return getattr(user, "role", None) in set(roles)


def is_platform_admin(user) -> bool:
    if not _is_authenticated(user):
        return False
    return bool(getattr(user, "is_staff", False)) or _user_has_role(user, [ROLE_ADMIN])


def _owner_id(obj: Any) -> int | None:
    for attr in ("posted_by_id", "organizer_id", "user_id"):
        if hasattr(obj, attr):
            return getattr(obj, attr)
    return None


class _RolePermission(BasePermission):
    """Base helper to gate access by role names."""

    allowed_roles: tuple[str, ...] = ()
    allow_staff: bool = True

    def has_permission(self, request, view) -> bool:
        user = getattr(request, "user", None)
        if not _is_authenticated(user):
            return False
        if self.allow_staff and getattr(user, "is_staff", False):
            return True
        return _user_has_role(user, self.allowed_roles)


class IsPlatformAdmin(_RolePermission):
    """Allow access only to admin-role users (staff always allowed)."""

    allowed_roles = (ROLE_ADMIN,)


class CanPostJobs(BasePermission):
    """Seniors, teachers and admins may publish jobs; everyone may read."""

    message = "Only seniors, teachers and admins can post jobs."

    def has_permission(self, request, view) -> bool:
        user = getattr(request, "user", None)
        if not _is_authenticated(user):
            return False
        if request.method in SAFE_METHODS or getattr(view, "action", None) != "create":
            return True
        return is_platform_admin(user) or _user_has_role(
            user, [ROLE_SENIOR, ROLE_TEACHER]
        )


class IsOwnerOrReadOnly(BasePermission):
    """Writes on an owned record are limited to its owner (and platform admins)."""

    message = "Not authorized to modify this record."

    def has_object_permission(self, request, view, obj) -> bool:
        if request.method in SAFE_METHODS or is_platform_admin(request.user):
            return True
        return _owner_id(obj) == getattr(request.user, "id", None)
