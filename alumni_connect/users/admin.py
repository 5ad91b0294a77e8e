from django.contrib import admin
from django.contrib.auth import admin as auth_admin
from django.utils.translation import gettext_lazy as _

from alumni_connect.users.models import User


@admin.register(User)
class UserAdmin(auth_admin.UserAdmin):
    fieldsets = (
        (None, {"fields": ("email", "username", "password")}),
        (
            _("Profile"),
            {
                "fields": (
                    "name",
                    "role",
                    "headline",
                    "designation",
                    "batch",
                    "company",
                    "location",
                    "website",
                    "bio",
                    "field_of_study",
                    "skills",
                    "avatar",
                ),
            },
        ),
        (
            _("Verification"),
            {"fields": ("id_card", "is_verified", "verification_status", "points")},
        ),
        (
            _("Permissions"),
            {
                "fields": (
                    "is_active",
                    "is_staff",
                    "is_superuser",
                    "groups",
                    "user_permissions",
                ),
            },
        ),
        (_("Important dates"), {"fields": ("last_login", "date_joined")}),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "username", "name", "role", "password1", "password2"),
            },
        ),
    )
    list_display = ["email", "name", "role", "is_verified", "points", "is_superuser"]
    list_filter = ["role", "is_verified", "verification_status", "is_staff"]
    search_fields = ["name", "email", "company"]
    ordering = ["id"]
