from django.contrib import admin

from alumni_connect.audit.models import AuditLog


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ["created_at", "action", "actor", "model_name", "record_id", "ip_address"]
    list_filter = ["action"]
    search_fields = ["actor__email", "actor__name", "message", "ip_address"]
    raw_id_fields = ["actor"]
    date_hierarchy = "created_at"

    # The trail is append-only, even for superusers
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
