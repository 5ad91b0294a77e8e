from django.contrib import admin

from alumni_connect.messaging import models


@admin.register(models.Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ["id", "sender", "recipient", "content", "is_read", "created_at"]
    search_fields = ["content", "sender__email", "recipient__email"]
    list_filter = ["is_read", "created_at"]
    raw_id_fields = ["sender", "recipient"]
    readonly_fields = ["created_at", "schema_version"]
