from django.contrib import admin

from alumni_connect.connections import models


@admin.register(models.Connection)
class ConnectionAdmin(admin.ModelAdmin):
    list_display = ["id", "requester", "recipient", "status", "created_at"]
    search_fields = ["requester__email", "recipient__email", "pair_key"]
    list_filter = ["status", "created_at"]
    raw_id_fields = ["requester", "recipient"]
