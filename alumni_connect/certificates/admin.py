from django.contrib import admin

from alumni_connect.certificates import models


@admin.register(models.Certificate)
class CertificateAdmin(admin.ModelAdmin):
    list_display = ["id", "title", "category", "issuing_organization", "user", "issue_date"]
    search_fields = ["title", "issuing_organization", "user__email"]
    list_filter = ["category", "issue_date"]
    raw_id_fields = ["user"]
