from django.contrib import admin

from alumni_connect.jobs import models


class JobApplicationInline(admin.TabularInline):
    model = models.JobApplication
    extra = 0
    raw_id_fields = ["user"]


@admin.register(models.Job)
class JobAdmin(admin.ModelAdmin):
    list_display = ["id", "title", "company", "job_type", "posted_by", "status"]
    search_fields = ["title", "company", "location"]
    list_filter = ["status", "job_type", "created_at"]
    raw_id_fields = ["posted_by"]
    inlines = [JobApplicationInline]
