from django.contrib import admin

from alumni_connect.events import models


class EventRegistrationInline(admin.TabularInline):
    model = models.EventRegistration
    extra = 0
    raw_id_fields = ["user"]


@admin.register(models.Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["id", "title", "event_type", "date", "organizer", "max_participants"]
    search_fields = ["title", "location"]
    list_filter = ["event_type", "date"]
    raw_id_fields = ["organizer"]
    inlines = [EventRegistrationInline]
