from rest_framework import serializers

from alumni_connect.events.models import Event
from alumni_connect.events.models import EventRegistration
from alumni_connect.users.api.serializers import UserSummarySerializer


class EventSerializer(serializers.ModelSerializer):
    organizer = UserSummarySerializer(read_only=True)
    image = serializers.FileField(write_only=True, required=False, allow_null=True)
    image_url = serializers.CharField(read_only=True)
    attendees_count = serializers.SerializerMethodField()
    is_registered = serializers.SerializerMethodField()

    class Meta:
        model = Event
        fields = [
            "id",
            "title",
            "description",
            "date",
            "time",
            "location",
            "event_type",
            "max_participants",
            "image",
            "image_url",
            "organizer",
            "attendees_count",
            "is_registered",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["created_at", "updated_at"]

    def get_attendees_count(self, obj: Event) -> int:
        annotated = getattr(obj, "attendees_total", None)
        if annotated is not None:
            return annotated
        return obj.registrations.count()

    def get_is_registered(self, obj: Event) -> bool:
        request = self.context.get("request")
        user = getattr(request, "user", None)
        if not getattr(user, "is_authenticated", False):
            return False
        return obj.registrations.filter(user=user).exists()


class EventAttendeeSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = EventRegistration
        fields = ["id", "user", "registered_at"]
        read_only_fields = fields
