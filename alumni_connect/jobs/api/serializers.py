from rest_framework import serializers

from alumni_connect.jobs.models import Job
from alumni_connect.jobs.models import JobApplication
from alumni_connect.users.api.serializers import UserSummarySerializer


class JobSerializer(serializers.ModelSerializer):
    posted_by = UserSummarySerializer(read_only=True)
    applicants_count = serializers.SerializerMethodField()
    has_applied = serializers.SerializerMethodField()

    class Meta:
        model = Job
        fields = [
            "id",
            "title",
            "company",
            "location",
            "job_type",
            "description",
            "salary_range",
            "status",
            "posted_by",
            "applicants_count",
            "has_applied",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["status", "created_at", "updated_at"]

    def get_applicants_count(self, obj: Job) -> int:
        annotated = getattr(obj, "applicants_total", None)
        if annotated is not None:
            return annotated
        return obj.applications.count()

    def get_has_applied(self, obj: Job) -> bool:
        request = self.context.get("request")
        user = getattr(request, "user", None)
        if not getattr(user, "is_authenticated", False):
            return False
        return obj.applications.filter(user=user).exists()


class JobApplySerializer(serializers.Serializer):
    cover_letter = serializers.CharField(required=False, allow_blank=True, default="")


class JobApplicantSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = JobApplication
        fields = ["id", "user", "status", "cover_letter", "applied_at"]
        read_only_fields = fields
