from rest_framework import serializers

from alumni_connect.certificates.models import Certificate
from alumni_connect.users.api.serializers import UserSummarySerializer
from alumni_connect.users.models import User


class AdminUserSerializer(serializers.ModelSerializer):
    avatar_url = serializers.CharField(read_only=True)
    id_card_url = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            "id",
            "name",
            "email",
            "role",
            "batch",
            "company",
            "avatar_url",
            "id_card_url",
            "is_verified",
            "verification_status",
            "points",
            "is_active",
            "created_at",
        ]
        read_only_fields = fields

    def get_id_card_url(self, obj: User) -> str:
        return obj.id_card.url if obj.id_card else ""


class RecentUserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "name", "email", "role", "created_at"]
        read_only_fields = fields


class RoleUpdateSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=User.Role.choices)


class VerificationDecisionSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=[User.VerificationStatus.APPROVED, User.VerificationStatus.REJECTED],
    )


class AdminCertificateSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)
    file_url = serializers.CharField(read_only=True)

    class Meta:
        model = Certificate
        fields = [
            "id",
            "user",
            "title",
            "category",
            "issuing_organization",
            "issue_date",
            "file_url",
            "created_at",
        ]
        read_only_fields = fields
