from django.contrib.auth import password_validation
from rest_framework import serializers

from alumni_connect.users.models import User


class UserSummarySerializer(serializers.ModelSerializer):
    """Compact representation embedded in connections, jobs and events."""

    avatar_url = serializers.CharField(read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "name",
            "email",
            "role",
            "avatar_url",
            "company",
            "designation",
            "batch",
            "field_of_study",
        ]
        read_only_fields = fields


class UserSerializer(serializers.ModelSerializer):
    id = serializers.IntegerField(read_only=True)
    avatar_url = serializers.CharField(read_only=True)

    # Role, verification and points are system-managed
    email = serializers.EmailField(read_only=True)
    role = serializers.CharField(read_only=True)
    is_verified = serializers.BooleanField(read_only=True)
    verification_status = serializers.CharField(read_only=True)
    points = serializers.IntegerField(read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "name",
            "email",
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
            "avatar_url",
            "is_verified",
            "verification_status",
            "points",
            "email_notifications",
            "profile_visibility",
            "created_at",
        ]
        read_only_fields = ["created_at", "skills", "email_notifications", "profile_visibility"]


class ProfileUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = [
            "name",
            "headline",
            "bio",
            "location",
            "company",
            "designation",
            "website",
            "batch",
            "field_of_study",
        ]


class SkillsSerializer(serializers.Serializer):
    skills = serializers.ListField(
        child=serializers.CharField(max_length=100, allow_blank=False),
        allow_empty=True,
    )

    def validate_skills(self, value: list[str]) -> list[str]:
        # Deduplicate while keeping the order the user gave
        seen: set[str] = set()
        out: list[str] = []
        for skill in (s.strip() for s in value):
            key = skill.lower()
            if skill and key not in seen:
                seen.add(key)
                out.append(skill)
        return out


class SettingsSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["email_notifications", "profile_visibility"]


class AvatarSerializer(serializers.Serializer):
    image = serializers.FileField()


class ChangePasswordSerializer(serializers.Serializer):
    current_password = serializers.CharField(write_only=True)
    new_password = serializers.CharField(write_only=True)

    def validate_current_password(self, value: str) -> str:
        user = self.context["request"].user
        if not user.check_password(value):
            msg = "Incorrect current password"
            raise serializers.ValidationError(msg)
        return value

    def validate_new_password(self, value: str) -> str:
        password_validation.validate_password(value, self.context["request"].user)
        return value


class LeaderboardEntrySerializer(serializers.ModelSerializer):
    avatar_url = serializers.CharField(read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "name",
            "avatar_url",
            "points",
            "role",
            "batch",
            "company",
            "field_of_study",
        ]
        read_only_fields = fields
