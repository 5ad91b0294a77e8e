"""Signup and login endpoints.

Tokens travel in the JSON body (``token`` + ``refresh``) since the single-page
client sends them back as ``Authorization: Bearer`` headers.
"""

from __future__ import annotations

import logging

from django.contrib.auth import password_validation
from django.contrib.auth import user_logged_in
from drf_spectacular.utils import extend_schema
from rest_framework import serializers
from rest_framework import status
from rest_framework.parsers import FormParser
from rest_framework.parsers import JSONParser
from rest_framework.parsers import MultiPartParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenObtainPairView

from alumni_connect.users.models import User

logger = logging.getLogger(__name__)

# Roles that must upload an ID card before an admin can verify them
ID_CARD_REQUIRED_ROLES = {User.Role.JUNIOR, User.Role.TEACHER}
SELF_SERVICE_ROLES = [User.Role.JUNIOR, User.Role.SENIOR, User.Role.TEACHER]


def tokens_for_user(user: User) -> dict[str, str]:
    refresh = RefreshToken.for_user(user)
    refresh["role"] = user.role
    refresh["name"] = user.name
    return {"token": str(refresh.access_token), "refresh": str(refresh)}


def auth_user_payload(user: User) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "is_verified": user.is_verified,
    }


class SignupSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)
    role = serializers.ChoiceField(choices=SELF_SERVICE_ROLES)
    batch = serializers.CharField(required=False, allow_blank=True, default="")
    company = serializers.CharField(required=False, allow_blank=True, default="")
    id_card = serializers.FileField(required=False, allow_null=True)

    def validate_email(self, value: str) -> str:
        value = value.strip().lower()
        if User.objects.filter(email__iexact=value).exists():
            msg = "User already exists"
            raise serializers.ValidationError(msg)
        return value

    def validate_password(self, value: str) -> str:
        password_validation.validate_password(value)
        return value

    def validate(self, attrs):
        if attrs["role"] in ID_CARD_REQUIRED_ROLES and not attrs.get("id_card"):
            raise serializers.ValidationError(
                {"id_card": "ID Card is required for Junior and Teacher"}
            )
        return attrs

    def create(self, validated_data):
        is_senior = validated_data["role"] == User.Role.SENIOR
        user = User(
            username=validated_data["email"],
            email=validated_data["email"],
            name=validated_data["name"].strip(),
            role=validated_data["role"],
            batch=validated_data.get("batch", ""),
            company=validated_data.get("company", ""),
            is_verified=is_senior,
            verification_status=(
                User.VerificationStatus.APPROVED
                if is_senior
                else User.VerificationStatus.PENDING
            ),
        )
        user.set_password(validated_data["password"])
        user.save()
        id_card = validated_data.get("id_card")
        if id_card:
            user.id_card = id_card
            user.save(update_fields=["id_card"])
        return user


class SignupView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []
    parser_classes = (JSONParser, MultiPartParser, FormParser)

    @extend_schema(tags=["Authentication"], request=SignupSerializer)
    def post(self, request, *args, **kwargs):
        serializer = SignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info("New %s account registered: %s", user.role, user.email)
        return Response(
            {
                "message": "Registration successful",
                **tokens_for_user(user),
                "user": auth_user_payload(user),
            },
            status=status.HTTP_201_CREATED,
        )


class LoginSerializer(TokenObtainPairSerializer):
    """Email/password login that adds ``role`` and ``name`` claims."""

    default_error_messages = {
        "no_active_account": "Invalid email or password",
    }

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token["role"] = user.role
        token["name"] = user.name
        return token

    def validate(self, attrs):
        attrs[self.username_field] = attrs[self.username_field].strip().lower()
        data = super().validate(attrs)
        return {
            "message": "Login successful",
            "token": data["access"],
            "refresh": data["refresh"],
            "user": auth_user_payload(self.user),
        }


@extend_schema(tags=["Authentication"])
class LoginView(TokenObtainPairView):
    serializer_class = LoginSerializer

    def post(self, request, *args, **kwargs):
        response = super().post(request, *args, **kwargs)
        if response.status_code == status.HTTP_200_OK:
            user = User.objects.get(pk=response.data["user"]["id"])
            user_logged_in.send(sender=user.__class__, request=request, user=user)
        return response
