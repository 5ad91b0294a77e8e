from rest_framework import serializers

from alumni_connect.certificates.models import Certificate


class CertificateSerializer(serializers.ModelSerializer):
    file = serializers.FileField(write_only=True)
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
            "file",
            "file_url",
            "created_at",
        ]
        read_only_fields = ["user", "created_at"]
