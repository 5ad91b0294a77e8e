from __future__ import annotations

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework import status
from rest_framework.test import APIClient

from alumni_connect.certificates.models import Certificate
from tests.factories import create_user

pytestmark = pytest.mark.django_db

CERTIFICATES_URL = "/api/v1/certificates/"


def client_for(user) -> APIClient:
    client = APIClient()
    client.force_authenticate(user=user)
    return client


def upload(client, **overrides):
    payload = {
        "title": "AWS Practitioner",
        "category": "technical",
        "issuing_organization": "AWS",
        "issue_date": "2025-03-01",
        "file": SimpleUploadedFile(
            "cert.pdf", b"%PDF-1.4 test", content_type="application/pdf"
        ),
    }
    payload.update(overrides)
    return client.post(CERTIFICATES_URL, payload, format="multipart")


def test_upload_awards_points(user):
    res = upload(client_for(user))
    assert res.status_code == status.HTTP_201_CREATED, res.data
    assert res.data["user"] == user.pk
    assert res.data["file_url"].endswith(".pdf")
    assert "file" not in res.data
    user.refresh_from_db()
    assert user.points == 30


def test_file_is_required(user):
    client = client_for(user)
    res = client.post(
        CERTIFICATES_URL,
        {"title": "No file", "issuing_organization": "X", "issue_date": "2025-01-01"},
        format="multipart",
    )
    assert res.status_code == status.HTTP_400_BAD_REQUEST
    assert "file" in res.data


def test_list_own_and_other_users(user):
    other = create_user("other")
    upload(client_for(user))
    upload(client_for(other), title="Scrum Master")

    client = client_for(user)
    mine = client.get(CERTIFICATES_URL)
    assert [row["title"] for row in mine.data] == ["AWS Practitioner"]

    theirs = client.get(CERTIFICATES_URL, {"user": other.pk})
    assert [row["title"] for row in theirs.data] == ["Scrum Master"]

    assert client.get(CERTIFICATES_URL, {"user": "abc"}).status_code == (
        status.HTTP_400_BAD_REQUEST
    )


def test_delete_refunds_points(user):
    client = client_for(user)
    cert_id = upload(client).data["id"]
    res = client.delete(f"{CERTIFICATES_URL}{cert_id}/")
    assert res.status_code == status.HTTP_204_NO_CONTENT
    assert not Certificate.objects.exists()
    user.refresh_from_db()
    assert user.points == 0


def test_only_owner_deletes(user):
    cert_id = upload(client_for(user)).data["id"]
    other = create_user("other")
    res = client_for(other).delete(f"{CERTIFICATES_URL}{cert_id}/")
    assert res.status_code == status.HTTP_403_FORBIDDEN
    assert Certificate.objects.filter(pk=cert_id).exists()
