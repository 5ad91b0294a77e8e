from __future__ import annotations

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from rest_framework import status

from alumni_connect.certificates.models import Certificate
from alumni_connect.connections.models import Connection
from tests.factories import DEFAULT_PASSWORD
from tests.factories import create_user

pytestmark = pytest.mark.django_db


def test_users_routes_available_v1_only():
    assert reverse("api_v1:user-list") == "/api/v1/users/"
    assert reverse("api_v1:user-leaderboard") == "/api/v1/users/leaderboard/"
    assert reverse("api_v1:user-change-password") == "/api/v1/users/change-password/"


def test_network_lists_verified_members_except_self(auth_client, user):
    create_user("verified_senior", role="senior", company="Globex")
    create_user("pending_junior", is_verified=False)
    create_user("site_admin", role="admin")

    res = auth_client.get("/api/v1/users/")
    assert res.status_code == status.HTTP_200_OK
    emails = {row["email"] for row in res.data}
    assert emails == {"verified_senior@example.com"}
    assert user.email not in emails


def test_network_search_by_company(auth_client):
    create_user("ann", company="Globex")
    create_user("ben", company="Initech")
    res = auth_client.get("/api/v1/users/", {"search": "glob"})
    assert [row["email"] for row in res.data] == ["ann@example.com"]


def test_me_returns_profile(auth_client, user):
    res = auth_client.get("/api/v1/users/me/")
    assert res.status_code == status.HTTP_200_OK
    assert res.data["id"] == user.pk
    assert "password" not in res.data


def test_leaderboard_orders_by_points_and_skips_admins(auth_client, user):
    top = create_user("top", points=500)
    create_user("admin_rich", role="admin", points=10_000)
    create_user("unverified_rich", is_verified=False, points=9_000)
    user.points = 20
    user.save(update_fields=["points"])

    res = auth_client.get("/api/v1/users/leaderboard/")
    ids = [row["id"] for row in res.data]
    assert ids == [top.pk, user.pk]


def test_leaderboard_size(settings, auth_client):
    settings.LEADERBOARD_SIZE = 2
    for n in range(4):
        create_user(f"member_{n}", points=n)
    res = auth_client.get("/api/v1/users/leaderboard/")
    assert len(res.data) == 2


def test_stats(auth_client, user):
    user.points = 130
    user.save(update_fields=["points"])
    peer = create_user("peer")
    Connection.objects.create(
        requester=user, recipient=peer, status=Connection.Status.ACCEPTED
    )
    Certificate.objects.create(
        user=user,
        title="AWS",
        issuing_organization="Amazon",
        issue_date="2024-01-01",
        file="certificates/x.pdf",
    )

    res = auth_client.get("/api/v1/users/stats/")
    assert res.status_code == status.HTTP_200_OK
    assert res.data["points"] == 130
    assert res.data["next_level_target"] == 200
    assert res.data["progress_percentage"] == 65.0
    assert res.data["connections"] == 1
    assert res.data["certificates"] == 1
    assert res.data["events_registered"] == 0
    assert res.data["jobs_applied"] == 0


def test_profile_update_cannot_touch_role_or_points(auth_client, user):
    res = auth_client.patch(
        "/api/v1/users/profile/",
        {"headline": "Backend engineer", "role": "admin", "points": 999},
        format="json",
    )
    assert res.status_code == status.HTTP_200_OK
    user.refresh_from_db()
    assert user.headline == "Backend engineer"
    assert user.role == "junior"
    assert user.points == 0


def test_skills_are_deduplicated(auth_client, user):
    res = auth_client.put(
        "/api/v1/users/skills/",
        {"skills": ["Python", "python", " Django ", ""]},
        format="json",
    )
    # Blank entries are rejected by the field itself
    assert res.status_code == status.HTTP_400_BAD_REQUEST

    res = auth_client.put(
        "/api/v1/users/skills/",
        {"skills": ["Python", "python", " Django "]},
        format="json",
    )
    assert res.status_code == status.HTTP_200_OK
    user.refresh_from_db()
    assert user.skills == ["Python", "Django"]


def test_settings_update(auth_client, user):
    res = auth_client.put(
        "/api/v1/users/settings/",
        {"email_notifications": False, "profile_visibility": "private"},
        format="json",
    )
    assert res.status_code == status.HTTP_200_OK
    user.refresh_from_db()
    assert user.email_notifications is False
    assert user.profile_visibility == "private"


def test_avatar_upload(auth_client, user):
    image = SimpleUploadedFile("me.png", b"\x89PNG fake", content_type="image/png")
    res = auth_client.put("/api/v1/users/avatar/", {"image": image}, format="multipart")
    assert res.status_code == status.HTTP_200_OK
    user.refresh_from_db()
    assert user.avatar.name.startswith(f"users/avatars/{user.pk}/")
    assert res.data["avatar_url"] == user.avatar_url


def test_change_password(auth_client, user):
    bad = auth_client.put(
        "/api/v1/users/change-password/",
        {"current_password": "nope", "new_password": "An0ther-Secret!"},
        format="json",
    )
    assert bad.status_code == status.HTTP_400_BAD_REQUEST

    ok = auth_client.put(
        "/api/v1/users/change-password/",
        {"current_password": DEFAULT_PASSWORD, "new_password": "An0ther-Secret!"},
        format="json",
    )
    assert ok.status_code == status.HTTP_200_OK
    user.refresh_from_db()
    assert user.check_password("An0ther-Secret!")
