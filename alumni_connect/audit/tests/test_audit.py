from __future__ import annotations

import pytest
from django.test import RequestFactory

from alumni_connect.audit.models import AuditLog
from alumni_connect.audit.utils import client_ip
from alumni_connect.audit.utils import log_action
from tests.factories import DEFAULT_PASSWORD
from tests.factories import create_user

pytestmark = pytest.mark.django_db


def test_log_action_records_actor_and_request():
    admin = create_user("auditor", role="admin")
    request = RequestFactory().put(
        "/", REMOTE_ADDR="198.51.100.4", HTTP_USER_AGENT="Mozilla/5.0"
    )
    entry = log_action(
        AuditLog.Action.ROLE_CHANGED,
        actor=admin,
        request=request,
        model_name="users.User",
        record_id=42,
        before={"role": "junior"},
        after={"role": "senior"},
    )
    assert entry.actor == admin
    assert entry.ip_address == "198.51.100.4"
    assert entry.user_agent == "Mozilla/5.0"
    assert entry.get_action_display() == "Role changed"
    assert AuditLog.objects.get().after == {"role": "senior"}


def test_log_action_without_user_actor():
    entry = log_action(AuditLog.Action.JOB_DELETED, actor="cron")
    assert entry.actor is None
    assert entry.ip_address == ""


def test_log_action_rejects_unknown_actions():
    with pytest.raises(ValueError, match="Unknown audit action"):
        log_action("profile_updated")
    assert not AuditLog.objects.exists()


def test_client_ip_prefers_forwarded_header():
    request = RequestFactory().get(
        "/", HTTP_X_FORWARDED_FOR="203.0.113.9, 10.0.0.1", REMOTE_ADDR="10.0.0.1"
    )
    assert client_ip(request) == "203.0.113.9"
    assert client_ip(None) == ""


def test_login_writes_audit_entry(api_client):
    user = create_user("signin")
    res = api_client.post(
        "/api/v1/auth/login/",
        {"email": user.email, "password": DEFAULT_PASSWORD},
        format="json",
        HTTP_USER_AGENT="AlumniApp/2.1 (Android)",
    )
    assert res.status_code == 200
    entry = AuditLog.objects.get(action="login")
    assert entry.actor == user
    assert entry.user_agent == "AlumniApp/2.1 (Android)"


def test_failed_login_is_not_audited(api_client):
    user = create_user("signin")
    api_client.post(
        "/api/v1/auth/login/",
        {"email": user.email, "password": "wrong"},
        format="json",
    )
    assert not AuditLog.objects.filter(action="login").exists()
