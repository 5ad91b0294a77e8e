from __future__ import annotations

import pytest
from django.urls import resolve
from django.urls import reverse

from tests.factories import create_user

pytestmark = pytest.mark.django_db


@pytest.mark.parametrize(
    ("url_name", "kwargs", "path"),
    [
        ("api_v1:auth:signup", None, "/api/v1/auth/signup/"),
        ("api_v1:auth:login", None, "/api/v1/auth/login/"),
        ("api_v1:messages-list", None, "/api/v1/messages/"),
        ("api_v1:messages-conversations", None, "/api/v1/messages/conversations/"),
        ("api_v1:messages-detail", {"partner_id": 7}, "/api/v1/messages/7/"),
        ("api_v1:messages-upload", None, "/api/v1/messages/upload/"),
        ("api_v1:connections-list", None, "/api/v1/connections/"),
        ("api_v1:administration:stats", None, "/api/v1/admin/stats/"),
    ],
)
def test_api_routes(url_name, kwargs, path):
    assert reverse(url_name, kwargs=kwargs) == path
    assert resolve(path).view_name == url_name


def test_schema_groups_operations_by_tag(api_client):
    api_client.force_authenticate(user=create_user("docs", role="admin", is_staff=True))
    res = api_client.get(reverse("api-schema-v1"), {"format": "json"})
    assert res.status_code == 200
    schema = res.json()
    tags = {
        tag
        for operations in schema["paths"].values()
        for operation in operations.values()
        if isinstance(operation, dict)
        for tag in operation.get("tags", [])
    }
    assert {"Authentication", "Messages", "Jobs", "Admin"} <= tags
