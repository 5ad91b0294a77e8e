from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from tests.factories import create_user

ROLE_JUNIOR = "junior"
ROLE_SENIOR = "senior"
ROLE_TEACHER = "teacher"
ROLE_ADMIN = "admin"
PLATFORM_ROLES = [ROLE_JUNIOR, ROLE_SENIOR, ROLE_TEACHER, ROLE_ADMIN]


class RoleAPITestCase(APITestCase):
    """Base test case with one verified user per platform role."""

    def setUp(self):
        super().setUp()
        self.roles = {role: create_user(f"{role}_user", role=role) for role in PLATFORM_ROLES}

    # Utilities -------------------------------------------------------------
    def authenticate(self, role: str):
        self.client.force_authenticate(user=self.roles[role])

    def assert_http_status(self, response, expected_status: int):
        msg = getattr(response, "data", response)
        assert response.status_code == expected_status, msg

    def get(self, url_name: str, *, role: str, reverse_kwargs=None, **kwargs):
        self.authenticate(role)
        url = reverse(url_name, kwargs=reverse_kwargs)
        return self.client.get(url, **kwargs)

    def post(
        self, url_name: str, *, role: str, payload=None, reverse_kwargs=None, **kwargs
    ):
        self.authenticate(role)
        url = reverse(url_name, kwargs=reverse_kwargs)
        return self.client.post(url, data=payload or {}, format="json", **kwargs)

    def put(
        self, url_name: str, *, role: str, payload=None, reverse_kwargs=None, **kwargs
    ):
        self.authenticate(role)
        url = reverse(url_name, kwargs=reverse_kwargs)
        return self.client.put(url, data=payload or {}, format="json", **kwargs)

    def delete(self, url_name: str, *, role: str, reverse_kwargs=None, **kwargs):
        self.authenticate(role)
        url = reverse(url_name, kwargs=reverse_kwargs)
        return self.client.delete(url, **kwargs)

    def assert_allowed(self, response):
        assert response.status_code in (
            status.HTTP_200_OK,
            status.HTTP_201_CREATED,
            status.HTTP_204_NO_CONTENT,
        ), response.data

    def assert_denied(self, response, code=status.HTTP_403_FORBIDDEN):
        assert response.status_code == code, response.data
