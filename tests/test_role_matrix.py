"""Who may do what across the API, one role at a time."""

from __future__ import annotations

from django.urls import reverse

from alumni_connect.events.models import Event
from alumni_connect.jobs.models import Job
from tests.roles import PLATFORM_ROLES
from tests.roles import ROLE_ADMIN
from tests.roles import ROLE_JUNIOR
from tests.roles import ROLE_SENIOR
from tests.roles import ROLE_TEACHER
from tests.roles import RoleAPITestCase

JOB_PAYLOAD = {
    "title": "Data Analyst",
    "company": "Globex",
    "location": "Pune",
    "job_type": "Full-time",
    "description": "SQL and dashboards",
}

ADMIN_ENDPOINTS = [
    "api_v1:administration:stats",
    "api_v1:administration:analytics",
    "api_v1:administration:audit",
    "api_v1:administration:users-list",
    "api_v1:administration:verify-list",
    "api_v1:administration:jobs-list",
    "api_v1:administration:events-list",
    "api_v1:administration:certificates-list",
]


class TestJobPostingMatrix(RoleAPITestCase):
    def test_posting_roles(self):
        expected = {
            ROLE_JUNIOR: 403,
            ROLE_SENIOR: 201,
            ROLE_TEACHER: 201,
            ROLE_ADMIN: 201,
        }
        for role, code in expected.items():
            res = self.post("api_v1:jobs-list", role=role, payload=JOB_PAYLOAD)
            self.assert_http_status(res, code)
        assert Job.objects.count() == 3

    def test_everyone_reads_jobs(self):
        for role in PLATFORM_ROLES:
            self.assert_allowed(self.get("api_v1:jobs-list", role=role))

    def test_admin_deletes_any_job(self):
        job = Job.objects.create(posted_by=self.roles[ROLE_SENIOR], **JOB_PAYLOAD)
        denied = self.delete(
            "api_v1:jobs-detail", role=ROLE_TEACHER, reverse_kwargs={"pk": job.pk}
        )
        self.assert_denied(denied)
        allowed = self.delete(
            "api_v1:jobs-detail", role=ROLE_ADMIN, reverse_kwargs={"pk": job.pk}
        )
        self.assert_allowed(allowed)


class TestEventMatrix(RoleAPITestCase):
    def test_any_member_may_organize(self):
        for role in PLATFORM_ROLES:
            res = self.post(
                "api_v1:events-list",
                role=role,
                payload={
                    "title": f"{role} session",
                    "description": "Open to all",
                    "date": "2026-12-10",
                    "time": "17:30",
                    "location": "Online",
                },
            )
            self.assert_http_status(res, 201)
        assert Event.objects.count() == len(PLATFORM_ROLES)


class TestAdminConsoleMatrix(RoleAPITestCase):
    def test_only_admin_reaches_console(self):
        for url_name in ADMIN_ENDPOINTS:
            for role in (ROLE_JUNIOR, ROLE_SENIOR, ROLE_TEACHER):
                self.assert_denied(self.get(url_name, role=role))
            self.assert_allowed(self.get(url_name, role=ROLE_ADMIN))

    def test_staff_flag_grants_console(self):
        staff = self.roles[ROLE_JUNIOR]
        staff.is_staff = True
        staff.save(update_fields=["is_staff"])
        self.assert_allowed(self.get("api_v1:administration:stats", role=ROLE_JUNIOR))

    def test_anonymous_is_rejected(self):
        res = self.client.get(reverse("api_v1:administration:stats"))
        self.assert_denied(res, code=401)
