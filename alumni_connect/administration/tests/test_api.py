from __future__ import annotations

from alumni_connect.audit.models import AuditLog
from alumni_connect.certificates.models import Certificate
from alumni_connect.events.models import Event
from alumni_connect.jobs.models import Job
from alumni_connect.users.models import User
from tests.factories import create_user
from tests.roles import ROLE_ADMIN
from tests.roles import ROLE_SENIOR
from tests.roles import RoleAPITestCase


class TestAdminDashboard(RoleAPITestCase):
    def test_stats_counts_members_only(self):
        create_user("applicant", role="senior", is_verified=False)
        Job.objects.create(
            posted_by=self.roles[ROLE_SENIOR],
            title="QA",
            company="Initech",
            location="Remote",
            job_type="Contract",
            description="Testing",
        )

        res = self.get("api_v1:administration:stats", role=ROLE_ADMIN)
        self.assert_http_status(res, 200)
        stats = res.data["stats"]
        # junior, senior, teacher and the pending applicant
        assert stats["total_users"] == 4
        assert stats["pending_verifications"] == 1
        assert stats["total_jobs"] == 1
        assert stats["total_events"] == 0
        assert len(res.data["recent_users"]) == 4

    def test_analytics_breakdown(self):
        create_user("applicant", role="senior", is_verified=False)
        res = self.get("api_v1:administration:analytics", role=ROLE_ADMIN)
        self.assert_http_status(res, 200)
        assert res.data["students_count"] == 1
        assert res.data["alumni_count"] == 2
        assert res.data["teachers_count"] == 1
        assert res.data["verified_alumni"] == 1
        assert res.data["pending_alumni"] == 1


class TestVerification(RoleAPITestCase):
    def setUp(self):
        super().setUp()
        self.applicant = create_user("applicant", is_verified=False)

    def test_pending_queue(self):
        res = self.get("api_v1:administration:verify-list", role=ROLE_ADMIN)
        self.assert_http_status(res, 200)
        assert [row["id"] for row in res.data] == [self.applicant.pk]

    def test_approve_is_audited(self):
        res = self.put(
            "api_v1:administration:verify-detail",
            role=ROLE_ADMIN,
            payload={"status": "approved"},
            reverse_kwargs={"pk": self.applicant.pk},
        )
        self.assert_http_status(res, 200)
        self.applicant.refresh_from_db()
        assert self.applicant.is_verified is True
        assert self.applicant.verification_status == User.VerificationStatus.APPROVED

        entry = AuditLog.objects.get(action="admin_verification")
        assert entry.actor == self.roles[ROLE_ADMIN]
        assert entry.record_id == self.applicant.pk
        assert entry.after == {"verification_status": "approved", "is_verified": True}

    def test_reject_keeps_user_unverified(self):
        res = self.put(
            "api_v1:administration:verify-detail",
            role=ROLE_ADMIN,
            payload={"status": "rejected"},
            reverse_kwargs={"pk": self.applicant.pk},
        )
        self.assert_http_status(res, 200)
        self.applicant.refresh_from_db()
        assert self.applicant.is_verified is False
        assert self.applicant.verification_status == User.VerificationStatus.REJECTED

    def test_pending_is_not_a_decision(self):
        res = self.put(
            "api_v1:administration:verify-detail",
            role=ROLE_ADMIN,
            payload={"status": "pending"},
            reverse_kwargs={"pk": self.applicant.pk},
        )
        self.assert_http_status(res, 400)


class TestUserManagement(RoleAPITestCase):
    def test_change_role_is_audited(self):
        junior = self.roles["junior"]
        res = self.put(
            "api_v1:administration:users-role",
            role=ROLE_ADMIN,
            payload={"role": "senior"},
            reverse_kwargs={"pk": junior.pk},
        )
        self.assert_http_status(res, 200)
        junior.refresh_from_db()
        assert junior.role == "senior"
        entry = AuditLog.objects.get(action="admin_role_changed")
        assert entry.before == {"role": "junior"}
        assert entry.after == {"role": "senior"}

    def test_delete_user_is_audited(self):
        target = create_user("leaver")
        res = self.delete(
            "api_v1:administration:users-detail",
            role=ROLE_ADMIN,
            reverse_kwargs={"pk": target.pk},
        )
        self.assert_http_status(res, 204)
        assert not User.objects.filter(pk=target.pk).exists()
        entry = AuditLog.objects.get(action="admin_user_deleted")
        assert entry.record_id == target.pk
        assert entry.model_name == "users.User"

    def test_admin_accounts_are_not_listed(self):
        res = self.get("api_v1:administration:users-list", role=ROLE_ADMIN)
        self.assert_http_status(res, 200)
        assert self.roles[ROLE_ADMIN].pk not in {row["id"] for row in res.data}


class TestContentModeration(RoleAPITestCase):
    def setUp(self):
        super().setUp()
        owner = self.roles[ROLE_SENIOR]
        self.job = Job.objects.create(
            posted_by=owner,
            title="PM",
            company="Hooli",
            location="SF",
            job_type="Full-time",
            description="Roadmaps",
        )
        self.event = Event.objects.create(
            organizer=owner,
            title="Reunion",
            description="Batch of 2015",
            date="2026-12-20",
            time="19:00",
            location="Campus",
        )
        self.certificate = Certificate.objects.create(
            user=owner,
            title="PMP",
            issuing_organization="PMI",
            issue_date="2024-01-10",
            file="certificates/pmp.pdf",
        )

    def test_delete_any_content(self):
        cases = [
            ("jobs", self.job, "admin_job_deleted"),
            ("events", self.event, "admin_event_deleted"),
            ("certificates", self.certificate, "admin_certificate_deleted"),
        ]
        for basename, obj, action in cases:
            res = self.delete(
                f"api_v1:administration:{basename}-detail",
                role=ROLE_ADMIN,
                reverse_kwargs={"pk": obj.pk},
            )
            self.assert_http_status(res, 204)
            assert not type(obj).objects.filter(pk=obj.pk).exists()
            assert AuditLog.objects.filter(action=action, record_id=obj.pk).exists()

    def test_certificate_search(self):
        res = self.get(
            "api_v1:administration:certificates-list",
            role=ROLE_ADMIN,
            data={"search": "pmp"},
        )
        self.assert_http_status(res, 200)
        assert [row["id"] for row in res.data] == [self.certificate.pk]

        res = self.get(
            "api_v1:administration:certificates-list",
            role=ROLE_ADMIN,
            data={"search": "nothing"},
        )
        assert res.data == []


class TestAuditFeed(RoleAPITestCase):
    def test_limit_is_clamped(self):
        actions = [
            AuditLog.Action.LOGIN,
            AuditLog.Action.JOB_DELETED,
            AuditLog.Action.EVENT_DELETED,
        ]
        for action in actions:
            AuditLog.objects.create(action=action)
        res = self.get(
            "api_v1:administration:audit", role=ROLE_ADMIN, data={"limit": "2"}
        )
        self.assert_http_status(res, 200)
        assert res.data["limit"] == 2
        assert [r["action"] for r in res.data["results"]] == [
            "admin_event_deleted",
            "admin_job_deleted",
        ]
        assert res.data["results"][0]["action_display"] == "Event removed"

        res = self.get(
            "api_v1:administration:audit", role=ROLE_ADMIN, data={"limit": "5000"}
        )
        assert res.data["limit"] == 100

    def test_filter_by_action(self):
        self.put(
            "api_v1:administration:users-role",
            role=ROLE_ADMIN,
            payload={"role": "teacher"},
            reverse_kwargs={"pk": self.roles[ROLE_SENIOR].pk},
        )
        AuditLog.objects.create(action=AuditLog.Action.LOGIN)

        res = self.get(
            "api_v1:administration:audit",
            role=ROLE_ADMIN,
            data={"action": "admin_role_changed"},
        )
        self.assert_http_status(res, 200)
        assert [r["action"] for r in res.data["results"]] == ["admin_role_changed"]
        assert res.data["results"][0]["actor"]["id"] == self.roles[ROLE_ADMIN].pk

        bad = self.get(
            "api_v1:administration:audit", role=ROLE_ADMIN, data={"action": "nope"}
        )
        self.assert_http_status(bad, 400)
