from __future__ import annotations

import pytest
from rest_framework import status
from rest_framework.test import APIClient

from alumni_connect.jobs.models import Job
from alumni_connect.jobs.models import JobApplication
from tests.factories import create_user

pytestmark = pytest.mark.django_db

JOBS_URL = "/api/v1/jobs/"

JOB_PAYLOAD = {
    "title": "Backend Engineer",
    "company": "Acme",
    "location": "Remote",
    "job_type": "Full-time",
    "description": "Build APIs",
    "salary_range": "10LPA - 15LPA",
}


def client_for(user) -> APIClient:
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def senior():
    return create_user("senior", role="senior")


@pytest.fixture
def junior():
    return create_user("junior")


@pytest.fixture
def job(senior):
    return Job.objects.create(posted_by=senior, **JOB_PAYLOAD)


def test_senior_posts_job_and_earns_points(senior):
    res = client_for(senior).post(JOBS_URL, JOB_PAYLOAD, format="json")
    assert res.status_code == status.HTTP_201_CREATED, res.data
    assert res.data["posted_by"]["id"] == senior.pk
    senior.refresh_from_db()
    assert senior.points == 100


def test_junior_cannot_post_job(junior):
    res = client_for(junior).post(JOBS_URL, JOB_PAYLOAD, format="json")
    assert res.status_code == status.HTTP_403_FORBIDDEN


def test_list_only_active_newest_first(senior, junior):
    older = Job.objects.create(posted_by=senior, **JOB_PAYLOAD)
    newer = Job.objects.create(posted_by=senior, **{**JOB_PAYLOAD, "title": "SRE"})
    Job.objects.create(posted_by=senior, status=Job.Status.CLOSED, **JOB_PAYLOAD)

    res = client_for(junior).get(JOBS_URL)
    assert [row["id"] for row in res.data] == [newer.pk, older.pk]


def test_filter_by_job_type(senior, junior):
    Job.objects.create(posted_by=senior, **JOB_PAYLOAD)
    intern = Job.objects.create(posted_by=senior, **{**JOB_PAYLOAD, "job_type": "Internship"})
    res = client_for(junior).get(JOBS_URL, {"job_type": "Internship"})
    assert [row["id"] for row in res.data] == [intern.pk]


def test_apply_once_for_points(job, junior):
    url = f"{JOBS_URL}{job.pk}/apply/"
    first = client_for(junior).post(url, {"cover_letter": "Hire me"}, format="json")
    assert first.status_code == status.HTTP_201_CREATED
    second = client_for(junior).post(url, {}, format="json")
    assert second.status_code == status.HTTP_400_BAD_REQUEST

    junior.refresh_from_db()
    assert junior.points == 20
    assert JobApplication.objects.get().cover_letter == "Hire me"


def test_teacher_cannot_apply(job):
    teacher = create_user("teacher", role="teacher")
    res = client_for(teacher).post(f"{JOBS_URL}{job.pk}/apply/", {}, format="json")
    assert res.status_code == status.HTTP_403_FORBIDDEN


def test_applicants_visible_to_owner_only(job, junior):
    JobApplication.objects.create(job=job, user=junior)
    url = f"{JOBS_URL}{job.pk}/applicants/"

    assert client_for(junior).get(url).status_code == status.HTTP_403_FORBIDDEN
    res = client_for(job.posted_by).get(url)
    assert res.status_code == status.HTTP_200_OK
    assert [row["user"]["id"] for row in res.data] == [junior.pk]


def test_delete_owner_only(job, junior):
    url = f"{JOBS_URL}{job.pk}/"
    assert client_for(junior).delete(url).status_code == status.HTTP_403_FORBIDDEN
    assert client_for(job.posted_by).delete(url).status_code == status.HTTP_204_NO_CONTENT
    assert not Job.objects.exists()
