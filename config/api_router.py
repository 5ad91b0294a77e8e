from django.conf import settings
from django.urls import include
from django.urls import path
from rest_framework.routers import DefaultRouter
from rest_framework.routers import SimpleRouter

from alumni_connect.certificates.api.views import CertificateViewSet
from alumni_connect.connections.api.views import ConnectionViewSet
from alumni_connect.events.api.views import EventViewSet
from alumni_connect.jobs.api.views import JobViewSet
from alumni_connect.messaging.api.views import MessageViewSet
from alumni_connect.users.api.views import UserViewSet

router = DefaultRouter() if settings.DEBUG else SimpleRouter()

router.register("users", UserViewSet)
router.register("messages", MessageViewSet, basename="messages")
router.register("connections", ConnectionViewSet, basename="connections")
router.register("jobs", JobViewSet, basename="jobs")
router.register("events", EventViewSet, basename="events")
router.register("certificates", CertificateViewSet, basename="certificates")


app_name = "api"
urlpatterns = [
    path("auth/", include("alumni_connect.users.api.auth_urls")),
    path("admin/", include("alumni_connect.administration.api.urls")),
    *router.urls,
]
