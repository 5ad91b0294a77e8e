from django.urls import path
from rest_framework.routers import SimpleRouter

from .views import AdminAnalyticsView
from .views import AdminAuditView
from .views import AdminCertificateViewSet
from .views import AdminEventViewSet
from .views import AdminJobViewSet
from .views import AdminStatsView
from .views import AdminUserViewSet
from .views import VerificationViewSet

router = SimpleRouter()
router.register("users", AdminUserViewSet, basename="users")
router.register("verify", VerificationViewSet, basename="verify")
router.register("jobs", AdminJobViewSet, basename="jobs")
router.register("events", AdminEventViewSet, basename="events")
router.register("certificates", AdminCertificateViewSet, basename="certificates")

app_name = "administration"
urlpatterns = [
    path("stats/", AdminStatsView.as_view(), name="stats"),
    path("analytics/", AdminAnalyticsView.as_view(), name="analytics"),
    path("audit/", AdminAuditView.as_view(), name="audit"),
    *router.urls,
]
