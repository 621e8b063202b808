from django.contrib import admin
from django.urls import include, path
from accounts import views as accounts_views

urlpatterns = [
    path("admin/", admin.site.urls),
    path("django-rq/", include("django_rq.urls")),
    path("accounts/", include("allauth.urls")),
    path("", accounts_views.home, name="home"),
    # portal sections
    path("academics/", include("academics.urls")),
    path("attendance/", include("attendance.urls")),
    path("financials/", include("financials.urls")),
    path("clearance/", include("clearance.urls")),
    path("", include("students.urls")),
]
