from django.urls import path
from . import views

app_name = "students"

urlpatterns = [
    path("students/profile/", views.profile, name="profile"),
]
