from django.urls import path
from . import views

app_name = "clearance"

urlpatterns = [
    path("", views.check, name="check"),
    path("recheck/", views.recheck, name="recheck"),
    path("quick/", views.quick, name="quick"),
    path("assignment-access/", views.assignment_access, name="assignment_access"),
    path("debug/<int:student_id>/", views.debug_attendance, name="debug_attendance"),
]
