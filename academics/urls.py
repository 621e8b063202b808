from django.urls import path
from . import views

app_name = "academics"

urlpatterns = [
    path("", views.index, name="index"),
    path("examinations/", views.examinations, name="examinations"),
    path("examinations/permit/", views.exam_permit, name="exam_permit"),
    path("examinations/<int:pk>/start/", views.start_exam, name="start_exam"),
    path("examinations/<int:pk>/submit/", views.submit_exam, name="submit_exam"),
    path("lectures/", views.lectures, name="lectures"),
    path("coursework/", views.coursework, name="coursework"),
    path("coursework/<int:pk>/submit/", views.submit_assignment, name="submit_assignment"),
]
