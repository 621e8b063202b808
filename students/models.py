from django.db import models
from django.conf import settings


class Student(models.Model):
    student_number = models.CharField(max_length=64, unique=True)
    full_name = models.CharField(max_length=128)
    email = models.EmailField(blank=True)
    program = models.CharField(max_length=200, blank=True)
    program_code = models.CharField(max_length=32, blank=True)
    year_of_study = models.PositiveSmallIntegerField(default=1)
    semester = models.PositiveSmallIntegerField(default=1)
    academic_year = models.CharField(max_length=16, blank=True)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="student",
    )

    def __str__(self):
        return f"{self.full_name} ({self.student_number})"
