from django.db import models
from students.models import Student

class AttendanceRecord(models.Model):
    PRESENT = "present"
    STATUS_CHOICES = [
        ("present", "Present"),
        ("absent", "Absent"),
        ("late", "Late"),
        ("excused", "Excused"),
    ]
    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="attendance_records")
    course = models.ForeignKey("academics.Course", null=True, blank=True, on_delete=models.SET_NULL)
    date = models.DateField()
    slot = models.CharField(max_length=64, blank=True)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES)
    note = models.CharField(max_length=255, blank=True)

    class Meta:
        indexes = [models.Index(fields=["student", "date"], name="attendance_student_date_idx")]
