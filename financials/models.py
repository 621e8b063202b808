from django.db import models
from students.models import Student

class FeeRecord(models.Model):
    CATEGORY_CHOICES = [
        ("tuition", "Tuition"),
        ("functional", "Functional"),
        ("examination", "Examination"),
        ("library", "Library"),
        ("accommodation", "Accommodation"),
        ("other", "Other"),
    ]
    STATUS_CHOICES = [
        ("paid", "Paid"),
        ("partial", "Partial"),
        ("pending", "Pending"),
    ]
    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="fee_records")
    # blank for legacy rows imported before categories existed
    category = models.CharField(max_length=32, choices=CATEGORY_CHOICES, blank=True)
    description = models.CharField(max_length=200, blank=True)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default="pending")
    balance_due = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    academic_year = models.CharField(max_length=16)
    semester = models.PositiveSmallIntegerField(default=1)
    due_date = models.DateField(null=True, blank=True)

    class Meta:
        indexes = [models.Index(fields=["student", "academic_year", "semester"], name="fee_student_term_idx")]

class Payment(models.Model):
    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="payments")
    fee_record = models.ForeignKey(FeeRecord, null=True, blank=True, on_delete=models.SET_NULL)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    method = models.CharField(max_length=64, blank=True)
    receipt_number = models.CharField(max_length=64, blank=True)
    description = models.CharField(max_length=200, blank=True)
    paid_at = models.DateTimeField()
