from django.core.serializers.json import DjangoJSONEncoder
from django.db import models
from students.models import Student


class ClearanceResult(models.Model):
    """Latest verdict per student and term. A cache; re-evaluate when stale."""

    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="clearances")
    academic_year = models.CharField(max_length=16)
    semester = models.PositiveSmallIntegerField()
    financial_cleared = models.BooleanField(default=False)
    attendance_cleared = models.BooleanField(default=False)
    assignment_access = models.BooleanField(default=False)
    overall_cleared = models.BooleanField(default=False)
    financial_notes = models.TextField(blank=True)
    attendance_notes = models.TextField(blank=True)
    assignment_notes = models.TextField(blank=True)
    attendance_percentage = models.PositiveSmallIntegerField(default=0)
    # assignment-access figures from the latest evaluation
    tuition_percentage_paid = models.PositiveSmallIntegerField(default=0)
    tuition_fees = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    tuition_paid = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    tuition_required = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    assignment_details = models.JSONField(default=list, blank=True)
    cleared_at = models.DateTimeField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["student", "academic_year", "semester"],
                name="uniq_clearance_student_term",
            )
        ]


class ClearanceEvaluationLog(models.Model):
    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="clearance_log")
    academic_year = models.CharField(max_length=16)
    semester = models.PositiveSmallIntegerField()
    financial_cleared = models.BooleanField()
    attendance_cleared = models.BooleanField()
    assignment_access = models.BooleanField()
    overall_cleared = models.BooleanField()
    attendance_percentage = models.PositiveSmallIntegerField(default=0)
    outstanding_balance = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    tuition_percentage_paid = models.PositiveSmallIntegerField(default=0)
    payload = models.JSONField(default=dict, blank=True, encoder=DjangoJSONEncoder)
    evaluated_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-evaluated_at", "-id"]
