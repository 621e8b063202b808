from django.contrib import admin
from .models import ClearanceResult, ClearanceEvaluationLog

@admin.register(ClearanceResult)
class ClearanceResultAdmin(admin.ModelAdmin):
    list_display = (
        "student",
        "academic_year",
        "semester",
        "financial_cleared",
        "attendance_cleared",
        "assignment_access",
        "overall_cleared",
        "attendance_percentage",
        "updated_at",
    )
    list_filter = ("overall_cleared", "academic_year", "semester")
    search_fields = ("student__student_number", "student__full_name")

@admin.register(ClearanceEvaluationLog)
class ClearanceEvaluationLogAdmin(admin.ModelAdmin):
    list_display = ("student", "academic_year", "semester", "overall_cleared", "evaluated_at")
    list_filter = ("overall_cleared",)
    readonly_fields = ("payload",)
