from django.contrib import admin
from .models import AttendanceRecord

@admin.register(AttendanceRecord)
class AttendanceRecordAdmin(admin.ModelAdmin):
    list_display = ("student", "course", "date", "status")
    list_filter = ("status",)
    search_fields = ("student__student_number", "student__full_name")
