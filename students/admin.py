from django.contrib import admin
from .models import Student

@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ("id", "student_number", "full_name", "program_code", "academic_year", "semester")
    search_fields = ("student_number", "full_name", "email")
    list_filter = ("program_code", "academic_year", "semester")
