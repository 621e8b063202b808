from django.contrib import admin
from .models import Course, Enrollment, ExamSlot, ExamSubmission, Assignment, AssignmentSubmission, Lecture

@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    search_fields = ("code", "title")
    list_display = ("code", "title", "credits")

@admin.register(Enrollment)
class EnrollmentAdmin(admin.ModelAdmin):
    list_display = ("student", "course", "academic_year", "semester", "status")
    list_filter = ("academic_year", "semester", "status")

@admin.register(ExamSlot)
class ExamSlotAdmin(admin.ModelAdmin):
    list_display = ("__str__", "exam_type", "status", "starts_at", "ends_at", "venue")
    list_filter = ("status", "exam_type")

@admin.register(ExamSubmission)
class ExamSubmissionAdmin(admin.ModelAdmin):
    list_display = ("slot", "student", "status", "submitted_at", "marks_obtained")
    list_filter = ("status",)

@admin.register(Assignment)
class AssignmentAdmin(admin.ModelAdmin):
    list_display = ("title", "course", "status", "due_date", "total_marks")
    list_filter = ("status",)

@admin.register(AssignmentSubmission)
class AssignmentSubmissionAdmin(admin.ModelAdmin):
    list_display = ("assignment", "student", "submitted_at", "marks_obtained")

@admin.register(Lecture)
class LectureAdmin(admin.ModelAdmin):
    list_display = ("__str__", "course", "scheduled_date", "start_time", "lecturer_name", "status")
    list_filter = ("status", "scheduled_date")
