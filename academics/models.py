from django.db import models
from students.models import Student

class Course(models.Model):
    code = models.CharField(max_length=32, unique=True)
    title = models.CharField(max_length=200)
    credits = models.PositiveIntegerField(default=0)

    def __str__(self):
        return f"{self.code} {self.title}"

class Enrollment(models.Model):
    COMPLETED = "completed"

    student = models.ForeignKey(Student, on_delete=models.CASCADE)
    course = models.ForeignKey(Course, on_delete=models.CASCADE)
    academic_year = models.CharField(max_length=16)
    semester = models.PositiveSmallIntegerField(default=1)
    status = models.CharField(max_length=32, default="active")
    lecturer_name = models.CharField(max_length=128, blank=True)

    class Meta:
        unique_together = [("student", "course", "academic_year", "semester")]

class ExamSlot(models.Model):
    TYPE_CHOICES = [
        ("physical", "Physical"),
        ("online", "Online"),
        ("written_online", "Written online"),
    ]
    STATUS_CHOICES = [
        ("draft", "Draft"),
        ("scheduled", "Scheduled"),
        ("published", "Published"),
        ("active", "Active"),
        ("completed", "Completed"),
    ]
    # draft slots are never shown to students
    VISIBLE_STATUSES = ("scheduled", "published", "active", "completed")
    ONLINE_TYPES = ("online", "written_online")

    enrollment = models.ForeignKey(Enrollment, on_delete=models.CASCADE)
    title = models.CharField(max_length=200, blank=True)
    exam_type = models.CharField(max_length=32, choices=TYPE_CHOICES, default="physical")
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default="scheduled")
    starts_at = models.DateTimeField()
    ends_at = models.DateTimeField()
    venue = models.CharField(max_length=128, blank=True)
    seat = models.CharField(max_length=32, blank=True)
    total_marks = models.PositiveIntegerField(default=100)

    @property
    def is_online(self):
        return self.exam_type in self.ONLINE_TYPES

    def __str__(self):
        return self.title or f"{self.enrollment.course.code} Final"

class ExamSubmission(models.Model):
    STATUS_CHOICES = [
        ("started", "Started"),
        ("submitted", "Submitted"),
        ("graded", "Graded"),
    ]
    slot = models.ForeignKey(ExamSlot, on_delete=models.CASCADE, related_name="submissions")
    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="exam_submissions")
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default="started")
    answers_url = models.URLField(blank=True)
    started_at = models.DateTimeField(auto_now_add=True)
    submitted_at = models.DateTimeField(null=True, blank=True)
    graded_at = models.DateTimeField(null=True, blank=True)
    marks_obtained = models.DecimalField(max_digits=6, decimal_places=2, null=True, blank=True)

    class Meta:
        unique_together = [("slot", "student")]

    @property
    def is_submitted(self):
        return self.status in ("submitted", "graded") or self.submitted_at is not None

    @property
    def is_graded(self):
        return self.status == "graded" or self.graded_at is not None

class Assignment(models.Model):
    STATUS_CHOICES = [
        ("draft", "Draft"),
        ("published", "Published"),
        ("closed", "Closed"),
    ]
    course = models.ForeignKey(Course, on_delete=models.CASCADE)
    title = models.CharField(max_length=200)
    instructions = models.TextField(blank=True)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default="published")
    due_date = models.DateTimeField()
    total_marks = models.PositiveIntegerField(default=100)
    created_at = models.DateTimeField(auto_now_add=True)

class AssignmentSubmission(models.Model):
    assignment = models.ForeignKey(Assignment, on_delete=models.CASCADE, related_name="submissions")
    student = models.ForeignKey(Student, on_delete=models.CASCADE)
    file_url = models.URLField()
    comments = models.TextField(blank=True)
    submitted_at = models.DateTimeField(auto_now=True)
    marks_obtained = models.DecimalField(max_digits=6, decimal_places=2, null=True, blank=True)

    class Meta:
        unique_together = [("assignment", "student")]

class Lecture(models.Model):
    STATUS_CHOICES = [
        ("scheduled", "Scheduled"),
        ("ongoing", "Ongoing"),
        ("completed", "Completed"),
        ("cancelled", "Cancelled"),
    ]
    UPCOMING_STATUSES = ("scheduled", "ongoing")

    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name="lectures")
    title = models.CharField(max_length=200, blank=True)
    lecturer_name = models.CharField(max_length=128, blank=True)
    scheduled_date = models.DateField()
    start_time = models.TimeField()
    end_time = models.TimeField(null=True, blank=True)
    venue = models.CharField(max_length=128, blank=True)
    meeting_link = models.URLField(blank=True)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default="scheduled")

    class Meta:
        ordering = ["scheduled_date", "start_time"]
        indexes = [models.Index(fields=["course", "scheduled_date"], name="lecture_course_date_idx")]

    def __str__(self):
        return self.title or self.course.title
