import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("students", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Course",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=32, unique=True)),
                ("title", models.CharField(max_length=200)),
                ("credits", models.PositiveIntegerField(default=0)),
            ],
        ),
        migrations.CreateModel(
            name="Assignment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=200)),
                ("instructions", models.TextField(blank=True)),
                ("status", models.CharField(choices=[("draft", "Draft"), ("published", "Published"), ("closed", "Closed")], default="published", max_length=16)),
                ("due_date", models.DateTimeField()),
                ("total_marks", models.PositiveIntegerField(default=100)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("course", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="academics.course")),
            ],
        ),
        migrations.CreateModel(
            name="Enrollment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("academic_year", models.CharField(max_length=16)),
                ("semester", models.PositiveSmallIntegerField(default=1)),
                ("status", models.CharField(default="active", max_length=32)),
                ("lecturer_name", models.CharField(blank=True, max_length=128)),
                ("course", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="academics.course")),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="students.student")),
            ],
            options={
                "unique_together": {("student", "course", "academic_year", "semester")},
            },
        ),
        migrations.CreateModel(
            name="ExamSlot",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(blank=True, max_length=200)),
                ("exam_type", models.CharField(choices=[("physical", "Physical"), ("online", "Online"), ("written_online", "Written online")], default="physical", max_length=32)),
                ("status", models.CharField(choices=[("draft", "Draft"), ("scheduled", "Scheduled"), ("published", "Published"), ("active", "Active"), ("completed", "Completed")], default="scheduled", max_length=16)),
                ("starts_at", models.DateTimeField()),
                ("ends_at", models.DateTimeField()),
                ("venue", models.CharField(blank=True, max_length=128)),
                ("seat", models.CharField(blank=True, max_length=32)),
                ("total_marks", models.PositiveIntegerField(default=100)),
                ("enrollment", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="academics.enrollment")),
            ],
        ),
        migrations.CreateModel(
            name="ExamSubmission",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("status", models.CharField(choices=[("started", "Started"), ("submitted", "Submitted"), ("graded", "Graded")], default="started", max_length=16)),
                ("answers_url", models.URLField(blank=True)),
                ("started_at", models.DateTimeField(auto_now_add=True)),
                ("submitted_at", models.DateTimeField(blank=True, null=True)),
                ("graded_at", models.DateTimeField(blank=True, null=True)),
                ("marks_obtained", models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True)),
                ("slot", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="submissions", to="academics.examslot")),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="exam_submissions", to="students.student")),
            ],
            options={
                "unique_together": {("slot", "student")},
            },
        ),
        migrations.CreateModel(
            name="AssignmentSubmission",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("file_url", models.URLField()),
                ("comments", models.TextField(blank=True)),
                ("submitted_at", models.DateTimeField(auto_now=True)),
                ("marks_obtained", models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True)),
                ("assignment", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="submissions", to="academics.assignment")),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="students.student")),
            ],
            options={
                "unique_together": {("assignment", "student")},
            },
        ),
        migrations.CreateModel(
            name="Lecture",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(blank=True, max_length=200)),
                ("lecturer_name", models.CharField(blank=True, max_length=128)),
                ("scheduled_date", models.DateField()),
                ("start_time", models.TimeField()),
                ("end_time", models.TimeField(blank=True, null=True)),
                ("venue", models.CharField(blank=True, max_length=128)),
                ("meeting_link", models.URLField(blank=True)),
                ("status", models.CharField(choices=[("scheduled", "Scheduled"), ("ongoing", "Ongoing"), ("completed", "Completed"), ("cancelled", "Cancelled")], default="scheduled", max_length=16)),
                ("course", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="lectures", to="academics.course")),
            ],
            options={
                "ordering": ["scheduled_date", "start_time"],
                "indexes": [models.Index(fields=["course", "scheduled_date"], name="lecture_course_date_idx")],
            },
        ),
    ]
