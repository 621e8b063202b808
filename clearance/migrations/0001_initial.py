import django.core.serializers.json
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("students", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="ClearanceResult",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("academic_year", models.CharField(max_length=16)),
                ("semester", models.PositiveSmallIntegerField()),
                ("financial_cleared", models.BooleanField(default=False)),
                ("attendance_cleared", models.BooleanField(default=False)),
                ("assignment_access", models.BooleanField(default=False)),
                ("overall_cleared", models.BooleanField(default=False)),
                ("financial_notes", models.TextField(blank=True)),
                ("attendance_notes", models.TextField(blank=True)),
                ("assignment_notes", models.TextField(blank=True)),
                ("attendance_percentage", models.PositiveSmallIntegerField(default=0)),
                ("tuition_percentage_paid", models.PositiveSmallIntegerField(default=0)),
                ("tuition_fees", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("tuition_paid", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("tuition_required", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("assignment_details", models.JSONField(blank=True, default=list)),
                ("cleared_at", models.DateTimeField(blank=True, null=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="clearances", to="students.student")),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(fields=("student", "academic_year", "semester"), name="uniq_clearance_student_term"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ClearanceEvaluationLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("academic_year", models.CharField(max_length=16)),
                ("semester", models.PositiveSmallIntegerField()),
                ("financial_cleared", models.BooleanField()),
                ("attendance_cleared", models.BooleanField()),
                ("assignment_access", models.BooleanField()),
                ("overall_cleared", models.BooleanField()),
                ("attendance_percentage", models.PositiveSmallIntegerField(default=0)),
                ("outstanding_balance", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("tuition_percentage_paid", models.PositiveSmallIntegerField(default=0)),
                ("payload", models.JSONField(blank=True, default=dict, encoder=django.core.serializers.json.DjangoJSONEncoder)),
                ("evaluated_at", models.DateTimeField(auto_now_add=True)),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="clearance_log", to="students.student")),
            ],
            options={
                "ordering": ["-evaluated_at", "-id"],
            },
        ),
    ]
