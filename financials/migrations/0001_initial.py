import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("students", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="FeeRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("category", models.CharField(blank=True, choices=[("tuition", "Tuition"), ("functional", "Functional"), ("examination", "Examination"), ("library", "Library"), ("accommodation", "Accommodation"), ("other", "Other")], max_length=32)),
                ("description", models.CharField(blank=True, max_length=200)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("status", models.CharField(choices=[("paid", "Paid"), ("partial", "Partial"), ("pending", "Pending")], default="pending", max_length=16)),
                ("balance_due", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("academic_year", models.CharField(max_length=16)),
                ("semester", models.PositiveSmallIntegerField(default=1)),
                ("due_date", models.DateField(blank=True, null=True)),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="fee_records", to="students.student")),
            ],
            options={
                "indexes": [models.Index(fields=["student", "academic_year", "semester"], name="fee_student_term_idx")],
            },
        ),
        migrations.CreateModel(
            name="Payment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("method", models.CharField(blank=True, max_length=64)),
                ("receipt_number", models.CharField(blank=True, max_length=64)),
                ("description", models.CharField(blank=True, max_length=200)),
                ("paid_at", models.DateTimeField()),
                ("fee_record", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to="financials.feerecord")),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="payments", to="students.student")),
            ],
        ),
    ]
