import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Student",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("student_number", models.CharField(max_length=64, unique=True)),
                ("full_name", models.CharField(max_length=128)),
                ("email", models.EmailField(blank=True, max_length=254)),
                ("program", models.CharField(blank=True, max_length=200)),
                ("program_code", models.CharField(blank=True, max_length=32)),
                ("year_of_study", models.PositiveSmallIntegerField(default=1)),
                ("semester", models.PositiveSmallIntegerField(default=1)),
                ("academic_year", models.CharField(blank=True, max_length=16)),
                ("user", models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="student", to=settings.AUTH_USER_MODEL)),
            ],
        ),
    ]
