from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from attendance.models import AttendanceRecord
from financials.models import FeeRecord
from students.models import Student


@pytest.fixture(autouse=True)
def fast_hashing(settings):
    settings.PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
    settings.AXES_ENABLED = False


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(
        email="amina.nakato@example.edu", password="not-a-real-pass"
    )


@pytest.fixture
def student(user):
    return Student.objects.create(
        student_number="S25-0001",
        full_name="Amina Nakato",
        email="amina.nakato@example.edu",
        program="BSc Computer Science",
        program_code="BSCS",
        year_of_study=1,
        semester=1,
        academic_year="2025/2029",
        user=user,
    )


@pytest.fixture
def add_fee(student):
    def _add(amount, status="paid", balance_due=None, category="", description="",
             academic_year="2025/2029", semester=1, owner=None):
        return FeeRecord.objects.create(
            student=owner or student,
            amount=Decimal(str(amount)),
            status=status,
            balance_due=None if balance_due is None else Decimal(str(balance_due)),
            category=category,
            description=description,
            academic_year=academic_year,
            semester=semester,
        )
    return _add


@pytest.fixture
def add_attendance(student):
    """Create `total` consecutive daily marks ending at `end`, the first `present` of them present."""
    def _add(present, total, end=None, owner=None):
        end = end or timezone.localdate()
        for i in range(total):
            AttendanceRecord.objects.create(
                student=owner or student,
                date=end - timedelta(days=i),
                status="present" if i < present else "absent",
            )
    return _add
