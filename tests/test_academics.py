from datetime import date, datetime, timedelta, timezone as dt_timezone

import pytest

from academics import services
from academics.models import Course, Enrollment, ExamSlot, ExamSubmission
from attendance.models import AttendanceRecord

pytestmark = pytest.mark.django_db

NOW = datetime(2026, 10, 19, 10, 0, tzinfo=dt_timezone.utc)


@pytest.fixture
def slot(student):
    course = Course.objects.create(code="CSC1101", title="Introduction to Programming")
    enrollment = Enrollment.objects.create(student=student, course=course, academic_year="2025/2029")
    return ExamSlot.objects.create(
        enrollment=enrollment,
        exam_type="online",
        starts_at=NOW - timedelta(hours=1),
        ends_at=NOW + timedelta(hours=2),
    )


@pytest.mark.parametrize(
    "now,expected",
    [
        (NOW - timedelta(days=1), "upcoming"),
        (NOW, "active"),
        (NOW + timedelta(hours=2), "active"),
        (NOW + timedelta(hours=3), "ended"),
    ],
)
def test_exam_status_follows_time_window(slot, now, expected):
    assert services.exam_status(slot, None, now) == expected


def test_exam_status_prefers_submission(slot, student):
    submission = ExamSubmission(slot=slot, student=student, status="started")
    assert services.exam_status(slot, submission, NOW) == "active"
    submission.submitted_at = NOW
    assert services.exam_status(slot, submission, NOW) == "submitted"
    submission.graded_at = NOW
    assert services.exam_status(slot, submission, NOW) == "graded"


def test_exam_rows_gate_start_on_clearance(slot, student):
    assert services.exam_rows(student, cleared=False, now=NOW)[0]["can_start"] is False
    row = services.exam_rows(student, cleared=True, now=NOW)[0]
    assert row["can_start"] is True
    assert row["title"] == "CSC1101 Final"


def test_week_attendance_runs_monday_to_sunday(student):
    # 2026-10-21 is a Wednesday
    AttendanceRecord.objects.create(student=student, date=date(2026, 10, 19), status="present")
    AttendanceRecord.objects.create(student=student, date=date(2026, 10, 20), status="absent")
    AttendanceRecord.objects.create(student=student, date=date(2026, 10, 12), status="present")

    week = services.week_attendance(student, today=date(2026, 10, 21))

    assert week[0] == {"day": "Mon", "date": date(2026, 10, 19), "value": 1}
    assert week[1]["value"] == 0
    assert [d["value"] for d in week[2:]] == [None] * 5
    assert week[-1]["date"] == date(2026, 10, 25)
