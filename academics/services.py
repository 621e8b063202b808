from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from django.utils import timezone

from attendance.models import AttendanceRecord
from .models import Assignment, Enrollment, ExamSlot, ExamSubmission, Lecture

WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
LECTURE_LOOKAHEAD_DAYS = 7


def active_enrollments(student):
    """Enrolments the student is still taking, whatever the term."""
    return (
        Enrollment.objects.filter(student=student)
        .exclude(status=Enrollment.COMPLETED)
        .select_related("course")
    )


def active_course_ids(student) -> List[int]:
    return list(active_enrollments(student).values_list("course_id", flat=True))


def exam_status(slot: ExamSlot, submission: Optional[ExamSubmission], now=None) -> str:
    """
    graded / submitted come from the student's submission, otherwise the
    slot's time window decides: upcoming, active or ended.
    """
    now = now or timezone.now()
    if submission is not None:
        if submission.is_graded:
            return "graded"
        if submission.is_submitted:
            return "submitted"
    if slot.starts_at <= now <= slot.ends_at:
        return "active"
    if now < slot.starts_at:
        return "upcoming"
    return "ended"


def exam_rows(student, cleared: bool, now=None) -> List[Dict[str, Any]]:
    now = now or timezone.now()
    slots = (
        ExamSlot.objects.filter(
            enrollment__in=active_enrollments(student),
            status__in=ExamSlot.VISIBLE_STATUSES,
        )
        .select_related("enrollment__course")
        .order_by("starts_at")
    )
    submissions = {
        s.slot_id: s for s in ExamSubmission.objects.filter(student=student, slot__in=slots)
    }
    rows = []
    for slot in slots:
        submission = submissions.get(slot.id)
        status = exam_status(slot, submission, now)
        in_progress = submission is not None and not submission.is_submitted
        rows.append(
            {
                "slot": slot,
                "course": slot.enrollment.course,
                "title": str(slot),
                "status": status,
                "submission": submission,
                "can_start": cleared and slot.is_online and status == "active" and submission is None,
                "can_resume": cleared and in_progress and status == "active",
            }
        )
    return rows


def permit_rows(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [r for r in rows if r["status"] in ("upcoming", "active")]


def week_attendance(student, today: Optional[date] = None) -> List[Dict[str, Any]]:
    """Monday to Sunday of the current week: 1 present, 0 other mark, None no mark."""
    today = today or timezone.localdate()
    monday = today - timedelta(days=today.weekday())
    sunday = monday + timedelta(days=6)
    marks = {}
    for record in AttendanceRecord.objects.filter(
        student=student, date__gte=monday, date__lte=sunday
    ).order_by("date"):
        marks[record.date] = 1 if record.status == AttendanceRecord.PRESENT else 0
    return [
        {"day": label, "date": monday + timedelta(days=i), "value": marks.get(monday + timedelta(days=i))}
        for i, label in enumerate(WEEKDAYS)
    ]


def pending_assignments(student, now=None):
    now = now or timezone.now()
    return (
        Assignment.objects.filter(
            course_id__in=active_course_ids(student),
            status="published",
            due_date__gt=now,
        )
        .select_related("course")
        .order_by("due_date")
    )


def upcoming_exams(student, now=None):
    now = now or timezone.now()
    return (
        ExamSlot.objects.filter(
            enrollment__in=active_enrollments(student),
            status="published",
            starts_at__gt=now,
        )
        .select_related("enrollment__course")
        .order_by("starts_at")
    )


def upcoming_lectures(student, today: Optional[date] = None):
    today = today or timezone.localdate()
    return (
        Lecture.objects.filter(
            course_id__in=active_course_ids(student),
            scheduled_date__gte=today,
            scheduled_date__lte=today + timedelta(days=LECTURE_LOOKAHEAD_DAYS),
            status__in=Lecture.UPCOMING_STATUSES,
        )
        .select_related("course")
        .order_by("scheduled_date", "start_time")
    )
