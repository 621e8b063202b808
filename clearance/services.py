from __future__ import annotations

import logging
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional, Tuple

from django.conf import settings
from django.db import DatabaseError, transaction
from django.utils import timezone

from attendance.models import AttendanceRecord
from financials.models import FeeRecord
from students.models import Student

from .exceptions import DataSourceError, NotFoundError
from .models import ClearanceEvaluationLog, ClearanceResult

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
TUITION_CATEGORY = "tuition"
TUITION_KEYWORDS = ("tuition", "fee")
SOURCE = "dashboard-attendance-calculation"
DEBUG_SAMPLE_SIZE = 10


def _min_attendance() -> int:
    return int(getattr(settings, "CLEARANCE_MIN_ATTENDANCE_PERCENTAGE", 75))


def _min_tuition_paid() -> int:
    return int(getattr(settings, "CLEARANCE_ASSIGNMENT_ACCESS_PERCENTAGE", 50))


def _window_months() -> int:
    return int(getattr(settings, "CLEARANCE_ATTENDANCE_WINDOW_MONTHS", 4))


def _log_retention_days() -> int:
    return int(getattr(settings, "CLEARANCE_LOG_RETENTION_DAYS", 180))


def _to_decimal(value: Any) -> Decimal:
    if value is None or value == "":
        return ZERO
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return ZERO


def percentage(part: Any, whole: Any) -> int:
    """Whole-number percentage, rounded half up. A zero denominator gives 0."""
    whole = _to_decimal(whole)
    if whole == ZERO:
        return 0
    ratio = _to_decimal(part) / whole * 100
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_money(amount: Any) -> str:
    text = f"{_to_decimal(amount):,.2f}"
    if text.endswith(".00"):
        text = text[:-3]
    elif text.endswith("0"):
        text = text[:-1]
    return f"${text}"


def attendance_window_start(
    today: Optional[date] = None,
    months: Optional[int] = None,
) -> date:
    """First day of the month `months` calendar months before today."""
    today = today or timezone.localdate()
    months = _window_months() if months is None else months
    index = today.year * 12 + (today.month - 1) - months
    return date(index // 12, index % 12 + 1, 1)


def _resolve_term(
    student: Student,
    academic_year: Optional[str],
    semester: Optional[Any],
) -> Tuple[str, int]:
    year = (
        academic_year
        or student.academic_year
        or getattr(settings, "CLEARANCE_DEFAULT_ACADEMIC_YEAR", "2025/2029")
    )
    sem = (
        semester
        or student.semester
        or getattr(settings, "CLEARANCE_DEFAULT_SEMESTER", 1)
    )
    return year, int(sem)


def _get_student(student_id: Any) -> Student:
    try:
        return Student.objects.get(pk=student_id)
    except (Student.DoesNotExist, ValueError, TypeError):
        raise NotFoundError(student_id)


def _student_summary(student: Student) -> Dict[str, Any]:
    return {
        "id": student.pk,
        "student_number": student.student_number,
        "name": student.full_name,
        "program_code": student.program_code,
        "year_of_study": student.year_of_study,
        "semester": student.semester,
        "academic_year": student.academic_year,
    }


# Fee records


def _fetch_fee_records(
    student_id: int,
    academic_year: str,
    semester: Optional[int] = None,
) -> List[FeeRecord]:
    qs = FeeRecord.objects.filter(student_id=student_id, academic_year=academic_year)
    if semester is not None:
        qs = qs.filter(semester=semester)
    try:
        return list(qs.order_by("id"))
    except DatabaseError as exc:
        raise DataSourceError("fee records", exc) from exc


def _outstanding(record: FeeRecord) -> Decimal:
    if record.balance_due is None:
        return _to_decimal(record.amount)
    return _to_decimal(record.balance_due)


def _paid_portion(record: FeeRecord) -> Decimal:
    amount = _to_decimal(record.amount)
    if record.status == "paid":
        return amount
    if record.status == "partial":
        return max(amount - _outstanding(record), ZERO)
    return ZERO


def is_tuition_like(record: FeeRecord) -> bool:
    if (record.category or "").lower() == TUITION_CATEGORY:
        return True
    description = (record.description or "").lower()
    return any(word in description for word in TUITION_KEYWORDS)


def _financial_result(
    cleared: bool,
    notes: str,
    details: List[str],
    outstanding_balance: Decimal = ZERO,
    total_fees: Decimal = ZERO,
    total_paid: Decimal = ZERO,
) -> Dict[str, Any]:
    return {
        "cleared": cleared,
        "notes": notes,
        "details": details,
        "outstanding_balance": outstanding_balance,
        "total_fees": total_fees,
        "total_paid": total_paid,
    }


def check_financial_clearance(
    student_id: int,
    academic_year: str,
    semester: int,
) -> Dict[str, Any]:
    """
    Clear when nothing is outstanding on the term's fee records.
    Falls back to the whole academic year when the semester has no records.
    """
    try:
        records = _fetch_fee_records(student_id, academic_year, semester)
        if not records:
            records = _fetch_fee_records(student_id, academic_year)
    except DataSourceError as exc:
        logger.warning("Financial clearance degraded: student=%s err=%s", student_id, exc)
        return _financial_result(
            False,
            "Error checking financial records",
            ["❌ Error checking financial status"],
        )
    if not records:
        return _financial_result(
            False,
            "No fee records found",
            ["❌ No fee records found for this academic year"],
        )

    total_fees = ZERO
    total_paid = ZERO
    outstanding = ZERO
    for record in records:
        amount = _to_decimal(record.amount)
        total_fees += amount
        if record.status == "paid":
            total_paid += amount
        else:
            outstanding += _outstanding(record)

    cleared = outstanding == ZERO
    if cleared:
        notes = f"All fees cleared. Total paid: {format_money(total_paid)}"
        details = [
            "✅ All fees are paid",
            f"  - Total fees: {format_money(total_fees)}",
            f"  - Amount paid: {format_money(total_paid)}",
            "  - Balance: $0.00",
        ]
    else:
        notes = (
            f"Outstanding balance: {format_money(outstanding)}. "
            f"Total fees: {format_money(total_fees)}, Paid: {format_money(total_paid)}"
        )
        details = [
            "❌ Outstanding fees",
            f"  - Total fees: {format_money(total_fees)}",
            f"  - Amount paid: {format_money(total_paid)}",
            f"  - Balance due: {format_money(outstanding)}",
        ]
    return _financial_result(cleared, notes, details, outstanding, total_fees, total_paid)


def _tuition_totals(records: Iterable[FeeRecord]) -> Tuple[Decimal, Decimal]:
    fees = ZERO
    paid = ZERO
    for record in records:
        fees += _to_decimal(record.amount)
        paid += _paid_portion(record)
    return fees, paid


def _access_result(has_access: bool, notes: str, details: List[str], **totals) -> Dict[str, Any]:
    result = {
        "has_access": has_access,
        "notes": notes,
        "details": details,
        "percentage_paid": 0,
        "total_tuition_fees": ZERO,
        "total_tuition_paid": ZERO,
        "required_amount": ZERO,
        "shortfall": ZERO,
    }
    result.update(totals)
    return result


def check_assignment_access(
    student_id: int,
    academic_year: str,
    semester: int,
) -> Dict[str, Any]:
    try:
        records = _fetch_fee_records(student_id, academic_year, semester)
    except DataSourceError as exc:
        logger.warning("Assignment access degraded: student=%s err=%s", student_id, exc)
        return _access_result(
            False,
            "Error checking fee records",
            ["❌ Error checking tuition payments"],
        )
    if not records:
        return _access_result(
            False,
            "No fee records found",
            ["❌ No fee records found for this semester"],
        )

    fees, paid = _tuition_totals(r for r in records if is_tuition_like(r))
    if fees == ZERO:
        # nothing tagged as tuition: treat every record as tuition
        fees, paid = _tuition_totals(records)

    minimum = _min_tuition_paid()
    pct = percentage(paid, fees)
    has_access = pct >= minimum
    required = fees * Decimal(minimum) / 100
    shortfall = max(required - paid, ZERO)

    if has_access:
        notes = f"Assignment access granted. {pct}% of tuition paid (minimum {minimum}%)."
        details = [
            "✅ Assignment access granted",
            f"  - Tuition fees: {format_money(fees)}",
            f"  - Amount paid: {format_money(paid)} ({pct}%)",
            f"  - Required: {format_money(required)} ({minimum}%)",
        ]
    else:
        notes = (
            f"Assignment access requires {minimum}% of tuition paid. "
            f"Paid: {pct}%. Pay {format_money(shortfall)} more to unlock submissions."
        )
        details = [
            "❌ Assignment access restricted",
            f"  - Tuition fees: {format_money(fees)}",
            f"  - Amount paid: {format_money(paid)} ({pct}%)",
            f"  - Required: {format_money(required)} ({minimum}%)",
            f"  - Shortfall: {format_money(shortfall)}",
        ]
    return _access_result(
        has_access,
        notes,
        details,
        percentage_paid=pct,
        total_tuition_fees=fees,
        total_tuition_paid=paid,
        required_amount=required,
        shortfall=shortfall,
    )


# Attendance


def _attendance_queryset(student_id: int, window_start: date):
    return AttendanceRecord.objects.filter(
        student_id=student_id,
        date__gte=window_start,
    ).order_by("date")


def attendance_percentage(student_id: int, today: Optional[date] = None) -> Dict[str, Any]:
    """Share of 'present' marks over the trailing window, as on the dashboard."""
    window_start = attendance_window_start(today)
    summary = {
        "percentage": 0,
        "attended": 0,
        "expected": 0,
        "window_start": window_start.isoformat(),
        "error": None,
    }
    try:
        records = list(_attendance_queryset(student_id, window_start))
    except DatabaseError as exc:
        err = DataSourceError("attendance records", exc)
        logger.warning("Attendance degraded: student=%s err=%s", student_id, err)
        summary["error"] = str(err)
        return summary
    total = len(records)
    present = sum(1 for r in records if r.status == AttendanceRecord.PRESENT)
    summary.update(
        {
            "percentage": percentage(present, total),
            "attended": present,
            "expected": total,
        }
    )
    return summary


def check_attendance_clearance(student_id: int, today: Optional[date] = None) -> Dict[str, Any]:
    summary = attendance_percentage(student_id, today=today)
    pct = summary["percentage"]
    minimum = _min_attendance()
    cleared = pct >= minimum
    notes = f"Attendance: {pct}%"
    if summary["error"]:
        notes = f"{notes} (attendance records unavailable)"
    details = [
        "✅ Attendance satisfactory" if cleared else "❌ Low attendance",
        f"  - Percentage: {pct}%",
        f"  - Minimum required: {minimum}%",
    ]
    return {
        "cleared": cleared,
        "notes": notes,
        "details": details,
        "percentage": pct,
        "attended": summary["attended"],
        "expected": summary["expected"],
        "window_start": summary["window_start"],
    }


# Evaluation


def _requirements() -> Dict[str, Any]:
    return {
        "minimum_attendance_percentage": _min_attendance(),
        "minimum_tuition_percentage_for_assignments": _min_tuition_paid(),
        "require_financial_clearance": True,
        "require_attendance_clearance": True,
    }


def _error_response(message: str) -> Dict[str, Any]:
    return {
        "cleared": False,
        "financial": _financial_result(
            False, message, ["❌ System error checking financial status"]
        ),
        "attendance": {
            "cleared": False,
            "notes": message,
            "details": ["❌ System error checking attendance"],
            "percentage": 0,
            "attended": 0,
            "expected": 0,
            "window_start": None,
        },
        "assignment_access": _access_result(
            False, message, ["❌ System error checking assignment access"]
        ),
        "student": None,
        "academic_year": None,
        "semester": None,
        "requirements": _requirements(),
        "timestamp": timezone.now().isoformat(),
        "source": SOURCE,
        "error": message,
    }


def _persist(student: Student, academic_year: str, semester: int, result: Dict[str, Any], now) -> None:
    financial = result["financial"]
    attendance = result["attendance"]
    access = result["assignment_access"]
    defaults = {
        "financial_cleared": financial["cleared"],
        "attendance_cleared": attendance["cleared"],
        "assignment_access": access["has_access"],
        "overall_cleared": result["cleared"],
        "financial_notes": financial["notes"],
        "attendance_notes": attendance["notes"],
        "assignment_notes": access["notes"],
        "attendance_percentage": attendance["percentage"],
        "tuition_percentage_paid": access["percentage_paid"],
        "tuition_fees": access["total_tuition_fees"],
        "tuition_paid": access["total_tuition_paid"],
        "tuition_required": access["required_amount"],
        "assignment_details": access["details"],
    }
    # cleared_at is only written on a clearing evaluation; otherwise the stored value stays
    if result["cleared"]:
        defaults["cleared_at"] = now
    with transaction.atomic():
        if getattr(settings, "CLEARANCE_LOG_EVALUATIONS", True):
            ClearanceEvaluationLog.objects.create(
                student=student,
                academic_year=academic_year,
                semester=semester,
                financial_cleared=financial["cleared"],
                attendance_cleared=attendance["cleared"],
                assignment_access=access["has_access"],
                overall_cleared=result["cleared"],
                attendance_percentage=attendance["percentage"],
                outstanding_balance=financial["outstanding_balance"],
                tuition_percentage_paid=access["percentage_paid"],
                payload=result,
            )
        ClearanceResult.objects.update_or_create(
            student=student,
            academic_year=academic_year,
            semester=semester,
            defaults=defaults,
        )


def evaluate(
    student_id: Any,
    academic_year: Optional[str] = None,
    semester: Optional[Any] = None,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """
    Run the financial, attendance and assignment-access checks for one
    student and term, and store the verdict.

    Raises NotFoundError for an unknown student. Any other failure comes back
    as an errored verdict (every gate false, `error` set) and nothing is stored.
    """
    logger.info(
        "Checking exam clearance: student=%s academic_year=%s semester=%s",
        student_id,
        academic_year,
        semester,
    )
    try:
        student = _get_student(student_id)
        year, sem = _resolve_term(student, academic_year, semester)

        financial = check_financial_clearance(student.pk, year, sem)
        financial["program_code"] = student.program_code
        attendance = check_attendance_clearance(student.pk, today=today)
        access = check_assignment_access(student.pk, year, sem)
        overall = financial["cleared"] and attendance["cleared"]

        now = timezone.now()
        result = {
            "cleared": overall,
            "financial": financial,
            "attendance": attendance,
            "assignment_access": access,
            "student": _student_summary(student),
            "academic_year": year,
            "semester": sem,
            "requirements": _requirements(),
            "timestamp": now.isoformat(),
            "source": SOURCE,
            "error": None,
        }
        _persist(student, year, sem, result, now)
    except NotFoundError:
        logger.warning("Exam clearance requested for unknown student %s", student_id)
        raise
    except Exception as exc:
        logger.exception("Exam clearance failed for student %s", student_id)
        return _error_response(f"System error: {exc}")

    logger.info(
        "Exam clearance for student=%s term=%s/%s: financial=%s attendance=%s(%s%%) assignments=%s overall=%s",
        student.pk,
        year,
        sem,
        financial["cleared"],
        attendance["cleared"],
        attendance["percentage"],
        access["has_access"],
        overall,
    )
    return result


def manually_check_clearance(
    student_id: Any,
    academic_year: Optional[str] = None,
    semester: Optional[Any] = None,
) -> Dict[str, Any]:
    logger.info("Manual clearance re-check for student %s", student_id)
    return evaluate(student_id, academic_year, semester)


def get_clearance_status(
    student_id: Any,
    academic_year: str,
    semester: Any,
) -> Optional[ClearanceResult]:
    try:
        return ClearanceResult.objects.filter(
            student_id=student_id,
            academic_year=academic_year,
            semester=semester,
        ).first()
    except DatabaseError as exc:
        logger.warning("Could not read cached clearance for student %s: %s", student_id, exc)
        return None


def quick_check(student_id: Any) -> Dict[str, Any]:
    """Cached verdict for the student's current term. Never re-evaluates."""
    student = _get_student(student_id)
    year, sem = _resolve_term(student, None, None)
    existing = get_clearance_status(student.pk, year, sem)
    if existing is not None:
        return {
            "cleared": existing.overall_cleared,
            "financial": existing.financial_cleared,
            "attendance": existing.attendance_cleared,
            "assignment_access": existing.assignment_access,
            "attendance_percentage": existing.attendance_percentage,
            "tuition_percentage_paid": existing.tuition_percentage_paid,
            "cached": True,
            "last_checked": existing.updated_at.isoformat(),
            "academic_year": year,
            "semester": sem,
            "notes": {
                "financial": existing.financial_notes,
                "attendance": existing.attendance_notes,
                "assignment_access": existing.assignment_notes,
            },
        }
    return {
        "cleared": False,
        "financial": False,
        "attendance": False,
        "assignment_access": False,
        "cached": False,
        "needs_full_check": True,
        "academic_year": year,
        "semester": sem,
        "message": "No cached clearance status found",
    }


def check_assignment_access_only(student_id: Any) -> Dict[str, Any]:
    """
    Assignment-access verdict for the current term. A cached row wins;
    otherwise a full evaluation runs and only its assignment part is returned.
    """
    student = _get_student(student_id)
    year, sem = _resolve_term(student, None, None)
    existing = get_clearance_status(student.pk, year, sem)
    if existing is not None:
        access = _access_result(
            existing.assignment_access,
            existing.assignment_notes,
            list(existing.assignment_details or []),
            percentage_paid=existing.tuition_percentage_paid,
            total_tuition_fees=existing.tuition_fees,
            total_tuition_paid=existing.tuition_paid,
            required_amount=existing.tuition_required,
            shortfall=max(existing.tuition_required - existing.tuition_paid, ZERO),
        )
        return {
            **access,
            "cached": True,
            "last_checked": existing.updated_at.isoformat(),
            "academic_year": year,
            "semester": sem,
            "error": None,
        }
    result = evaluate(student.pk, year, sem)
    return {
        **result["assignment_access"],
        "cached": False,
        "last_checked": result["timestamp"],
        "academic_year": year,
        "semester": sem,
        "error": result["error"],
    }


def debug_attendance(student_id: Any, today: Optional[date] = None) -> Dict[str, Any]:
    """Read-only attendance audit: the dashboard percentage next to the raw rows."""
    student = _get_student(student_id)
    summary = attendance_percentage(student.pk, today=today)
    window_rows: List[Dict[str, Any]] = []
    raw: Dict[str, Any] = {"total_records": 0, "records_without_course": 0, "sample_records": []}
    try:
        window_rows = [
            {"date": r.date.isoformat(), "status": r.status}
            for r in _attendance_queryset(student.pk, attendance_window_start(today))
        ]
        qs = AttendanceRecord.objects.filter(student_id=student.pk).order_by("date")
        raw = {
            "total_records": qs.count(),
            "records_without_course": qs.filter(course__isnull=True).count(),
            "sample_records": [
                {
                    "date": r.date.isoformat(),
                    "status": r.status,
                    "course_id": r.course_id,
                    "slot": r.slot,
                }
                for r in qs[:DEBUG_SAMPLE_SIZE]
            ],
        }
    except DatabaseError as exc:
        logger.warning("Attendance debug read failed for student %s: %s", student.pk, exc)
        raw["error"] = str(exc)
    return {
        "student": _student_summary(student),
        "dashboard": {
            "percentage": summary["percentage"],
            "cleared": summary["percentage"] >= _min_attendance(),
            "attended": summary["attended"],
            "expected": summary["expected"],
            "window_start": summary["window_start"],
            "method": f"Last {_window_months()} months calculation (same as dashboard)",
        },
        "window_records": window_rows,
        "raw_data": raw,
    }


def prune_evaluation_log(days: Optional[int] = None, now=None) -> int:
    """Delete evaluation log rows older than the retention window. Returns the number removed."""
    days = _log_retention_days() if days is None else days
    if days < 1:
        raise ValueError("retention must be at least one day")
    cutoff = (now or timezone.now()) - timedelta(days=days)
    deleted, _ = ClearanceEvaluationLog.objects.filter(evaluated_at__lt=cutoff).delete()
    logger.info("Pruned %d clearance evaluation log rows older than %s", deleted, cutoff.isoformat())
    return deleted
