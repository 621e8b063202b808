from datetime import date, timedelta
from decimal import Decimal
from unittest.mock import patch

import pytest
from django.utils import timezone

from clearance import services
from clearance.exceptions import DataSourceError, NotFoundError
from clearance.models import ClearanceEvaluationLog, ClearanceResult

pytestmark = pytest.mark.django_db

TODAY = date(2026, 10, 19)


def _financial(cleared):
    return {
        "cleared": cleared,
        "notes": "fin",
        "details": [],
        "outstanding_balance": Decimal("0") if cleared else Decimal("100"),
        "total_fees": Decimal("100"),
        "total_paid": Decimal("100") if cleared else Decimal("0"),
    }


def _attendance(cleared):
    pct = 90 if cleared else 40
    return {
        "cleared": cleared,
        "notes": f"Attendance: {pct}%",
        "details": [],
        "percentage": pct,
        "attended": pct,
        "expected": 100,
        "window_start": "2026-06-01",
    }


def test_fully_paid_and_attending_student_is_cleared(student, add_fee, add_attendance):
    add_fee(1000, status="paid", category="tuition")
    add_attendance(8, 10, end=TODAY)

    result = services.evaluate(student.id, today=TODAY)

    assert result["cleared"] is True
    assert result["error"] is None
    assert result["financial"]["cleared"] is True
    assert result["financial"]["program_code"] == "BSCS"
    assert result["attendance"]["percentage"] == 80
    assert result["assignment_access"]["has_access"] is True
    assert result["academic_year"] == "2025/2029"
    assert result["semester"] == 1
    assert result["student"]["student_number"] == "S25-0001"
    assert result["requirements"]["minimum_attendance_percentage"] == 75
    assert result["source"] == services.SOURCE

    row = ClearanceResult.objects.get(student=student)
    assert row.overall_cleared is True
    assert row.attendance_percentage == 80
    assert row.cleared_at is not None
    assert row.financial_notes == "All fees cleared. Total paid: $1,000"


def test_outstanding_balance_blocks_clearance_but_not_assignments(student, add_fee, add_attendance):
    add_fee(1000, status="partial", balance_due=300, category="tuition")
    add_attendance(10, 10, end=TODAY)

    result = services.evaluate(student.id, today=TODAY)

    assert result["cleared"] is False
    assert result["financial"]["outstanding_balance"] == Decimal("300")
    assert result["attendance"]["cleared"] is True
    assert result["assignment_access"]["percentage_paid"] == 70
    assert result["assignment_access"]["has_access"] is True


def test_low_attendance_blocks_clearance(student, add_fee, add_attendance):
    add_fee(500, status="paid")
    add_attendance(1, 4, end=TODAY)

    result = services.evaluate(student.id, today=TODAY)

    assert result["financial"]["cleared"] is True
    assert result["attendance"]["percentage"] == 25
    assert result["cleared"] is False


@pytest.mark.parametrize(
    "financial,attendance,access",
    [
        (True, True, False),
        (True, False, True),
        (False, True, True),
        (False, False, False),
    ],
)
def test_overall_ignores_assignment_access(student, financial, attendance, access):
    access_result = services._access_result(access, "acc", [], percentage_paid=60 if access else 10)
    with patch.object(services, "check_financial_clearance", return_value=_financial(financial)), \
            patch.object(services, "check_attendance_clearance", return_value=_attendance(attendance)), \
            patch.object(services, "check_assignment_access", return_value=access_result):
        result = services.evaluate(student.id)

    assert result["cleared"] is (financial and attendance)
    row = ClearanceResult.objects.get(student=student)
    assert row.overall_cleared is (financial and attendance)
    assert row.assignment_access is access


def test_term_arguments_override_student_record(student, add_fee):
    add_fee(400, status="paid", academic_year="2026/2030", semester=2)

    result = services.evaluate(student.id, "2026/2030", 2, today=TODAY)

    assert result["academic_year"] == "2026/2030"
    assert result["semester"] == 2
    assert result["financial"]["cleared"] is True
    assert ClearanceResult.objects.filter(student=student, academic_year="2026/2030", semester=2).exists()


def test_default_term_used_when_student_has_none(student, settings):
    settings.CLEARANCE_DEFAULT_ACADEMIC_YEAR = "2024/2028"
    settings.CLEARANCE_DEFAULT_SEMESTER = 2
    student.academic_year = ""
    student.semester = 0
    student.save()

    result = services.evaluate(student.id, today=TODAY)

    assert (result["academic_year"], result["semester"]) == ("2024/2028", 2)


def test_unknown_student_raises_and_writes_nothing():
    with pytest.raises(NotFoundError):
        services.evaluate(999999)
    with pytest.raises(NotFoundError):
        services.evaluate("not-a-number")
    assert ClearanceResult.objects.count() == 0
    assert ClearanceEvaluationLog.objects.count() == 0


def test_repeat_evaluation_keeps_single_cache_row_and_appends_log(student, add_fee, add_attendance):
    add_fee(1000, status="paid")
    add_attendance(9, 10, end=TODAY)

    first = services.evaluate(student.id, today=TODAY)
    second = services.evaluate(student.id, today=TODAY)

    assert first["cleared"] == second["cleared"] is True
    assert ClearanceResult.objects.filter(student=student).count() == 1
    logs = ClearanceEvaluationLog.objects.filter(student=student)
    assert logs.count() == 2
    latest = logs.first()
    assert latest.overall_cleared is True
    assert latest.attendance_percentage == 90
    assert latest.payload["academic_year"] == "2025/2029"
    assert latest.payload["financial"]["notes"] == "All fees cleared. Total paid: $1,000"


def test_evaluation_log_can_be_disabled(student, settings):
    settings.CLEARANCE_LOG_EVALUATIONS = False
    services.evaluate(student.id, today=TODAY)
    assert ClearanceEvaluationLog.objects.count() == 0
    assert ClearanceResult.objects.count() == 1


def test_cleared_at_survives_later_failing_evaluation(student, add_fee, add_attendance):
    add_fee(1000, status="paid")
    add_attendance(10, 10, end=TODAY)
    services.evaluate(student.id, today=TODAY)
    cleared_at = ClearanceResult.objects.get(student=student).cleared_at
    assert cleared_at is not None

    add_fee(200, status="pending")
    result = services.evaluate(student.id, today=TODAY)

    row = ClearanceResult.objects.get(student=student)
    assert result["cleared"] is False
    assert row.overall_cleared is False
    assert row.cleared_at == cleared_at


def test_never_cleared_student_has_no_cleared_at(student):
    services.evaluate(student.id, today=TODAY)
    assert ClearanceResult.objects.get(student=student).cleared_at is None


def test_unexpected_failure_returns_errored_verdict_without_writing(student):
    with patch.object(services, "check_attendance_clearance", side_effect=RuntimeError("boom")):
        result = services.evaluate(student.id)

    assert result["error"] == "System error: boom"
    assert result["cleared"] is False
    assert result["financial"]["cleared"] is False
    assert result["attendance"]["cleared"] is False
    assert result["assignment_access"]["has_access"] is False
    assert result["student"] is None
    assert ClearanceResult.objects.count() == 0
    assert ClearanceEvaluationLog.objects.count() == 0


def test_fee_source_failure_degrades_but_still_persists(student, add_attendance):
    add_attendance(10, 10, end=TODAY)
    with patch.object(services, "_fetch_fee_records", side_effect=DataSourceError("fee records")):
        result = services.evaluate(student.id, today=TODAY)

    assert result["error"] is None
    assert result["financial"]["notes"] == "Error checking financial records"
    assert result["assignment_access"]["notes"] == "Error checking fee records"
    assert result["attendance"]["cleared"] is True
    assert result["cleared"] is False
    assert ClearanceResult.objects.get(student=student).financial_cleared is False


# Cached reads


def test_quick_check_without_cache_asks_for_full_check(student):
    result = services.quick_check(student.id)
    assert result["cached"] is False
    assert result["needs_full_check"] is True
    assert result["cleared"] is False
    assert result["message"] == "No cached clearance status found"
    assert ClearanceResult.objects.count() == 0


def test_quick_check_returns_cached_verdict(student, add_fee, add_attendance):
    add_fee(1000, status="paid")
    add_attendance(8, 10, end=TODAY)
    services.evaluate(student.id, today=TODAY)

    result = services.quick_check(student.id)

    assert result["cached"] is True
    assert result["cleared"] is True
    assert result["attendance_percentage"] == 80
    assert result["notes"]["attendance"] == "Attendance: 80%"
    assert result["last_checked"]
    assert ClearanceEvaluationLog.objects.count() == 1


def test_quick_check_unknown_student():
    with pytest.raises(NotFoundError):
        services.quick_check(424242)


def test_get_clearance_status(student):
    assert services.get_clearance_status(student.id, "2025/2029", 1) is None
    services.evaluate(student.id, today=TODAY)
    row = services.get_clearance_status(student.id, "2025/2029", 1)
    assert row is not None
    assert row.student_id == student.id
    assert services.get_clearance_status(student.id, "2025/2029", 2) is None


def test_assignment_access_only_evaluates_then_serves_cache(student, add_fee):
    add_fee(1000, status="partial", balance_due=400, category="tuition")

    first = services.check_assignment_access_only(student.id)
    assert first["cached"] is False
    assert first["has_access"] is True
    assert first["percentage_paid"] == 60
    assert first["error"] is None
    assert ClearanceResult.objects.count() == 1

    # cached row is served even though the fee data changed
    add_fee(5000, status="pending", category="tuition")
    second = services.check_assignment_access_only(student.id)
    assert second["cached"] is True
    assert second["has_access"] is True
    assert set(second) == set(first)
    assert second["percentage_paid"] == 60
    assert second["total_tuition_fees"] == Decimal("1000")
    assert second["total_tuition_paid"] == Decimal("600")
    assert second["required_amount"] == Decimal("500")
    assert second["shortfall"] == 0
    assert second["details"] == first["details"]
    assert ClearanceEvaluationLog.objects.count() == 1


def test_manual_recheck_refreshes_cache(student, add_fee):
    add_fee(1000, status="partial", balance_due=400, category="tuition")
    services.check_assignment_access_only(student.id)
    add_fee(5000, status="pending", category="tuition")

    result = services.manually_check_clearance(student.id)

    assert result["assignment_access"]["has_access"] is False
    assert services.check_assignment_access_only(student.id)["has_access"] is False


def test_debug_attendance_is_read_only(student, add_attendance):
    from attendance.models import AttendanceRecord
    from academics.models import Course

    course = Course.objects.create(code="CSC1101", title="Intro to Programming")
    add_attendance(3, 4, end=TODAY)
    AttendanceRecord.objects.create(student=student, course=course, date=date(2025, 1, 10), status="present")

    report = services.debug_attendance(student.id, today=TODAY)

    assert report["student"]["id"] == student.id
    assert report["dashboard"]["percentage"] == 75
    assert report["dashboard"]["cleared"] is True
    assert report["dashboard"]["window_start"] == "2026-06-01"
    assert len(report["window_records"]) == 4
    assert report["raw_data"]["total_records"] == 5
    assert report["raw_data"]["records_without_course"] == 4
    assert report["raw_data"]["sample_records"][0]["date"] == "2025-01-10"
    assert ClearanceResult.objects.count() == 0
    assert ClearanceEvaluationLog.objects.count() == 0


def test_debug_attendance_unknown_student():
    with pytest.raises(NotFoundError):
        services.debug_attendance(31337)


def test_quick_check_reports_tuition_share(student, add_fee):
    add_fee(1000, status="partial", balance_due=750, category="tuition")
    services.evaluate(student.id, today=TODAY)
    assert services.quick_check(student.id)["tuition_percentage_paid"] == 25


# Log retention


def test_prune_removes_only_rows_past_retention(student, settings):
    settings.CLEARANCE_LOG_RETENTION_DAYS = 30
    services.evaluate(student.id, today=TODAY)
    services.evaluate(student.id, today=TODAY)
    old = ClearanceEvaluationLog.objects.order_by("id").first()
    ClearanceEvaluationLog.objects.filter(pk=old.pk).update(
        evaluated_at=timezone.now() - timedelta(days=31)
    )

    assert services.prune_evaluation_log() == 1
    assert not ClearanceEvaluationLog.objects.filter(pk=old.pk).exists()
    assert ClearanceEvaluationLog.objects.count() == 1
    assert ClearanceResult.objects.count() == 1


def test_prune_rejects_empty_retention():
    with pytest.raises(ValueError):
        services.prune_evaluation_log(days=0)
