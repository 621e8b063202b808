import logging
from django.contrib.auth.decorators import login_required
from django.http import HttpResponseBadRequest, HttpResponseForbidden, JsonResponse
from django.shortcuts import get_object_or_404, render
from django.utils import timezone
from django.views.decorators.http import require_GET, require_POST

from clearance.services import check_assignment_access_only, evaluate, quick_check
from students.decorators import require_student
from .models import Assignment, AssignmentSubmission, Enrollment, ExamSlot, ExamSubmission
from .services import active_enrollments, exam_rows, exam_status, permit_rows, upcoming_lectures

logger = logging.getLogger(__name__)

NOT_CLEARED_MESSAGE = (
    "You are not cleared for examinations. Settle outstanding fees and "
    "attendance requirements, then re-check your clearance."
)


def _current_enrollments(student):
    return Enrollment.objects.filter(
        student=student,
        academic_year=student.academic_year,
        semester=student.semester,
    ).select_related("course")


def _is_cleared(student) -> bool:
    # cached verdict when there is one, a full evaluation otherwise
    cached = quick_check(student.id)
    if cached["cached"]:
        return cached["cleared"]
    return evaluate(student.id)["cleared"]


def _student_exam(student, pk):
    return get_object_or_404(
        ExamSlot.objects.select_related("enrollment__course"),
        pk=pk,
        enrollment__in=active_enrollments(student),
        status__in=ExamSlot.VISIBLE_STATUSES,
    )


@login_required
@require_student
def index(request):
    ctx = {
        "active_nav": "academics",
        "student": request.student,
        "enrollments": list(_current_enrollments(request.student).order_by("course__code")),
    }
    return render(request, "academics/index.html", ctx)


@login_required
@require_student
def examinations(request):
    student = request.student
    clearance = evaluate(student.id)
    ctx = {
        "active_nav": "examinations",
        "student": student,
        "clearance": clearance,
        "exams": exam_rows(student, clearance["cleared"]),
    }
    return render(request, "academics/examinations.html", ctx)


@login_required
@require_student
@require_GET
def exam_permit(request):
    student = request.student
    if not _is_cleared(student):
        return HttpResponseForbidden(NOT_CLEARED_MESSAGE)
    ctx = {
        "active_nav": "examinations",
        "student": student,
        "exams": permit_rows(exam_rows(student, True)),
        "issued_at": timezone.now(),
    }
    return render(request, "academics/exam_permit.html", ctx)


@login_required
@require_student
@require_POST
def start_exam(request, pk: int):
    student = request.student
    slot = _student_exam(student, pk)
    if not _is_cleared(student):
        logger.info("Exam start refused for student %s on slot %s: not cleared", student.id, pk)
        return HttpResponseForbidden(NOT_CLEARED_MESSAGE)
    if not slot.is_online:
        return HttpResponseBadRequest("This is a physical exam. Please attend at the specified venue.")
    submission = ExamSubmission.objects.filter(slot=slot, student=student).first()
    if submission is not None and submission.is_submitted:
        return HttpResponseBadRequest("This exam has already been submitted.")
    if exam_status(slot, submission) != "active":
        return HttpResponseBadRequest("This exam is not open.")
    submission, created = ExamSubmission.objects.get_or_create(slot=slot, student=student)
    return JsonResponse(
        {
            "ok": True,
            "resumed": not created,
            "submission_id": submission.id,
            "status": submission.status,
            "started_at": submission.started_at.isoformat(),
            "ends_at": slot.ends_at.isoformat(),
        }
    )


@login_required
@require_student
@require_POST
def submit_exam(request, pk: int):
    student = request.student
    slot = _student_exam(student, pk)
    submission = get_object_or_404(ExamSubmission, slot=slot, student=student)
    if submission.is_submitted:
        return HttpResponseBadRequest("This exam has already been submitted.")
    now = timezone.now()
    if now > slot.ends_at:
        return HttpResponseBadRequest("This exam has ended. Submissions are no longer accepted.")
    submission.status = "submitted"
    submission.submitted_at = now
    submission.answers_url = (request.POST.get("answers_url") or "").strip()
    submission.save(update_fields=["status", "submitted_at", "answers_url"])
    return JsonResponse(
        {
            "ok": True,
            "submission_id": submission.id,
            "submitted_at": submission.submitted_at.isoformat(),
        }
    )


@login_required
@require_student
def lectures(request):
    ctx = {
        "active_nav": "lectures",
        "student": request.student,
        "lectures": list(upcoming_lectures(request.student)),
    }
    return render(request, "academics/lectures.html", ctx)


@login_required
@require_student
def coursework(request):
    student = request.student
    course_ids = _current_enrollments(student).values_list("course_id", flat=True)
    assignments = (
        Assignment.objects.filter(course_id__in=course_ids, status="published")
        .select_related("course")
        .order_by("due_date")
    )
    submitted = {
        s.assignment_id: s
        for s in AssignmentSubmission.objects.filter(student=student, assignment__in=assignments)
    }
    now = timezone.now()
    rows = [
        {
            "assignment": a,
            "submission": submitted.get(a.id),
            "can_submit": a.due_date >= now,
        }
        for a in assignments
    ]
    ctx = {
        "active_nav": "coursework",
        "student": student,
        "access": check_assignment_access_only(student.id),
        "assignments": rows,
    }
    return render(request, "academics/coursework.html", ctx)


@login_required
@require_student
@require_POST
def submit_assignment(request, pk: int):
    student = request.student
    assignment = get_object_or_404(
        Assignment,
        pk=pk,
        status="published",
        course_id__in=_current_enrollments(student).values_list("course_id", flat=True),
    )
    access = check_assignment_access_only(student.id)
    if not access["has_access"]:
        logger.info("Submission refused for student %s on assignment %s: no assignment access", student.id, pk)
        return HttpResponseForbidden(access["notes"] or "Assignment access restricted")
    if assignment.due_date < timezone.now():
        return HttpResponseBadRequest("This assignment is past the due date. Submissions are no longer accepted.")
    file_url = (request.POST.get("file_url") or "").strip()
    if not file_url:
        return HttpResponseBadRequest("file_url required")
    submission, created = AssignmentSubmission.objects.update_or_create(
        assignment=assignment,
        student=student,
        defaults={"file_url": file_url, "comments": request.POST.get("comments", "")},
    )
    return JsonResponse(
        {
            "ok": True,
            "created": created,
            "submission_id": submission.id,
            "submitted_at": submission.submitted_at.isoformat(),
        }
    )
