import logging
from django.contrib import messages
from django.contrib.admin.views.decorators import staff_member_required
from django.contrib.auth.decorators import login_required
from django.http import HttpResponseBadRequest, JsonResponse
from django.shortcuts import redirect
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_GET, require_POST
from students.decorators import require_student
from . import services
from .exceptions import NotFoundError

logger = logging.getLogger(__name__)


def _term_params(params):
    academic_year = params.get("academic_year") or None
    semester = params.get("semester") or None
    if semester is not None:
        semester = int(semester)
        if semester < 1:
            raise ValueError(semester)
    return academic_year, semester


def _safe_next(request):
    target = request.POST.get("next") or ""
    if target and url_has_allowed_host_and_scheme(
        target, allowed_hosts={request.get_host()}, require_https=request.is_secure()
    ):
        return target
    return None


def _not_found(exc):
    return JsonResponse({"error": str(exc)}, status=404)


@login_required
@require_student
@require_GET
def check(request):
    try:
        academic_year, semester = _term_params(request.GET)
    except ValueError:
        return HttpResponseBadRequest("semester must be a positive number")
    try:
        result = services.evaluate(request.student.id, academic_year, semester)
    except NotFoundError as exc:
        return _not_found(exc)
    return JsonResponse(result)


@login_required
@require_student
@require_POST
def recheck(request):
    try:
        academic_year, semester = _term_params(request.POST)
    except ValueError:
        return HttpResponseBadRequest("semester must be a positive number")
    try:
        result = services.manually_check_clearance(request.student.id, academic_year, semester)
    except NotFoundError as exc:
        return _not_found(exc)
    target = _safe_next(request)
    if target:
        # form posts from portal pages go back to the page that asked
        if result["error"]:
            messages.error(request, result["error"])
        elif result["cleared"]:
            messages.success(request, "You are cleared for examinations.")
        else:
            messages.warning(request, "You are not yet cleared for examinations.")
        return redirect(target)
    return JsonResponse(result)


@login_required
@require_student
@require_GET
def quick(request):
    try:
        return JsonResponse(services.quick_check(request.student.id))
    except NotFoundError as exc:
        return _not_found(exc)


@login_required
@require_student
@require_GET
def assignment_access(request):
    try:
        return JsonResponse(services.check_assignment_access_only(request.student.id))
    except NotFoundError as exc:
        return _not_found(exc)


@staff_member_required
@require_GET
def debug_attendance(request, student_id: int):
    logger.info("Attendance debug for student %s requested by user %s", student_id, request.user.pk)
    try:
        return JsonResponse(services.debug_attendance(student_id))
    except NotFoundError as exc:
        return _not_found(exc)
