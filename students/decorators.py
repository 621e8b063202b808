from functools import wraps
from django.http import HttpResponseForbidden
from .permissions import student_for_user


def require_student(view_func):
    """
    Guard views that expose student data.
    Uses request.student when the middleware resolved one, otherwise looks it up.
    """
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        student = getattr(request, "student", None) or student_for_user(request.user)
        if student is None:
            return HttpResponseForbidden("No student record linked to this account")
        request.student = student
        return view_func(request, *args, **kwargs)
    return _wrapped
