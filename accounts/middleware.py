from students.permissions import student_for_user

class ActiveStudentMiddleware:
    """Attach the student linked to the signed-in user as request.student (or None)."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        user = getattr(request, "user", None)
        request.student = None
        if user and user.is_authenticated:
            request.student = student_for_user(user)
        return self.get_response(request)
