import logging
from .models import Student

logger = logging.getLogger(__name__)


def student_for_user(user):
    """Return the Student linked to an authenticated user, or None."""
    if not getattr(user, "is_authenticated", False):
        return None
    student = Student.objects.filter(user=user).first()
    if student is None:
        logger.warning("No student record linked to user %s", user.pk)
    return student
