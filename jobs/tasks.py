import logging
from django_rq import job
from django.conf import settings
from clearance.exceptions import NotFoundError
from clearance.services import evaluate, prune_evaluation_log
from students.models import Student

logger = logging.getLogger(__name__)


def students_for_term(academic_year=None, semester=None):
    qs = Student.objects.all()
    if academic_year:
        qs = qs.filter(academic_year=academic_year)
    if semester:
        qs = qs.filter(semester=semester)
    return qs.order_by("id")


@job("clearance")
def refresh_term_clearance(academic_year=None, semester=None):
    ids = list(students_for_term(academic_year, semester).values_list("id", flat=True))
    batch_size = getattr(settings, "CLEARANCE_REFRESH_BATCH_SIZE", 500)
    logger.info(
        "Refreshing clearance for %d students (academic_year=%s semester=%s)",
        len(ids),
        academic_year,
        semester,
    )
    for i in range(0, len(ids), batch_size):
        enqueue_clearance_batch.delay(ids[i:i + batch_size], academic_year, semester)
    return len(ids)


@job("clearance")
def enqueue_clearance_batch(student_ids: list[int], academic_year=None, semester=None):
    for sid in student_ids:
        refresh_student_clearance.delay(sid, academic_year, semester)


@job("clearance")
def refresh_student_clearance(student_id: int, academic_year=None, semester=None):
    try:
        result = evaluate(student_id, academic_year, semester)
    except NotFoundError:
        logger.warning("Skipping clearance refresh: student %s no longer exists", student_id)
        return None
    return result["cleared"]


@job("clearance")
def prune_clearance_log(days=None):
    return prune_evaluation_log(days)
