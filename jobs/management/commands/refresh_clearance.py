from django.core.management.base import BaseCommand, CommandError
from clearance.exceptions import NotFoundError
from clearance.services import evaluate
from jobs.tasks import refresh_student_clearance, refresh_term_clearance, students_for_term


class Command(BaseCommand):
    help = "Re-evaluate exam clearance for one student or every student in a term"

    def add_arguments(self, parser):
        parser.add_argument("--student", dest="student", type=int, help="Student id")
        parser.add_argument("--academic-year", dest="academic_year", help="e.g. 2025/2029")
        parser.add_argument("--semester", dest="semester", type=int)
        parser.add_argument(
            "--async",
            dest="run_async",
            action="store_true",
            help="Enqueue on the rq 'clearance' queue instead of evaluating inline",
        )

    def handle(self, *args, **options):
        sid = options.get("student")
        year = options.get("academic_year")
        semester = options.get("semester")

        if options.get("run_async"):
            if sid:
                refresh_student_clearance.delay(sid, year, semester)
                self.stdout.write(self.style.SUCCESS(f"Enqueued clearance refresh for student {sid}"))
            else:
                refresh_term_clearance.delay(year, semester)
                self.stdout.write(self.style.SUCCESS("Enqueued clearance refresh for term"))
            return

        ids = [sid] if sid else list(students_for_term(year, semester).values_list("id", flat=True))
        cleared = 0
        for student_id in ids:
            try:
                result = evaluate(student_id, year, semester)
            except NotFoundError as exc:
                raise CommandError(str(exc))
            if result["error"]:
                self.stdout.write(self.style.ERROR(f"Student {student_id}: {result['error']}"))
                continue
            label = "CLEARED" if result["cleared"] else "NOT CLEARED"
            self.stdout.write(
                f"Student {student_id} {result['academic_year']}/{result['semester']}: {label} "
                f"(attendance {result['attendance']['percentage']}%, "
                f"balance {result['financial']['outstanding_balance']}, "
                f"assignments {'open' if result['assignment_access']['has_access'] else 'locked'})"
            )
            cleared += int(result["cleared"])
        self.stdout.write(self.style.SUCCESS(f"Evaluated {len(ids)} students, {cleared} cleared."))
