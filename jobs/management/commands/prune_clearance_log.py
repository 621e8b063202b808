from django.core.management.base import BaseCommand, CommandError
from clearance.services import prune_evaluation_log
from jobs.tasks import prune_clearance_log


class Command(BaseCommand):
    help = "Delete clearance evaluation log rows older than the retention window"

    def add_arguments(self, parser):
        parser.add_argument(
            "--days",
            type=int,
            help="Keep this many days of history (default CLEARANCE_LOG_RETENTION_DAYS)",
        )
        parser.add_argument(
            "--async",
            dest="run_async",
            action="store_true",
            help="Enqueue on the rq 'clearance' queue instead of pruning inline",
        )

    def handle(self, *args, **options):
        days = options.get("days")
        if options.get("run_async"):
            prune_clearance_log.delay(days)
            self.stdout.write(self.style.SUCCESS("Enqueued clearance log prune"))
            return
        try:
            deleted = prune_evaluation_log(days)
        except ValueError as exc:
            raise CommandError(str(exc))
        self.stdout.write(self.style.SUCCESS(f"Deleted {deleted} evaluation log rows."))
