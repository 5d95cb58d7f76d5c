# performance/management/commands/recalculate_goal_metrics.py

from django.core.management.base import BaseCommand
from performance.models import Goal
from performance.services.goals import recalculate_goal


class Command(BaseCommand):
    help = "Recalculate KPI scores stored in the metrics of every goal."

    def add_arguments(self, parser):
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Report which goals would change without saving them.",
        )

    def handle(self, *args, **options):
        dry_run = options["dry_run"]
        qs = Goal.objects.select_related("assigned_to__team").order_by("pk")
        total = qs.count()
        self.stdout.write(f"Recalculating metrics for {total} goals ...")

        changed = 0
        for idx, goal in enumerate(qs.iterator(), start=1):
            if recalculate_goal(goal, commit=not dry_run):
                changed += 1
                self.stdout.write(f"- [{idx}/{total}] Goal #{goal.pk} {'would change' if dry_run else 'updated'}")

        verb = "would be updated" if dry_run else "updated"
        self.stdout.write(self.style.SUCCESS(f"Done: {changed} of {total} goals {verb}."))
