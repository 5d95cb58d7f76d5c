# hr/management/commands/seed_teams.py
from django.core.management.base import BaseCommand
from django.db import transaction

from hr.models import Branch, Team
from performance.services.scoring import TEAM_SCORERS


class Command(BaseCommand):
    help = "Create one team per scored category (idempotent), optionally under a branch."

    def add_arguments(self, parser):
        parser.add_argument("--branch", help="Branch name to attach the teams to (created if missing).")

    @transaction.atomic
    def handle(self, *args, **options):
        branch = None
        if options.get("branch"):
            branch, created = Branch.objects.get_or_create(name=options["branch"].strip())
            if created:
                self.stdout.write(f"+ Branch: {branch.name}")

        for category in TEAM_SCORERS:
            team, created = Team.objects.get_or_create(
                name=category.value,
                defaults={"branch": branch, "description": f"{category.value} team"},
            )
            self.stdout.write(f"{'+' if created else '='} Team: {team.name}")

        self.stdout.write(self.style.SUCCESS("Teams ready."))
