# hr/models/team.py
from django.db import models

from base.models.mixins import TimeStampedMixin, ActivableMixin
from performance.services.scoring import TeamCategory, normalize_team


class Team(ActivableMixin, TimeStampedMixin, models.Model):
    """
    A sales/ads team. Team names are free text ("Sales - Cairo",
    "website ads team", ...); the scoring category is derived from the name
    and never stored on its own.
    """
    name = models.CharField(max_length=255, unique=True)
    description = models.TextField(blank=True)

    branch = models.ForeignKey(
        "hr.Branch",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="teams",
    )

    class Meta:
        db_table = "hr_team"
        ordering = ("name",)
        indexes = [
            models.Index(fields=["branch", "active"], name="hr_team_branch_active_idx"),
        ]

    @property
    def category(self) -> TeamCategory:
        return normalize_team(self.name)

    @property
    def member_count(self) -> int:
        return self.members.filter(active=True).count()

    def __str__(self):
        return self.name
