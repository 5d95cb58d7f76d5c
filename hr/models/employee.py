# hr/models/employee.py
from django.core.exceptions import ValidationError
from django.db import models

from base.models.mixins import TimeStampedMixin, ActivableMixin
from performance.services.scoring import TeamCategory, normalize_team


class Employee(ActivableMixin, TimeStampedMixin, models.Model):
    """Person goals are assigned to. Optionally linked to a dashboard login."""

    name = models.CharField(max_length=255, db_index=True)

    user = models.OneToOneField(
        "base.User",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="employee",
    )

    branch = models.ForeignKey(
        "hr.Branch",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="employees",
    )

    team = models.ForeignKey(
        "hr.Team",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="members",
    )

    work_email = models.EmailField(blank=True)

    class Meta:
        db_table = "hr_employee"
        ordering = ("name",)
        indexes = [
            models.Index(fields=["team", "active"], name="hr_employee_team_active_idx"),
            models.Index(fields=["branch", "active"], name="hr_employee_branch_active_idx"),
        ]

    @property
    def team_name(self) -> str:
        return self.team.name if self.team_id else ""

    @property
    def team_category(self) -> TeamCategory:
        return normalize_team(self.team_name)

    def clean(self):
        super().clean()
        # A team bound to a branch only takes members from that branch
        if self.team_id and self.branch_id and self.team.branch_id:
            if self.team.branch_id != self.branch_id:
                raise ValidationError({"team": "Team belongs to a different branch."})

    def __str__(self):
        return self.name
