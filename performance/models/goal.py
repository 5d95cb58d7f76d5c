# performance/models/goal.py
from typing import Optional

from django.core.exceptions import ValidationError
from django.db import models

from base.models.mixins import TimeStampedMixin


class Goal(TimeStampedMixin, models.Model):
    """
    A weekly (or otherwise periodic) target assigned to an employee.

    `metrics` is a flat JSON object: the raw inputs for the employee's team
    (targets and achievements) and, once scored, the computed fields
    (`*_score`, `total_score`, `*_achievement_percent`,
    `isPerformerOfTheWeek`). `target_value` mirrors the headline target for
    list displays. Write through performance.services.goals so both stay
    consistent.
    """

    class Status(models.TextChoices):
        NOT_STARTED = "not_started", "Not Started"
        IN_PROGRESS = "in_progress", "In Progress"
        COMPLETED = "completed", "Completed"

    class Priority(models.TextChoices):
        LOW = "low", "Low"
        MEDIUM = "medium", "Medium"
        HIGH = "high", "High"

    assigned_to = models.ForeignKey(
        "hr.Employee",
        on_delete=models.CASCADE,
        related_name="goals",
    )
    set_by = models.ForeignKey(
        "base.User",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="goals_set",
    )

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)

    target_value = models.FloatField(default=0)
    current_value = models.FloatField(default=0)
    unit = models.CharField(max_length=16, default="$")

    start_date = models.DateField(null=True, blank=True)
    deadline = models.DateField(null=True, blank=True)

    status = models.CharField(max_length=16, choices=Status.choices, default=Status.NOT_STARTED, db_index=True)
    priority = models.CharField(max_length=8, choices=Priority.choices, default=Priority.MEDIUM)

    metrics = models.JSONField(default=dict, blank=True)

    class Meta:
        db_table = "perf_goal"
        ordering = ("-updated_at",)
        indexes = [
            models.Index(fields=["assigned_to", "updated_at"], name="perf_goal_assignee_upd_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                check=(models.Q(deadline__isnull=True) | models.Q(start_date__isnull=True)
                       | models.Q(start_date__lte=models.F("deadline"))),
                name="chk_goal_dates",
            ),
        ]
        permissions = [
            ("report_goal_achievement", "Can report goal achievements"),
        ]

    def __str__(self):
        return self.title

    def clean(self):
        super().clean()
        if self.start_date and self.deadline and self.start_date > self.deadline:
            raise ValidationError({"deadline": "Deadline cannot be before the start date."})
        if not isinstance(self.metrics, dict):
            raise ValidationError({"metrics": "Metrics must be a JSON object."})

    # ----------------------------
    # Read helpers over the metrics bag
    # ----------------------------
    @property
    def is_scored(self) -> bool:
        return "total_score" in (self.metrics or {})

    @property
    def total_score(self) -> Optional[int]:
        return (self.metrics or {}).get("total_score")

    @property
    def is_performer_of_the_week(self) -> bool:
        return bool((self.metrics or {}).get("isPerformerOfTheWeek"))
