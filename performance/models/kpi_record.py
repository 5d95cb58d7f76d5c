from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from base.models.mixins import TimeStampedMixin


class KpiRecord(TimeStampedMixin, models.Model):
    """
    One measured value of a named KPI for an employee on a given day
    ("weekly_sales" = 1250 on 2024-10-09). Free-standing log, not tied to a goal.
    """
    employee = models.ForeignKey(
        "hr.Employee",
        on_delete=models.CASCADE,
        related_name="kpi_records",
    )
    metric = models.CharField(max_length=255, db_index=True)
    value = models.FloatField(default=0)
    recorded_at = models.DateField(default=timezone.localdate)

    class Meta:
        db_table = "perf_kpi_record"
        ordering = ("-recorded_at", "-id")
        indexes = [
            models.Index(fields=["employee", "recorded_at"], name="perf_kpi_emp_rec_idx"),
        ]

    def __str__(self):
        return f"{self.employee}: {self.metric} = {self.value}"

    def clean(self):
        super().clean()
        self.metric = (self.metric or "").strip()
        if not self.metric:
            raise ValidationError({"metric": "Metric name is required."})
