# hr/models/branch.py
from django.db import models
from base.models.mixins import TimeStampedMixin, ActivableMixin


class Branch(ActivableMixin, TimeStampedMixin, models.Model):
    """
    A physical office/branch. Teams and employees may be attached to one.
    `employee_count` is computed, never stored.
    """
    name = models.CharField(max_length=255, unique=True)
    location = models.CharField(max_length=255, blank=True)

    class Meta:
        db_table = "hr_branch"
        ordering = ("name",)

    @property
    def employee_count(self) -> int:
        """Active employees attached to the branch."""
        return self.employees.filter(active=True).count()

    def __str__(self):
        return self.name
