# base/models/mixins.py
from django.db import models


# ---------- Basic stamps (time / active flag) ----------
class TimeStampedMixin(models.Model):
    """Creation/modification stamps, indexed."""
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True, db_index=True)

    class Meta:
        abstract = True


class ActivableMixin(models.Model):
    """Indexed `active` flag."""
    active = models.BooleanField(default=True, db_index=True)

    class Meta:
        abstract = True
