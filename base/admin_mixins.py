# base/admin_mixins.py
# Reusable admin mixins shared by every app
from typing import Sequence
from django.contrib import admin


def _present_fields(model, names: Sequence[str]) -> list:
    fields = {fld.name for fld in model._meta.get_fields()}
    return [f for f in names if f in fields]


class ReadonlyAuditFieldsMixin:
    """
    Shows the audit stamps (created_at/updated_at) as read-only.
    Safe for models that do not carry them.
    """
    AUDIT_FIELDS: Sequence[str] = ("created_at", "updated_at")

    def get_readonly_fields(self, request, obj=None):
        ro = list(super().get_readonly_fields(request, obj) or [])
        return list(dict.fromkeys(ro + _present_fields(self.model, self.AUDIT_FIELDS)))


class AppAdmin(ReadonlyAuditFieldsMixin, admin.ModelAdmin):
    pass
