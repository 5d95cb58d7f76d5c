# performance/admin.py
from __future__ import annotations

import json

from django.contrib import admin
from django.utils.html import format_html

from base.admin_mixins import AppAdmin
from performance.models import Goal, KpiRecord
from performance.services.goals import recalculate_goal


@admin.register(Goal)
class GoalAdmin(AppAdmin):
    list_display = (
        "title",
        "assigned_to",
        "target_value",
        "total_score_display",
        "performer_badge",
        "status",
        "priority",
        "deadline",
        "updated_at",
    )
    list_filter = ("status", "priority", "assigned_to__team", "assigned_to__branch")
    search_fields = ("title", "description", "assigned_to__name")
    list_select_related = ("assigned_to", "set_by")
    autocomplete_fields = ("assigned_to", "set_by")
    date_hierarchy = "updated_at"
    actions = ("recalculate_selected",)

    readonly_fields = ("target_value", "metrics_pretty")
    fieldsets = (
        ("Goal", {"fields": ("title", "description", "assigned_to", "set_by")}),
        ("Values", {"fields": ("target_value", "current_value", "unit")}),
        ("Schedule", {"fields": ("start_date", "deadline", "status", "priority")}),
        ("Metrics", {"fields": ("metrics", "metrics_pretty")}),
        ("Dates", {"fields": ("created_at", "updated_at")}),
    )

    @admin.display(description="Total score")
    def total_score_display(self, obj):
        return obj.total_score if obj.is_scored else "—"

    @admin.display(description="Performer", boolean=True)
    def performer_badge(self, obj):
        return obj.is_performer_of_the_week

    @admin.display(description="Metrics (formatted)")
    def metrics_pretty(self, obj):
        return format_html("<pre>{}</pre>", json.dumps(obj.metrics or {}, indent=2, sort_keys=True))

    def save_model(self, request, obj, form, change):
        if not change and not obj.set_by_id:
            obj.set_by = request.user
        super().save_model(request, obj, form, change)
        # Metrics edited by hand are rescored like any other write
        recalculate_goal(obj)

    @admin.action(description="Recalculate scores of selected goals")
    def recalculate_selected(self, request, queryset):
        changed = sum(1 for goal in queryset.select_related("assigned_to__team") if recalculate_goal(goal))
        self.message_user(request, f"{changed} goal(s) recalculated.")


@admin.register(KpiRecord)
class KpiRecordAdmin(AppAdmin):
    list_display = ("employee", "metric", "value", "recorded_at")
    list_filter = ("metric", "employee__team", "recorded_at")
    search_fields = ("metric", "employee__name")
    list_select_related = ("employee",)
    autocomplete_fields = ("employee",)
    date_hierarchy = "recorded_at"
