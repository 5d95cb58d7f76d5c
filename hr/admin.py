# hr/admin.py
# ============================================================
# Django Admin (HR): branches, teams, employees
# ============================================================

from __future__ import annotations

from django.contrib import admin

from base.admin_mixins import AppAdmin
from . import models


@admin.register(models.Branch)
class BranchAdmin(AppAdmin):
    list_display = ("name", "location", "employee_count", "active")
    list_filter = ("active",)
    search_fields = ("name", "location")


@admin.register(models.Team)
class TeamAdmin(AppAdmin):
    list_display = ("name", "category_display", "branch", "member_count", "active")
    list_filter = ("active", "branch")
    search_fields = ("name",)
    list_select_related = ("branch",)

    @admin.display(description="Scoring category")
    def category_display(self, obj):
        return obj.category.value


@admin.register(models.Employee)
class EmployeeAdmin(AppAdmin):
    list_display = ("name", "team", "branch", "user", "work_email", "active")
    list_filter = ("active", "team", "branch")
    search_fields = ("name", "work_email", "user__email")
    list_select_related = ("team", "branch", "user")
    autocomplete_fields = ("user", "team", "branch")

    fieldsets = (
        ("Employee", {"fields": ("name", "user", "work_email", "active")}),
        ("Organisation", {"fields": ("branch", "team")}),
        ("Dates", {"fields": ("created_at", "updated_at")}),
    )
