# performance/access.py
# ------------------------------------------------------------
# Who may see a goal and who may report achievements on it.
# ------------------------------------------------------------
# - Does NOT grant permissions (see performance/signals.py).
# - Admin roles (Super Admin / Admin) and superusers see everything.
# - Everyone else relies on django-guardian object permissions.
# ------------------------------------------------------------

from __future__ import annotations

from django.db.models import QuerySet
from guardian.shortcuts import get_objects_for_user

from performance.models import Goal


def _is_admin(user) -> bool:
    return bool(user and user.is_authenticated and getattr(user, "is_admin_role", False))


def visible_goals(user) -> QuerySet:
    """Goals the user may list on the dashboard."""
    if not user or not user.is_authenticated:
        return Goal.objects.none()
    if _is_admin(user):
        return Goal.objects.all()
    return get_objects_for_user(user, "performance.view_goal", klass=Goal, accept_global_perms=True)


def can_view_goal(user, goal: Goal) -> bool:
    if not user or not user.is_authenticated:
        return False
    return _is_admin(user) or user.has_perm("performance.view_goal", goal)


def can_report_goal(user, goal: Goal) -> bool:
    """Reporting achievements = sending new metrics through update_goal()."""
    if not user or not user.is_authenticated:
        return False
    return _is_admin(user) or user.has_perm("performance.report_goal_achievement", goal)


def can_edit_goal(user, goal: Goal) -> bool:
    """Editing the goal itself (title, dates, status, ...), not its achievements."""
    if not user or not user.is_authenticated:
        return False
    return _is_admin(user) or user.has_perm("performance.change_goal", goal)
