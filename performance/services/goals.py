# performance/services/goals.py
# ======================================================================
# Goal assignment / achievement reporting / recalculation
#
# The only place that writes Goal.metrics and Goal.target_value:
# - assign_goal():   create + score whatever metrics came with the assignment
# - update_goal():   merge new metrics over the stored ones, rescore
# - recalculate_goal(): rescore the stored metrics as they are
# ======================================================================
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from django.core.exceptions import PermissionDenied, ValidationError
from django.db import transaction

from notifications.models import Notification
from notifications.services import notify_safely
from performance.access import can_edit_goal, can_report_goal
from performance.models import Goal
from performance.services.scoring import (
    TeamCategory,
    extract_target_value,
    merge_metrics,
    normalize_team,
    score,
    strip_computed,
)

logger = logging.getLogger(__name__)

# Scalar fields update_goal() accepts besides metrics/team
UPDATABLE_FIELDS = (
    "title",
    "description",
    "current_value",
    "unit",
    "start_date",
    "deadline",
    "status",
    "priority",
)


@dataclass(frozen=True)
class GoalMetrics:
    team: TeamCategory
    metrics: Dict[str, Any]
    target_value: float

    @property
    def scored(self) -> bool:
        return self.team.is_known


# ======================================================================
# Helpers
# ======================================================================

def parse_metrics(value: Any) -> Dict[str, Any]:
    """
    Accept a mapping, a JSON object string or None. Anything else (invalid
    JSON, a JSON list, ...) becomes an empty bag.
    """
    if value is None or value == "":
        return {}
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            logger.warning("Ignoring metrics that are not valid JSON: %.80r", value)
            return {}
    if not isinstance(value, Mapping):
        logger.warning("Ignoring metrics that are not an object: %r", type(value).__name__)
        return {}
    return dict(value)


def resolve_team_name(metrics: Mapping[str, Any], *, team: Any = None, employee=None, title: str = "") -> str:
    """
    Raw team text for a goal, first non-empty of: metrics["team"], the
    explicit team, the employee's team, the goal title.
    """
    candidates = (
        (metrics or {}).get("team"),
        team.value if isinstance(team, TeamCategory) else team,
        getattr(employee, "team_name", "") if employee is not None else "",
        title,
    )
    for candidate in candidates:
        if candidate:
            return str(candidate)
    return ""


def compute_goal_metrics(team_raw: Any, metrics: Mapping[str, Any]) -> GoalMetrics:
    """
    Score `metrics` for `team_raw`. Computed fields already in the bag are
    dropped first, so a goal that changes team never keeps the old team's
    scores (and an unscored goal carries none at all).
    """
    category = normalize_team(team_raw)
    if not category.is_known:
        logger.warning("Team %r is not a scored category; metrics stored unscored", team_raw)
    return GoalMetrics(
        team=category,
        metrics=score(category, strip_computed(metrics)),
        target_value=extract_target_value(category, metrics),
    )


# ======================================================================
# Assignment
# ======================================================================

def assign_goal(
    *,
    employee,
    set_by,
    title: str,
    metrics: Any = None,
    team: Any = None,
    description: str = "",
    current_value: float = 0,
    unit: str = "$",
    start_date=None,
    deadline=None,
    status: str = Goal.Status.NOT_STARTED,
    priority: str = Goal.Priority.MEDIUM,
) -> Goal:
    """
    Create a goal for `employee`. Metrics are scored from whatever subset is
    present (usually the targets only) and the employee's user is notified.
    """
    if not (title or "").strip():
        raise ValidationError({"title": "Title is required."})

    raw = parse_metrics(metrics)
    computed = compute_goal_metrics(resolve_team_name(raw, team=team, employee=employee, title=title), raw)

    with transaction.atomic():
        goal = Goal(
            assigned_to=employee,
            set_by=set_by,
            title=title.strip(),
            description=description or "",
            target_value=computed.target_value,
            current_value=current_value if current_value is not None else 0,
            unit=unit or "$",
            start_date=start_date,
            deadline=deadline,
            status=status or Goal.Status.NOT_STARTED,
            priority=priority or Goal.Priority.MEDIUM,
            metrics=computed.metrics,
        )
        goal.full_clean()
        goal.save()

        notify_safely(
            employee.user if employee.user_id else None,
            Notification.Type.NEW_TARGET,
            f"A new goal has been assigned: {goal.title}",
        )

    logger.info("Goal #%s assigned to employee #%s (team=%s, target=%s)",
                goal.pk, employee.pk, computed.team.value, computed.target_value)
    return goal


# ======================================================================
# Achievement reporting
# ======================================================================

def update_goal(goal: Goal, *, metrics: Any = None, team: Any = None, user=None, **fields) -> Goal:
    """
    Report achievements / edit a goal.

    New metrics are merged over the stored ones (targets sent at assignment
    survive), the merged bag is rescored, and only the scalar fields passed
    in `fields` change.

    When `user` is given, scalar edits need change_goal and metrics need
    report_goal_achievement (or change_goal) on the goal.
    """
    unknown = set(fields) - set(UPDATABLE_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown goal field(s): {', '.join(sorted(unknown))}")

    if user is not None:
        if fields and not can_edit_goal(user, goal):
            raise PermissionDenied("You cannot edit this goal.")
        if metrics is not None and not (can_report_goal(user, goal) or can_edit_goal(user, goal)):
            raise PermissionDenied("You cannot report achievements on this goal.")

    with transaction.atomic():
        locked = Goal.objects.select_for_update().select_related("assigned_to__team").get(pk=goal.pk)

        for name, value in fields.items():
            if name == "current_value" and value is None:
                value = 0
            setattr(locked, name, value)

        merged = merge_metrics(locked.metrics, parse_metrics(metrics))
        team_raw = resolve_team_name(merged, team=team, employee=locked.assigned_to, title=locked.title)
        computed = compute_goal_metrics(team_raw, merged)

        locked.metrics = computed.metrics
        locked.target_value = computed.target_value
        locked.full_clean()
        locked.save()

        employee = locked.assigned_to
        notify_safely(
            employee.user if employee.user_id else None,
            Notification.Type.GOAL_UPDATED,
            f"Your goal has been updated: {locked.title}",
        )

    logger.info("Goal #%s updated (team=%s, total_score=%s)",
                locked.pk, computed.team.value, computed.metrics.get("total_score"))
    return locked


# ======================================================================
# Recalculation
# ======================================================================

def recalculate_goal(goal: Goal, *, commit: bool = True) -> bool:
    """
    Rescore the stored metrics of `goal` (after a scoring rule change).
    Returns True when metrics or target changed. No notification is sent.
    """
    raw = parse_metrics(goal.metrics)
    team_raw = resolve_team_name(raw, employee=goal.assigned_to, title=goal.title)
    computed = compute_goal_metrics(team_raw, raw)

    changed = computed.metrics != raw or computed.target_value != goal.target_value
    if changed and commit:
        goal.metrics = computed.metrics
        goal.target_value = computed.target_value
        goal.save(update_fields=["metrics", "target_value", "updated_at"])
    return changed
