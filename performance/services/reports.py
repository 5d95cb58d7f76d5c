# performance/services/reports.py
"""
Dashboard aggregations over goals:
- employee_performance(): latest goal per employee, week leaders, stars of the month
- weekly_score_chart(): best total score per employee per ISO week
Scores are recomputed from the stored metrics so rule changes show up
without a recalculation run.
"""
from __future__ import annotations

from collections import defaultdict
from datetime import timedelta
from typing import Any, Callable, Dict, Iterable, List, Optional

from django.db.models import QuerySet
from django.utils import timezone

from performance.models import Goal
from performance.services.goals import resolve_team_name
from performance.services.scoring import normalize_team, score, strip_computed


def _rescored(goal: Goal) -> Dict[str, Any]:
    metrics = goal.metrics if isinstance(goal.metrics, dict) else {}
    team_raw = resolve_team_name(metrics, employee=goal.assigned_to, title=goal.title)
    return score(team_raw, strip_computed(metrics))


def _latest_goal_per_employee(goals: QuerySet) -> List[Goal]:
    latest: Dict[int, Goal] = {}
    for goal in goals.order_by("assigned_to_id", "-updated_at", "-id"):
        latest.setdefault(goal.assigned_to_id, goal)
    return list(latest.values())


def _week_of(row: Dict[str, Any]) -> Optional[tuple]:
    if not row["updated_at"]:
        return None
    iso_year, iso_week, _ = timezone.localtime(row["updated_at"]).isocalendar()
    return iso_year, iso_week


def _month_of(row: Dict[str, Any]) -> Optional[tuple]:
    if not row["updated_at"]:
        return None
    local = timezone.localtime(row["updated_at"])
    return local.year, local.month


def _flag_top(rows: Iterable[Dict[str, Any]], group_of: Callable[[Dict[str, Any]], Any], flag: str) -> None:
    groups: Dict[Any, List[Dict[str, Any]]] = defaultdict(list)
    for row in rows:
        row[flag] = False
        group = group_of(row)
        if group is not None:
            groups[group].append(row)
    for group in groups.values():
        # first highest wins on ties
        top = group[0]
        for row in group[1:]:
            if row["total_score"] > top["total_score"]:
                top = row
        top[flag] = True


def employee_performance(goals: Optional[QuerySet] = None) -> List[Dict[str, Any]]:
    """
    One row per active employee that has a goal, built from that employee's
    most recently updated goal, ordered by employee name. Leaders are picked
    per ISO week of an ISO year and per calendar month of a year.
    """
    if goals is None:
        goals = Goal.objects.all()
    goals = goals.filter(assigned_to__active=True).select_related("assigned_to__team")

    rows: List[Dict[str, Any]] = []
    for goal in _latest_goal_per_employee(goals):
        employee = goal.assigned_to
        metrics = _rescored(goal)
        updated = timezone.localtime(goal.updated_at) if goal.updated_at else None
        rows.append({
            "employee": {
                "id": employee.pk,
                "name": employee.name,
                "team": employee.team_name,
            },
            "goal_id": goal.pk,
            "team": normalize_team(resolve_team_name(metrics, employee=employee, title=goal.title)).value,
            "target": goal.target_value or 0,
            "target_achieved_percentage": metrics.get("sales_achievement_percent") or 0,
            "total_score": metrics.get("total_score") or 0,
            "week": updated.isocalendar()[1] if updated else None,
            "month": updated.month if updated else None,
            "metrics": metrics,
            "deadline": goal.deadline,
            "priority": goal.priority,
            "updated_at": goal.updated_at,
        })

    rows.sort(key=lambda r: (r["employee"]["name"], r["employee"]["id"]))
    _flag_top(rows, _week_of, "is_week_leader")
    _flag_top(rows, _month_of, "is_star_of_the_month")
    return rows


def weekly_score_chart(weeks: int = 8, now=None, goals: Optional[QuerySet] = None) -> List[Dict[str, Any]]:
    """
    Best total score per employee for each ISO week of the last `weeks`
    weeks, shaped for a line chart:
        [{"week": "Week 41", "emp_3": 10, "emp_7": 6}, ...]
    """
    now = now or timezone.now()
    if goals is None:
        goals = Goal.objects.all()
    goals = goals.filter(updated_at__gte=now - timedelta(weeks=weeks)).select_related("assigned_to__team")

    best: Dict[tuple, Dict[str, Any]] = {}
    for goal in goals:
        local = timezone.localtime(goal.updated_at)
        iso_year, iso_week, _ = local.isocalendar()
        key = (iso_year, iso_week)
        row = best.setdefault(key, {"week": f"Week {iso_week}"})
        emp_key = f"emp_{goal.assigned_to_id}"
        total = _rescored(goal).get("total_score") or 0
        row[emp_key] = max(row.get(emp_key, 0), total)

    return [best[key] for key in sorted(best)]
