# performance/services/kpis.py
"""
KPI record log: raw measured values per employee, listed per team.
"""
from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Any, Dict, List

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import QuerySet

from hr.models import Team
from hr.services import employees_for_category
from performance.models import KpiRecord

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("metric", "value", "recorded_at")

UNASSIGNED_TEAM = "Unassigned"


@transaction.atomic
def record_kpi(*, employee, metric: str, value: Any, recorded_at=None) -> KpiRecord:
    record = KpiRecord(employee=employee, metric=metric, value=value)
    if recorded_at is not None:
        record.recorded_at = recorded_at
    record.full_clean()
    record.save()
    logger.info("KPI %r = %s recorded for employee #%s", record.metric, record.value, employee.pk)
    return record


@transaction.atomic
def update_kpi(record: KpiRecord, **fields) -> KpiRecord:
    unknown = set(fields) - set(UPDATABLE_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown KPI field(s): {', '.join(sorted(unknown))}")
    for name, value in fields.items():
        setattr(record, name, value)
    record.full_clean()
    record.save()
    return record


def kpis_for_team(team) -> QuerySet:
    """
    Records of the members of `team`: a Team row matches that team only,
    anything else (category or free text) matches every team of the category.
    """
    qs = KpiRecord.objects.select_related("employee__team")
    if isinstance(team, Team):
        qs = qs.filter(employee__team=team)
    else:
        qs = qs.filter(employee__in=[e.pk for e in employees_for_category(team, include_inactive=True)])
    return qs.order_by("employee__name", "-recorded_at", "-id")


def kpis_by_team(category=None) -> Dict[str, List[Dict[str, Any]]]:
    """
    {team name: [record rows]} ordered by team name, then employee name.
    Members without a team are listed under "Unassigned".
    """
    qs = kpis_for_team(category) if category is not None else (
        KpiRecord.objects.select_related("employee__team").order_by("employee__name", "-recorded_at", "-id")
    )

    grouped: Dict[str, List[Dict[str, Any]]] = {}
    for record in qs:
        employee = record.employee
        team_name = employee.team_name or UNASSIGNED_TEAM
        grouped.setdefault(team_name, []).append({
            "id": record.pk,
            "employee": {"id": employee.pk, "name": employee.name},
            "team": team_name,
            "metric": record.metric,
            "value": record.value,
            "recorded_at": record.recorded_at,
        })
    return OrderedDict(sorted(grouped.items()))
