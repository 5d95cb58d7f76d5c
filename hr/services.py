# hr/services.py
from django.db.models import QuerySet

from hr.models import Branch, Employee
from performance.services.scoring import TeamCategory, normalize_team


def employees_for_branch(branch: Branch, *, include_inactive: bool = False) -> QuerySet:
    qs = Employee.objects.filter(branch=branch).select_related("team")
    if not include_inactive:
        qs = qs.filter(active=True)
    return qs


def employees_for_category(category, *, include_inactive: bool = False) -> list:
    """
    Employees whose team resolves to `category` (a TeamCategory or any
    free-text team name). Team names are free text, so the match runs in
    Python over the team names rather than in SQL.
    """
    category = normalize_team(category)
    qs = Employee.objects.select_related("team", "branch")
    if not include_inactive:
        qs = qs.filter(active=True)
    if category is TeamCategory.UNKNOWN:
        return [e for e in qs if e.team_category is TeamCategory.UNKNOWN]
    return [e for e in qs.filter(team__isnull=False) if e.team_category is category]
