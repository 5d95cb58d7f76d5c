import datetime
import logging

import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from notifications.models import Notification
from performance.models import Goal
from performance.services.goals import (
    assign_goal,
    parse_metrics,
    recalculate_goal,
    resolve_team_name,
    update_goal,
)
from performance.services.scoring import COMPUTED_KEYS

pytestmark = pytest.mark.django_db


@pytest.fixture
def sales_goal(make_employee, leader, sales_targets):
    employee = make_employee("Mona", team="Sales")
    return assign_goal(employee=employee, set_by=leader, title="Week 41 sales", metrics=sales_targets)


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------

def test_parse_metrics_accepts_json_and_mappings():
    assert parse_metrics('{"weekly_sales": 10}') == {"weekly_sales": 10}
    assert parse_metrics({"aov": 5}) == {"aov": 5}
    assert parse_metrics(None) == {}
    assert parse_metrics("") == {}


def test_parse_metrics_drops_invalid_input(caplog):
    with caplog.at_level(logging.WARNING, logger="performance.services.goals"):
        assert parse_metrics("{not json") == {}
        assert parse_metrics("[1, 2]") == {}
    assert "not valid JSON" in caplog.text


def test_resolve_team_name_precedence(make_employee):
    employee = make_employee("Omar", team="Ads")
    assert resolve_team_name({"team": "Portfolio"}, team="Sales", employee=employee) == "Portfolio"
    assert resolve_team_name({}, team="Sales", employee=employee) == "Sales"
    assert resolve_team_name({}, employee=employee, title="Website push") == "Ads"
    assert resolve_team_name({}, title="Website push") == "Website push"
    assert resolve_team_name({}) == ""


# ----------------------------------------------------------------------
# assign_goal
# ----------------------------------------------------------------------

def test_assign_goal_scores_targets_and_notifies(sales_goal):
    goal = Goal.objects.get(pk=sales_goal.pk)

    assert goal.target_value == 1000
    assert goal.metrics["weekly_sales_target"] == 1000
    assert goal.metrics["total_score"] == 0
    assert goal.is_performer_of_the_week is False
    assert goal.status == Goal.Status.NOT_STARTED
    assert goal.unit == "$"

    notification = Notification.objects.get(user=goal.assigned_to.user)
    assert notification.type == Notification.Type.NEW_TARGET
    assert notification.message == "A new goal has been assigned: Week 41 sales"


def test_assign_goal_accepts_json_string(make_employee, leader):
    employee = make_employee("Sara", team="Website Ads")
    goal = assign_goal(
        employee=employee, set_by=leader, title="ROAS",
        metrics='{"weekly_sales_target": "2000", "target_roas": 4}',
    )
    assert goal.target_value == 2000
    assert "roas_score" in goal.metrics


def test_assign_goal_without_login_skips_notification(make_employee, leader):
    employee = make_employee("Hany", team="Sales", with_user=False)
    goal = assign_goal(employee=employee, set_by=leader, title="Sales")
    assert goal.pk
    assert Notification.objects.count() == 0


def test_assign_goal_requires_title(make_employee, leader):
    employee = make_employee()
    with pytest.raises(ValidationError):
        assign_goal(employee=employee, set_by=leader, title="   ")
    assert Goal.objects.count() == 0


def test_assign_goal_rejects_deadline_before_start(make_employee, leader):
    employee = make_employee()
    with pytest.raises(ValidationError):
        assign_goal(
            employee=employee, set_by=leader, title="Sales",
            start_date=datetime.date(2024, 5, 10), deadline=datetime.date(2024, 5, 1),
        )


def test_assign_goal_unknown_team_stores_metrics_unscored(make_employee, leader, caplog):
    employee = make_employee("Ali", team=None)
    with caplog.at_level(logging.WARNING, logger="performance.services.goals"):
        goal = assign_goal(
            employee=employee, set_by=leader, title="Quarterly review",
            metrics={"weekly_sales_target": 500},
        )

    assert goal.metrics == {"weekly_sales_target": 500}
    assert goal.target_value == 0
    assert goal.is_scored is False
    assert "not a scored category" in caplog.text


def test_explicit_team_is_used_when_employee_has_none(make_employee, leader):
    employee = make_employee("Ali", team=None)
    goal = assign_goal(
        employee=employee, set_by=leader, title="Trend", team="Portfolio Holders",
        metrics={"weekly_sales_target": 100},
    )
    assert "trend_score" in goal.metrics


# ----------------------------------------------------------------------
# update_goal
# ----------------------------------------------------------------------

def test_update_goal_merges_achievements_over_targets(sales_goal, sales_achievements):
    goal = update_goal(sales_goal, metrics=sales_achievements, status=Goal.Status.COMPLETED)

    assert goal.metrics["weekly_sales_target"] == 1000
    assert goal.metrics["weekly_sales"] == 1000
    assert goal.metrics["total_score"] == 10
    assert goal.is_performer_of_the_week is True
    assert goal.status == Goal.Status.COMPLETED

    stored = Goal.objects.get(pk=sales_goal.pk)
    assert stored.metrics == goal.metrics


def test_update_goal_sends_update_notification(sales_goal):
    update_goal(sales_goal, metrics={"weekly_sales": 500})
    types = list(
        Notification.objects.filter(user=sales_goal.assigned_to.user)
        .order_by("id").values_list("type", flat=True)
    )
    assert types == [Notification.Type.NEW_TARGET, Notification.Type.GOAL_UPDATED]
    last = Notification.objects.filter(type=Notification.Type.GOAL_UPDATED).get()
    assert last.message == "Your goal has been updated: Week 41 sales"


def test_update_goal_without_metrics_keeps_them(sales_goal):
    before = dict(sales_goal.metrics)
    goal = update_goal(sales_goal, metrics=None, priority=Goal.Priority.HIGH)
    assert goal.metrics == before
    assert goal.priority == Goal.Priority.HIGH


def test_update_goal_new_target_changes_target_value(sales_goal):
    goal = update_goal(sales_goal, metrics={"weekly_sales_target": 2000, "weekly_sales": 1600})
    assert goal.target_value == 2000
    assert goal.metrics["sales_score"] == 3


def test_update_goal_rejects_unknown_fields(sales_goal):
    with pytest.raises(ValidationError):
        update_goal(sales_goal, assigned_to=None)


def test_update_goal_null_current_value_reads_zero(sales_goal):
    goal = update_goal(sales_goal, current_value=None)
    assert goal.current_value == 0


# ----------------------------------------------------------------------
# recalculate_goal
# ----------------------------------------------------------------------

def test_recalculate_goal_scores_raw_metrics(make_employee, sales_targets, sales_achievements):
    employee = make_employee("Mona", team="Sales")
    goal = Goal.objects.create(
        assigned_to=employee, title="Imported", metrics={**sales_targets, **sales_achievements},
    )

    assert recalculate_goal(goal) is True
    goal.refresh_from_db()
    assert goal.metrics["total_score"] == 10
    assert goal.target_value == 1000

    # already up to date
    assert recalculate_goal(goal) is False


def test_recalculate_goal_dry_run_does_not_save(make_employee, sales_targets):
    employee = make_employee("Mona", team="Sales")
    goal = Goal.objects.create(assigned_to=employee, title="Imported", metrics=sales_targets)

    assert recalculate_goal(goal, commit=False) is True
    goal.refresh_from_db()
    assert "total_score" not in goal.metrics


def test_recalculate_goal_sends_no_notification(sales_goal):
    Notification.objects.all().delete()
    recalculate_goal(sales_goal)
    assert Notification.objects.count() == 0


# ----------------------------------------------------------------------
# Team changes
# ----------------------------------------------------------------------

def test_team_change_to_unknown_drops_scores(sales_goal, sales_achievements):
    goal = update_goal(sales_goal, metrics=sales_achievements)
    assert goal.metrics["total_score"] == 10

    goal = update_goal(goal, metrics={"team": "Engineering"})

    assert goal.target_value == 0
    assert goal.is_scored is False
    assert goal.is_performer_of_the_week is False
    assert not COMPUTED_KEYS & set(goal.metrics)
    # raw inputs survive
    assert goal.metrics["weekly_sales"] == 1000


def test_team_change_keeps_only_new_team_scores(sales_goal, sales_achievements):
    update_goal(sales_goal, metrics=sales_achievements)
    goal = update_goal(sales_goal, metrics={"team": "Portfolio Holders"})

    assert sorted(COMPUTED_KEYS & set(goal.metrics)) == sorted([
        "sales_achievement_percent", "trend_percent",
        "sales_score", "trend_score", "conversion_score",
        "total_score", "isPerformerOfTheWeek",
    ])
    assert goal.metrics["sales_score"] == 5


def test_recalculate_goal_clears_stale_scores(make_employee):
    employee = make_employee("Ali", team=None)
    goal = Goal.objects.create(
        assigned_to=employee, title="Review",
        metrics={"weekly_sales": 10, "total_score": 10, "isPerformerOfTheWeek": True},
    )

    assert recalculate_goal(goal) is True
    goal.refresh_from_db()
    assert goal.metrics == {"weekly_sales": 10}


def test_goal_dates_are_checked_by_the_database(sales_goal):
    with pytest.raises(IntegrityError), transaction.atomic():
        Goal.objects.filter(pk=sales_goal.pk).update(
            start_date=datetime.date(2024, 5, 10), deadline=datetime.date(2024, 5, 1),
        )
