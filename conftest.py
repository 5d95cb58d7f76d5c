import pytest

from hr.models import Branch, Employee, Team


@pytest.fixture
def make_user(django_user_model):
    counter = {"n": 0}

    def _make(email=None, role="staff", **extra):
        counter["n"] += 1
        email = email or f"user{counter['n']}@example.com"
        return django_user_model.objects.create_user(email=email, password="pass-1234", role=role, **extra)

    return _make


@pytest.fixture
def branch(db):
    return Branch.objects.create(name="Cairo", location="Nasr City")


@pytest.fixture
def make_team(db, branch):
    def _make(name="Sales", **extra):
        extra.setdefault("branch", branch)
        return Team.objects.create(name=name, **extra)

    return _make


@pytest.fixture
def make_employee(db, branch, make_team, make_user):
    teams = {}

    def _make(name="Mona", team="Sales", with_user=True, **extra):
        if team and team not in teams:
            teams[team] = make_team(team)
        extra.setdefault("branch", branch)
        return Employee.objects.create(
            name=name,
            team=teams.get(team) if team else None,
            user=make_user() if with_user else None,
            **extra,
        )

    return _make


@pytest.fixture
def leader(make_user):
    return make_user("leader@example.com", role="leader")


@pytest.fixture
def admin_user_role(make_user):
    return make_user("admin@example.com", role="admin")


@pytest.fixture
def sales_targets():
    return {
        "weekly_sales_target": 1000,
        "target_cost_percent": 10,
        "aov_target": 50,
    }


@pytest.fixture
def sales_achievements():
    return {
        "weekly_sales": 1000,
        "weekly_spend": 100,
        "aov": 50,
    }
