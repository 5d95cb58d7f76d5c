import datetime

import pytest
from django.core.exceptions import ValidationError
from django.utils import timezone

from performance.models import KpiRecord
from performance.services.kpis import kpis_by_team, kpis_for_team, record_kpi, update_kpi
from performance.services.scoring import TeamCategory

pytestmark = pytest.mark.django_db


@pytest.fixture
def staff(make_employee):
    return {
        "mona": make_employee("Mona", team="Sales - Cairo"),
        "omar": make_employee("Omar", team="Ads"),
        "ali": make_employee("Ali", team=None),
    }


def test_record_kpi_defaults_to_today(staff):
    record = record_kpi(employee=staff["mona"], metric=" weekly_sales ", value="1250.5")

    record.refresh_from_db()
    assert record.metric == "weekly_sales"
    assert record.value == 1250.5
    assert record.recorded_at == timezone.localdate()


def test_record_kpi_rejects_bad_input(staff):
    with pytest.raises(ValidationError):
        record_kpi(employee=staff["mona"], metric="  ", value=1)
    with pytest.raises(ValidationError):
        record_kpi(employee=staff["mona"], metric="aov", value="lots")
    assert KpiRecord.objects.count() == 0


def test_update_kpi(staff):
    record = record_kpi(employee=staff["mona"], metric="aov", value=40)
    update_kpi(record, value=55, recorded_at=datetime.date(2024, 10, 9))

    record.refresh_from_db()
    assert (record.value, record.recorded_at) == (55, datetime.date(2024, 10, 9))

    with pytest.raises(ValidationError):
        update_kpi(record, employee=staff["omar"])


def test_kpis_for_team_by_row_and_by_category(staff, make_team):
    mona_sales = record_kpi(employee=staff["mona"], metric="weekly_sales", value=900)
    record_kpi(employee=staff["omar"], metric="weekly_acos_percent", value=12)

    assert list(kpis_for_team(staff["mona"].team)) == [mona_sales]
    assert list(kpis_for_team(TeamCategory.SALES)) == [mona_sales]
    assert list(kpis_for_team("sales")) == [mona_sales]
    assert not kpis_for_team(make_team("Sales - Giza")).exists()


def test_kpis_by_team_groups_and_orders(staff):
    record_kpi(employee=staff["omar"], metric="aov", value=30)
    record_kpi(employee=staff["mona"], metric="aov", value=50)
    record_kpi(employee=staff["ali"], metric="aov", value=10)

    grouped = kpis_by_team()

    assert list(grouped) == ["Ads", "Sales - Cairo", "Unassigned"]
    assert grouped["Sales - Cairo"][0]["employee"]["name"] == "Mona"
    assert grouped["Unassigned"][0]["value"] == 10

    assert list(kpis_by_team(TeamCategory.ADS)) == ["Ads"]
