from __future__ import annotations

import pytest

from hrdash.data import RosterStore
from hrdash.metrics_compensation import compute_compensation
from hrdash.metrics_overview import attrition_rate, compute_charts, compute_kpis, compute_overview
from hrdash.metrics_probation import compute_probation
from hrdash.metrics_workforce import TENURE_BUCKETS, compute_age_buckets, compute_tenure
from hrdash.payload import RosterPayload

from conftest import NOW


@pytest.fixture
def empty_store() -> RosterStore:
    s = RosterStore()
    s.load(RosterPayload.model_validate({"employees": []}), NOW)
    return s


def test_kpis(store):
    kpis = compute_kpis(store)
    assert kpis["total"] == 5
    assert kpis["active"] == 4
    assert kpis["inactive"] == 1
    assert kpis["probation"] == 2
    assert kpis["attrition_rate"] == 20.0
    assert kpis["attrition_display"] == "20.0%"


def test_probation_ending_this_month_ignores_year(store):
    # E002 ends 2024-03-20, E005 ends 2025-03-10; both match month 3.
    assert compute_kpis(store)["probation_ending_month"] == 2


def test_birthdays(store):
    kpis = compute_kpis(store)
    assert kpis["birthdays_today"] == 1
    assert kpis["birthdays_month"] == 2


def test_attrition_on_empty_roster_is_a_sentinel(empty_store):
    kpis = compute_kpis(empty_store)
    assert kpis["total"] == 0
    assert kpis["attrition_rate"] is None
    assert kpis["attrition_display"] == "N/A"
    assert attrition_rate(0, 0) is None


def test_tenure_buckets_partition_employees_with_joining_date(store):
    tenure = compute_tenure(store)
    assert tenure == {"0_3": 1, "3_12": 1, "12_24": 1, "24p": 1}
    with_join = sum(1 for e in store.employees if e.joined_at is not None)
    assert sum(tenure.values()) == with_join


def test_tenure_bucket_boundaries():
    first, second, third, last = TENURE_BUCKETS
    assert first.contains(-2) and first.contains(2)
    assert second.contains(3) and not second.contains(12)
    assert third.contains(12) and third.contains(23)
    assert last.contains(24)
    assert not any(b.contains(None) for b in TENURE_BUCKETS)


def test_age_buckets_use_year_difference(store):
    assert compute_age_buckets(store) == {"<25": 1, "25-34": 1, "35-44": 1, "45+": 1}


def test_compensation(store):
    comp = compute_compensation(store)
    assert comp["total_payroll"] == pytest.approx(545000)
    assert comp["avg_salary"] == 109000
    assert [r["country"] for r in comp["by_country"]] == ["Nepal", "Australia", "India"]
    nepal = comp["by_country"][0]
    assert nepal["count"] == 3
    assert nepal["payroll"] == pytest.approx(285000)


def test_compensation_on_empty_roster(empty_store):
    comp = compute_compensation(empty_store)
    assert comp["total_payroll"] == 0
    assert comp["avg_salary"] is None
    assert comp["by_country"] == []


def test_probation_rows(store):
    rows = compute_probation(store)
    assert [r["id"] for r in rows] == ["E002", "E005"]
    assert rows[0]["probation_end"] == "2024-03-20"
    assert rows[0]["days_left"] == 19


def test_charts_are_built_from_labels_and_values(store):
    charts = compute_charts(store)
    assert set(charts) == {"dept", "gender", "age", "tenure"}
    dept_rows = next(iter(charts["dept"]["datasets"].values()))
    assert [r["label"] for r in dept_rows] == ["Engineering", "Design", "Operations"]
    assert [r["value"] for r in dept_rows] == [2, 2, 1]
    tenure_rows = next(iter(charts["tenure"]["datasets"].values()))
    assert [r["label"] for r in tenure_rows] == [b.label for b in TENURE_BUCKETS]


def test_overview_bundles_everything(store):
    overview = compute_overview(store)
    assert overview["evaluated_at"] == NOW.isoformat()
    assert overview["kpis"]["total"] == 5
    assert overview["breakdowns"]["by_gender"] == {"F": 3, "M": 2}
