from __future__ import annotations

from hrdash import page as slots
from hrdash.metrics_compensation import compute_compensation
from hrdash.metrics_overview import compute_kpis
from hrdash.page import Page
from hrdash.render import (
    PEOPLE_COLUMNS,
    people_row,
    populate_filters,
    render_compensation,
    render_kpis,
    render_people_table,
    render_tenure,
)


def test_render_people_table_twice_does_not_accumulate(store):
    page = Page()
    render_people_table(page, store.employees)
    render_people_table(page, store.employees)
    assert len(page.rows(slots.PEOPLE_TABLE)) == len(store.employees)
    assert page.html(slots.PEOPLE_TABLE).count("<tr>") == len(store.employees)


def test_people_html_escapes_interpolated_text(store):
    page = Page()
    render_people_table(page, store.employees)
    markup = page.html(slots.PEOPLE_TABLE)
    assert "<script>" not in markup
    assert "Bob &lt;script&gt;alert(1)&lt;/script&gt;" in markup
    assert '<span class="status-pill status-probation">Probation</span>' in markup


def test_people_row_formats_dates_and_salary(store):
    row = people_row(store.employees[0])
    assert list(row) == [key for key, _ in PEOPLE_COLUMNS]
    assert row["joining_date"] == "2023-01-15"
    assert row["probation_end"] == "-"
    assert row["salary_base"] == "1,35,000"


def test_render_kpis_fills_tiles(store):
    page = Page()
    render_kpis(page, compute_kpis(store))
    assert page.text[slots.KPI_TOTAL] == "5"
    assert page.text[slots.KPI_ATTRITION] == "20.0%"
    assert page.text[slots.KPI_BDAY_TOTAL] == page.text[slots.KPI_BDAY_MONTH] == "2"
    assert page.text[slots.KPI_BDAY_TODAY] == "1"


def test_render_tenure_defaults_missing_buckets_to_zero():
    page = Page()
    render_tenure(page, {"0_3": 4})
    assert page.text[slots.TENURE_0_3] == "4"
    assert page.text[slots.TENURE_24P] == "0"


def test_render_compensation(store):
    page = Page()
    render_compensation(page, compute_compensation(store))
    assert page.text[slots.TOTAL_PAYROLL] == "5,45,000"
    assert page.text[slots.AVG_SALARY] == "1,09,000"
    assert page.rows(slots.COUNTRY_PAYROLL_TABLE)[0] == {"country": "Nepal", "count": 3, "payroll": "2,85,000"}


def test_populate_filters_replaces_options():
    page = Page()
    options = {"status": ["Active"], "department": ["Design"], "country": ["Nepal"]}
    populate_filters(page, options)
    populate_filters(page, options)
    assert page.options[slots.FILTER_DEPT] == ["Design"]


def test_snapshot_is_plain_data(store):
    page = Page()
    render_people_table(page, store.employees[:1])
    snap = page.snapshot()
    assert snap["tables"][slots.PEOPLE_TABLE][0]["id"] == "E001"
    assert snap["columns"][slots.PEOPLE_TABLE][0] == ["id", "ID"]
