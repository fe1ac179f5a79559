from __future__ import annotations

import logging

from hrdash import page as slots
from hrdash.config import DashboardConfig
from hrdash.dashboard import Dashboard

from conftest import API_URL, NOW, SAMPLE_PAYLOAD, mock_client


def test_load_renders_every_region(dashboard):
    page = dashboard.page
    assert dashboard.loaded
    assert page.text[slots.KPI_TOTAL] == "5"
    assert page.text[slots.KPI_PROBATION_ENDING] == "2"
    assert page.text[slots.TENURE_12_24] == "1"
    assert set(page.charts) == {slots.DEPT_CHART, slots.GENDER_CHART, slots.AGE_CHART, slots.TENURE_CHART}
    assert len(page.rows(slots.PEOPLE_TABLE)) == 5
    assert len(page.rows(slots.PROBATION_TABLE)) == 2
    assert page.options[slots.FILTER_COUNTRY] == ["Nepal", "Australia", "India"]
    assert dashboard.views.active_tab == "overview"


def test_failed_load_is_logged_and_leaves_page_blank(caplog):
    dash = Dashboard(DashboardConfig(api_url=API_URL), clock=lambda: NOW, client=mock_client(status_code=500, body={}))
    with caplog.at_level(logging.ERROR, logger="hrdash.dashboard"):
        assert dash.load() is False
    assert "Dashboard load error" in caplog.text
    assert not dash.loaded
    assert dash.page.is_blank()
    assert dash.filters is None and dash.views is None


def test_filter_changes_do_not_touch_charts(dashboard):
    charts_before = dict(dashboard.page.charts)
    dashboard.filters.update(search="alice")
    assert dashboard.page.charts == charts_before
    assert [r["id"] for r in dashboard.page.rows(slots.PEOPLE_TABLE)] == ["E001"]


def test_reload_rebuilds_roster():
    dash = Dashboard(clock=lambda: NOW)
    assert dash.load_payload(SAMPLE_PAYLOAD)
    dash.filters.update(status="Inactive")
    assert dash.load_payload({"employees": SAMPLE_PAYLOAD["employees"][:2], "breakdowns": {}})
    assert len(dash.store) == 2
    assert dash.filters.state.is_empty()
    assert len(dash.page.rows(slots.PEOPLE_TABLE)) == 2


def test_load_payload_rejects_malformed_data():
    dash = Dashboard(clock=lambda: NOW)
    assert dash.load_payload({"employees": "nope"}) is False
    assert dash.page.is_blank()


def test_snapshot(dashboard):
    snap = dashboard.snapshot()
    assert snap["loaded"] is True
    assert snap["evaluated_at"] == NOW.isoformat()
    assert snap["view"]["active_tab"] == "overview"
    assert snap["filters"] == {"search": "", "status": "", "department": "", "country": ""}
