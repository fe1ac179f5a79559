import pandas as pd
import streamlit as st
from contextlib import contextmanager
from typing import Optional

from hrdash import page as slots
from hrdash.config import config_from_env
from hrdash.dashboard import Dashboard
from hrdash.page import Page
from hrdash.views import TENURE_CARDS


TAB_TITLES = {
    "overview": "Overview",
    "people": "People",
    "probation": "Probation",
    "compensation": "Compensation",
}


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .app-top-bar {padding: 6px 0 4px;border-bottom: 1px solid #e5e7eb;margin-bottom: 10px;}
        .app-top-bar .breadcrumb {color: #6b7280;font-size: 0.9rem;margin-bottom: 2px;}
        .app-top-bar .page-title {font-size: 1.4rem;font-weight: 700;color: #111827;}
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-title {font-weight: 600;font-size: 1.0rem;color: #111827;}
        .status-pill {border-radius: 10px;padding: 2px 8px;font-size: 0.8rem;}
        .status-active {background: #dcfce7;color: #166534;}
        .status-probation {background: #fef9c3;color: #854d0e;}
        .status-inactive {background: #fee2e2;color: #991b1b;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str):
    container = st.container(border=True)
    container.markdown(f"<div class='card-title'>{title}</div>", unsafe_allow_html=True)
    with container:
        yield container


def render_page_header(title: str, breadcrumb: str, export_df: Optional[pd.DataFrame] = None, export_name: str = "export.csv"):
    inject_base_styles()
    c1, c2 = st.columns([8, 2])
    with c1:
        st.markdown(
            f"<div class='app-top-bar'><div class='breadcrumb'>{breadcrumb}</div><div class='page-title'>{title}</div></div>",
            unsafe_allow_html=True,
        )
    with c2:
        if st.button("Reload"):
            st.session_state.pop("dashboard", None)
            st.rerun()
        if export_df is not None and not export_df.empty:
            st.download_button(
                "Export CSV",
                data=export_df.to_csv(index=False).encode("utf-8"),
                file_name=export_name,
                mime="text/csv",
            )


def table_frame(page: Page, slot: str) -> pd.DataFrame:
    columns = page.columns.get(slot, [])
    df = pd.DataFrame(page.rows(slot), columns=[key for key, _ in columns])
    return df.rename(columns=dict(columns))


# ---------- Session ----------
def get_dashboard() -> Dashboard:
    dashboard = st.session_state.get("dashboard")
    if dashboard is None:
        dashboard = Dashboard(config_from_env())
        dashboard.load()
        st.session_state["dashboard"] = dashboard
        st.session_state["nav_tab"] = dashboard.views.active_tab if dashboard.views else None
    return dashboard


def on_nav_change():
    dash: Dashboard = st.session_state["dashboard"]
    dash.views.select(st.session_state["nav_tab"])


def on_filter_change():
    dash: Dashboard = st.session_state["dashboard"]
    dash.filters.update(
        search=st.session_state.get("filter_search", ""),
        status=st.session_state.get("filter_status", ""),
        department=st.session_state.get("filter_department", ""),
        country=st.session_state.get("filter_country", ""),
    )


def on_clear_filters():
    dash: Dashboard = st.session_state["dashboard"]
    dash.filters.reset()
    for key in ("filter_search", "filter_status", "filter_department", "filter_country"):
        st.session_state[key] = ""


def on_card_click(card_id: str):
    dash: Dashboard = st.session_state["dashboard"]
    dash.views.click_card(card_id)
    st.session_state["nav_tab"] = dash.views.active_tab
    # Status cards go through the shared filter controls; keep the widgets in sync.
    st.session_state["filter_status"] = dash.filters.state.status


# ---------- UI setup ----------
st.set_page_config(page_title="HR Dashboard", layout="wide")
inject_base_styles()
st.title("HR Dashboard")

dashboard = get_dashboard()
if not dashboard.loaded:
    # Load failures are only logged; the page stays blank.
    st.stop()

page = dashboard.page
views = dashboard.views

with st.sidebar:
    st.markdown("### Navigate")
    st.radio(
        "Navigate",
        options=list(views.tabs),
        format_func=lambda t: TAB_TITLES.get(t, t.title()),
        key="nav_tab",
        on_change=on_nav_change,
    )


def render_overview_page():
    render_page_header("Overview", "Home / Overview")
    with card("Headcount"):
        cols = st.columns(6)
        cols[0].metric("Total", page.text.get(slots.KPI_TOTAL, "-"))
        cols[1].metric("Active", page.text.get(slots.KPI_ACTIVE, "-"))
        cols[2].metric("Inactive", page.text.get(slots.KPI_INACTIVE, "-"))
        cols[3].metric("Attrition", page.text.get(slots.KPI_ATTRITION, "-"))
        cols[4].metric("Probation", page.text.get(slots.KPI_PROBATION, "-"))
        cols[5].metric("Probation ending (month)", page.text.get(slots.KPI_PROBATION_ENDING, "-"))
        btn_cols = st.columns(6)
        btn_cols[1].button("View active", key="btn_kpiActiveCard", on_click=on_card_click, args=("kpiActiveCard",))
        btn_cols[4].button("View probation", key="btn_kpiProbCard", on_click=on_card_click, args=("kpiProbCard",))

    with card("Birthdays"):
        cols = st.columns(2)
        cols[0].metric("This month", page.text.get(slots.KPI_BDAY_MONTH, "-"))
        cols[1].metric("Today", page.text.get(slots.KPI_BDAY_TODAY, "-"))

    with card("Tenure"):
        tenure_slots = [slots.TENURE_0_3, slots.TENURE_3_12, slots.TENURE_12_24, slots.TENURE_24P]
        tenure_labels = ["0–3 months", "3–12 months", "12–24 months", "24+ months"]
        cols = st.columns(4)
        for col, slot, label, card_id in zip(cols, tenure_slots, tenure_labels, TENURE_CARDS):
            col.metric(label, page.text.get(slot, "-"))
            col.button("View", key=f"btn_{card_id}", on_click=on_card_click, args=(card_id,))

    chart_cols = st.columns(2)
    with chart_cols[0]:
        with card("Department"):
            st.vega_lite_chart(page.charts.get(slots.DEPT_CHART), use_container_width=True)
        with card("Age"):
            st.vega_lite_chart(page.charts.get(slots.AGE_CHART), use_container_width=True)
    with chart_cols[1]:
        with card("Gender"):
            st.vega_lite_chart(page.charts.get(slots.GENDER_CHART), use_container_width=True)
        with card("Tenure"):
            st.vega_lite_chart(page.charts.get(slots.TENURE_CHART), use_container_width=True)


def render_people_page():
    people_df = table_frame(page, slots.PEOPLE_TABLE)
    render_page_header("People", "Home / People", export_df=people_df, export_name="people.csv")
    state = dashboard.filters.state
    for key, value in [
        ("filter_search", state.search),
        ("filter_status", state.status),
        ("filter_department", state.department),
        ("filter_country", state.country),
    ]:
        st.session_state.setdefault(key, value)

    cols = st.columns([3, 2, 2, 2])
    cols[0].text_input("Search name / ID / designation", key="filter_search", on_change=on_filter_change)
    cols[1].selectbox("Status", [""] + page.options.get(slots.FILTER_STATUS, []), key="filter_status", on_change=on_filter_change, format_func=lambda v: v or "All")
    cols[2].selectbox("Department", [""] + page.options.get(slots.FILTER_DEPT, []), key="filter_department", on_change=on_filter_change, format_func=lambda v: v or "All")
    cols[3].selectbox("Country", [""] + page.options.get(slots.FILTER_COUNTRY, []), key="filter_country", on_change=on_filter_change, format_func=lambda v: v or "All")
    st.button("Clear filters", key="btn_clear_filters", on_click=on_clear_filters)

    with card(f"Employees ({len(people_df)})"):
        st.dataframe(people_df, hide_index=True, use_container_width=True)


def render_probation_page():
    probation_df = table_frame(page, slots.PROBATION_TABLE)
    render_page_header("Probation", "Home / Probation", export_df=probation_df, export_name="probation.csv")
    with card("On probation"):
        if probation_df.empty:
            st.info("No employees on probation.")
        else:
            st.dataframe(probation_df, hide_index=True, use_container_width=True)


def render_compensation_page():
    country_df = table_frame(page, slots.COUNTRY_PAYROLL_TABLE)
    render_page_header("Compensation", "Home / Compensation", export_df=country_df, export_name="payroll_by_country.csv")
    with card("Payroll (NPR)"):
        cols = st.columns(2)
        cols[0].metric("Total payroll", page.text.get(slots.TOTAL_PAYROLL, "-"))
        cols[1].metric("Average salary", page.text.get(slots.AVG_SALARY, "-"))
    with card("By country"):
        st.dataframe(country_df, hide_index=True, use_container_width=True)


PAGES = {
    "overview": render_overview_page,
    "people": render_people_page,
    "probation": render_probation_page,
    "compensation": render_compensation_page,
}

renderer = PAGES.get(views.active_tab)
if renderer is None:
    st.info(f"No view for tab '{views.active_tab}'.")
else:
    renderer()
