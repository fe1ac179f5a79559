"""Write computed values into the named regions of a `Page`.

Renderers hold no filtering logic. Table renderers replace the whole slot on
every call; charts are rendered once per load.
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from hrdash import page as slots
from hrdash.data import EmployeeView, format_date, format_number
from hrdash.page import Page

PEOPLE_COLUMNS = [
    ("id", "ID"),
    ("name", "Name"),
    ("designation", "Designation"),
    ("department", "Department"),
    ("country", "Country"),
    ("status", "Status"),
    ("joining_date", "Joined"),
    ("probation_end", "Probation End"),
    ("salary_base", "Salary (NPR)"),
    ("salary_fx", "Currency"),
]

PROBATION_COLUMNS = [
    ("name", "Name"),
    ("department", "Department"),
    ("probation_end", "Probation End"),
    ("days_left", "Days Left"),
]

COUNTRY_PAYROLL_COLUMNS = [
    ("country", "Country"),
    ("count", "Employees"),
    ("payroll", "Payroll (NPR)"),
]

_TENURE_SLOTS = {
    "0_3": slots.TENURE_0_3,
    "3_12": slots.TENURE_3_12,
    "12_24": slots.TENURE_12_24,
    "24p": slots.TENURE_24P,
}


def people_row(e: EmployeeView) -> Dict[str, Any]:
    return {
        "id": e.id,
        "name": e.name,
        "designation": e.designation,
        "department": e.department,
        "country": e.country,
        "status": e.status,
        "joining_date": format_date(e.joined_at),
        "probation_end": format_date(e.probation_end_at),
        "salary_base": format_number(e.salary_base),
        "salary_fx": e.salary_fx,
    }


def render_kpis(page: Page, kpis: Dict[str, Any]) -> None:
    page.set_text(slots.KPI_TOTAL, kpis["total"])
    page.set_text(slots.KPI_ACTIVE, kpis["active"])
    page.set_text(slots.KPI_INACTIVE, kpis["inactive"])
    page.set_text(slots.KPI_ATTRITION, kpis["attrition_display"])
    page.set_text(slots.KPI_PROBATION, kpis["probation"])
    page.set_text(slots.KPI_PROBATION_ENDING, kpis["probation_ending_month"])

    # The combined birthday card headlines the month count.
    page.set_text(slots.KPI_BDAY_TOTAL, kpis["birthdays_month"])
    page.set_text(slots.KPI_BDAY_TODAY, kpis["birthdays_today"])
    page.set_text(slots.KPI_BDAY_MONTH, kpis["birthdays_month"])


def render_tenure(page: Page, tenure: Dict[str, int]) -> None:
    for key, slot in _TENURE_SLOTS.items():
        page.set_text(slot, tenure.get(key, 0))


def render_charts(page: Page, charts: Dict[str, Dict[str, Any]]) -> None:
    page.set_chart(slots.DEPT_CHART, charts["dept"])
    page.set_chart(slots.GENDER_CHART, charts["gender"])
    page.set_chart(slots.AGE_CHART, charts["age"])
    page.set_chart(slots.TENURE_CHART, charts["tenure"])


def render_probation_table(page: Page, rows: Sequence[Dict[str, Any]]) -> None:
    page.replace_rows(slots.PROBATION_TABLE, rows, PROBATION_COLUMNS)


def render_people_table(page: Page, employees: Sequence[EmployeeView]) -> None:
    page.replace_rows(slots.PEOPLE_TABLE, [people_row(e) for e in employees], PEOPLE_COLUMNS)


def populate_filters(page: Page, options: Dict[str, List[str]]) -> None:
    page.set_options(slots.FILTER_STATUS, options.get("status", []))
    page.set_options(slots.FILTER_DEPT, options.get("department", []))
    page.set_options(slots.FILTER_COUNTRY, options.get("country", []))


def render_compensation(page: Page, comp: Dict[str, Any]) -> None:
    page.set_text(slots.TOTAL_PAYROLL, format_number(comp["total_payroll"]))
    page.set_text(slots.AVG_SALARY, format_number(comp["avg_salary"]))
    rows = [
        {"country": r["country"], "count": r["count"], "payroll": format_number(r["payroll"])}
        for r in comp["by_country"]
    ]
    page.replace_rows(slots.COUNTRY_PAYROLL_TABLE, rows, COUNTRY_PAYROLL_COLUMNS)
