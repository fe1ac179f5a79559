"""Named display regions of the hosting page.

Slot names mirror the element ids the dashboard markup provides, so a front end
can map `page.text["kpiTotal"]` straight onto its KPI tile.
"""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

# KPI tiles
KPI_TOTAL = "kpiTotal"
KPI_ACTIVE = "kpiActive"
KPI_INACTIVE = "kpiInactive"
KPI_ATTRITION = "kpiAttr"
KPI_PROBATION = "kpiProbation"
KPI_PROBATION_ENDING = "kpiProbEndingMonth"
KPI_BDAY_TOTAL = "kpiBdayTotal"
KPI_BDAY_TODAY = "kpiBdayToday"
KPI_BDAY_MONTH = "kpiBdayMonth"

# Tenure cards
TENURE_0_3 = "tenure0_3"
TENURE_3_12 = "tenure3_12"
TENURE_12_24 = "tenure12_24"
TENURE_24P = "tenure24p"

# Compensation
TOTAL_PAYROLL = "totalPayrollNPR"
AVG_SALARY = "avgSalaryNPR"

# Tables
PEOPLE_TABLE = "employeeTableBody"
PROBATION_TABLE = "probationTableBody"
COUNTRY_PAYROLL_TABLE = "countryPayrollBody"

# Charts
DEPT_CHART = "deptChart"
GENDER_CHART = "genderChart"
AGE_CHART = "ageChart"
TENURE_CHART = "tenureChart"

# Filter controls
FILTER_STATUS = "filterStatus"
FILTER_DEPT = "filterDept"
FILTER_COUNTRY = "filterCountry"

Column = Tuple[str, str]


@dataclass
class Page:
    text: Dict[str, str] = field(default_factory=dict)
    tables: Dict[str, List[Dict[str, Any]]] = field(default_factory=dict)
    columns: Dict[str, List[Column]] = field(default_factory=dict)
    charts: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    options: Dict[str, List[str]] = field(default_factory=dict)

    def set_text(self, slot: str, value: object) -> None:
        self.text[slot] = str(value)

    def replace_rows(self, slot: str, rows: Sequence[Dict[str, Any]], columns: Sequence[Column]) -> None:
        """Full replacement; a table slot never accumulates across calls."""
        self.tables[slot] = [dict(r) for r in rows]
        self.columns[slot] = list(columns)

    def set_chart(self, slot: str, spec: Dict[str, Any]) -> None:
        self.charts[slot] = spec

    def set_options(self, slot: str, values: Sequence[str]) -> None:
        self.options[slot] = list(values)

    def rows(self, slot: str) -> List[Dict[str, Any]]:
        return self.tables.get(slot, [])

    def html(self, slot: str) -> str:
        """`<tr>` markup for a table slot; every cell value is escaped."""
        out: List[str] = []
        for row in self.rows(slot):
            cells = []
            for key, _label in self.columns.get(slot, []):
                value = row.get(key)
                text = html.escape("" if value is None else str(value))
                if key == "status":
                    css = html.escape(str(value or "").lower(), quote=True)
                    text = f'<span class="status-pill status-{css}">{text}</span>'
                cells.append(f"<td>{text}</td>")
            out.append("<tr>" + "".join(cells) + "</tr>")
        return "".join(out)

    def clear(self) -> None:
        self.text.clear()
        self.tables.clear()
        self.columns.clear()
        self.charts.clear()
        self.options.clear()

    def is_blank(self) -> bool:
        return not (self.text or self.tables or self.charts or self.options)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "text": dict(self.text),
            "tables": {slot: list(rows) for slot, rows in self.tables.items()},
            "columns": {slot: [list(c) for c in cols] for slot, cols in self.columns.items()},
            "charts": dict(self.charts),
            "options": {slot: list(values) for slot, values in self.options.items()},
        }
