from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

import pandas as pd

from hrdash.charts import bar_chart, doughnut_chart, to_vega_spec
from hrdash.data import (
    STATUS_ACTIVE,
    STATUS_INACTIVE,
    STATUS_PROBATION,
    RosterStore,
    format_percent,
    round_half_up,
)
from hrdash.metrics_workforce import TENURE_BUCKETS, compute_age_buckets, compute_tenure


def attrition_rate(inactive: int, total: int) -> Optional[float]:
    """Inactive share in percent, one decimal; None on an empty roster."""
    if not total:
        return None
    return round_half_up(inactive / total * 100, 1)


def compute_kpis(store: RosterStore, now: Optional[datetime] = None) -> Dict[str, Any]:
    now = now or store.evaluated_at or datetime.now()
    frame = store.frame
    status = frame["status"]

    total = int(len(frame))
    active = int(status.isin([STATUS_ACTIVE, STATUS_PROBATION]).sum())
    inactive = int((status == STATUS_INACTIVE).sum())
    on_probation = status == STATUS_PROBATION

    # Month only; an end date in the same month of another year still counts.
    end_month = pd.to_datetime(frame["probation_end_at"], errors="coerce").dt.month
    probation_ending = int((on_probation & (end_month == now.month)).sum())

    bday_month = frame["birthday_month"] == now.month
    bday_today = bday_month & (frame["birthday_day"] == now.day)

    attrition = attrition_rate(inactive, total)
    return {
        "total": total,
        "active": active,
        "inactive": inactive,
        "attrition_rate": attrition,
        "attrition_display": format_percent(attrition),
        "probation": int(on_probation.sum()),
        "probation_ending_month": probation_ending,
        "birthdays_today": int(bday_today.sum()),
        "birthdays_month": int(bday_month.sum()),
    }


def compute_charts(store: RosterStore, now: Optional[datetime] = None) -> Dict[str, Any]:
    dept = store.breakdowns.get("by_department") or {}
    gender = store.breakdowns.get("by_gender") or {}
    ages = compute_age_buckets(store, now)
    tenure = compute_tenure(store)
    return {
        "dept": to_vega_spec(bar_chart(list(dept.keys()), list(dept.values()), title="Headcount by Department")),
        "gender": to_vega_spec(doughnut_chart(list(gender.keys()), list(gender.values()), title="Gender Split")),
        "age": to_vega_spec(bar_chart(list(ages.keys()), list(ages.values()), title="Age Distribution")),
        "tenure": to_vega_spec(
            bar_chart([b.label for b in TENURE_BUCKETS], [tenure[b.key] for b in TENURE_BUCKETS], title="Tenure")
        ),
    }


def compute_overview(store: RosterStore, now: Optional[datetime] = None) -> Dict[str, Any]:
    now = now or store.evaluated_at or datetime.now()
    return {
        "evaluated_at": now.isoformat(),
        "kpis": compute_kpis(store, now),
        "tenure": compute_tenure(store),
        "age": compute_age_buckets(store, now),
        "breakdowns": store.breakdowns,
    }
