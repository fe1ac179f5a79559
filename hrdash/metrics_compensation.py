from __future__ import annotations

from typing import Any, Dict

import pandas as pd

from hrdash.data import RosterStore, round_half_up

UNKNOWN_COUNTRY = "Unknown"


def compute_compensation(store: RosterStore) -> Dict[str, Any]:
    frame = store.frame
    salary = pd.to_numeric(frame["salary_base"], errors="coerce")

    count = int(len(frame))
    total_payroll = float(salary.sum()) if count else 0.0
    avg_salary = round_half_up(total_payroll / count) if count else None

    by_country = (
        frame.assign(salary_base=salary, country=frame["country"].fillna(UNKNOWN_COUNTRY))
        .groupby("country", sort=False)
        .agg(count=("id", "size"), payroll=("salary_base", "sum"))
        .reset_index()
    )

    return {
        "base_currency": store.fx.base_currency,
        "total_payroll": total_payroll,
        "avg_salary": int(avg_salary) if avg_salary is not None else None,
        "by_country": [
            {"country": str(r["country"]), "count": int(r["count"]), "payroll": float(r["payroll"])}
            for r in by_country.to_dict(orient="records")
        ],
    }
