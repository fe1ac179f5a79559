from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from hrdash.data import STATUS_PROBATION, RosterStore, format_date, round_half_up

_SECONDS_PER_DAY = 24 * 60 * 60


def days_until(end: Optional[datetime], now: datetime) -> Optional[int]:
    if end is None:
        return None
    days = round_half_up((end - now).total_seconds() / _SECONDS_PER_DAY)
    return int(days) if days is not None else None


def compute_probation(store: RosterStore, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
    """One row per employee currently on probation, roster order."""
    now = now or store.evaluated_at or datetime.now()
    return [
        {
            "id": e.id,
            "name": e.name,
            "department": e.department,
            "probation_end": format_date(e.probation_end_at),
            "days_left": days_until(e.probation_end_at, now),
        }
        for e in store.employees
        if e.status == STATUS_PROBATION
    ]
