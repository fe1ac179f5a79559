from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

import pandas as pd

from hrdash.data import STATUSES, EmployeeView, RosterStore
from hrdash.page import Page
from hrdash.render import render_people_table


@dataclass(frozen=True)
class FilterState:
    search: str = ""
    status: str = ""
    department: str = ""
    country: str = ""

    def is_empty(self) -> bool:
        return not (self.search or self.status or self.department or self.country)


def _as_str(value: object) -> str:
    if value is None:
        return ""
    return str(value)


def normalize_filters(raw: Optional[dict] = None) -> FilterState:
    raw = raw or {}
    return FilterState(
        search=_as_str(raw.get("search")),
        status=_as_str(raw.get("status")).strip(),
        department=_as_str(raw.get("department")).strip(),
        country=_as_str(raw.get("country")).strip(),
    )


def _contains(series: pd.Series, needle: str) -> pd.Series:
    return series.fillna("").astype(str).str.lower().str.contains(needle, regex=False)


def filter_frame(frame: pd.DataFrame, state: FilterState) -> pd.DataFrame:
    """Search -> status -> department -> country; empty fields are skipped."""
    filtered = frame

    if state.search:
        s = state.search.lower()
        mask = _contains(filtered["name"], s) | _contains(filtered["id"], s) | _contains(filtered["designation"], s)
        filtered = filtered[mask]

    if state.status:
        filtered = filtered[filtered["status"] == state.status]

    if state.department:
        filtered = filtered[filtered["department"] == state.department]

    if state.country:
        filtered = filtered[filtered["country"] == state.country]

    return filtered


def filter_employees(store: RosterStore, state: FilterState) -> List[EmployeeView]:
    return store.select(filter_frame(store.frame, state).index)


def _first_seen(values: pd.Series) -> List[str]:
    return [str(v) for v in values.dropna().drop_duplicates().tolist() if str(v) != ""]


def compute_filter_options(store: RosterStore) -> Dict[str, List[str]]:
    frame = store.frame
    return {
        "status": list(STATUSES),
        "department": _first_seen(frame["department"]),
        "country": _first_seen(frame["country"]),
    }


class FilterController:
    """Holds the live FilterState and re-renders the people table on change."""

    def __init__(self, store: RosterStore, page: Page, state: Optional[FilterState] = None) -> None:
        self._store = store
        self._page = page
        self._state = state or FilterState()

    @property
    def state(self) -> FilterState:
        return self._state

    @property
    def store(self) -> RosterStore:
        return self._store

    @property
    def page(self) -> Page:
        return self._page

    def update(self, **changes: str) -> List[EmployeeView]:
        unknown = set(changes) - set(asdict(self._state))
        if unknown:
            raise TypeError(f"unknown filter fields: {sorted(unknown)}")
        self._state = normalize_filters({**asdict(self._state), **changes})
        return self.apply()

    def reset(self) -> List[EmployeeView]:
        self._state = FilterState()
        return self.apply()

    def apply(self) -> List[EmployeeView]:
        rows = filter_employees(self._store, self._state)
        render_people_table(self._page, rows)
        return rows

    def as_dict(self) -> Dict[str, str]:
        return asdict(self._state)
