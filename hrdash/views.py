from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from hrdash.config import DEFAULT_TABS, PEOPLE_TAB
from hrdash.data import STATUS_ACTIVE, STATUS_PROBATION, EmployeeView
from hrdash.filters import FilterController
from hrdash.metrics_workforce import tenure_bucket
from hrdash.render import render_people_table

STATUS_CARDS: Dict[str, str] = {
    "kpiActiveCard": STATUS_ACTIVE,
    "kpiProbCard": STATUS_PROBATION,
}

TENURE_CARDS: Dict[str, str] = {
    "tenure0_3_card": "0_3",
    "tenure3_12_card": "3_12",
    "tenure12_24_card": "12_24",
    "tenure24p_card": "24p",
}

CARDS = tuple(STATUS_CARDS) + tuple(TENURE_CARDS)


class ViewController:
    """Single active tab; cards jump to the people tab with a preset filter."""

    def __init__(self, filters: FilterController, tabs: Sequence[str] = DEFAULT_TABS, active: Optional[str] = None) -> None:
        if not tabs:
            raise ValueError("at least one tab is required")
        if PEOPLE_TAB not in tabs:
            raise ValueError(f"tabs must include {PEOPLE_TAB!r}: {tuple(tabs)!r}")
        self._filters = filters
        self._tabs = tuple(tabs)
        self._active = self._tabs[0]
        if active is not None:
            self.select(active)

    @property
    def tabs(self) -> tuple:
        return self._tabs

    @property
    def active_tab(self) -> str:
        return self._active

    @property
    def filters(self) -> FilterController:
        return self._filters

    def select(self, tab: str) -> str:
        if tab not in self._tabs:
            raise ValueError(f"unknown tab: {tab!r}")
        self._active = tab
        return tab

    def panels(self) -> Dict[str, bool]:
        return {tab: tab == self._active for tab in self._tabs}

    def click_card(self, card_id: str) -> List[EmployeeView]:
        if card_id in STATUS_CARDS:
            self.select(PEOPLE_TAB)
            return self._filters.update(status=STATUS_CARDS[card_id])

        if card_id in TENURE_CARDS:
            self.select(PEOPLE_TAB)
            # Tenure cards bypass FilterState: the filter controls keep their values.
            bucket = tenure_bucket(TENURE_CARDS[card_id])
            rows = [e for e in self._filters.store.employees if bucket.contains(e.tenure_months)]
            render_people_table(self._filters.page, rows)
            return rows

        raise ValueError(f"unknown card: {card_id!r}")

    def as_dict(self) -> Dict[str, object]:
        return {"active_tab": self._active, "panels": self.panels()}
