from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional

import httpx

from hrdash.config import DashboardConfig
from hrdash.data import RosterStore
from hrdash.fetch import FetchOrParseFailure, fetch_payload, parse_payload
from hrdash.filters import FilterController, compute_filter_options
from hrdash.metrics_compensation import compute_compensation
from hrdash.metrics_overview import compute_charts, compute_kpis
from hrdash.metrics_probation import compute_probation
from hrdash.metrics_workforce import compute_tenure
from hrdash.page import Page
from hrdash.payload import RosterPayload
from hrdash.render import (
    populate_filters,
    render_charts,
    render_compensation,
    render_kpis,
    render_probation_table,
    render_tenure,
)
from hrdash.views import ViewController


logger = logging.getLogger(__name__)


class Dashboard:
    """Fetch -> normalize -> aggregate/render once -> interactive controllers."""

    def __init__(
        self,
        config: Optional[DashboardConfig] = None,
        *,
        page: Optional[Page] = None,
        clock: Callable[[], datetime] = datetime.now,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.config = config or DashboardConfig()
        self.page = page or Page()
        self.store = RosterStore(self.config.fx)
        self._clock = clock
        self._client = client
        self.filters: Optional[FilterController] = None
        self.views: Optional[ViewController] = None

    @property
    def loaded(self) -> bool:
        return self.store.loaded and self.filters is not None

    def load(self) -> bool:
        logger.info("Loading HR dashboard")
        try:
            payload = fetch_payload(self.config.api_url, client=self._client, timeout=self.config.timeout)
        except FetchOrParseFailure:
            logger.exception("Dashboard load error")
            return False
        self._render(payload)
        return True

    def load_payload(self, data: Any) -> bool:
        try:
            payload = data if isinstance(data, RosterPayload) else parse_payload(data)
        except FetchOrParseFailure:
            logger.exception("Dashboard load error")
            return False
        self._render(payload)
        return True

    def _render(self, payload: RosterPayload) -> None:
        self.store.load(payload, self._clock())
        now = self.store.evaluated_at
        self.page.clear()

        render_kpis(self.page, compute_kpis(self.store, now))
        render_tenure(self.page, compute_tenure(self.store))
        render_charts(self.page, compute_charts(self.store, now))
        render_probation_table(self.page, compute_probation(self.store, now))
        populate_filters(self.page, compute_filter_options(self.store))
        render_compensation(self.page, compute_compensation(self.store))

        self.filters = FilterController(self.store, self.page)
        self.filters.apply()
        self.views = ViewController(self.filters, self.config.tabs, active=self.config.default_tab)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "loaded": self.loaded,
            "evaluated_at": self.store.evaluated_at.isoformat() if self.store.evaluated_at else None,
            "filters": self.filters.as_dict() if self.filters else None,
            "view": self.views.as_dict() if self.views else None,
            "page": self.page.snapshot(),
        }
