from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple


DEFAULT_API_URL = "https://hr-api.ashishoct34.workers.dev/"
BASE_CURRENCY = "NPR"

DEFAULT_FX_RATES: Dict[str, float] = {
    "NPR": 1.0,
    "USD": 135.0,
    "AUD": 90.0,
    "INR": 1.6,
}

# Cards always land on the people tab, so every tab set must carry it.
PEOPLE_TAB = "people"
DEFAULT_TABS: Tuple[str, ...] = ("overview", PEOPLE_TAB, "probation", "compensation")

ENV_PREFIX = "HRDASH_"


@dataclass(frozen=True)
class FxTable:
    """Currency code -> multiplier into the base reporting currency."""

    rates: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_FX_RATES))
    base_currency: str = BASE_CURRENCY

    def rate(self, code: Optional[str]) -> float:
        if not code:
            return 1.0
        return self.rates.get(code) or 1.0

    def convert(self, amount: Optional[float], code: Optional[str]) -> Optional[float]:
        if amount is None:
            return None
        return amount * self.rate(code)


@dataclass(frozen=True)
class DashboardConfig:
    api_url: str = DEFAULT_API_URL
    timeout: Optional[float] = None
    tabs: Tuple[str, ...] = DEFAULT_TABS
    default_tab: str = "overview"
    fx: FxTable = field(default_factory=FxTable)

    def __post_init__(self) -> None:
        if not self.tabs:
            raise ValueError("at least one tab is required")
        if PEOPLE_TAB not in self.tabs:
            raise ValueError(f"tabs must include {PEOPLE_TAB!r}: {self.tabs!r}")
        if self.default_tab not in self.tabs:
            raise ValueError(f"default tab {self.default_tab!r} is not one of {self.tabs!r}")


def _as_rates(values: Optional[Mapping[str, object]]) -> Dict[str, float]:
    if not values:
        return dict(DEFAULT_FX_RATES)
    out: Dict[str, float] = {}
    for code, rate in values.items():
        try:
            out[str(code).strip().upper()] = float(rate)  # type: ignore[arg-type]
        except Exception:
            continue
    return out


def _as_timeout(value: object) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        out = float(value)  # type: ignore[arg-type]
    except Exception:
        return None
    return out if out > 0 else None


def _as_list(value: object) -> list:
    if value is None or value == "":
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",")]
    return list(value)  # type: ignore[arg-type]


def normalize_config(raw: Optional[dict] = None) -> DashboardConfig:
    """Loose dict -> DashboardConfig. Raises ValueError when the tabs leave out `people`."""
    raw = raw or {}

    api_url = (raw.get("api_url") or DEFAULT_API_URL).strip()
    tabs = tuple(str(t) for t in _as_list(raw.get("tabs")) if t)
    if not tabs:
        tabs = DEFAULT_TABS
    default_tab = str(raw.get("default_tab") or tabs[0])
    if default_tab not in tabs:
        default_tab = tabs[0]

    fx_raw = raw.get("fx") or {}
    fx = FxTable(
        rates=_as_rates(fx_raw.get("rates")),
        base_currency=str(fx_raw.get("base_currency") or BASE_CURRENCY),
    )
    return DashboardConfig(
        api_url=api_url,
        timeout=_as_timeout(raw.get("timeout")),
        tabs=tabs,
        default_tab=default_tab,
        fx=fx,
    )


def config_from_env(environ: Optional[Mapping[str, str]] = None) -> DashboardConfig:
    """Read HRDASH_API_URL, HRDASH_TIMEOUT, HRDASH_TABS and HRDASH_DEFAULT_TAB."""
    env = os.environ if environ is None else environ
    return normalize_config(
        {
            "api_url": env.get(f"{ENV_PREFIX}API_URL"),
            "timeout": env.get(f"{ENV_PREFIX}TIMEOUT"),
            "tabs": env.get(f"{ENV_PREFIX}TABS"),
            "default_tab": env.get(f"{ENV_PREFIX}DEFAULT_TAB"),
        }
    )
