from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional

import pandas as pd

from hrdash.data import RosterStore


@dataclass(frozen=True)
class TenureBucket:
    key: str
    label: str
    lower: float
    upper: float

    def contains(self, months: Optional[int]) -> bool:
        if months is None or pd.isna(months):
            return False
        return self.lower <= months < self.upper


# Negative tenure (joining date in the future) lands in the first bucket.
TENURE_BUCKETS = (
    TenureBucket("0_3", "0–3m", -math.inf, 3),
    TenureBucket("3_12", "3–12m", 3, 12),
    TenureBucket("12_24", "12–24m", 12, 24),
    TenureBucket("24p", "24m+", 24, math.inf),
)

AGE_LABELS = ["<25", "25-34", "35-44", "45+"]
_AGE_BINS = [-math.inf, 25, 35, 45, math.inf]


def tenure_bucket(key: str) -> TenureBucket:
    for bucket in TENURE_BUCKETS:
        if bucket.key == key:
            return bucket
    raise KeyError(key)


def _bucket_counts(values: pd.Series, bins: List[float], labels: List[str]) -> Dict[str, int]:
    values = pd.to_numeric(values, errors="coerce").dropna()
    if values.empty:
        return {label: 0 for label in labels}
    cut = pd.cut(values, bins=bins, labels=labels, right=False)
    counts = cut.value_counts(sort=False).reindex(labels, fill_value=0)
    return {label: int(counts[label]) for label in labels}


def compute_tenure(store: RosterStore) -> Dict[str, int]:
    """Counts per tenure bucket; employees without a joining date are not counted."""
    bins = [TENURE_BUCKETS[0].lower] + [b.upper for b in TENURE_BUCKETS]
    counts = _bucket_counts(store.frame["tenure_months"], bins, [b.key for b in TENURE_BUCKETS])
    return counts


def compute_age_buckets(store: RosterStore, now: Optional[datetime] = None) -> Dict[str, int]:
    now = now or store.evaluated_at or datetime.now()
    dob = pd.to_datetime(store.frame["dob_at"], errors="coerce")
    # Year difference only, same simplification as tenure.
    ages = now.year - dob.dt.year
    return _bucket_counts(ages, _AGE_BINS, AGE_LABELS)
