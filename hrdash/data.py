from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields
from datetime import datetime, tzinfo
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pandas as pd

from hrdash.config import FxTable
from hrdash.payload import RawEmployeeRecord, RosterPayload


logger = logging.getLogger(__name__)

STATUS_ACTIVE = "Active"
STATUS_INACTIVE = "Inactive"
STATUS_PROBATION = "Probation"
STATUSES = (STATUS_ACTIVE, STATUS_PROBATION, STATUS_INACTIVE)


@dataclass(frozen=True)
class EmployeeView:
    id: str
    name: str
    designation: str
    department: Optional[str]
    country: Optional[str]
    gender: Optional[str]
    dob: Optional[str]
    joining_date: Optional[str]
    probation_end: Optional[str]
    raw_status: str
    status: str
    last_salary: Optional[float]
    salary_fx: Optional[str]
    tenure_months: Optional[int]
    birthday_month: Optional[int]
    birthday_day: Optional[int]
    salary_base: Optional[float]
    joined_at: Optional[datetime] = None
    dob_at: Optional[datetime] = None
    probation_end_at: Optional[datetime] = None


EMPLOYEE_COLUMNS: List[str] = [f.name for f in fields(EmployeeView)]


# ---------------- Parsing / formatting helpers ----------------
def parse_date(value: object, tz: Optional[tzinfo] = None) -> Optional[datetime]:
    """ISO-ish string -> naive datetime, else None.

    Offset-aware input is shifted into `tz` (the local zone when None) and the
    offset dropped, so it compares directly with a naive clock in that zone.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        ts = pd.to_datetime(value, errors="coerce")
    except Exception:
        return None
    if ts is None or pd.isna(ts):
        return None
    dt = ts.to_pydatetime()
    if dt.tzinfo is not None:
        dt = dt.astimezone(tz).replace(tzinfo=None)
    return dt


def reference_time(now: datetime) -> Tuple[datetime, Optional[tzinfo]]:
    """Split an evaluation time into naive wall-clock time and its zone (None = local)."""
    if now.tzinfo is None:
        return now, None
    return now.replace(tzinfo=None), now.tzinfo


def month_diff(start: datetime, end: datetime) -> int:
    """Calendar-field month difference; day of month is ignored."""
    return (end.year - start.year) * 12 + (end.month - start.month)


def round_half_up(value: object, ndigits: int = 0) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    q = Decimal(10) ** -ndigits
    return float(Decimal(str(value)).quantize(q, rounding=ROUND_HALF_UP))


def _group_indian(digits: str) -> str:
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups: List[str] = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_number(value: object, max_decimals: int = 3) -> str:
    """en-IN grouping: 135000 -> '1,35,000', 1234.5 -> '1,234.5'."""
    if value is None or isinstance(value, bool):
        return "N/A"
    try:
        num = float(value)  # type: ignore[arg-type]
    except Exception:
        return "N/A"
    if pd.isna(num):
        return "N/A"
    rounded = round_half_up(abs(num), max_decimals) or 0.0
    text = f"{rounded:.{max_decimals}f}"
    if max_decimals > 0:
        text = text.rstrip("0").rstrip(".")
    int_part, _, frac = text.partition(".")
    out = _group_indian(int_part) + (f".{frac}" if frac else "")
    return f"-{out}" if num < 0 and rounded != 0 else out


def format_date(value: object) -> str:
    dt = value if isinstance(value, datetime) else parse_date(value)
    if dt is None:
        return "-"
    return dt.strftime("%Y-%m-%d")


def format_percent(value: Optional[float], decimals: int = 1) -> str:
    if value is None or pd.isna(value):
        return "N/A"
    return f"{value:.{decimals}f}%"


# ---------------- Normalizer ----------------
def normalize_employee(raw: RawEmployeeRecord, now: datetime, fx: FxTable) -> EmployeeView:
    now, tz = reference_time(now)
    joined_at = parse_date(raw.joining_date, tz)
    dob_at = parse_date(raw.dob, tz)
    probation_end_at = parse_date(raw.probation_end, tz)

    tenure_months = month_diff(joined_at, now) if joined_at is not None else None

    status = raw.status
    if probation_end_at is not None and probation_end_at > now and raw.status == STATUS_ACTIVE:
        status = STATUS_PROBATION

    return EmployeeView(
        id=raw.id,
        name=raw.name,
        designation=raw.designation,
        department=raw.department,
        country=raw.country,
        gender=raw.gender,
        dob=raw.dob,
        joining_date=raw.joining_date,
        probation_end=raw.probation_end,
        raw_status=raw.status,
        status=status,
        last_salary=raw.last_salary,
        salary_fx=raw.salary_fx,
        tenure_months=tenure_months,
        birthday_month=dob_at.month if dob_at is not None else None,
        birthday_day=dob_at.day if dob_at is not None else None,
        salary_base=fx.convert(raw.last_salary, raw.salary_fx),
        joined_at=joined_at,
        dob_at=dob_at,
        probation_end_at=probation_end_at,
    )


def build_roster(records: Iterable[RawEmployeeRecord], now: datetime, fx: FxTable) -> List[EmployeeView]:
    return [normalize_employee(r, now, fx) for r in records]


def roster_frame(employees: Iterable[EmployeeView]) -> pd.DataFrame:
    """One row per employee; the index is the position in the roster."""
    return pd.DataFrame([asdict(e) for e in employees], columns=EMPLOYEE_COLUMNS)


# ---------------- Roster store ----------------
class RosterStore:
    """Owns the normalized roster. `load` is the only writer."""

    def __init__(self, fx: Optional[FxTable] = None) -> None:
        self._fx = fx or FxTable()
        self._employees: Tuple[EmployeeView, ...] = ()
        self._frame: pd.DataFrame = roster_frame([])
        self._breakdowns: Dict[str, Dict[str, Any]] = {"by_department": {}, "by_gender": {}}
        self._evaluated_at: Optional[datetime] = None

    def load(self, payload: RosterPayload, now: datetime) -> None:
        employees = tuple(build_roster(payload.employees, now, self._fx))
        self._employees = employees
        self._frame = roster_frame(employees)
        self._breakdowns = payload.breakdowns.model_dump()
        self._evaluated_at = reference_time(now)[0]
        logger.info("Loaded employees: %d", len(employees))

    @property
    def fx(self) -> FxTable:
        return self._fx

    @property
    def employees(self) -> Tuple[EmployeeView, ...]:
        return self._employees

    @property
    def frame(self) -> pd.DataFrame:
        return self._frame

    @property
    def breakdowns(self) -> Dict[str, Dict[str, Any]]:
        return self._breakdowns

    @property
    def evaluated_at(self) -> Optional[datetime]:
        return self._evaluated_at

    @property
    def loaded(self) -> bool:
        return self._evaluated_at is not None

    def __len__(self) -> int:
        return len(self._employees)

    def select(self, index: Iterable[int]) -> List[EmployeeView]:
        return [self._employees[int(i)] for i in index]
