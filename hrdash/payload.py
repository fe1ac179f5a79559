"""Pydantic models for the roster payload served by the HR API."""

from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RawEmployeeRecord(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True, coerce_numbers_to_str=True)

    id: str = ""
    name: str = ""
    designation: str = ""
    department: Optional[str] = None
    country: Optional[str] = None
    gender: Optional[str] = None
    dob: Optional[str] = None
    joining_date: Optional[str] = None
    probation_end: Optional[str] = None
    status: str = ""
    last_salary: Optional[float] = None
    salary_fx: Optional[str] = None

    @field_validator("id", "name", "designation", "status", mode="before")
    @classmethod
    def _none_as_blank(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("dob", "joining_date", "probation_end", mode="before")
    @classmethod
    def _blank_as_none(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return value

    @field_validator("last_salary", mode="before")
    @classmethod
    def _salary_or_none(cls, value: Any) -> Optional[float]:
        if value is None or isinstance(value, bool):
            return None
        try:
            out = float(value)
        except Exception:
            return None
        return None if math.isnan(out) or math.isinf(out) else out


class Breakdowns(BaseModel):
    by_department: Dict[str, Union[int, float]] = Field(default_factory=dict)
    by_gender: Dict[str, Union[int, float]] = Field(default_factory=dict)


class RosterPayload(BaseModel):
    model_config = ConfigDict(extra="allow")

    employees: List[RawEmployeeRecord]
    breakdowns: Breakdowns = Field(default_factory=Breakdowns)
