from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class FilterStateModel(BaseModel):
    search: str = ""
    status: str = ""
    department: str = ""
    country: str = ""


class ViewStateModel(BaseModel):
    active_tab: str
    panels: Dict[str, bool] = Field(default_factory=dict)


class PeopleResponse(BaseModel):
    filters: FilterStateModel
    count: int
    rows: List[Dict[str, Optional[str]]]


class CardResponse(PeopleResponse):
    view: ViewStateModel


class FilterOptionsResponse(BaseModel):
    status: List[str]
    department: List[str]
    country: List[str]
