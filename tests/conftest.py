from __future__ import annotations

import json
from datetime import datetime

import httpx
import pytest
from starlette.testclient import TestClient

from hrdash.config import DashboardConfig
from hrdash.dashboard import Dashboard
from hrdash.data import RosterStore
from hrdash.payload import RosterPayload
from hrdash_api.main import app, get_dashboard

NOW = datetime(2024, 3, 1, 12, 0, 0)
API_URL = "https://hr.test/roster"

SAMPLE_PAYLOAD = {
    "employees": [
        {
            "id": "E001",
            "name": "Alice Sharma",
            "designation": "Software Engineer",
            "department": "Engineering",
            "country": "Nepal",
            "gender": "F",
            "dob": "1995-03-01",
            "joining_date": "2023-01-15",
            "probation_end": None,
            "status": "Active",
            "last_salary": 1000,
            "salary_fx": "USD",
        },
        {
            "id": "E002",
            "name": "Bob <script>alert(1)</script>",
            "designation": "QA Analyst",
            "department": "Engineering",
            "country": "Australia",
            "gender": "M",
            "dob": "1980-07-20",
            "joining_date": "2024-01-10",
            "probation_end": "2024-03-20",
            "status": "Active",
            "last_salary": 2000,
            "salary_fx": "AUD",
        },
        {
            "id": "E003",
            "name": "Chitra Rao",
            "designation": "Designer",
            "department": "Design",
            "country": "India",
            "gender": "F",
            "dob": "2001-03-15",
            "joining_date": "2023-06-01",
            "probation_end": "2023-12-01",
            "status": "Active",
            "last_salary": 50000,
            "salary_fx": "INR",
        },
        {
            "id": "E004",
            "name": "Dev Thapa",
            "designation": "Operations Manager",
            "department": "Operations",
            "country": "Nepal",
            "gender": "M",
            "dob": "1970-11-11",
            "joining_date": "2020-02-01",
            "probation_end": None,
            "status": "Inactive",
            "last_salary": 150000,
            "salary_fx": "NPR",
        },
        {
            "id": "E005",
            "name": "Esha Karki",
            "designation": "Design Intern",
            "department": "Design",
            "country": "Nepal",
            "gender": "F",
            "dob": None,
            "joining_date": None,
            "probation_end": "2025-03-10",
            "status": "Active",
            "last_salary": None,
            "salary_fx": "XYZ",
        },
    ],
    "breakdowns": {
        "by_department": {"Engineering": 2, "Design": 2, "Operations": 1},
        "by_gender": {"F": 3, "M": 2},
    },
}


def mock_client(status_code: int = 200, body: object = None, *, raw: bytes | None = None) -> httpx.Client:
    def handler(request: httpx.Request) -> httpx.Response:
        if raw is not None:
            return httpx.Response(status_code, content=raw, headers={"content-type": "application/json"})
        return httpx.Response(status_code, content=json.dumps(SAMPLE_PAYLOAD if body is None else body).encode("utf-8"))

    return httpx.Client(transport=httpx.MockTransport(handler))


@pytest.fixture
def payload() -> RosterPayload:
    return RosterPayload.model_validate(SAMPLE_PAYLOAD)


@pytest.fixture
def store(payload) -> RosterStore:
    s = RosterStore()
    s.load(payload, NOW)
    return s


@pytest.fixture
def dashboard() -> Dashboard:
    dash = Dashboard(DashboardConfig(api_url=API_URL), clock=lambda: NOW, client=mock_client())
    assert dash.load()
    return dash


@pytest.fixture
def client(dashboard):
    app.dependency_overrides[get_dashboard] = lambda: dashboard
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
