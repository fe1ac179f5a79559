from __future__ import annotations

import logging
import math
from functools import lru_cache

import numpy as np
import pandas as pd
from fastapi import Depends, FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from hrdash import page as slots
from hrdash.config import config_from_env
from hrdash.dashboard import Dashboard
from hrdash.filters import FilterController, compute_filter_options, normalize_filters
from hrdash.metrics_overview import compute_overview
from hrdash.page import Page
from hrdash.views import ViewController
from hrdash_api.schemas import CardResponse, FilterOptionsResponse, FilterStateModel, PeopleResponse, ViewStateModel


app = FastAPI(title="HR Dashboard API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:8501"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache(maxsize=1)
def get_dashboard() -> Dashboard:
    dashboard = Dashboard(config_from_env())
    dashboard.load()
    return dashboard


def _json(data: object, status_code: int = 200) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
                pd.Timestamp: lambda ts: ts.isoformat(),
            },
        ),
    )


def _error(exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


def _not_loaded() -> JSONResponse:
    return JSONResponse(status_code=503, content={"error": "dashboard not loaded", "type": "FetchOrParseFailure"})


def _filter_controller(dashboard: Dashboard, model: FilterStateModel) -> FilterController:
    # Scratch page per request; the shared dashboard page stays as rendered at load.
    return FilterController(dashboard.store, Page(), normalize_filters(model.model_dump()))


@app.get("/dashboard")
def dashboard_snapshot(dashboard: Dashboard = Depends(get_dashboard)):
    try:
        if not dashboard.loaded:
            return _not_loaded()
        return _json(dashboard.snapshot())
    except Exception as exc:
        logger.exception("dashboard_snapshot failed")
        return _error(exc)


@app.get("/overview")
def overview(dashboard: Dashboard = Depends(get_dashboard)):
    try:
        if not dashboard.loaded:
            return _not_loaded()
        return _json(compute_overview(dashboard.store))
    except Exception as exc:
        logger.exception("overview failed")
        return _error(exc)


@app.get("/meta/filters")
def meta_filters(dashboard: Dashboard = Depends(get_dashboard)):
    try:
        if not dashboard.loaded:
            return _not_loaded()
        return _json(FilterOptionsResponse(**compute_filter_options(dashboard.store)).model_dump())
    except Exception as exc:
        logger.exception("meta_filters failed")
        return _error(exc)


@app.post("/people")
def people(filters: FilterStateModel, dashboard: Dashboard = Depends(get_dashboard)):
    try:
        if not dashboard.loaded:
            return _not_loaded()
        controller = _filter_controller(dashboard, filters)
        controller.apply()
        rows = controller.page.rows(slots.PEOPLE_TABLE)
        return _json(PeopleResponse(filters=FilterStateModel(**controller.as_dict()), count=len(rows), rows=rows).model_dump())
    except Exception as exc:
        logger.exception("people failed")
        return _error(exc)


@app.get("/tabs/{tab}")
def select_tab(tab: str, dashboard: Dashboard = Depends(get_dashboard)):
    """Validate a tab and return the panel layout with it active.

    View state is not stored on the server; clients keep their own active tab.
    """
    try:
        if not dashboard.loaded:
            return _not_loaded()
        views = ViewController(_filter_controller(dashboard, FilterStateModel()), dashboard.config.tabs)
        try:
            views.select(tab)
        except ValueError as exc:
            return JSONResponse(status_code=404, content={"error": str(exc), "type": type(exc).__name__})
        return _json(ViewStateModel(**views.as_dict()).model_dump())
    except Exception as exc:
        logger.exception("select_tab failed")
        return _error(exc)


@app.post("/cards/{card_id}")
def click_card(card_id: str, filters: FilterStateModel, dashboard: Dashboard = Depends(get_dashboard)):
    try:
        if not dashboard.loaded:
            return _not_loaded()
        controller = _filter_controller(dashboard, filters)
        views = ViewController(controller, dashboard.config.tabs)
        try:
            views.click_card(card_id)
        except ValueError as exc:
            return JSONResponse(status_code=404, content={"error": str(exc), "type": type(exc).__name__})
        rows = controller.page.rows(slots.PEOPLE_TABLE)
        payload = CardResponse(
            filters=FilterStateModel(**controller.as_dict()),
            count=len(rows),
            rows=rows,
            view=ViewStateModel(**views.as_dict()),
        )
        return _json(payload.model_dump())
    except Exception as exc:
        logger.exception("click_card failed")
        return _error(exc)


@app.post("/reload")
def reload():
    get_dashboard.cache_clear()
    dashboard = get_dashboard()
    if not dashboard.loaded:
        return _not_loaded()
    return _json({"loaded": True, "employees": len(dashboard.store)})


@app.post("/export/people")
def export_people(filters: FilterStateModel, dashboard: Dashboard = Depends(get_dashboard)):
    if not dashboard.loaded:
        return _not_loaded()
    controller = _filter_controller(dashboard, filters)
    controller.apply()
    columns = controller.page.columns.get(slots.PEOPLE_TABLE, [])
    export_df = pd.DataFrame(controller.page.rows(slots.PEOPLE_TABLE), columns=[key for key, _ in columns])
    export_df = export_df.rename(columns=dict(columns))
    csv_bytes = export_df.to_csv(index=False).encode("utf-8")
    return Response(content=csv_bytes, media_type="text/csv", headers={"Content-Disposition": "attachment; filename=people.csv"})
