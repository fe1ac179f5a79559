"""Core (UI-agnostic) HR dashboard logic.

This package contains:
- roster fetching (HTTP GET -> validated payload)
- employee normalization and the roster store
- KPI / tenure / age / compensation / probation aggregates
- chart helpers (Altair -> Vega-Lite spec dict)
- page rendering, filter state and tab/card view control
"""
