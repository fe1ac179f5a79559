from __future__ import annotations

from typing import Any, Dict, Sequence

import altair as alt
import pandas as pd

alt.data_transformers.disable_max_rows()


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def _label_frame(labels: Sequence[str], values: Sequence[float]) -> pd.DataFrame:
    return pd.DataFrame({"label": [str(x) for x in labels], "value": list(values)})


def bar_chart(labels: Sequence[str], values: Sequence[float], *, title: str = "", height: int = 260) -> alt.Chart:
    df = _label_frame(labels, values)
    return (
        alt.Chart(df, title=title)
        .mark_bar()
        .encode(
            x=alt.X("label:N", title=None, sort=list(df["label"]), axis=alt.Axis(labelAngle=0)),
            y=alt.Y("value:Q", title=None, axis=alt.Axis(format="~s", gridDash=[4, 4], domain=False, ticks=False)),
            tooltip=[alt.Tooltip("label:N", title="Group"), alt.Tooltip("value:Q", title="Count", format=",")],
        )
        .properties(height=height)
    )


def doughnut_chart(labels: Sequence[str], values: Sequence[float], *, title: str = "", inner_radius: int = 60) -> alt.Chart:
    df = _label_frame(labels, values)
    return (
        alt.Chart(df, title=title)
        .mark_arc(innerRadius=inner_radius)
        .encode(
            theta=alt.Theta("value:Q"),
            color=alt.Color("label:N", title=None, sort=list(df["label"])),
            tooltip=[alt.Tooltip("label:N", title="Group"), alt.Tooltip("value:Q", title="Count", format=",")],
        )
    )
