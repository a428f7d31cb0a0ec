"""Plotly figure builders for forecast charts."""

from __future__ import annotations

from typing import Optional

import pandas as pd
import plotly.graph_objects as go

from ..domain import ChartRange
from .projection import TICK_COUNT

# Half-width used when a forecast collapses to a single price.
MIN_SPAN_RATIO = 0.01
MIN_SPAN = 1.0


def _empty_figure(title: str) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(text="No data to display", showarrow=False, x=0.5, y=0.5, xref="paper", yref="paper")
    fig.update_layout(title=title, template="plotly_white")
    return fig


def displayable_range(chart_range: ChartRange) -> ChartRange:
    """Widen a zero-width range so the axis still has ticks."""
    if chart_range.tick_step > 0:
        return chart_range

    center = chart_range.min
    half_span = abs(center) * MIN_SPAN_RATIO or MIN_SPAN
    low, high = center - half_span, center + half_span
    return ChartRange(min=low, max=high, tick_step=(high - low) / TICK_COUNT)


def make_forecast_chart(forecast: pd.DataFrame, chart_range: Optional[ChartRange], title: str = "Predicted price") -> go.Figure:
    """Line chart of predicted closes with padded, fixed y bounds."""
    if forecast.empty or chart_range is None:
        return _empty_figure(title)

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=forecast["date"],
            y=forecast["predicted_close_price"],
            mode="lines+markers",
            name="Predicted close price",
            fill="tozeroy",
            line=dict(color="rgba(75,192,192,1)"),
            fillcolor="rgba(75,192,192,0.2)",
        )
    )

    bounds = displayable_range(chart_range)
    fig.update_layout(
        title=title,
        xaxis_title="Date",
        yaxis_title="Price",
        hovermode="x unified",
        template="plotly_white",
    )
    fig.update_xaxes(type="category")
    fig.update_yaxes(range=[bounds.min, bounds.max], dtick=bounds.tick_step, tick0=bounds.min)
    return fig


def make_overlay_chart(overlay: Optional[pd.DataFrame], title: str = "Historical data and test-set prediction") -> go.Figure:
    """Historical closes against test-set predictions; y bounds auto-scale."""
    if overlay is None or overlay.empty:
        return _empty_figure(title)

    colors = ["rgba(75,192,192,1)", "rgba(192,75,75,1)"]
    fig = go.Figure()
    for color, column in zip(colors, overlay.columns):
        fig.add_trace(
            go.Scatter(
                x=[str(label) for label in overlay.index],
                y=overlay[column],
                mode="lines",
                name=str(column),
                line=dict(color=color),
            )
        )

    fig.update_layout(
        title=title,
        xaxis_title="Date",
        yaxis_title="Price",
        hovermode="x unified",
        template="plotly_white",
    )
    fig.update_xaxes(type="category")
    return fig
