"""Wealth evolution chart presentation logic for the Streamlit UI.

This module contains pure, testable transformations from the snapshots
produced by ``GetWealthEvolutionUseCase`` to a chart model and a Plotly
stacked area figure.

The UI is responsible for loading the snapshots (no IO here) and for
displaying the figure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from src.domain.models import BucketSnapshot

if TYPE_CHECKING:  # pragma: no cover
    import plotly.graph_objects as go


SERIES_LABELS = {
    "investments": "Investments",
    "realEstate": "Real estate",
    "bankAccounts": "Bank accounts",
    "other": "Other assets",
}
SERIES_COLORS = {
    "investments": "#1b9aaa",
    "realEstate": "#2e7d32",
    "bankAccounts": "#f4a261",
    "other": "#6c8ead",
}


@dataclass(frozen=True)
class WealthSeries:
    """One stacked series of the chart."""

    key: str
    label: str
    values: list[int]


@dataclass(frozen=True)
class WealthChartModel:
    """Model used by the UI to render the wealth chart.

    Attributes:
        labels: Bucket labels in chronological order.
        series: Stacked series, one per wealth channel.
        totals: Bucket totals, equal to the sum of the series.
    """

    labels: list[str]
    series: list[WealthSeries]
    totals: list[int]

    @property
    def is_empty(self) -> bool:
        return not self.labels


def build_wealth_chart_model(
    snapshots: list[BucketSnapshot],
) -> WealthChartModel:
    """Build the chart model from wealth snapshots.

    Args:
        snapshots: Snapshots in chronological order.

    Returns:
        WealthChartModel: Labels, per-channel values and totals, rounded to
        whole units.
    """
    payloads = [snapshot.to_dict() for snapshot in snapshots]
    series = [
        WealthSeries(
            key=key,
            label=label,
            values=[payload[key] for payload in payloads],
        )
        for key, label in SERIES_LABELS.items()
    ]
    return WealthChartModel(
        labels=[payload["month"] for payload in payloads],
        series=series,
        totals=[payload["total"] for payload in payloads],
    )


def build_plotly_figure(model: WealthChartModel) -> "go.Figure":
    """Build a Plotly stacked area figure from a chart model.

    Args:
        model: Precomputed chart model.

    Returns:
        Plotly figure ready to be displayed in Streamlit.
    """
    import plotly.graph_objects as go

    fig = go.Figure()
    for item in model.series:
        fig.add_trace(
            go.Scatter(
                x=model.labels,
                y=item.values,
                name=item.label,
                mode="lines",
                stackgroup="wealth",
                line=dict(width=1, color=SERIES_COLORS.get(item.key)),
                hovertemplate="%{y:,.0f}<extra>" + item.label + "</extra>",
            )
        )
    fig.add_trace(
        go.Scatter(
            x=model.labels,
            y=model.totals,
            name="Total",
            mode="lines+markers",
            line=dict(width=2, color="#e7ecf3", dash="dot"),
            hovertemplate="%{y:,.0f}<extra>Total</extra>",
        )
    )
    fig.update_layout(
        margin=dict(l=8, r=8, t=8, b=8),
        height=420,
        legend=dict(orientation="h", y=-0.15),
        hovermode="x unified",
    )
    return fig


__all__ = [
    "WealthSeries",
    "WealthChartModel",
    "build_wealth_chart_model",
    "build_plotly_figure",
]
