"""Plotly chart builders."""

from __future__ import annotations

import pandas as pd
import plotly.graph_objects as go

from safetrade.contracts.catalog import display_name
from safetrade.contracts.enums import CatalogKind
from safetrade.contracts.insights import DistributionItem

# ── chart config (hide toolbar by default) ──────────────────────────────────

CHART_CONFIG: dict = {"displayModeBar": False}

IMPACT_COLORS: dict[str, str] = {
    "ninguno": "#10B981",
    "robo_datos": "#F59E0B",
    "robo_dinero": "#EF4444",
    "cuenta_comprometida": "#A1CDF4",
}

_DEFAULT_COLOR = "#8b5cf6"

# ── shared layout ───────────────────────────────────────────────────────────

_FONT = dict(family="-apple-system, Segoe UI, Roboto, sans-serif", size=13, color="#c9d1d9")

_LAYOUT: dict = dict(
    template="plotly_dark",
    paper_bgcolor="rgba(0,0,0,0)",
    plot_bgcolor="rgba(0,0,0,0)",
    margin=dict(l=48, r=16, t=44, b=36),
    font=_FONT,
    title=dict(font=dict(size=14, color="#e6edf3"), x=0, xanchor="left", y=0.98, yanchor="top"),
    legend=dict(
        orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1, font=dict(size=11)
    ),
    bargap=0.35,
    height=340,
)

_GRID_COLOR = "rgba(128,128,128,0.10)"


def _base(**overrides: object) -> dict:
    merged = {**_LAYOUT}
    for k, v in overrides.items():
        if isinstance(v, dict) and isinstance(merged.get(k), dict):
            merged[k] = {**merged[k], **v}
        else:
            merged[k] = v
    return merged


# ── distribution bar ────────────────────────────────────────────────────────


def distribution_bar(
    items: list[DistributionItem],
    kind: CatalogKind,
    title: str,
) -> go.Figure:
    """Horizontal bars, largest share on top."""
    labels = [display_name(kind, i.name) for i in items]
    fig = go.Figure(
        go.Bar(
            x=[i.count for i in items],
            y=labels,
            orientation="h",
            marker_color=_DEFAULT_COLOR,
            marker_line_width=0,
            text=[f"{i.percentage:.1f}%" for i in items],
            textposition="outside",
            customdata=[i.percentage for i in items],
            hovertemplate="%{y}: %{x} (%{customdata:.1f}%)<extra></extra>",
        )
    )
    fig.update_layout(
        **_base(
            title=dict(text=title),
            xaxis=dict(title="", gridcolor=_GRID_COLOR, zeroline=False),
            yaxis=dict(title="", autorange="reversed"),
            showlegend=False,
        )
    )
    return fig


# ── impact pie ──────────────────────────────────────────────────────────────


def impact_pie(items: list[DistributionItem]) -> go.Figure | None:
    """Donut of the impact distribution; None when every count is zero."""
    shown = [i for i in items if i.count > 0]
    if not shown:
        return None
    fig = go.Figure(
        go.Pie(
            labels=[display_name(CatalogKind.IMPACT, i.name) for i in shown],
            values=[i.count for i in shown],
            marker=dict(colors=[IMPACT_COLORS.get(i.name, _DEFAULT_COLOR) for i in shown]),
            hole=0.45,
            sort=False,
            hovertemplate="%{label}: %{value} (%{percent})<extra></extra>",
        )
    )
    fig.update_layout(**_base(title=dict(text="Nivel de impacto")))
    return fig


# ── reports per day ─────────────────────────────────────────────────────────


def reports_per_day(df: pd.DataFrame) -> go.Figure | None:
    """Line chart of ``daily_counts`` output; None when there is nothing to plot."""
    if df is None or df.empty or df["count"].sum() == 0:
        return None
    fig = go.Figure(
        go.Scatter(
            x=df["day"],
            y=df["count"],
            mode="lines+markers",
            line=dict(color=_DEFAULT_COLOR, width=2),
            marker=dict(color=_DEFAULT_COLOR, size=6),
            hovertemplate="%{x|%d %b}<br>%{y} reportes<extra></extra>",
        )
    )
    fig.update_layout(
        **_base(
            title=dict(text="Reportes por día"),
            xaxis=dict(title="", gridcolor=_GRID_COLOR, tickformat="%d %b"),
            yaxis=dict(title="", gridcolor=_GRID_COLOR, zeroline=False, rangemode="tozero"),
            showlegend=False,
        )
    )
    return fig
