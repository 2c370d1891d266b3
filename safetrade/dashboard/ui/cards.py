"""HTML builders for the alert banner and KPI cards."""

from __future__ import annotations

from html import escape

from safetrade.contracts.enums import AlertLevel
from safetrade.contracts.insights import AlertState

# ── canonical alert colours & titles ────────────────────────────────────────

ALERT_COLORS: dict[AlertLevel, str] = {
    AlertLevel.GREEN: "#22c55e",
    AlertLevel.YELLOW: "#f59e0b",
    AlertLevel.RED: "#ef4444",
}

ALERT_TITLES: dict[AlertLevel, str] = {
    AlertLevel.GREEN: "Alerta comunitaria: verde",
    AlertLevel.YELLOW: "Alerta comunitaria: amarilla",
    AlertLevel.RED: "Alerta comunitaria: roja",
}


def alert_card(alert: AlertState) -> str:
    """Banner with the alert level, message and recommendations."""
    color = ALERT_COLORS[alert.level]
    items = "".join(f"<li>{escape(r)}</li>" for r in alert.recommendations)
    return (
        f'<div class="alert-card alert-{alert.level.value}" style="border-left: 6px solid {color};">'
        f'  <div class="alert-card-header" style="color: {color};">{ALERT_TITLES[alert.level]}</div>'
        f'  <div class="alert-card-message">{escape(alert.message)}</div>'
        f'  <ul class="alert-card-recs">{items}</ul>'
        f'  <div class="alert-card-ts">Actualizado: {escape(alert.generated_at)}</div>'
        f"</div>"
    )


def kpi_card(label: str, value: int | float | str, hint: str = "") -> str:
    """One KPI tile."""
    if isinstance(value, float):
        shown = f"{value:.1f}%"
    else:
        shown = escape(str(value))
    hint_html = f'<div class="kpi-hint">{escape(hint)}</div>' if hint else ""
    return (
        f'<div class="kpi-card">'
        f'  <div class="kpi-value">{shown}</div>'
        f'  <div class="kpi-label">{escape(label)}</div>'
        f"  {hint_html}"
        f"</div>"
    )
