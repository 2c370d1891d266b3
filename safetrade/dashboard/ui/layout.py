"""Page layout — sidebar controls and the title bar.

``render_sidebar`` draws the left panel and returns the current filter
values; ``render_header`` draws the title.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

import streamlit as st

from safetrade.community.transformer import ReportTransformer
from safetrade.contracts.enums import CatalogKind, TrendPeriod

_PERIOD_LABELS = {
    TrendPeriod.SEVEN_DAYS.value: "Últimos 7 días",
    TrendPeriod.THIRTY_DAYS.value: "Últimos 30 días",
    TrendPeriod.NINETY_DAYS.value: "Últimos 90 días",
}

_ANONYMOUS_CHOICES = {"todos": None, "anónimos": True, "identificados": False}


@dataclass
class SidebarState:
    """Values collected from sidebar controls."""
    period: str
    attack_types: list[str]
    statuses: list[str]
    impacts: list[str]
    anonymous: bool | None


def render_header() -> None:
    st.markdown(
        '<h1 class="page-title">SafeTrade — Panel de administración</h1>'
        '<p class="page-subtitle">'
        "Tendencias comunitarias y reportes de incidentes de ciberseguridad."
        "</p>",
        unsafe_allow_html=True,
    )


def _select(label: str, options: list[dict], key: str) -> list[str]:
    names = [o["label"] for o in options]
    return st.multiselect(
        label,
        options=names,
        default=[],
        format_func=lambda n: next(o["display_name"] for o in options if o["label"] == n),
        key=key,
    )


def render_sidebar(transformer: ReportTransformer) -> SidebarState:
    """Draw sidebar controls and return current selections."""
    with st.sidebar:
        st.markdown('<p class="sidebar-brand">SafeTrade</p>', unsafe_allow_html=True)
        st.caption("Comunidad e inteligencia de amenazas")
        st.divider()

        st.markdown("##### Periodo de tendencias")
        period = st.selectbox(
            "Periodo",
            options=list(_PERIOD_LABELS),
            format_func=_PERIOD_LABELS.get,
            key="period",
            label_visibility="collapsed",
        )

        st.divider()
        st.markdown("##### Filtrar reportes")
        attack_types = _select("Tipo de ataque", transformer.options(CatalogKind.ATTACK_TYPE), "attack_type_filter")
        statuses = _select("Estado", transformer.options(CatalogKind.STATUS), "status_filter")
        impacts = _select("Impacto", transformer.options(CatalogKind.IMPACT), "impact_filter")
        anon_choice = st.radio(
            "Autoría",
            options=list(_ANONYMOUS_CHOICES),
            horizontal=True,
            key="anonymous_filter",
        )

        st.divider()
        st.text_input(
            "URL del backend (catálogos)",
            key="catalog_url",
            help="Vacío = catálogos por defecto.",
        )

        now_str = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
        st.markdown(
            f'<p class="refresh-timestamp">Última actualización: {now_str}</p>',
            unsafe_allow_html=True,
        )

    return SidebarState(
        period=period,
        attack_types=attack_types,
        statuses=statuses,
        impacts=impacts,
        anonymous=_ANONYMOUS_CHOICES[anon_choice],
    )
