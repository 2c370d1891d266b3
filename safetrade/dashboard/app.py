"""SafeTrade admin dashboard (Streamlit).

Run with:  streamlit run safetrade/dashboard/app.py
"""

from __future__ import annotations

from pathlib import Path

import streamlit as st

# ── page config (MUST be the first Streamlit call) ───────────────────────────

st.set_page_config(
    page_title="SafeTrade — Panel de administración",
    layout="wide",
    initial_sidebar_state="expanded",
)

# ── inject theme CSS ────────────────────────────────────────────────────────

_CSS_PATH = Path(__file__).resolve().parent / "styles" / "theme.css"
if _CSS_PATH.exists():
    st.markdown(f"<style>{_CSS_PATH.read_text()}</style>", unsafe_allow_html=True)

# ── local imports (after page config) ───────────────────────────────────────

from safetrade.community.catalog_cache import CatalogCache  # noqa: E402
from safetrade.community.catalog_client import HttpCatalogService  # noqa: E402
from safetrade.community.catalog_resolver import CatalogResolver  # noqa: E402
from safetrade.community.service import CommunityService  # noqa: E402
from safetrade.community.settings import CONFIG_FILE, CommunitySettings, load_settings  # noqa: E402
from safetrade.community.store import InMemoryReportStore  # noqa: E402
from safetrade.contracts.enums import CatalogKind, TrendPeriod  # noqa: E402
from safetrade.dashboard.data_access import (  # noqa: E402
    CONFIG_DIR,
    REPORTS_PATH,
    daily_counts,
    file_mtime_str,
    filter_legacy,
    frame_to_reports,
    legacy_frame,
    load_reports_frame,
)
from safetrade.dashboard.ui.cards import alert_card, kpi_card  # noqa: E402
from safetrade.dashboard.ui.charts import (  # noqa: E402
    CHART_CONFIG,
    distribution_bar,
    impact_pie,
    reports_per_day,
)
from safetrade.dashboard.ui.layout import render_header, render_sidebar  # noqa: E402
from safetrade.dashboard.ui.state import init_state  # noqa: E402
from safetrade.dashboard.ui.tables import render_reports_table  # noqa: E402
from safetrade.shared.clock import SystemClock  # noqa: E402


@st.cache_resource
def _settings() -> CommunitySettings:
    if (CONFIG_DIR / CONFIG_FILE).exists():
        return load_settings(CONFIG_DIR)
    return CommunitySettings()


@st.cache_resource
def _resolver(catalog_url: str) -> CatalogResolver:
    """One resolver per backend URL so its TTL cache survives reruns."""
    settings = _settings()
    clock = SystemClock()
    url = catalog_url or settings.catalog_url
    service = HttpCatalogService(url, timeout_sec=settings.catalog_timeout_sec) if url else None
    return CatalogResolver(service=service, cache=CatalogCache(clock, settings.catalog_ttl_sec), clock=clock)


# ── initialise session state ────────────────────────────────────────────────

init_state()

settings = _settings()
resolver = _resolver(st.session_state.get("catalog_url", ""))

df_raw = load_reports_frame()
reports = frame_to_reports(df_raw) if df_raw is not None else []
clock = SystemClock()
service = CommunityService(InMemoryReportStore(reports, clock), resolver=resolver, clock=clock, settings=settings)
transformer = service.transformer()

sidebar = render_sidebar(transformer)
render_header()

if df_raw is None:
    st.markdown(
        '<div class="no-data-box">'
        "<strong>Aún no hay reportes.</strong> "
        f"No se encontró <code>{REPORTS_PATH}</code>.<br><br>"
        "Exporta los reportes del backend a CSV o define "
        "<code>SAFETRADE_REPORTS</code> con la ruta del archivo."
        "</div>",
        unsafe_allow_html=True,
    )
    st.stop()

period = TrendPeriod.parse(sidebar.period)
trends = service.get_trends(period)
overview = service.get_analytics()
alert = service.get_community_alert()

# ── ALERT ───────────────────────────────────────────────────────────────────

st.markdown(alert_card(alert), unsafe_allow_html=True)

# ── KPI CARDS ───────────────────────────────────────────────────────────────

st.markdown('<div class="section-gap"></div>', unsafe_allow_html=True)
kpis = [
    ("Reportes totales", overview.total_reports, ""),
    ("Hoy", overview.reports_today, ""),
    ("Últimos 7 días", overview.reports_this_week, ""),
    ("Impacto máximo", overview.highest_impact_count, ""),
    ("Pendientes", overview.pending_reports, f"{overview.resolved_reports} resueltos"),
    ("Anónimos", overview.anonymous_pct, f"{overview.anonymous_reports} reportes"),
]
for col, (label, value, hint) in zip(st.columns(len(kpis)), kpis):
    with col:
        st.markdown(kpi_card(label, value, hint), unsafe_allow_html=True)

# ── CHARTS ──────────────────────────────────────────────────────────────────

st.markdown('<div class="section-gap"></div>', unsafe_allow_html=True)
st.caption(
    f"{trends.total_reports} reportes en {period.days} días — amenaza principal: {trends.main_threat}"
)

c1, c2 = st.columns(2)
with c1:
    st.plotly_chart(
        distribution_bar(trends.attack_type_distribution, CatalogKind.ATTACK_TYPE, "Tipos de ataque"),
        width="stretch",
        config=CHART_CONFIG,
        key="chart_attack",
    )
with c2:
    fig = impact_pie(trends.impact_distribution)
    if fig is not None:
        st.plotly_chart(fig, width="stretch", config=CHART_CONFIG, key="chart_impact")
    else:
        st.markdown(
            '<div class="no-data-box"><strong>Nivel de impacto</strong><br>Sin datos en el periodo.</div>',
            unsafe_allow_html=True,
        )

c3, c4 = st.columns(2)
with c3:
    st.plotly_chart(
        distribution_bar(overview.status_distribution, CatalogKind.STATUS, "Estado de los reportes"),
        width="stretch",
        config=CHART_CONFIG,
        key="chart_status",
    )
with c4:
    fig = reports_per_day(daily_counts(reports, period.days, clock.now()))
    if fig is not None:
        st.plotly_chart(fig, width="stretch", config=CHART_CONFIG, key="chart_daily")
    else:
        st.markdown(
            '<div class="no-data-box"><strong>Reportes por día</strong><br>Sin datos en el periodo.</div>',
            unsafe_allow_html=True,
        )

# ── REPORTS TABLE ───────────────────────────────────────────────────────────

st.markdown('<div class="section-gap"></div>', unsafe_allow_html=True)
st.markdown('<p class="section-label">Reportes</p>', unsafe_allow_html=True)

table = filter_legacy(
    legacy_frame(reports, transformer),
    attack_types=sidebar.attack_types,
    statuses=sidebar.statuses,
    impacts=sidebar.impacts,
    anonymous=sidebar.anonymous,
)
render_reports_table(table)

with st.expander("Diagnóstico", expanded=False):
    cache_exp = resolver.cache.expires_at
    st.markdown(
        f"""
| Métrica | Valor |
|---|---|
| **Archivo de reportes** | {REPORTS_PATH} |
| **Modificado** | {file_mtime_str(REPORTS_PATH)} |
| **Filas cargadas** | {len(reports)} |
| **Catálogo en caché hasta** | {cache_exp.isoformat() if cache_exp else "sin caché"} |
| **Consultas al catálogo** | {resolver.fetch_count} |
""",
    )
