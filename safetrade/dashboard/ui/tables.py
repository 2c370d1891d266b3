"""Legacy-shaped reports table."""

from __future__ import annotations

import pandas as pd
import streamlit as st
from streamlit import column_config as colcfg

# columns to display (in order)
_DISPLAY_COLS = [
    "id",
    "created_at",
    "attack_type",
    "impact_level",
    "status",
    "is_anonymous",
    "attack_origin",
]

_COL_LABELS = {
    "id": "ID",
    "created_at": "Creado",
    "attack_type": "Tipo de ataque",
    "impact_level": "Impacto",
    "status": "Estado",
    "is_anonymous": "Anónimo",
    "attack_origin": "Origen",
}

_COL_CONFIG = {
    "Creado": colcfg.DatetimeColumn("Creado", format="DD MMM YYYY  HH:mm"),
    "Anónimo": colcfg.CheckboxColumn("Anónimo"),
}


def render_reports_table(df: pd.DataFrame) -> None:
    """Sortable table of reports, newest first."""
    if df.empty:
        st.info("No hay reportes para mostrar.")
        return

    cols = [c for c in _DISPLAY_COLS if c in df.columns]
    view = df[cols].sort_values("created_at", ascending=False).rename(columns=_COL_LABELS)

    st.caption(f"Total de reportes: {len(view)}")
    st.dataframe(
        view,
        hide_index=True,
        use_container_width=True,
        height=min(len(view) * 36 + 42, 600),
        column_config=_COL_CONFIG,
        key="tbl_reports",
    )
