"""Session state initialisation."""

from __future__ import annotations

import os

import streamlit as st

_DEFAULTS: dict[str, object] = {
    "period": "30days",
    "catalog_url": os.environ.get("SAFETRADE_API_URL", ""),
    "attack_type_filter": [],
    "status_filter": [],
    "impact_filter": [],
    "anonymous_filter": "todos",
}


def init_state() -> None:
    """Fill st.session_state with defaults for missing keys."""
    for key, value in _DEFAULTS.items():
        if key not in st.session_state:
            st.session_state[key] = value
