# actrend/config.py
"""
App settings.

Values come from Streamlit secrets when available, then environment
variables, then the defaults below.
"""
from __future__ import annotations

import os
from typing import Optional

import streamlit as st

APP_NAME = "AC Trend Analysis Tool"
APP_ICON = "🗳️"

# ---------------- safe secrets helper ----------------
def _get_secret(key: str, default: Optional[str] = None) -> Optional[str]:
    """Return st.secrets[key] if available; otherwise default (no exceptions)."""
    try:
        return st.secrets[key]  # type: ignore[index]
    except Exception:
        return default


def get_setting(key: str, default: Optional[str] = None) -> Optional[str]:
    value = _get_secret(key, None)
    if value:
        return str(value)
    return os.environ.get(key, default)


def log_level() -> str:
    return (get_setting("LOG_LEVEL", "INFO") or "INFO").upper()


def sample_data_url() -> Optional[str]:
    """Optional CSV (path or URL) offered on the landing page as sample data."""
    return get_setting("DATA_URL", None)


# ---------------- Sankey layout ----------------
SANKEY_NODE_PAD = 15
SANKEY_NODE_THICKNESS = 20
SANKEY_MIN_HEIGHT = 500
SANKEY_PX_PER_LABEL = 25
SANKEY_FONT_SIZE = 10
SANKEY_MARGIN = dict(l=50, r=50, t=60, b=40)

# ---------------- tables ----------------
DEFAULT_SORTS = {
    "district": {"column": "count", "direction": "desc"},
    "zone": {"column": "count", "direction": "desc"},
    "ac": {"column": "district", "direction": "asc"},
}
