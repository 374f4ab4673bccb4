from __future__ import annotations

import numbers

import streamlit as st
import pandas as pd

from .colors import ROW_BG_EVEN, ROW_BG_ODD, TOTAL_ROW_BG
from .data import get_dataset
from .trends import Dataset

COUNT_COLUMNS = ("AC Count",)

TABLE_CSS = """
<style>
  .tbl-wrap { width: 100%; overflow-x: auto; }
  .tbl-wrap table { width: 100%; border-collapse: collapse; table-layout: auto; }
  .tbl-wrap th, .tbl-wrap td { padding: 6px 8px; }
  @media (max-width: 1200px) {
    .tbl-wrap th, .tbl-wrap td { font-size: 0.9rem; }
  }
</style>
"""


def _fmt_count(value):
    """Thousands separator for counts; blanks (total-row filler) pass through."""
    if isinstance(value, numbers.Integral) and not isinstance(value, bool):
        return f"{value:,}"
    return "" if value is None else str(value)


def count_formats(df: pd.DataFrame, columns=COUNT_COLUMNS) -> dict:
    """Styler format map for the count columns present in `df`."""
    return {c: _fmt_count for c in columns if c in df.columns}


def with_total_row(df: pd.DataFrame, label_col: str, count_col: str, total: int) -> pd.DataFrame:
    """Append a "Total" row; other columns are left blank."""
    total_row = {c: "" for c in df.columns}
    total_row[label_col] = "Total"
    total_row[count_col] = total
    return pd.concat([df, pd.DataFrame([total_row])], ignore_index=True)


def style_striped(df: pd.DataFrame, total_label: str | None = None, label_col: str | None = None):
    def _row_style(row: pd.Series):
        if total_label is not None and label_col is not None and row.get(label_col) == total_label:
            return [f"background-color: {TOTAL_ROW_BG}; font-weight: 600"] * len(row)
        color = ROW_BG_EVEN if row.name % 2 == 0 else ROW_BG_ODD
        return [f"background-color: {color}"] * len(row)

    return df.style.apply(_row_style, axis=1)


def render_styled_table(styler: pd.io.formats.style.Styler):
    """Render a styled summary table as responsive HTML without the index; counts get separators."""
    styler = styler.format(count_formats(styler.data)).hide(axis="index")
    st.markdown(TABLE_CSS, unsafe_allow_html=True)
    st.markdown(f"<div class='tbl-wrap'>{styler.to_html()}</div>", unsafe_allow_html=True)


def require_dataset() -> Dataset:
    """Return the loaded dataset or stop the page with a pointer to the upload page."""
    dataset = get_dataset()
    if dataset is None:
        st.info("Upload a CSV with trend_YYYY columns on the home page first.")
        st.stop()
    st.caption(f"Year Order: {dataset.year_order}")
    return dataset
