from __future__ import annotations

import hashlib
import io
import logging
import re
from pathlib import Path
from typing import Any, Optional, Union

import numpy as np
import pandas as pd
import streamlit as st

from .flow import ColorCache
from .trends import Dataset, ParseIssue, ParseResult, ingest

logger = logging.getLogger(__name__)

ENCODINGS = ["utf-8-sig", "utf-8", "cp1252"]

# session_state keys
DATASET_KEY = "dataset"
ERROR_KEY = "ingest_error"
COLOR_CACHE_KEY = "color_cache"
YEARS_KEY = "sankey_years"
SELECTED_PATH_KEY = "sankey_selected_path"
LAST_GRAPH_KEY = "sankey_last_graph"
SORT_KEY = "table_sorts"
GROUP_KEY = "selected_group_id"
YEAR_CHECKBOX_PREFIX = "year_"

Source = Union[str, Path, bytes]

_LINE_RE = re.compile(r"line (\d+)")


# ---------------- parsing ----------------
def _open(src: Source):
    return io.BytesIO(src) if isinstance(src, bytes) else src


def _read_csv_robust(src: Source) -> pd.DataFrame:
    last_err: Exception | None = None
    for enc in ENCODINGS:
        try:
            return pd.read_csv(
                _open(src),
                encoding=enc,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
            )
        except UnicodeDecodeError as e:
            last_err = e
    raise RuntimeError(f"Could not decode CSV with any of {', '.join(ENCODINGS)}: {last_err}")


def _dynamic_type(col: pd.Series) -> pd.Series:
    """Strip text cells; turn all-numeric columns into int/float cells, blanks into None."""
    text = col.astype(str).str.strip()
    blank = text == ""
    values = text.where(~blank, None)

    present = values[~blank]
    if present.empty:
        return values.astype(object)
    nums = pd.to_numeric(present, errors="coerce").astype(float)
    # inf / 1e999 keep the column as text
    if nums.notna().all() and bool(np.isfinite(nums).all()):
        integral = bool((nums == nums.round()).all())
        converted = nums.map(lambda v: int(v) if integral else float(v))
        out = pd.Series([None] * len(col), index=col.index, dtype=object)
        out[~blank] = converted.astype(object)
        return out
    return values.astype(object)


def frame_to_rows(df: pd.DataFrame) -> list[dict[str, Any]]:
    if df.empty:
        return []
    typed = pd.DataFrame({c: _dynamic_type(df[c]) for c in df.columns}, index=df.index)
    rows = typed.to_dict(orient="records")
    return [{k: (None if (v is None or (isinstance(v, float) and pd.isna(v))) else v)
             for k, v in row.items()} for row in rows]


def short_rows(df: pd.DataFrame) -> list[ParseIssue]:
    """
    One ParseIssue per data row that had fewer fields than the header.

    Cells are read with keep_default_na=False, so a present-but-empty field is
    "" while pandas pads the fields a short row never had with NaN.
    """
    expected = len(df.columns)
    missing = df.isna().sum(axis=1)
    return [
        ParseIssue(int(row), f"Too few fields: expected {expected} fields but parsed {expected - int(n)}")
        for row, n in enumerate(missing)
        if n > 0
    ]


def parse_csv(src: Source, name: Optional[str] = None) -> ParseResult:
    """
    Read a CSV upload into a ParseResult.

    Tokenizer failures and short rows become ParseIssues instead of exceptions
    so the ingestion step can report them alongside its own checks.
    """
    if name is not None and not str(name).lower().endswith(".csv"):
        return ParseResult(data=[], errors=[ParseIssue(0, "Please select a valid CSV file.")])

    try:
        df = _read_csv_robust(src)
    except pd.errors.EmptyDataError:
        return ParseResult(data=[], errors=[])
    except pd.errors.ParserError as e:
        message = str(e).strip()
        m = _LINE_RE.search(message)
        # pandas counts file lines from 1 including the header
        row = max(int(m.group(1)) - 2, 0) if m else 0
        logger.warning("CSV parse failed for %s: %s", name or "upload", message)
        return ParseResult(data=[], errors=[ParseIssue(row, f"Parsing error: {message}")])
    except RuntimeError as e:
        return ParseResult(data=[], errors=[ParseIssue(0, f"Parsing error: {e}")])

    issues = short_rows(df)
    if issues:
        logger.warning("CSV %s has %d short row(s)", name or "upload", len(issues))
    return ParseResult(data=frame_to_rows(df), errors=issues)


def upload_token(content: bytes) -> str:
    """Content fingerprint; a new upload is ingested only when this changes."""
    return hashlib.sha1(content).hexdigest()


# ---------------- loading ----------------
@st.cache_data(show_spinner=True, ttl=300)
def load_dataset(content: bytes, name: str) -> Dataset:
    """Parse + ingest an uploaded file. Raises IngestionError."""
    return ingest(parse_csv(content, name), source_name=name)


@st.cache_data(show_spinner=True, ttl=300)
def load_sample(url: str) -> Dataset:
    return ingest(parse_csv(url), source_name=url)


# ---------------- session state ----------------
def get_dataset() -> Optional[Dataset]:
    return st.session_state.get(DATASET_KEY)


def set_dataset(dataset: Dataset) -> None:
    """Install a freshly ingested dataset and reset everything derived from the old one."""
    st.session_state[DATASET_KEY] = dataset
    st.session_state[ERROR_KEY] = None
    get_color_cache().reset()
    for key in (YEARS_KEY, SELECTED_PATH_KEY, LAST_GRAPH_KEY, SORT_KEY, GROUP_KEY):
        st.session_state.pop(key, None)
    for key in [k for k in st.session_state.keys() if str(k).startswith(YEAR_CHECKBOX_PREFIX)]:
        del st.session_state[key]


def clear_dataset(error: Optional[str] = None) -> None:
    st.session_state.pop(DATASET_KEY, None)
    st.session_state[ERROR_KEY] = error
    get_color_cache().reset()


def get_error() -> Optional[str]:
    return st.session_state.get(ERROR_KEY)


def get_color_cache() -> ColorCache:
    if COLOR_CACHE_KEY not in st.session_state:
        st.session_state[COLOR_CACHE_KEY] = ColorCache()
    return st.session_state[COLOR_CACHE_KEY]
