# actrend/summary.py
"""
Zone / district summaries and table sorting.

Rows are plain dicts so they can feed a DataFrame or a table directly.
Sorting is stable: rows with equal keys keep their incoming order in both
directions.
"""
from __future__ import annotations

import numbers
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Optional

import pandas as pd

from .records import (
    AC_NAME_FIELD,
    DISTRICT_FIELD,
    UNKNOWN,
    ZONE_FIELD,
    Record,
    collation_key,
)

ASC = "asc"
DESC = "desc"
INDEX_COLUMN = "index"

Row = Mapping[str, Any]


# ---------------- summaries ----------------
def summarize_by(records: Iterable[Record], field: str, label: str = "category") -> list[dict[str, Any]]:
    """One `{label: value, "count": n}` row per distinct value of `field`, first-seen order."""
    categories = [rec.category(field) if isinstance(rec, Record) else (rec.get(field) or UNKNOWN)
                  for rec in records]
    if not categories:
        return []
    series = pd.Series(categories, dtype=object)
    counts = series.groupby(series, sort=False).size()
    return [{label: str(cat), "count": int(n)} for cat, n in counts.items()]


def district_summary(records: Iterable[Record]) -> list[dict[str, Any]]:
    return summarize_by(records, DISTRICT_FIELD, label="district")


def zone_summary(records: Iterable[Record]) -> list[dict[str, Any]]:
    return summarize_by(records, ZONE_FIELD, label="zone")


# ---------------- sorting ----------------
def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


def _as_number(value: Any) -> float:
    try:
        num = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if pd.isna(num) else num


def _as_text(value: Any) -> str:
    return str(value or "").lower()


def _check_direction(direction: str) -> bool:
    if direction not in (ASC, DESC):
        raise ValueError(f"direction must be '{ASC}' or '{DESC}', got {direction!r}")
    return direction == DESC


def sort_by_number(rows: Sequence[Row], key: str, direction: str = ASC) -> list[Row]:
    return sorted(rows, key=lambda r: _as_number(r.get(key)), reverse=_check_direction(direction))


def sort_by_string(rows: Sequence[Row], key: str, direction: str = ASC) -> list[Row]:
    return sorted(rows, key=lambda r: collation_key(_as_text(r.get(key))), reverse=_check_direction(direction))


def sort_rows(rows: Sequence[Row], key: str, direction: str = ASC) -> list[Row]:
    """
    Sort by `key`, picking numeric or text comparison from the first non-None value.

    Text compares lowercased. `key == "index"` returns the rows in their
    original order. Always returns a new list.
    """
    if not rows:
        return []
    if key == INDEX_COLUMN:
        return list(rows)
    sample = next((r.get(key) for r in rows if r.get(key) is not None), None)
    if _is_number(sample):
        return sort_by_number(rows, key, direction)
    return sort_by_string(rows, key, direction)


# ---------------- table sorters ----------------
DISTRICT_TABLE_COLUMNS = {"district": "district", "count": "count"}
ZONE_TABLE_COLUMNS = {"zone": "zone", "count": "count"}
AC_TABLE_COLUMNS = {"zone": ZONE_FIELD, "district": DISTRICT_FIELD, "ac": AC_NAME_FIELD}


def _sort_table(rows: Sequence[Row], columns: Mapping[str, str], column: str, direction: str) -> list[Row]:
    if column == INDEX_COLUMN:
        return list(rows)
    field = columns.get(column)
    if field is None:
        return list(rows)
    if field == "count":
        return sort_by_number(rows, field, direction)
    return sort_by_string(rows, field, direction)


def sort_district_table(rows: Sequence[Row], column: str, direction: str) -> list[Row]:
    return _sort_table(rows, DISTRICT_TABLE_COLUMNS, column, direction)


def sort_zone_table(rows: Sequence[Row], column: str, direction: str) -> list[Row]:
    return _sort_table(rows, ZONE_TABLE_COLUMNS, column, direction)


def sort_ac_table(rows: Sequence[Row], column: str, direction: str) -> list[Row]:
    return _sort_table(rows, AC_TABLE_COLUMNS, column, direction)


def next_sort_state(current: Optional[Mapping[str, str]], column: str) -> dict[str, str]:
    """Clicking the sorted column flips its direction; a new column starts descending."""
    if current and current.get("column") == column:
        previous = current.get("direction", ASC)
    else:
        previous = ASC
    return {"column": column, "direction": DESC if previous == ASC else ASC}


# ---------------- display frames ----------------
def summary_frame(rows: Sequence[Row], label: str, title: str) -> pd.DataFrame:
    """S.No / <title> / AC Count frame for a district or zone summary."""
    frame = pd.DataFrame(
        {
            "S.No": range(1, len(rows) + 1),
            title: [r.get(label) or UNKNOWN for r in rows],
            "AC Count": [int(r.get("count", 0)) for r in rows],
        }
    )
    return frame


def ac_frame(records: Sequence[Record]) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "S.No": range(1, len(records) + 1),
            "Zone": [r.zone or "" for r in records],
            "District": [r.district_name or "" for r in records],
            "AC Name": [r.ac_label() for r in records],
        }
    )
