# actrend/trends.py
"""
Trend extraction and ingestion.

Turns a CSV parse result into a `Dataset`: the discovered years, every row
augmented with its trend pattern, and the pattern groups.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Optional

from .errors import IngestionError
from .grouping import PatternGroup, group_by_pattern
from .records import TREND_PREFIX, Record

logger = logging.getLogger(__name__)

MAX_REPORTED_ERRORS = 3


@dataclass(frozen=True)
class ParseIssue:
    """One parser complaint; `row` is the 0-based data row."""
    row: int
    message: str


@dataclass(frozen=True)
class ParseResult:
    data: Sequence[Mapping[str, Any]] = ()
    errors: Sequence[ParseIssue] = ()


@dataclass(frozen=True)
class Dataset:
    years: tuple[str, ...]
    records: tuple[Record, ...]
    groups: tuple[PatternGroup, ...]
    source_name: Optional[str] = None
    columns: tuple[str, ...] = field(default=())

    @property
    def year_order(self) -> str:
        return " → ".join(self.years)


# ---------------- years & patterns ----------------
def extract_years(columns: Iterable[Any]) -> tuple[str, ...]:
    """
    Year tokens from `trend_<year>` headers, deduplicated and sorted as strings.

    The prefix match is literal and case-sensitive; non-string headers are ignored.
    """
    years = {
        col[len(TREND_PREFIX):]
        for col in columns
        if isinstance(col, str) and col.startswith(TREND_PREFIX)
    }
    return tuple(sorted(years))


def trend_pattern(row: Mapping[str, Any], years: Sequence[str]) -> str:
    """Space-joined W/L/"" tokens for `row` across `years`."""
    record = row if isinstance(row, Record) else Record(row)
    return record.with_pattern(tuple(years)).trend_pattern


def format_parse_errors(errors: Sequence[ParseIssue]) -> str:
    shown = "; ".join(f"Row {e.row + 1}: {e.message}" for e in errors[:MAX_REPORTED_ERRORS])
    return f"CSV parsing error(s): {shown}"


# ---------------- ingestion ----------------
def ingest(result: ParseResult, source_name: Optional[str] = None) -> Dataset:
    """
    Validate a parse result and build the session dataset.

    Raises IngestionError with a user-facing message when the file has parse
    errors, no rows, no usable header, no trend columns, or fewer than two years.
    """
    if result.errors:
        raise IngestionError(format_parse_errors(list(result.errors)))

    data = list(result.data or ())
    if not data:
        raise IngestionError("No data found in the CSV file.")

    first = data[0]
    if not isinstance(first, Mapping) or len(first) == 0:
        raise IngestionError(
            "CSV parsing failed to extract headers or data correctly. Ensure the CSV is well-formed."
        )

    columns = tuple(first.keys())
    years = extract_years(columns)
    if not years:
        raise IngestionError(
            'No trend columns found. The CSV must have columns named like "trend_YYYY" (e.g., trend_2011).'
        )
    if len(years) < 2:
        raise IngestionError(
            "Need at least two years with trend data (trend_YYYY columns) in the CSV to create a Sankey diagram."
        )

    records = tuple(Record(row).with_pattern(years) for row in data)
    groups = tuple(group_by_pattern(records))

    logger.info(
        "Ingested %d rows from %s: years=%s, %d trend groups",
        len(records), source_name or "upload", ",".join(years), len(groups),
    )
    return Dataset(
        years=years,
        records=records,
        groups=groups,
        source_name=source_name,
        columns=columns,
    )
