# actrend/records.py
"""
Record model for one CSV row.

A row keeps every column it was parsed with (unknown columns pass through
untouched) and adds typed accessors for the columns the app understands.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterator, Optional

TREND_PREFIX = "trend_"
PATTERN_FIELD = "trend_pattern"

WIN = "W"
LOSS = "L"
OUTCOMES = (WIN, LOSS)

DISTRICT_FIELD = "district_name"
ZONE_FIELD = "zone"
AC_NAME_FIELD = "ac_name"
AC_NO_FIELD = "ac_no"

UNKNOWN = "Unknown"


def trend_column(year: str) -> str:
    return f"{TREND_PREFIX}{year}"


def collation_key(text: str) -> tuple[str, str]:
    """Case-insensitive ordering key; on ties lowercase sorts first ("a" < "A" < "b")."""
    return (text.casefold(), text.swapcase())


def normalize_outcome(value: Any) -> str:
    """Return "W" or "L" for an exact match, otherwise ""."""
    if value == WIN:
        return WIN
    if value == LOSS:
        return LOSS
    return ""


class Record(Mapping):
    """
    Read-only mapping of column name -> raw cell value.

    Cells hold str, int/float or None. The derived trend pattern is stored
    as a tuple of outcome tokens and exposed under the `trend_pattern` key
    as the space-joined string, so it behaves like any other column in
    tables and lookups.
    """

    __slots__ = ("_values", "_tokens")

    def __init__(self, values: Mapping[str, Any], tokens: Optional[tuple[str, ...]] = None):
        self._values = dict(values)
        self._tokens = tokens
        if tokens is not None:
            self._values[PATTERN_FIELD] = " ".join(tokens)

    # ---------------- Mapping protocol ----------------
    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Record({self._values!r})"

    # ---------------- derived pattern ----------------
    def with_pattern(self, years: tuple[str, ...]) -> "Record":
        """Return a copy augmented with the trend pattern over `years`."""
        tokens = tuple(normalize_outcome(self.trend(y)) for y in years)
        return Record(self._values, tokens)

    @property
    def trend_tokens(self) -> Optional[tuple[str, ...]]:
        return self._tokens

    @property
    def trend_pattern(self) -> Optional[str]:
        return self._values.get(PATTERN_FIELD) if self._tokens is not None else None

    # ---------------- known columns ----------------
    def trend(self, year: str) -> Any:
        """Raw value of the `trend_<year>` column (None when absent)."""
        return self._values.get(trend_column(year))

    def outcome(self, year: str) -> Optional[str]:
        """"W" / "L" for the year, or None when the cell is anything else."""
        return normalize_outcome(self.trend(year)) or None

    @property
    def district_name(self) -> Any:
        return self._values.get(DISTRICT_FIELD)

    @property
    def zone(self) -> Any:
        return self._values.get(ZONE_FIELD)

    @property
    def ac_name(self) -> Any:
        return self._values.get(AC_NAME_FIELD)

    @property
    def ac_no(self) -> Any:
        return self._values.get(AC_NO_FIELD)

    def category(self, field: str) -> str:
        """Value of `field` for grouping, "Unknown" when missing or falsy."""
        value = self._values.get(field)
        return str(value) if value else UNKNOWN

    def ac_label(self) -> str:
        return f"{self.ac_name or ''} ({self.ac_no or ''})"

    def to_dict(self) -> dict[str, Any]:
        return dict(self._values)
