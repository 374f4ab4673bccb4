# actrend/grouping.py
"""Partition records by their full trend pattern."""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Optional, Union

from .records import Record, collation_key


@dataclass(frozen=True)
class PatternGroup:
    id: int
    pattern: str
    records: tuple[Record, ...]

    @property
    def count(self) -> int:
        return len(self.records)

    @property
    def label(self) -> str:
        """Dropdown text, e.g. "Group 2 (W L W) (14)"."""
        return f"Group {self.id} ({self.pattern}) ({self.count})"


def group_by_pattern(records: Iterable[Record]) -> list[PatternGroup]:
    """
    Group records sharing an identical `trend_pattern`.

    Groups come back sorted by pattern (case-insensitive, see `collation_key`)
    with ids 1..N in that order. Members keep their input order.
    """
    buckets: dict[str, list[Record]] = {}
    for rec in records:
        buckets.setdefault(rec.trend_pattern or "", []).append(rec)

    ordered = sorted(buckets, key=collation_key)
    return [
        PatternGroup(id=i, pattern=pattern, records=tuple(buckets[pattern]))
        for i, pattern in enumerate(ordered, start=1)
    ]


def find_group(groups: Sequence[PatternGroup], group_id: Union[int, str, None]) -> Optional[PatternGroup]:
    if group_id in (None, ""):
        return None
    try:
        wanted = int(group_id)
    except (TypeError, ValueError):
        return None
    return next((g for g in groups if g.id == wanted), None)
