# actrend/flow.py
"""
Sankey flow graph over a chosen subset of years.

Nodes are (year, outcome) pairs that actually occur in the data. Every
distinct outcome sequence across the chosen years is an edge group
("W-L-W"), and each group contributes one link per consecutive year pair.
Links from different groups are never merged, so the diagram stacks them.

Group colors come from a `ColorCache` owned by the caller's session; a group
id keeps its color for as long as the cache lives.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Optional, Protocol

import numpy as np

from .colors import DIMMED_LINK_COLOR, DIMMED_LINK_OPACITY
from .errors import GraphBuildError, YearSelectionError
from .records import OUTCOMES, Record

logger = logging.getLogger(__name__)

MIN_YEARS = 2
DEFAULT_YEAR_COUNT = 3
GROUP_SEPARATOR = "-"


# ---------------- colors ----------------
class ColorProvider(Protocol):
    def next_color(self) -> str: ...


class RandomColorProvider:
    """Uniform random RGB channels (0-255) at full opacity."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = np.random.default_rng(seed)

    def next_color(self) -> str:
        r, g, b = (int(c) for c in self._rng.integers(0, 256, size=3))
        return f"rgba({r}, {g}, {b}, 1)"


class ColorCache:
    """Group id -> color, filled on first use. Cleared only by `reset()`."""

    def __init__(self, provider: Optional[ColorProvider] = None):
        self.provider = provider or RandomColorProvider()
        self._colors: dict[str, str] = {}

    def color_for(self, group_id: str) -> str:
        color = self._colors.get(group_id)
        if color is None:
            color = self.provider.next_color()
            self._colors[group_id] = color
        return color

    def reset(self) -> None:
        self._colors.clear()

    def __contains__(self, group_id: object) -> bool:
        return group_id in self._colors

    def __len__(self) -> int:
        return len(self._colors)


# ---------------- graph types ----------------
@dataclass(frozen=True)
class EdgeGroup:
    group_id: str
    count: int
    color: str

    @property
    def outcomes(self) -> list[str]:
        return self.group_id.split(GROUP_SEPARATOR)


@dataclass(frozen=True)
class Edge:
    source: int
    target: int
    value: int
    group_id: str


@dataclass
class FlowGraph:
    years: tuple[str, ...]
    labels: list[str] = field(default_factory=list)
    node_index: dict[tuple[str, str], int] = field(default_factory=dict)
    groups: list[EdgeGroup] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.groups

    @property
    def node_outcomes(self) -> list[str]:
        """Outcome of each node, by index."""
        by_index = {idx: outcome for (_, outcome), idx in self.node_index.items()}
        return [by_index[i] for i in range(len(self.labels))]

    def total_count(self) -> int:
        return sum(g.count for g in self.groups)


def node_label(year: str, outcome: str) -> str:
    return f"{year} - {outcome}"


# ---------------- builder ----------------
def _discover_nodes(records: Sequence[Record], years: Sequence[str]) -> tuple[list[str], dict[tuple[str, str], int]]:
    labels: list[str] = []
    index: dict[tuple[str, str], int] = {}
    for year in years:
        for outcome in OUTCOMES:
            if (year, outcome) in index:
                continue
            if any(rec.trend(year) == outcome for rec in records):
                index[(year, outcome)] = len(labels)
                labels.append(node_label(year, outcome))
    return labels, index


def _tally_groups(records: Iterable[Record], years: Sequence[str]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for rec in records:
        outcomes = [rec.outcome(y) for y in years]
        if any(o is None for o in outcomes):
            continue
        group_id = GROUP_SEPARATOR.join(outcomes)
        counts[group_id] = counts.get(group_id, 0) + 1
    return counts


def _build(records: Sequence[Record], years: tuple[str, ...], color_cache: ColorCache) -> FlowGraph:
    if len(years) < MIN_YEARS:
        raise GraphBuildError(f"Need at least {MIN_YEARS} years for a flow graph, got {len(years)}.")

    labels, node_index = _discover_nodes(records, years)
    if not labels:
        raise GraphBuildError(
            "No valid nodes could be created. Check trend column data (should contain 'W' or 'L')."
        )

    graph = FlowGraph(years=years, labels=labels, node_index=node_index)

    counts = _tally_groups(records, years)
    if not counts:
        logger.info("No rows with valid W/L trends for all of %s", ", ".join(years))
        return graph

    for group_id, count in counts.items():
        graph.groups.append(EdgeGroup(group_id, count, color_cache.color_for(group_id)))

    for group in graph.groups:
        outcomes = group.outcomes
        for i in range(len(years) - 1):
            src = node_index.get((years[i], outcomes[i]))
            dst = node_index.get((years[i + 1], outcomes[i + 1]))
            if src is None or dst is None:
                logger.debug("Skipping %s link %s -> %s: missing node", group.group_id, years[i], years[i + 1])
                continue
            graph.edges.append(Edge(src, dst, group.count, group.group_id))

    logger.debug(
        "Flow graph for %s: %d nodes, %d groups, %d links",
        ",".join(years), len(labels), len(graph.groups), len(graph.edges),
    )
    return graph


def build_flow_graph(
    records: Sequence[Record],
    years: Sequence[str],
    color_cache: Optional[ColorCache] = None,
) -> Optional[FlowGraph]:
    """
    Build the flow graph for `years`, taken in the given order (left to right).

    Returns None when fewer than two years are given or no (year, outcome)
    node exists; the caller keeps whatever it showed before. A graph with
    nodes but no groups means no row has W/L in every chosen year.
    """
    cache = color_cache if color_cache is not None else ColorCache()
    try:
        return _build(list(records or ()), tuple(years or ()), cache)
    except GraphBuildError as e:
        logger.warning("Flow graph not built: %s", e)
        return None


# ---------------- highlighting ----------------
@dataclass(frozen=True)
class LinkStyle:
    color: str
    opacity: float


def link_style(group_id: str, selected_group_id: Optional[str], color: str) -> LinkStyle:
    """Selected path (or every path when none is selected) keeps its color; others are dimmed."""
    if selected_group_id is None or selected_group_id == group_id:
        return LinkStyle(color, 1.0)
    return LinkStyle(DIMMED_LINK_COLOR, DIMMED_LINK_OPACITY)


def toggle_selection(selected_group_id: Optional[str], group_id: str) -> Optional[str]:
    return None if selected_group_id == group_id else group_id


@dataclass(frozen=True)
class LegendEntry:
    group_id: str
    count: int
    color: str

    @property
    def text(self) -> str:
        path = " → ".join(self.group_id.split(GROUP_SEPARATOR))
        return f"Group ({path}): {self.count} ACs"


def legend_entries(graph: Optional[FlowGraph]) -> list[LegendEntry]:
    if graph is None:
        return []
    return [
        LegendEntry(g.group_id, g.count, g.color)
        for g in sorted(graph.groups, key=lambda g: g.group_id)
        if g.count > 0
    ]


# ---------------- year selection ----------------
def default_year_selection(years: Sequence[str], count: int = DEFAULT_YEAR_COUNT) -> list[str]:
    if len(years) < MIN_YEARS:
        return []
    return list(years[:min(count, len(years))])


def toggle_year(selected: Sequence[str], year: str, checked: bool) -> list[str]:
    """
    New selection after a year checkbox changes.

    Checking adds the year and re-sorts; unchecking is refused with
    YearSelectionError when it would leave fewer than two years.
    """
    if checked:
        return sorted(set(selected) | {year})
    if year not in selected:
        return list(selected)
    if len(selected) > MIN_YEARS:
        return [y for y in selected if y != year]
    raise YearSelectionError(f"Please select at least {MIN_YEARS} years for the Sankey diagram.")
