# actrend/charts.py
"""Plotly figures for the flow view."""
from __future__ import annotations

from typing import Optional

import plotly.graph_objects as go

from .colors import (
    DEFAULT_NODE_COLOR,
    LINK_LINE_COLOR,
    NODE_LINE_COLOR,
    OUTCOME_COLORS,
    hex_to_rgba,
)
from .config import (
    SANKEY_FONT_SIZE,
    SANKEY_MARGIN,
    SANKEY_MIN_HEIGHT,
    SANKEY_NODE_PAD,
    SANKEY_NODE_THICKNESS,
    SANKEY_PX_PER_LABEL,
)
from .flow import FlowGraph, link_style


def node_colors(graph: FlowGraph) -> list[str]:
    return [OUTCOME_COLORS.get(o, DEFAULT_NODE_COLOR) for o in graph.node_outcomes]


def link_colors(graph: FlowGraph, selected_group_id: Optional[str] = None) -> list[str]:
    """One rgba color per edge, with the highlight opacity folded into the alpha channel."""
    colors = {g.group_id: g.color for g in graph.groups}
    out = []
    for edge in graph.edges:
        style = link_style(edge.group_id, selected_group_id, colors[edge.group_id])
        out.append(hex_to_rgba(style.color, style.opacity))
    return out


def sankey_figure(graph: FlowGraph, selected_group_id: Optional[str] = None) -> go.Figure:
    edges = graph.edges
    fig = go.Figure(data=[
        go.Sankey(
            orientation="h",
            node=dict(
                pad=SANKEY_NODE_PAD,
                thickness=SANKEY_NODE_THICKNESS,
                line=dict(color=NODE_LINE_COLOR, width=0.5),
                label=graph.labels,
                color=node_colors(graph),
                hovertemplate="%{label}<br>ACs: %{value:.0f}<extra></extra>",
            ),
            link=dict(
                source=[e.source for e in edges],
                target=[e.target for e in edges],
                value=[e.value for e in edges],
                color=link_colors(graph, selected_group_id),
                customdata=[e.group_id for e in edges],
                line=dict(color=LINK_LINE_COLOR, width=0.5),
                hovertemplate=(
                    "%{source.label} → %{target.label}<br>"
                    "Group %{customdata}: %{value:.0f} ACs<extra></extra>"
                ),
            ),
        )
    ])
    fig.update_layout(
        title=f"AC Trend Flows ({' → '.join(graph.years)})",
        font=dict(size=SANKEY_FONT_SIZE),
        height=max(SANKEY_MIN_HEIGHT, len(graph.labels) * SANKEY_PX_PER_LABEL),
        margin=SANKEY_MARGIN,
    )
    return fig
