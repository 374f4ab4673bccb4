# pages/1_Sankey.py
import streamlit as st

from actrend.charts import sankey_figure
from actrend.config import APP_ICON
from actrend.data import (
    LAST_GRAPH_KEY,
    SELECTED_PATH_KEY,
    YEAR_CHECKBOX_PREFIX,
    YEARS_KEY,
    get_color_cache,
)
from actrend.errors import YearSelectionError
from actrend.flow import (
    build_flow_graph,
    default_year_selection,
    legend_entries,
    link_style,
    toggle_selection,
    toggle_year,
)
from actrend.ui import require_dataset

# ---------------- Page Config ----------------
st.set_page_config(page_title="Sankey · AC Trends", page_icon=APP_ICON, layout="wide")
st.title("🔀 Sankey Diagram")

dataset = require_dataset()

# ---------------- State ----------------
if YEARS_KEY not in st.session_state:
    st.session_state[YEARS_KEY] = default_year_selection(dataset.years)
st.session_state.setdefault(SELECTED_PATH_KEY, None)
for y in dataset.years:
    st.session_state.setdefault(f"{YEAR_CHECKBOX_PREFIX}{y}", y in st.session_state[YEARS_KEY])


def _on_year_toggle(year: str):
    key = f"{YEAR_CHECKBOX_PREFIX}{year}"
    try:
        st.session_state[YEARS_KEY] = toggle_year(st.session_state[YEARS_KEY], year, st.session_state[key])
    except YearSelectionError as e:
        st.session_state[key] = True
        st.session_state["year_warning"] = str(e)


def _on_legend_click(group_id: str):
    st.session_state[SELECTED_PATH_KEY] = toggle_selection(st.session_state[SELECTED_PATH_KEY], group_id)


# ---------------- Year selection ----------------
st.markdown("### Years")
for col, year in zip(st.columns(len(dataset.years)), dataset.years):
    col.checkbox(year, key=f"{YEAR_CHECKBOX_PREFIX}{year}", on_change=_on_year_toggle, args=(year,))

warning = st.session_state.pop("year_warning", None)
if warning:
    st.warning(warning)

# ---------------- Diagram ----------------
graph = build_flow_graph(dataset.records, st.session_state[YEARS_KEY], get_color_cache())
if graph is not None:
    st.session_state[LAST_GRAPH_KEY] = graph
else:
    # keep showing the previous diagram
    graph = st.session_state.get(LAST_GRAPH_KEY)

if graph is None:
    st.info("No valid W/L trend data for the selected years.")
    st.stop()

selected = st.session_state[SELECTED_PATH_KEY]
if selected is not None and selected not in {g.group_id for g in graph.groups}:
    selected = st.session_state[SELECTED_PATH_KEY] = None

chart_col, legend_col = st.columns([3, 1])

with chart_col:
    if graph.is_empty:
        st.info("No rows found with valid trend data ('W' or 'L') for all selected years.")
    st.plotly_chart(sankey_figure(graph, selected), use_container_width=True)

with legend_col:
    st.markdown("**Trend Groups Legend (click to highlight):**")
    for entry in legend_entries(graph):
        style = link_style(entry.group_id, selected, entry.color)
        is_selected = entry.group_id == selected
        st.markdown(
            f"<span style='display:inline-block;width:12px;height:12px;"
            f"background:{style.color};opacity:{style.opacity};margin-right:6px'></span>"
            f"{'<b>' if is_selected else ''}{entry.text}{'</b>' if is_selected else ''}",
            unsafe_allow_html=True,
        )
        st.button(
            "Clear highlight" if is_selected else "Highlight",
            key=f"legend_{entry.group_id}",
            on_click=_on_legend_click,
            args=(entry.group_id,),
        )
