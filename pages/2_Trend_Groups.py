# pages/2_Trend_Groups.py
import copy

import streamlit as st

from actrend.config import APP_ICON, DEFAULT_SORTS
from actrend.data import GROUP_KEY, SORT_KEY
from actrend.grouping import find_group
from actrend.summary import (
    ac_frame,
    district_summary,
    next_sort_state,
    sort_ac_table,
    sort_district_table,
    sort_zone_table,
    summary_frame,
    zone_summary,
)
from actrend.ui import render_styled_table, require_dataset, style_striped, with_total_row

# ---------------- Page Config ----------------
st.set_page_config(page_title="Trend Groups · AC Trends", page_icon=APP_ICON, layout="wide")
st.title("📋 Trend Groups Analysis")

dataset = require_dataset()

if not dataset.groups:
    st.info("No trend groups available.")
    st.stop()

if SORT_KEY not in st.session_state:
    st.session_state[SORT_KEY] = copy.deepcopy(DEFAULT_SORTS)
sorts = st.session_state[SORT_KEY]

# ---------------- Helpers ----------------
def _on_sort(table: str, column: str):
    st.session_state[SORT_KEY][table] = next_sort_state(st.session_state[SORT_KEY][table], column)


def sort_header(table: str, columns: dict[str, str]):
    """Row of header buttons; clicking one sorts the table by that column."""
    current = sorts[table]
    for col, (column, title) in zip(st.columns(len(columns)), columns.items()):
        arrow = ""
        if current["column"] == column:
            arrow = " ▲" if current["direction"] == "asc" else " ▼"
        col.button(f"{title}{arrow}", key=f"sort_{table}_{column}", on_click=_on_sort, args=(table, column))


# ---------------- Group selection ----------------
group_ids = [g.id for g in dataset.groups]
if st.session_state.get(GROUP_KEY) not in group_ids:
    st.session_state[GROUP_KEY] = group_ids[0]

labels = {g.id: g.label for g in dataset.groups}
st.selectbox("Trend group", group_ids, format_func=lambda gid: labels[gid], key=GROUP_KEY)

group = find_group(dataset.groups, st.session_state[GROUP_KEY])
if group is None:
    st.info("Select a group to see its details.")
    st.stop()

c1, c2, c3 = st.columns(3)
c1.metric("Group", group.id)
c2.metric("Trend", group.pattern or "—")
c3.metric("Total ACs", group.count)
st.caption(f"Years: {dataset.year_order}")

st.markdown("---")

# =====================================================
# Zone-wise AC count
# =====================================================
st.subheader("🧭 Zone-wise AC Count")
zone_rows = sort_zone_table(zone_summary(group.records), sorts["zone"]["column"], sorts["zone"]["direction"])
sort_header("zone", {"index": "S.No", "zone": "Zone", "count": "AC Count"})
zone_df = with_total_row(summary_frame(zone_rows, "zone", "Zone"), "Zone", "AC Count", group.count)
render_styled_table(style_striped(zone_df, total_label="Total", label_col="Zone"))

# =====================================================
# District-wise AC count
# =====================================================
st.subheader("🏙️ District-wise AC Count")
district_rows = sort_district_table(
    district_summary(group.records), sorts["district"]["column"], sorts["district"]["direction"]
)
sort_header("district", {"index": "S.No", "district": "District", "count": "AC Count"})
district_df = with_total_row(
    summary_frame(district_rows, "district", "District"), "District", "AC Count", group.count
)
render_styled_table(style_striped(district_df, total_label="Total", label_col="District"))

# =====================================================
# AC listing
# =====================================================
st.subheader("🗳️ AC Listing")
ac_rows = sort_ac_table(list(group.records), sorts["ac"]["column"], sorts["ac"]["direction"])
sort_header("ac", {"index": "S.No", "zone": "Zone", "district": "District", "ac": "AC Name"})
render_styled_table(style_striped(ac_frame(ac_rows)))
