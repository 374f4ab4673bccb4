import logging

import streamlit as st

from actrend.config import APP_ICON, APP_NAME, log_level, sample_data_url
from actrend.data import (
    clear_dataset,
    get_dataset,
    get_error,
    load_dataset,
    load_sample,
    set_dataset,
    upload_token,
)
from actrend.errors import IngestionError

logging.basicConfig(
    level=log_level(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

st.set_page_config(page_title=APP_NAME, page_icon=APP_ICON, layout="wide")

# optional: tiny CSS polish for sidebar links
st.markdown(
    """
    <style>
      section[data-testid="stSidebar"] .stMarkdown a { display:block; padding:6px 2px; }
    </style>
    """,
    unsafe_allow_html=True,
)

st.title(APP_NAME)
st.caption("Upload a trend CSV here, then use the sidebar to open a view.")

# ---------------- Upload ----------------
uploaded = st.file_uploader(
    "Please upload your CSV file with trend data:",
    type=["csv"],
    help=(
        "The CSV should contain columns named trend_YYYY (e.g., trend_2011, trend_2016, trend_2021) "
        "and optional fields for district_name, zone, ac_name, and ac_no."
    ),
)

if uploaded is not None:
    content = uploaded.getvalue()
    token = (uploaded.name, upload_token(content))
    if st.session_state.get("upload_token") != token:
        st.session_state["upload_token"] = token
        try:
            set_dataset(load_dataset(content, uploaded.name))
        except IngestionError as e:
            logger.warning("Rejected upload %s: %s", uploaded.name, e)
            clear_dataset(str(e))
elif get_dataset() is None and not get_error() and sample_data_url():
    try:
        set_dataset(load_sample(sample_data_url()))
    except IngestionError as e:
        logger.warning("Sample data rejected: %s", e)
        clear_dataset(str(e))

# ---------------- Error slot ----------------
error = get_error()
if error:
    st.error(error)
    st.stop()

dataset = get_dataset()
if dataset is None:
    st.info("No data loaded yet.")
    st.stop()

# ---------------- Overview ----------------
st.markdown(f"**Year Order:** {dataset.year_order}")
c1, c2, c3 = st.columns(3)
c1.metric("ACs", f"{len(dataset.records):,}")
c2.metric("Years", len(dataset.years))
c3.metric("Trend groups", len(dataset.groups))

st.markdown("---")
st.subheader("Pages")
st.markdown(
    """
    - **Sankey**: Win/loss flows between the selected years; click a legend group to highlight its path.
    - **Trend Groups**: Pick a trend pattern and browse zone, district and AC tables for it.
    """
)
