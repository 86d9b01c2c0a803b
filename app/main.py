import asyncio
import logging
import time

import streamlit as st

from location_tracking.sources import data_source_names, make_data_source
from location_tracking.viewer import LocationTrackingViewer

DEFAULT_DATA_SOURCE = "Sample"
REFRESH_SECONDS = 0.1
# Cap on animation frames replayed after a stalled refresh
MAX_CATCHUP_FRAMES = 120

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

st.set_page_config(layout="wide", page_title="Location Tracking")


def get_viewer(source_name: str) -> LocationTrackingViewer:
    if st.session_state.get("source_name") != source_name:
        st.session_state["source_name"] = source_name
        st.session_state["viewer"] = LocationTrackingViewer(
            make_data_source(source_name)
        )
        st.session_state["last_poll"] = None
        st.session_state["last_frame"] = time.monotonic()
    return st.session_state["viewer"]


def advance(viewer: LocationTrackingViewer, now: float) -> None:
    """Catch the viewer up to ``now``: poll when due, then replay missed frames."""
    last_poll = st.session_state["last_poll"]
    if last_poll is None or now - last_poll >= viewer.poll_config.interval:
        asyncio.run(viewer.poll())
        st.session_state["last_poll"] = now

    fps = viewer.poll_config.fps
    frames = int((now - st.session_state["last_frame"]) * fps)
    for _ in range(min(frames, MAX_CATCHUP_FRAMES)):
        viewer.tick()
    st.session_state["last_frame"] += frames / fps


@st.fragment(run_every=REFRESH_SECONDS)
def live_map(source_name: str) -> None:
    viewer = get_viewer(source_name)
    advance(viewer, time.monotonic())
    st.image(viewer.frame(), use_container_width=True)
    st.caption(
        f"{len(viewer.markers)} incidents · {viewer.poller.failures} failed polls"
    )


# --------- Main App ---------

st.title("Location Tracking")
source_names = data_source_names()
source_name: str = st.sidebar.selectbox(
    "Data source",
    source_names,
    index=source_names.index(DEFAULT_DATA_SOURCE),
    key="data_source",
)
live_map(source_name)
