"""Streamlit UI entrypoint.

Run with::

    streamlit run pneumo_ui/ui/app.py

The Inference Service address comes from ``PNEUMO_API_URL``.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

# Ensure repo root is on sys.path for imports.
repo_root = Path(__file__).resolve().parents[2]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

import streamlit as st

from pneumo_ui.config import get_config
from pneumo_ui.core.contracts import Mode, RequestStatus
from pneumo_ui.ui import components
from pneumo_ui.ui.formatting import selection_label, upload_caption
from pneumo_ui.ui.state import (
    get_service_info,
    get_session,
    reset_uploader,
    sync_uploads,
    uploader_key,
)

config = get_config()
logging.basicConfig(level=config.log_level)

# Configure Streamlit page
st.set_page_config(page_title="Pneumonia Detection System", layout="wide")
components.inject_custom_css(st)

session = get_session(config)
health, model_info = get_service_info(session)

MODE_LABELS = {Mode.SINGLE: "Single Image", Mode.BATCH: "Batch Analysis"}


def _on_mode_change() -> None:
    session.set_mode(st.session_state["mode_toggle"])
    reset_uploader()


def _on_clear() -> None:
    session.clear()
    reset_uploader()


# --- Header ---
header_col, badge_col = st.columns([5, 1])
with header_col:
    st.title("Pneumonia Detection System")
    st.caption("AI-Powered Chest X-Ray Analysis")
with badge_col:
    components.render_health_badge(st, health)
components.render_model_info(st, model_info)

# --- Mode selector ---
st.radio(
    "Mode",
    options=list(MODE_LABELS),
    format_func=lambda m: MODE_LABELS[Mode(m)],
    index=list(MODE_LABELS).index(session.state.mode),
    horizontal=True,
    key="mode_toggle",
    on_change=_on_mode_change,
    label_visibility="collapsed",
)

mode = session.state.mode
upload_col, result_col = st.columns(2)

# --- Upload section ---
with upload_col:
    st.header("Upload Images" if mode is Mode.BATCH else "Upload Image")
    uploads = st.file_uploader(
        "Drop images here or click to upload" if mode is Mode.BATCH else "Drop image here or click to upload",
        accept_multiple_files=mode is Mode.BATCH,
        key=uploader_key(mode.value),
        help=upload_caption(mode, config.batch_limit),
    )
    st.caption(upload_caption(mode, config.batch_limit))
    sync_uploads(session, uploads)

    state = session.state
    if state.has_selection:
        info_col, clear_col = st.columns([3, 1])
        info_col.markdown(f"**{selection_label(len(state.files), mode)}**")
        clear_col.button("Clear", on_click=_on_clear)

        components.render_preview_grid(st, state.previews, ready=state.previews_ready)

        analyze_label = "Analyze Images" if mode is Mode.BATCH else "Analyze Image"
        if st.button(analyze_label, type="primary", disabled=state.is_busy, width="stretch"):
            with st.spinner("Analyzing..."):
                asyncio.run(session.analyze())

# --- Results section ---
with result_col:
    st.header("Results")
    state = session.state
    if state.status is RequestStatus.FAILED and state.error:
        st.error(state.error)

    if state.single_result is not None and mode is Mode.SINGLE:
        components.render_single_result(st, state.single_result)
    elif state.batch_result is not None and mode is Mode.BATCH:
        components.render_batch_result(st, state.batch_result)
    else:
        components.render_empty_results(st)

st.divider()
st.caption(
    "This tool is for educational purposes only. "
    "Always consult with healthcare professionals for medical diagnosis."
)
