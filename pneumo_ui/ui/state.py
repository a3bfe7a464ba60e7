"""UI state management for the Streamlit app.

Provides centralized access to the per-browser-session ``ClassifierSession``
and the one-shot service probe held in ``st.session_state``.
"""

from __future__ import annotations

import asyncio
from typing import Any

import streamlit as st

from pneumo_ui.config import ClientConfig, get_config
from pneumo_ui.core.contracts import HealthStatus, ModelInfo, SelectedFile
from pneumo_ui.core.session import ClassifierSession, create_session

SESSION_KEY = "classifier_session"
SERVICE_INFO_KEY = "service_info"
UPLOADER_NONCE_KEY = "uploader_nonce"
UPLOAD_SIGNATURE_KEY = "upload_signature"


def get_session(config: ClientConfig | None = None) -> ClassifierSession:
    """Return this browser session's ``ClassifierSession``, creating it once."""
    if SESSION_KEY not in st.session_state:
        st.session_state[SESSION_KEY] = create_session(config or get_config())
    return st.session_state[SESSION_KEY]


def get_service_info(session: ClassifierSession) -> tuple[HealthStatus | None, ModelInfo | None]:
    """Probe /health and /model-info once per browser session."""
    if SERVICE_INFO_KEY not in st.session_state:
        st.session_state[SERVICE_INFO_KEY] = asyncio.run(session.probe())
    return st.session_state[SERVICE_INFO_KEY]


def uploader_key(mode: str) -> str:
    """Widget key for the file uploader; changing it resets the widget."""
    nonce = st.session_state.get(UPLOADER_NONCE_KEY, 0)
    return f"uploader_{mode}_{nonce}"


def reset_uploader() -> None:
    st.session_state[UPLOADER_NONCE_KEY] = st.session_state.get(UPLOADER_NONCE_KEY, 0) + 1
    st.session_state.pop(UPLOAD_SIGNATURE_KEY, None)


def upload_signature(uploads: Any) -> tuple:
    """Identity of the uploader's current contents (order-sensitive)."""
    if uploads is None:
        return ()
    if not isinstance(uploads, (list, tuple)):
        uploads = [uploads]
    return tuple((getattr(u, "file_id", None), u.name, u.size) for u in uploads)


def sync_uploads(session: ClassifierSession, uploads: Any) -> bool:
    """Push new uploader contents into the session. Returns True if it changed.

    Streamlit reruns the script on every interaction; only a changed upload
    set counts as a new selection.
    """
    signature = upload_signature(uploads)
    if signature == st.session_state.get(UPLOAD_SIGNATURE_KEY, ()):
        return False
    st.session_state[UPLOAD_SIGNATURE_KEY] = signature

    if not signature:
        session.clear()
        return True

    if not isinstance(uploads, (list, tuple)):
        uploads = [uploads]
    files = [SelectedFile.from_upload(u) for u in uploads]
    asyncio.run(session.select_and_wait(files))
    return True
