"""Thin UI layer.

Streamlit pages here:
- collect files and the mode toggle
- call into pneumo_ui.core.session
- render previews and results

State-transition logic lives in pneumo_ui.core.
"""
