"""Core (pure) library layer.

This package is UI-agnostic and safe to import from:
- the Streamlit app
- tests

It should not import Streamlit or trigger network calls at import time.
"""
