"""Streamlit client for the pneumonia chest X-ray Inference Service."""

__version__ = "1.0.0"
