"""Formatting helpers for UI display."""

from __future__ import annotations

import base64

import pandas as pd

from pneumo_ui.core.contracts import BatchResult, HealthStatus, Mode, SingleResult, is_pneumonia


def format_percent(value: float | None, digits: int = 2) -> str:
    """Return ``value`` (a 0..1 fraction) as a percentage string without the sign.

    Examples:
    - 0.88 -> "88.00"
    - 0.5, digits=1 -> "50.0"
    """
    if value is None:
        return "-"
    try:
        return f"{float(value) * 100:.{digits}f}"
    except (TypeError, ValueError):
        return "-"


def format_parameters(parameters: int | None) -> str:
    """Thousands-separated parameter count, e.g. 7978856 -> "7,978,856"."""
    if parameters is None:
        return "-"
    return f"{int(parameters):,}"


def health_badge(health: HealthStatus | None) -> tuple[str, str] | None:
    """Return (text, color) for the header badge, or None when unknown."""
    if health is None:
        return None
    return health.status.upper(), "green" if health.is_healthy else "orange"


def diagnosis_color(prediction: str) -> str:
    return "red" if is_pneumonia(prediction) else "green"


def single_result_summary(result: SingleResult) -> dict[str, str]:
    """View-model for the single-image diagnosis card."""
    return {
        "prediction": result.prediction,
        "confidence": format_percent(result.confidence, 2),
        "normal": format_percent(result.probability_normal, 2),
        "pneumonia": format_percent(result.probability_pneumonia, 2),
        "branch": "Pneumonia" if result.is_pneumonia else "Normal",
        "device_used": result.device_used,
        "model_architecture": result.model_architecture,
    }


def probability_frame(result: SingleResult) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {"label": "Normal", "probability": result.probability_normal},
            {"label": "Pneumonia", "probability": result.probability_pneumonia},
        ]
    )


def batch_results_frame(batch: BatchResult) -> pd.DataFrame:
    """Per-file batch rows, in the order the service returned them."""
    rows = [
        {
            "filename": item.filename,
            "prediction": item.prediction,
            "confidence": f"{format_percent(item.confidence, 1)}%",
        }
        for item in batch.results
    ]
    return pd.DataFrame(rows, columns=["filename", "prediction", "confidence"])


def upload_caption(mode: Mode, batch_limit: int) -> str:
    if mode is Mode.BATCH:
        return f"Upload up to {batch_limit} images"
    return "PNG, JPG, JPEG supported"


def selection_label(count: int, mode: Mode) -> str:
    noun = "images" if mode is Mode.BATCH else "image"
    return f"{count} {noun} selected"


def data_url_bytes(data_url: str) -> bytes:
    """Decode a base64 ``data:`` URL back into raw bytes for ``st.image``."""
    _, _, payload = data_url.partition(",")
    return base64.b64decode(payload)
