"""Pytest configuration to make the project root importable as a package.

This ensures that ``import pneumo_ui`` works when tests are run from the
repository root or other locations.
"""

import os
import sys

import pytest

# Project root = parent directory of this tests/ folder
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


@pytest.fixture
def single_payload() -> dict:
    return {
        "prediction": "PNEUMONIA",
        "confidence": 0.88,
        "probabilities": {"NORMAL": 0.12, "PNEUMONIA": 0.88},
        "device_used": "cuda",
        "model_architecture": "DenseNet121",
    }


@pytest.fixture
def batch_payload() -> dict:
    return {
        "total_images": 3,
        "summary": {"normal": 2, "pneumonia": 1},
        "results": [
            {"filename": "xray_0.png", "prediction": "NORMAL", "confidence": 0.91},
            {"filename": "xray_1.png", "prediction": "PNEUMONIA", "confidence": 0.77},
            {"filename": "xray_2.png", "prediction": "NORMAL", "confidence": 0.64},
        ],
    }
