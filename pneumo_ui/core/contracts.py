from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping


class Mode(str, Enum):
    SINGLE = "single"
    BATCH = "batch"


class RequestStatus(str, Enum):
    IDLE = "IDLE"
    IN_FLIGHT = "IN_FLIGHT"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


class Label(str, Enum):
    NORMAL = "NORMAL"
    PNEUMONIA = "PNEUMONIA"


def is_pneumonia(prediction: str | None) -> bool:
    """Return True when a service prediction string denotes pneumonia."""
    return str(prediction or "").upper() == Label.PNEUMONIA.value


class InferenceServiceError(RuntimeError):
    """Transport failure or non-success response from the Inference Service."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ResponseParseError(InferenceServiceError):
    """The service answered, but the body did not have the expected shape."""


def _require(d: Any, key: str) -> Any:
    if not isinstance(d, Mapping):
        raise ResponseParseError(f"Expected an object while reading '{key}', got {type(d).__name__}")
    if key not in d:
        raise ResponseParseError(f"Missing field '{key}' in service response")
    return d[key]


def _as_float(value: Any, key: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ResponseParseError(f"Field '{key}' is not a number: {value!r}") from exc


def _as_int(value: Any, key: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ResponseParseError(f"Field '{key}' is not an integer: {value!r}") from exc


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SelectedFile:
    name: str
    data: bytes
    mime_type: str | None = None

    @property
    def is_image(self) -> bool:
        return bool(self.mime_type) and str(self.mime_type).startswith("image/")

    @classmethod
    def from_upload(cls, uploaded: Any) -> "SelectedFile":
        """Build from a Streamlit ``UploadedFile`` (name, type, getvalue())."""
        return cls(name=uploaded.name, data=uploaded.getvalue(), mime_type=uploaded.type)


@dataclass(frozen=True)
class Preview:
    index: int
    filename: str
    data_url: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.data_url is not None


# ---------------------------------------------------------------------------
# Service responses
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SingleResult:
    prediction: str
    confidence: float
    probability_normal: float
    probability_pneumonia: float
    device_used: str
    model_architecture: str

    @property
    def is_pneumonia(self) -> bool:
        return is_pneumonia(self.prediction)

    @classmethod
    def from_dict(cls, d: Any) -> "SingleResult":
        probabilities = _require(d, "probabilities")
        return cls(
            prediction=str(_require(d, "prediction")),
            confidence=_as_float(_require(d, "confidence"), "confidence"),
            probability_normal=_as_float(_require(probabilities, Label.NORMAL.value), "probabilities.NORMAL"),
            probability_pneumonia=_as_float(
                _require(probabilities, Label.PNEUMONIA.value), "probabilities.PNEUMONIA"
            ),
            device_used=str(_require(d, "device_used")),
            model_architecture=str(_require(d, "model_architecture")),
        )


@dataclass(frozen=True)
class BatchItem:
    filename: str
    prediction: str
    confidence: float

    @property
    def is_pneumonia(self) -> bool:
        return is_pneumonia(self.prediction)

    @classmethod
    def from_dict(cls, d: Any) -> "BatchItem":
        return cls(
            filename=str(_require(d, "filename")),
            prediction=str(_require(d, "prediction")),
            confidence=_as_float(_require(d, "confidence"), "confidence"),
        )


@dataclass(frozen=True)
class BatchResult:
    total_images: int
    normal: int
    pneumonia: int
    results: tuple[BatchItem, ...]

    @classmethod
    def from_dict(cls, d: Any) -> "BatchResult":
        # Totals are shown as reported; they are not cross-checked against results.
        summary = _require(d, "summary")
        raw_results = _require(d, "results")
        if not isinstance(raw_results, list):
            raise ResponseParseError("Field 'results' is not a list")
        return cls(
            total_images=_as_int(_require(d, "total_images"), "total_images"),
            normal=_as_int(_require(summary, "normal"), "summary.normal"),
            pneumonia=_as_int(_require(summary, "pneumonia"), "summary.pneumonia"),
            results=tuple(BatchItem.from_dict(item) for item in raw_results),
        )


@dataclass(frozen=True)
class HealthStatus:
    status: str

    @property
    def is_healthy(self) -> bool:
        return self.status == "healthy"

    @classmethod
    def from_dict(cls, d: Any) -> "HealthStatus":
        return cls(status=str(_require(d, "status")))


@dataclass(frozen=True)
class ModelInfo:
    model_architecture: str
    input_size: str
    parameters: int | None = None

    @classmethod
    def from_dict(cls, d: Any) -> "ModelInfo":
        params = d.get("parameters") if isinstance(d, Mapping) else None
        return cls(
            model_architecture=str(_require(d, "model_architecture")),
            input_size=str(_require(d, "input_size")),
            parameters=_as_int(params, "parameters") if params is not None else None,
        )
