"""HTTP client for the remote Inference Service.

Blocking ``requests`` calls; async callers offload them with
``asyncio.to_thread``. Every failure mode surfaces as
``InferenceServiceError`` (or its ``ResponseParseError`` subclass) so the
orchestrator has a single exception boundary to handle.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

import requests

from pneumo_ui.config import ClientConfig
from pneumo_ui.core.contracts import (
    BatchResult,
    HealthStatus,
    InferenceServiceError,
    ModelInfo,
    ResponseParseError,
    SelectedFile,
    SingleResult,
)

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


def _multipart(field_name: str, file: SelectedFile) -> tuple[str, tuple[str, bytes, str]]:
    return field_name, (file.name, file.data, file.mime_type or DEFAULT_MIME_TYPE)


class InferenceClient:
    def __init__(
        self,
        base_url: str,
        *,
        timeout: float | None = None,
        session: Any = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        # Anything exposing requests-style get/post works (e.g. a test client).
        self._session = session if session is not None else requests.Session()

    @classmethod
    def from_config(cls, config: ClientConfig, *, session: Any = None) -> "InferenceClient":
        return cls(config.api_url, timeout=config.request_timeout, session=session)

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _send(self, method: str, path: str, **kwargs: Any) -> Any:
        url = self._url(path)
        try:
            response = getattr(self._session, method)(url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise InferenceServiceError(f"Could not reach the Inference Service at {url}: {exc}") from exc

        status = response.status_code
        if not 200 <= status < 300:
            detail = None
            try:
                body = response.json()
                if isinstance(body, dict):
                    detail = body.get("detail") or body.get("error")
            except ValueError:
                pass
            message = f"{method.upper()} {path} returned HTTP {status}"
            if detail:
                message = f"{message}: {detail}"
            raise InferenceServiceError(message, status_code=status)

        try:
            return response.json()
        except ValueError as exc:
            raise ResponseParseError(f"{method.upper()} {path} returned a non-JSON body") from exc

    def health(self) -> HealthStatus:
        return HealthStatus.from_dict(self._send("get", "/health"))

    def model_info(self) -> ModelInfo:
        return ModelInfo.from_dict(self._send("get", "/model-info"))

    def predict(self, file: SelectedFile) -> SingleResult:
        logger.info("Requesting single prediction for %s", file.name)
        payload = self._send("post", "/predict", files=[_multipart("file", file)])
        return SingleResult.from_dict(payload)

    def predict_batch(self, files: Sequence[SelectedFile]) -> BatchResult:
        logger.info("Requesting batch prediction for %d files", len(files))
        payload = self._send("post", "/predict-batch", files=[_multipart("files", f) for f in files])
        return BatchResult.from_dict(payload)
