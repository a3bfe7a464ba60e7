"""Prediction orchestrator.

Drives the request lifecycle::

    IDLE -> IN_FLIGHT          submit()
    IN_FLIGHT -> SUCCEEDED     parsed response
    IN_FLIGHT -> FAILED        transport error, non-2xx status, bad body or any
                               other exception from the request
    SUCCEEDED|FAILED -> IDLE   any selection or mode change

Only one request may be outstanding. A second ``submit()`` is refused, not
queued, so no cancellation is ever needed.
"""

from __future__ import annotations

import asyncio
import logging

from pneumo_ui.core.contracts import (
    BatchResult,
    HealthStatus,
    InferenceServiceError,
    Mode,
    ModelInfo,
    RequestStatus,
    SelectedFile,
    SingleResult,
)
from pneumo_ui.core.state import SessionStore
from pneumo_ui.inference_client import InferenceClient

logger = logging.getLogger(__name__)

SINGLE_FAILURE_MESSAGE = "Prediction failed. Please ensure the backend is running."
BATCH_FAILURE_MESSAGE = "Batch prediction failed. Please ensure the backend is running."


class PredictionOrchestrator:
    def __init__(self, store: SessionStore, client: InferenceClient) -> None:
        self._store = store
        self._client = client
        self._pending: asyncio.Task | None = None

    @property
    def has_pending_request(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def submit(self) -> asyncio.Task | None:
        """Dispatch an inference request for the current selection.

        Returns the request task, or ``None`` if the submission was refused
        (empty selection, or a request is already outstanding).
        """
        state = self._store.state
        if not state.files:
            logger.debug("submit() ignored: nothing selected")
            return None
        if state.status is RequestStatus.IN_FLIGHT or self.has_pending_request:
            logger.debug("submit() ignored: a request is already in flight")
            return None

        self._store.commit(status=RequestStatus.IN_FLIGHT, error=None)
        generation = self._store.generation
        self._pending = asyncio.create_task(self._run(generation, state.mode, state.files))
        return self._pending

    async def _request(self, mode: Mode, files: tuple[SelectedFile, ...]) -> SingleResult | BatchResult:
        if mode is Mode.BATCH:
            return await asyncio.to_thread(self._client.predict_batch, files)
        return await asyncio.to_thread(self._client.predict, files[0])

    async def _run(self, generation: int, mode: Mode, files: tuple[SelectedFile, ...]) -> None:
        try:
            result = await self._request(mode, files)
        except InferenceServiceError as exc:
            logger.warning("%s prediction failed: %s", mode.value.capitalize(), exc)
            self._fail(generation, mode)
            return
        except Exception:
            logger.exception("%s prediction raised an unexpected error", mode.value.capitalize())
            self._fail(generation, mode)
            return
        finally:
            self._pending = None

        if self._is_stale(generation):
            return
        self._store.commit(
            status=RequestStatus.SUCCEEDED,
            single_result=result if isinstance(result, SingleResult) else None,
            batch_result=result if isinstance(result, BatchResult) else None,
            error=None,
        )

    def _fail(self, generation: int, mode: Mode) -> None:
        if self._is_stale(generation):
            return
        self._store.commit(
            status=RequestStatus.FAILED,
            single_result=None,
            batch_result=None,
            error=BATCH_FAILURE_MESSAGE if mode is Mode.BATCH else SINGLE_FAILURE_MESSAGE,
        )

    def _is_stale(self, generation: int) -> bool:
        if self._store.generation != generation:
            logger.info("Discarding prediction response for a superseded selection")
            return True
        return False


async def probe_service(client: InferenceClient) -> tuple[HealthStatus | None, ModelInfo | None]:
    """Fetch health and model metadata concurrently; failures yield ``None``."""

    async def _health() -> HealthStatus | None:
        try:
            return await asyncio.to_thread(client.health)
        except InferenceServiceError as exc:
            logger.warning("Health check failed: %s", exc)
            return None

    async def _model_info() -> ModelInfo | None:
        try:
            return await asyncio.to_thread(client.model_info)
        except InferenceServiceError as exc:
            logger.warning("Model info fetch failed: %s", exc)
            return None

    health, info = await asyncio.gather(_health(), _model_info())
    return health, info
