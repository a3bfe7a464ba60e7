from __future__ import annotations

import asyncio
from typing import Iterable

from pneumo_ui.config import ClientConfig, get_config
from pneumo_ui.core.contracts import HealthStatus, Mode, ModelInfo, SelectedFile
from pneumo_ui.core.orchestrator import PredictionOrchestrator, probe_service
from pneumo_ui.core.previews import DecodeFn, decode_preview
from pneumo_ui.core.selection import SelectionController
from pneumo_ui.core.state import SessionState, SessionStore
from pneumo_ui.inference_client import InferenceClient


class ClassifierSession:
    """One operator's session: state store, selection controller and orchestrator.

    The sync methods schedule work on the running loop and return the task.
    The ``*_and_wait`` / ``analyze`` coroutines suit callers (such as the
    Streamlit script) that drive the loop with ``asyncio.run``.
    """

    def __init__(
        self,
        client: InferenceClient,
        *,
        store: SessionStore | None = None,
        decode: DecodeFn = decode_preview,
        batch_limit: int | None = None,
        decode_timeout: float | None = None,
    ) -> None:
        self.client = client
        self.store = store or SessionStore()
        selection_kwargs = {"decode": decode, "decode_timeout": decode_timeout}
        if batch_limit is not None:
            selection_kwargs["batch_limit"] = batch_limit
        self.selection = SelectionController(self.store, **selection_kwargs)
        self.orchestrator = PredictionOrchestrator(self.store, client)

    @property
    def state(self) -> SessionState:
        return self.store.state

    def set_mode(self, mode: Mode | str) -> None:
        self.selection.set_mode(mode)

    def clear(self) -> None:
        self.selection.clear()

    def select(self, raw_files: Iterable[SelectedFile]) -> asyncio.Task | None:
        return self.selection.select(raw_files)

    def submit(self) -> asyncio.Task | None:
        return self.orchestrator.submit()

    async def select_and_wait(self, raw_files: Iterable[SelectedFile]) -> SessionState:
        task = self.select(raw_files)
        if task is not None:
            await task
        return self.state

    async def analyze(self) -> SessionState:
        task = self.submit()
        if task is not None:
            await task
        return self.state

    async def probe(self) -> tuple[HealthStatus | None, ModelInfo | None]:
        return await probe_service(self.client)


def create_session(
    config: ClientConfig | None = None,
    *,
    client: InferenceClient | None = None,
    decode: DecodeFn | None = None,
) -> ClassifierSession:
    cfg = config or get_config()
    if decode is None:

        async def decode(file: SelectedFile) -> str:
            return await decode_preview(file, cfg.preview_max_size)

    return ClassifierSession(
        client or InferenceClient.from_config(cfg),
        decode=decode,
        batch_limit=cfg.batch_limit,
        decode_timeout=cfg.decode_timeout,
    )
