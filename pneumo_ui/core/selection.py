"""Selection & mode controller.

Owns which files are selected and whether the session is in single or batch
mode. Any change to either resets the request status and results in the same
commit, then kicks off preview decoding in the background.

Non-image entries and files beyond the batch cap are dropped without being
reported.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable

from pneumo_ui.config import DEFAULT_BATCH_LIMIT
from pneumo_ui.core.contracts import Mode, SelectedFile
from pneumo_ui.core.previews import DecodeFn, build_previews, decode_preview
from pneumo_ui.core.state import CLEARED_RESULTS, SessionStore

logger = logging.getLogger(__name__)


class SelectionController:
    def __init__(
        self,
        store: SessionStore,
        *,
        decode: DecodeFn = decode_preview,
        batch_limit: int = DEFAULT_BATCH_LIMIT,
        decode_timeout: float | None = None,
    ) -> None:
        self._store = store
        self._decode = decode
        self._batch_limit = batch_limit
        self._decode_timeout = decode_timeout

    def set_mode(self, mode: Mode | str) -> None:
        """Switch mode and start over, even when ``mode`` is already active."""
        self._store.commit(
            new_selection=True,
            mode=Mode(mode),
            files=(),
            previews=(),
            previews_ready=True,
            **CLEARED_RESULTS,
        )

    def clear(self) -> None:
        self._store.commit(
            new_selection=True,
            files=(),
            previews=(),
            previews_ready=True,
            **CLEARED_RESULTS,
        )

    def _apply_cap(self, images: list[SelectedFile]) -> list[SelectedFile]:
        if self._store.state.mode is Mode.SINGLE:
            return images[:1]
        return images[: self._batch_limit]

    def select(self, raw_files: Iterable[SelectedFile]) -> asyncio.Task | None:
        """Replace the selection and schedule preview decoding.

        Must be called with a running event loop. Returns the decode task so
        callers may await it; returns ``None`` when nothing usable was picked.
        """
        raw = list(raw_files)
        images = [f for f in raw if f.is_image]
        kept = self._apply_cap(images)
        dropped = len(raw) - len(kept)
        if dropped:
            logger.debug("Dropped %d of %d selected files (non-image or over cap)", dropped, len(raw))

        if not kept:
            self.clear()
            return None

        self._store.commit(
            new_selection=True,
            files=tuple(kept),
            previews=(),
            previews_ready=False,
            **CLEARED_RESULTS,
        )
        generation = self._store.generation
        return asyncio.create_task(self._publish_previews(generation, tuple(kept)))

    async def _publish_previews(self, generation: int, files: tuple[SelectedFile, ...]) -> None:
        previews = await build_previews(files, decode=self._decode, timeout=self._decode_timeout)
        if self._store.generation != generation:
            logger.debug("Discarding previews for a superseded selection")
            return
        self._store.commit(previews=tuple(previews), previews_ready=True)
