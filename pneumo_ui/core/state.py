"""Single source of truth for the classifier session.

All fields that must move together (mode, selection, previews, request status
and results) live in one frozen ``SessionState``. ``SessionStore.commit``
swaps the whole snapshot at once, so subscribers never observe a selection
paired with a result that belongs to an earlier one.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Callable

from pneumo_ui.core.contracts import (
    BatchResult,
    Mode,
    Preview,
    RequestStatus,
    SelectedFile,
    SingleResult,
)


Listener = Callable[["SessionState"], None]


@dataclass(frozen=True)
class SessionState:
    mode: Mode = Mode.SINGLE
    files: tuple[SelectedFile, ...] = ()
    previews: tuple[Preview, ...] = ()
    previews_ready: bool = True
    status: RequestStatus = RequestStatus.IDLE
    single_result: SingleResult | None = None
    batch_result: BatchResult | None = None
    error: str | None = None

    @property
    def result(self) -> SingleResult | BatchResult | None:
        if self.mode is Mode.BATCH:
            return self.batch_result
        return self.single_result

    @property
    def has_selection(self) -> bool:
        return len(self.files) > 0

    @property
    def is_busy(self) -> bool:
        return self.status is RequestStatus.IN_FLIGHT


# Changes applied whenever the selection is reset or replaced.
CLEARED_RESULTS: dict[str, Any] = {
    "status": RequestStatus.IDLE,
    "single_result": None,
    "batch_result": None,
    "error": None,
}


class SessionStore:
    """Holds the current ``SessionState`` and notifies subscribers on change."""

    def __init__(self, initial: SessionState | None = None) -> None:
        self._state = initial or SessionState()
        self._generation = 0
        self._listeners: list[Listener] = []

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def generation(self) -> int:
        """Counter bumped on every selection change; async work captures it."""
        return self._generation

    def commit(self, *, new_selection: bool = False, **changes: Any) -> SessionState:
        """Apply ``changes`` as one atomic replacement of the snapshot."""
        self._state = dataclasses.replace(self._state, **changes)
        if new_selection:
            self._generation += 1
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe
