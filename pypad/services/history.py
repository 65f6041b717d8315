from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class SnapshotHistory:
    """
    Undo/redo stacks of full-document snapshots.

    Depth is unbounded: every committed edit keeps a complete copy of the
    previous text until the history is cleared.
    """

    def __init__(self) -> None:
        self._undo: list[str] = []
        self._redo: list[str] = []

    @property
    def undo_stack(self) -> tuple[str, ...]:
        return tuple(self._undo)

    @property
    def redo_stack(self) -> tuple[str, ...]:
        return tuple(self._redo)

    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)

    def record_edit(self, previous_text: str) -> None:
        self._undo.append(previous_text)
        # Any new edit invalidates redo history
        self._redo.clear()

    def undo(self, current_text: str) -> str | None:
        if not self._undo:
            return None
        text = self._undo.pop()
        self._redo.append(current_text)
        logger.debug("undo: %d left, %d redoable", len(self._undo), len(self._redo))
        return text

    def redo(self, current_text: str) -> str | None:
        if not self._redo:
            return None
        text = self._redo.pop()
        self._undo.append(current_text)
        logger.debug("redo: %d left, %d undoable", len(self._redo), len(self._undo))
        return text

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()
