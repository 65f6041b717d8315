from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pypad.domain.errors import (
    AuthCancelled,
    AuthFailed,
    LoadFailed,
    PadError,
    SaveFailed,
    WriteError,
)
from pypad.domain.interfaces import IDocumentView, IFileService
from pypad.domain.models import CloseChoice, Direction, Mode, SearchState, Span
from pypad.services.elevation.credential_cache import CredentialCache
from pypad.services.elevation.privileged_writer import PrivilegedWriter
from pypad.services.history import SnapshotHistory
from pypad.services.search_engine import search
from pypad.services.session.outcomes import InputKind, InputRequest, Outcome
from pypad.utils.constants import APP_NAME

logger = logging.getLogger(__name__)

Selection = tuple[int, int]


@dataclass(frozen=True)
class _Pending:
    kind: InputKind
    resume: Callable[[Any], Outcome]


class DocumentSession:
    """
    State machine for one open document.

    The session owns the path, mode, dirty flag, snapshot history, search
    parameters and elevated-write credential. It talks to its window only
    through `IDocumentView`. Commands that need an answer from the user
    return `Outcome.needs(...)` and park a continuation; the window answers
    with `respond_secret`, `respond_save_location` or `respond_close`.
    Issuing any other command drops the parked continuation.
    """

    def __init__(
        self,
        view: IDocumentView,
        *,
        files: IFileService,
        writer: PrivilegedWriter,
        credentials: CredentialCache,
        history: SnapshotHistory | None = None,
        mode: Mode = Mode.PLAIN,
    ) -> None:
        self._view = view
        self._files = files
        self._writer = writer
        self._credentials = credentials
        self._history = history or SnapshotHistory()

        self._path: Path | None = None
        self._mode = mode
        self._dirty = False
        self._last_text = ""
        self._saved_text = ""
        self._suppress = False
        self._search = SearchState()
        self._pending: _Pending | None = None

    # ------------------------------------------------------------------ state

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def text(self) -> str:
        return self._last_text

    @property
    def elevated(self) -> bool:
        return self._credentials.is_active

    @property
    def suppressing_history(self) -> bool:
        return self._suppress

    @property
    def search_state(self) -> SearchState:
        return SearchState(self._search.pattern, self._search.match_case)

    @property
    def history(self) -> SnapshotHistory:
        return self._history

    @property
    def pending_request(self) -> InputKind | None:
        return self._pending.kind if self._pending else None

    def title(self) -> str:
        name = str(self._path) if self._path else "Untitled"
        star = " •" if self._dirty else ""
        sudo = " [SUDO]" if self.elevated else ""
        return f"{APP_NAME} - {name}{star}{sudo} {self._mode.title_tag}"

    def sync_view(self) -> None:
        """Push mode, indicator and title to a freshly built window."""
        self._view.apply_mode(self._mode)
        self._view.set_elevated_indicator_visible(self.elevated)
        self._view.set_title(self.title())

    # ---------------------------------------------------------------- helpers

    @contextmanager
    def _programmatic(self) -> Iterator[None]:
        self._suppress = True
        try:
            yield
        finally:
            self._suppress = False

    def _refresh_title(self) -> None:
        self._view.set_title(self.title())

    def _fail(self, error: PadError) -> Outcome:
        logger.warning("%s: %s", type(error).__name__, error)
        self._view.show_error(error.title, str(error))
        return Outcome.failed(error)

    def _park(self, request: InputRequest, resume: Callable[[Any], Outcome]) -> Outcome:
        self._pending = _Pending(request.kind, resume)
        return Outcome.needs(request)

    def _resume(self, kind: InputKind, answer: Any) -> Outcome:
        pending = self._pending
        if pending is None or pending.kind is not kind:
            raise RuntimeError(f"No pending {kind.name.lower()} request to answer.")
        self._pending = None
        return pending.resume(answer)

    # ------------------------------------------------------- prompt responses

    def respond_secret(self, secret: str | None) -> Outcome:
        return self._resume(InputKind.SECRET, secret)

    def respond_save_location(self, path: Path | None) -> Outcome:
        return self._resume(InputKind.SAVE_LOCATION, path)

    def respond_close(self, choice: CloseChoice) -> Outcome:
        return self._resume(InputKind.SAVE_DISCARD_CANCEL, choice)

    # ---------------------------------------------------------- text events

    def on_text_changed(self, new_text: str) -> None:
        if self._suppress or new_text == self._last_text:
            return
        self._history.record_edit(self._last_text)
        self._last_text = new_text
        if not self._dirty:
            self._dirty = True
            self._refresh_title()

    # ------------------------------------------------------ document lifecycle

    def load(self, path: Path | None, contents: str) -> None:
        self._pending = None
        with self._programmatic():
            self._view.replace_content(contents)
            self._history.clear()
            self._last_text = contents
            self._saved_text = contents
            self._path = path
            self._dirty = False
            self._credentials.clear()
            self._search = SearchState()
        self._view.set_elevated_indicator_visible(False)
        self._refresh_title()
        logger.info("loaded %s", path or "new document")

    def new(self) -> None:
        self.load(None, "")

    def open(self, path: Path) -> Outcome:
        try:
            contents = self._files.read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            return self._fail(LoadFailed(path, e))
        self.load(path, contents)
        return Outcome.completed()

    # ------------------------------------------------------------------- save

    def save(self) -> Outcome:
        self._pending = None
        if self._path is None:
            return self._ask_save_location(close_after=False)
        return self._save_to(self._path, close_after=False)

    def save_as(self, path: Path) -> Outcome:
        self._pending = None
        return self._save_to(path, close_after=False)

    def _ask_save_location(self, *, close_after: bool) -> Outcome:
        def resume(path: Path | None) -> Outcome:
            if path is None:
                return Outcome.rejected()
            return self._save_to(path, close_after=close_after)

        request = InputRequest(
            InputKind.SAVE_LOCATION,
            "Save As",
            "Choose where to save the document.",
            suggested_name=self._mode.default_filename,
        )
        return self._park(request, resume)

    def _save_to(self, path: Path, *, close_after: bool) -> Outcome:
        if self.elevated and not self._credentials.is_valid(self._credentials.now()):

            def resume(secret: str | None) -> Outcome:
                try:
                    self._accept_secret(secret)
                except (AuthFailed, AuthCancelled) as e:
                    return self._fail(SaveFailed(path, e))
                return self._write(path, secret, close_after=close_after)

            request = InputRequest(
                InputKind.SECRET,
                "Enter Sudo Password",
                "The sudo password has expired. Enter it again to save.",
            )
            return self._park(request, resume)

        credential = self._credentials.credential
        return self._write(path, credential.secret if credential else None, close_after=close_after)

    def _accept_secret(self, secret: str | None) -> None:
        if not secret:
            raise AuthCancelled()
        if not self._credentials.validate(secret):
            raise AuthFailed()
        self._credentials.set(secret)

    def _write(self, path: Path, secret: str | None, *, close_after: bool) -> Outcome:
        text = self._last_text
        try:
            self._writer.write(path, text, secret)
        except WriteError as e:
            return self._fail(SaveFailed(path, e))

        self._path = path
        self._dirty = False
        self._last_text = text
        self._saved_text = text
        self._refresh_title()
        self._view.show_status(f"Saved: {path}")
        return Outcome.close() if close_after else Outcome.completed()

    # -------------------------------------------------------------- undo/redo

    def undo(self) -> bool:
        return self._apply_history(self._history.undo, self._history.redo)

    def redo(self) -> bool:
        return self._apply_history(self._history.redo, self._history.undo)

    def _apply_history(
        self,
        take: Callable[[str], str | None],
        give_back: Callable[[str], str | None],
    ) -> bool:
        if self._suppress:
            return False
        with self._programmatic():
            text = take(self._last_text)
            if text is None:
                return False
            try:
                self._view.replace_content(text)
            except Exception:
                # Put the snapshot back on the stack it came from.
                give_back(text)
                raise
            self._last_text = text
            self._dirty = text != self._saved_text
        self._refresh_title()
        return True

    # ------------------------------------------------------------------- mode

    def set_mode(self, requested: Mode) -> Outcome:
        self._pending = None
        if requested is self._mode:
            return Outcome.completed()
        if self._last_text:
            logger.debug("mode change to %s rejected: document not empty", requested.value)
            self._view.show_warning(
                "Cannot change mode",
                "Cannot change mode while the document has content.\n"
                "Create a new file or clear all text before switching between Plain and Markup.",
            )
            return Outcome.rejected()
        self._mode = requested
        self._view.apply_mode(requested)
        self._refresh_title()
        return Outcome.completed()

    # --------------------------------------------------------------- elevation

    def toggle_elevated(self, enable: bool) -> Outcome:
        self._pending = None
        if not enable:
            if self.elevated:
                self._credentials.clear()
                self._view.set_elevated_indicator_visible(False)
                self._refresh_title()
                self._view.show_info("Sudo Mode", "Sudo Mode Disabled")
            return Outcome.completed()

        if self.elevated:
            return Outcome.completed()

        def resume(secret: str | None) -> Outcome:
            try:
                self._accept_secret(secret)
            except (AuthFailed, AuthCancelled) as e:
                return self._fail(e)
            self._view.set_elevated_indicator_visible(True)
            self._refresh_title()
            self._view.show_status("Sudo mode enabled")
            return Outcome.completed()

        request = InputRequest(
            InputKind.SECRET,
            "Enter Sudo Password",
            "Enter your password to enable Sudo Mode.",
        )
        return self._park(request, resume)

    # ------------------------------------------------------------------ close

    def request_close(self) -> Outcome:
        self._pending = None
        if not self._dirty:
            return Outcome.close()

        def resume(choice: CloseChoice) -> Outcome:
            if choice is CloseChoice.SAVE:
                if self._path is None:
                    return self._ask_save_location(close_after=True)
                return self._save_to(self._path, close_after=True)
            if choice is CloseChoice.DISCARD:
                # Clean now, so a repeated close goes straight through.
                self._dirty = False
                return Outcome.close()
            return Outcome.rejected()

        request = InputRequest(
            InputKind.SAVE_DISCARD_CANCEL,
            "Save changes?",
            "Do you want to save changes to this document before closing?\n"
            "If you don't save, your changes will be lost.",
        )
        return self._park(request, resume)

    # ----------------------------------------------------------- find/replace

    def find(
        self,
        pattern: str,
        match_case: bool,
        selection: Selection = (0, 0),
        direction: Direction = Direction.FORWARD,
    ) -> Span | None:
        """Remember the search parameters, then search once from the selection."""
        self._search = SearchState(pattern, match_case)
        return self._find(direction, selection)

    def find_next(self, selection: Selection) -> Span | None:
        return self._find(Direction.FORWARD, selection)

    def find_previous(self, selection: Selection) -> Span | None:
        return self._find(Direction.BACKWARD, selection)

    def _find(self, direction: Direction, selection: Selection) -> Span | None:
        st = self._search
        if not st.pattern:
            return None
        start, end = sorted(selection)
        origin = end if direction is Direction.FORWARD else start
        span = search(self._last_text, st.pattern, origin, direction, st.match_case)
        if span is None:
            self._view.show_status(f'Cannot find "{st.pattern}"')
            return None
        self._reveal(span)
        return span

    def _reveal(self, span: Span) -> None:
        self._view.select_range(span.start, span.end)
        self._view.scroll_to_range(span.start, span.end)

    def replace(
        self,
        find: str,
        replacement: str,
        match_case: bool,
        selection: Selection = (0, 0),
    ) -> Span | None:
        """
        Replace the next occurrence of `find` at or after the selection start.

        The delete and insert are recorded as one snapshot, so a single
        undo restores the text as it was before the replace.
        """
        self._search = SearchState(find, match_case)
        if not find or self._suppress:
            return None
        span = search(self._last_text, find, min(selection), Direction.FORWARD, match_case)
        if span is None:
            self._view.show_status(f'Cannot find "{find}"')
            return None

        before = self._last_text
        after = before[: span.start] + replacement + before[span.end :]
        with self._programmatic():
            self._view.replace_range(span.start, span.end, replacement)
            self._commit_compound_edit(before, after)
        inserted = Span(span.start, span.start + len(replacement))
        self._reveal(inserted)
        return inserted

    def replace_all(self, find: str, replacement: str, match_case: bool) -> int:
        """Replace every occurrence as one undoable edit; returns the count."""
        self._search = SearchState(find, match_case)
        if not find or self._suppress:
            return 0
        rx = re.compile(re.escape(find), 0 if match_case else re.IGNORECASE)
        before = self._last_text
        after, count = rx.subn(lambda _m: replacement, before)
        if count == 0:
            self._view.show_status(f'Cannot find "{find}"')
            return 0
        with self._programmatic():
            self._view.replace_content(after)
            self._commit_compound_edit(before, after)
        self._view.show_status(f"{count} replaced")
        return count

    def _commit_compound_edit(self, before: str, after: str) -> None:
        self._history.record_edit(before)
        self._last_text = after
        self._dirty = True
        self._refresh_title()
