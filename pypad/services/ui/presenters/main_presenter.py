from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pypad.domain.interfaces import ISettingsService
from pypad.domain.models import Mode
from pypad.services.session.document_session import DocumentSession
from pypad.services.session.outcomes import InputKind, InputRequest, Outcome, Status
from pypad.services.ui.ports.dialogs import IFileDialogService
from pypad.services.ui.ports.messages import IMessageService
from pypad.utils.constants import MAX_RECENTS, OPEN_FILTER, SAVE_FILTER

logger = logging.getLogger(__name__)


@runtime_checkable
class IMainView(Protocol):
    """Very small surface for a passive view (implemented by the Qt MainWindow)."""

    def dialog_parent(self) -> Any: ...
    def set_recents(self, items: list[str]) -> None: ...
    def sync_elevated_action(self, checked: bool) -> None: ...
    def sync_mode_actions(self, mode: Mode) -> None: ...


class MainPresenter:
    """
    Coordinator between the main window and its DocumentSession.

    Session commands may stop and ask for input; the presenter answers each
    request with a modal dialog and feeds the answer back until the command
    settles.
    """

    def __init__(
        self,
        view: IMainView,
        session: DocumentSession,
        settings: ISettingsService,
        messages: IMessageService,
        dialogs: IFileDialogService,
    ) -> None:
        self.view = view
        self.session = session
        self.settings = settings
        self.messages = messages
        self.dialogs = dialogs

    # ---------- prompt loop ----------

    def run(self, outcome: Outcome) -> Outcome:
        while outcome.needs_input:
            assert outcome.request is not None
            outcome = self._answer(outcome.request)
        return outcome

    def _answer(self, request: InputRequest) -> Outcome:
        parent = self.view.dialog_parent()
        if request.kind is InputKind.SECRET:
            secret = self.dialogs.get_secret(parent, request.title, request.text)
            return self.session.respond_secret(secret)
        if request.kind is InputKind.SAVE_LOCATION:
            start = str(self.session.path) if self.session.path else request.suggested_name
            path = self.dialogs.get_save_file(parent, request.title, start, SAVE_FILTER)
            return self.session.respond_save_location(path)
        choice = self.messages.ask_save_discard_cancel(parent, request.title, request.text)
        return self.session.respond_close(choice)

    # ---------- file commands ----------

    def confirm_discard(self) -> bool:
        if not self.session.dirty:
            return True
        return self.messages.ask(
            self.view.dialog_parent(),
            "Discard changes?",
            "You have unsaved changes. Discard them?",
        )

    def new_document(self) -> None:
        if self.confirm_discard():
            self.session.new()
            self.view.sync_elevated_action(False)

    def open_dialog(self) -> None:
        start = str(self.session.path.parent) if self.session.path else None
        path = self.dialogs.get_open_file(self.view.dialog_parent(), "Open File", start, OPEN_FILTER)
        if path:
            self.open_path(path)

    def open_path(self, path: Path) -> Outcome:
        if not self.confirm_discard():
            return Outcome.rejected()
        outcome = self.session.open(path)
        if outcome.ok:
            self.view.sync_elevated_action(False)
            self._add_recent(path)
        return outcome

    def save(self) -> Outcome:
        outcome = self.run(self.session.save())
        self._after_save(outcome)
        return outcome

    def save_as(self) -> Outcome:
        start = str(self.session.path) if self.session.path else self.session.mode.default_filename
        path = self.dialogs.get_save_file(self.view.dialog_parent(), "Save As", start, SAVE_FILTER)
        if path is None:
            return Outcome.rejected()
        outcome = self.run(self.session.save_as(path))
        self._after_save(outcome)
        return outcome

    def _after_save(self, outcome: Outcome) -> None:
        if outcome.ok and self.session.path is not None:
            self._add_recent(self.session.path)

    # ---------- mode / elevation ----------

    def set_mode(self, mode: Mode) -> None:
        self.session.set_mode(mode)
        self.view.sync_mode_actions(self.session.mode)

    def toggle_elevated(self, enable: bool) -> None:
        self.run(self.session.toggle_elevated(enable))
        self.view.sync_elevated_action(self.session.elevated)

    # ---------- close ----------

    def request_close(self) -> bool:
        """True when the window may close now."""
        return self.run(self.session.request_close()).status is Status.CLOSE

    # ---------- recents ----------

    def _add_recent(self, path: Path) -> None:
        s = str(path)
        recents = [p for p in self.settings.get_recent() if p != s]
        recents.insert(0, s)
        recents = recents[:MAX_RECENTS]
        self.settings.set_recent(recents)
        self.view.set_recents(recents)
        logger.debug("recent files: %s", recents)
