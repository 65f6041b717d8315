from __future__ import annotations

from typing import Any

from PyQt6.QtWidgets import QMessageBox

from pypad.domain.models import CloseChoice
from pypad.services.ui.ports.messages import IMessageService, Question


class QtMessageService(IMessageService):
    """Qt-backed implementation for message dialogs."""

    def info(self, parent: Any | None, title: str, text: str) -> None:
        QMessageBox.information(parent, title, text)

    def warning(self, parent: Any | None, title: str, text: str) -> None:
        QMessageBox.warning(parent, title, text)

    def error(self, parent: Any | None, title: str, text: str) -> None:
        QMessageBox.critical(parent, title, text)

    def ask(
        self,
        parent: Any | None,
        title: str,
        text: str,
        kind: Question = Question.YES_NO,
    ) -> bool:
        if kind is Question.SAVE_DISCARD_CANCEL:
            return self.ask_save_discard_cancel(parent, title, text) is not CloseChoice.CANCEL
        resp = QMessageBox.question(
            parent,
            title,
            text,
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        return resp == QMessageBox.StandardButton.Yes

    def ask_save_discard_cancel(self, parent: Any | None, title: str, text: str) -> CloseChoice:
        resp = QMessageBox.question(
            parent,
            title,
            text,
            QMessageBox.StandardButton.Save
            | QMessageBox.StandardButton.Discard
            | QMessageBox.StandardButton.Cancel,
            QMessageBox.StandardButton.Save,
        )
        if resp == QMessageBox.StandardButton.Save:
            return CloseChoice.SAVE
        if resp == QMessageBox.StandardButton.Discard:
            return CloseChoice.DISCARD
        return CloseChoice.CANCEL
