from __future__ import annotations

from typing import Protocol

from PyQt6.QtGui import QIntValidator
from PyQt6.QtWidgets import (
    QDialog,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
)

from pypad.utils.text_tools import line_start_offset


class CursorPort(Protocol):
    def text(self) -> str: ...
    def move_cursor_to(self, index: int) -> None: ...


class GoToLineDialog(QDialog):
    """Jump the caret to a 1-based line number, clamped to the document."""

    def __init__(self, editor: CursorPort, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Go To Line")
        self.setModal(True)
        self._ed = editor

        # Widgets
        self.line_edit = QLineEdit()
        self.line_edit.setValidator(QIntValidator(1, 10_000_000, self))

        self.go_btn = QPushButton("Go To")
        self.close_btn = QPushButton("Cancel")

        # Layout
        form = QGridLayout()
        form.addWidget(QLabel("Line number:"), 0, 0)
        form.addWidget(self.line_edit, 0, 1, 1, 3)

        buttons = QHBoxLayout()
        buttons.addStretch(1)
        buttons.addWidget(self.close_btn)
        buttons.addWidget(self.go_btn)

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addLayout(buttons)

        # Signals
        self.go_btn.clicked.connect(self.go)
        self.line_edit.returnPressed.connect(self.go)
        self.close_btn.clicked.connect(self.reject)

    def show_goto(self) -> None:
        self.line_edit.clear()
        self.show()
        self.raise_()
        self.activateWindow()
        self.line_edit.setFocus()

    def go(self) -> bool:
        raw = self.line_edit.text().strip()
        if not raw.isdigit():
            return False
        text = self._ed.text()
        self._ed.move_cursor_to(line_start_offset(text, int(raw)))
        self.accept()
        return True
