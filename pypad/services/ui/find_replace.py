from __future__ import annotations

from typing import Protocol

from PyQt6.QtWidgets import (
    QCheckBox,
    QDialog,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
)

from pypad.domain.models import Direction, Span
from pypad.services.session.document_session import DocumentSession


class SelectionPort(Protocol):
    def selection(self) -> tuple[int, int]: ...


class FindReplaceDialog(QDialog):
    """
    Non-modal find/replace dialog.

    All matching happens in the DocumentSession; the dialog only collects
    the pattern, replacement and case flag, and remembers nothing itself.
    """

    def __init__(self, session: DocumentSession, editor: SelectionPort, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Find / Replace")
        self.setModal(False)

        self._session = session
        self._editor = editor

        # Widgets
        self.find_edit = QLineEdit()
        self.replace_edit = QLineEdit()
        self.case_cb = QCheckBox("Match case")

        self.find_prev_btn = QPushButton("Find Previous")
        self.find_next_btn = QPushButton("Find Next")
        self.replace_btn = QPushButton("Replace")
        self.replace_all_btn = QPushButton("Replace All")
        self.close_btn = QPushButton("Close")

        # Layout
        form = QGridLayout()
        form.addWidget(QLabel("Find what:"), 0, 0)
        form.addWidget(self.find_edit, 0, 1, 1, 3)
        self.replace_label = QLabel("Replace with:")
        form.addWidget(self.replace_label, 1, 0)
        form.addWidget(self.replace_edit, 1, 1, 1, 3)

        opts = QHBoxLayout()
        opts.addWidget(self.case_cb)
        opts.addStretch(1)

        buttons = QHBoxLayout()
        buttons.addWidget(self.find_prev_btn)
        buttons.addWidget(self.find_next_btn)
        buttons.addWidget(self.replace_btn)
        buttons.addWidget(self.replace_all_btn)
        buttons.addStretch(1)
        buttons.addWidget(self.close_btn)

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addLayout(opts)
        root.addLayout(buttons)

        # Signals
        self.find_next_btn.clicked.connect(lambda: self.find(forward=True))
        self.find_prev_btn.clicked.connect(lambda: self.find(forward=False))
        self.replace_btn.clicked.connect(self.replace_one)
        self.replace_all_btn.clicked.connect(self.replace_all)
        self.close_btn.clicked.connect(self.close)

        self.find_edit.returnPressed.connect(lambda: self.find(forward=True))
        self.replace_edit.returnPressed.connect(self.replace_one)

        self.find_edit.setPlaceholderText("Find text… (F3 to find next)")
        self.replace_edit.setPlaceholderText("Replace with…")

    # Public API used by MainWindow wiring
    def show_find(self) -> None:
        self._load_search_state()
        self._set_replace_visible(False)
        self._present()
        self.find_edit.setFocus()
        self.find_edit.selectAll()

    def show_replace(self) -> None:
        self._load_search_state()
        self._set_replace_visible(True)
        self._present()
        self.replace_edit.setFocus()
        self.replace_edit.selectAll()

    def find(self, *, forward: bool) -> Span | None:
        return self._session.find(
            self.find_edit.text(),
            self.case_cb.isChecked(),
            self._editor.selection(),
            Direction.FORWARD if forward else Direction.BACKWARD,
        )

    def replace_one(self) -> Span | None:
        return self._session.replace(
            self.find_edit.text(),
            self.replace_edit.text(),
            self.case_cb.isChecked(),
            self._editor.selection(),
        )

    def replace_all(self) -> int:
        count = self._session.replace_all(
            self.find_edit.text(), self.replace_edit.text(), self.case_cb.isChecked()
        )
        self.setWindowTitle(f"Find / Replace — {count} replaced")
        return count

    # Internal helpers
    def _load_search_state(self) -> None:
        st = self._session.search_state
        if st.pattern:
            self.find_edit.setText(st.pattern)
        self.case_cb.setChecked(st.match_case)

    def _set_replace_visible(self, visible: bool) -> None:
        self.setWindowTitle("Find / Replace" if visible else "Find")
        for w in (self.replace_label, self.replace_edit, self.replace_btn, self.replace_all_btn):
            w.setVisible(visible)

    def _present(self) -> None:
        self.show()
        self.raise_()
        self.activateWindow()
