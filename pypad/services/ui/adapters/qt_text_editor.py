from __future__ import annotations

from PyQt6.QtGui import QTextCursor
from PyQt6.QtWidgets import QPlainTextEdit


def utf16_offset(text: str, index: int) -> int:
    """Qt counts positions in UTF-16 code units; Python counts code points."""
    prefix = text[: max(0, index)]
    return len(prefix) + sum(1 for ch in prefix if ord(ch) > 0xFFFF)


def py_index(text: str, offset: int) -> int:
    """Inverse of utf16_offset."""
    units = 0
    for i, ch in enumerate(text):
        if units >= offset:
            return i
        units += 2 if ord(ch) > 0xFFFF else 1
    return len(text)


class QtTextEditorAdapter:
    """
    Narrow adapter over QPlainTextEdit for the text-widget half of IDocumentView.

    All offsets in and out are Python string indices.
    """

    def __init__(self, edit: QPlainTextEdit):
        self._e = edit

    def text(self) -> str:
        return self._e.toPlainText()

    def replace_content(self, text: str) -> None:
        self._e.setPlainText(text)

    def replace_range(self, start: int, end: int, text: str) -> None:
        current = self.text()
        c = QTextCursor(self._e.document())
        c.beginEditBlock()
        try:
            c.setPosition(utf16_offset(current, start))
            c.setPosition(utf16_offset(current, end), QTextCursor.MoveMode.KeepAnchor)
            c.insertText(text)
        finally:
            c.endEditBlock()

    def select_range(self, start: int, end: int) -> None:
        current = self.text()
        c = self._e.textCursor()
        c.setPosition(utf16_offset(current, start))
        c.setPosition(utf16_offset(current, end), QTextCursor.MoveMode.KeepAnchor)
        self._e.setTextCursor(c)

    def scroll_to_range(self, start: int, end: int) -> None:
        self._e.ensureCursorVisible()

    def selection(self) -> tuple[int, int]:
        current = self.text()
        c = self._e.textCursor()
        return py_index(current, c.selectionStart()), py_index(current, c.selectionEnd())

    def cursor_index(self) -> int:
        return py_index(self.text(), self._e.textCursor().position())

    def move_cursor_to(self, index: int) -> None:
        c = self._e.textCursor()
        c.setPosition(utf16_offset(self.text(), index))
        self._e.setTextCursor(c)
        self._e.ensureCursorVisible()
