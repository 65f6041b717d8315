from __future__ import annotations

from PyQt6.QtCore import QRegularExpression
from PyQt6.QtGui import QColor, QFont, QSyntaxHighlighter, QTextCharFormat, QTextDocument


def _fmt(color: str, *, bold: bool = False, italic: bool = False, mono: bool = False) -> QTextCharFormat:
    f = QTextCharFormat()
    f.setForeground(QColor(color))
    if bold:
        f.setFontWeight(QFont.Weight.Bold)
    if italic:
        f.setFontItalic(True)
    if mono:
        f.setFontFixedPitch(True)
    return f


class MarkdownHighlighter(QSyntaxHighlighter):
    """Lightweight Markdown colouring used while a document is in Markup mode."""

    CODE_BLOCK_STATE = 1

    def __init__(self, document: QTextDocument | None = None) -> None:
        super().__init__(document)
        # Precompiled once; highlightBlock runs for every edited line.
        self._rules: list[tuple[QRegularExpression, QTextCharFormat]] = [
            (QRegularExpression(r"^#{1,6}\s.*$"), _fmt("#3b82f6", bold=True)),
            (QRegularExpression(r"^\s*>.*$"), _fmt("#6b7280", italic=True)),
            (QRegularExpression(r"^\s*([-*+]|\d+\.)\s"), _fmt("#d97706", bold=True)),
            (QRegularExpression(r"\*\*[^*]+\*\*|__[^_]+__"), _fmt("#b45309", bold=True)),
            (QRegularExpression(r"(?<![*\w])\*[^*\s][^*]*\*(?!\*)"), _fmt("#be185d", italic=True)),
            (QRegularExpression(r"~~[^~]+~~"), _fmt("#6b7280")),
            (QRegularExpression(r"`[^`]+`"), _fmt("#059669", mono=True)),
            (QRegularExpression(r"!?\[[^\]]*\]\([^)]*\)"), _fmt("#2563eb")),
        ]
        self._fence = QRegularExpression(r"^\s*(```|~~~)")
        self._code_block_format = _fmt("#059669", mono=True)

    def highlightBlock(self, text: str) -> None:  # noqa: N802 (Qt override)
        in_code = self.previousBlockState() == self.CODE_BLOCK_STATE
        is_fence = self._fence.match(text).hasMatch()

        if in_code or is_fence:
            self.setFormat(0, len(text), self._code_block_format)
            # A fence toggles the state; lines inside a block keep it.
            closes = in_code and is_fence
            self.setCurrentBlockState(
                self.CODE_BLOCK_STATE if (in_code and not closes) or (is_fence and not in_code) else 0
            )
            return

        self.setCurrentBlockState(0)
        for rx, fmt in self._rules:
            it = rx.globalMatch(text)
            while it.hasNext():
                m = it.next()
                self.setFormat(m.capturedStart(), m.capturedLength(), fmt)
