from __future__ import annotations

from pypad.utils.constants import ZOOM_MAX, ZOOM_MIN, ZOOM_STEP


def count_words_chars(text: str) -> tuple[int, int]:
    """Return (words, characters) the way the status bar reports them."""
    return len(text.split()), len(text)


def line_col(text: str, position: int) -> tuple[int, int]:
    """1-based line and column of a string index."""
    position = max(0, min(position, len(text)))
    before = text[:position]
    line = before.count("\n") + 1
    col = position - (before.rfind("\n") + 1) + 1
    return line, col


def line_start_offset(text: str, line_number: int) -> int:
    """
    Offset of the first character of `line_number` (1-based).
    Out-of-range numbers are clamped to the first/last line.
    """
    lines = text.split("\n")
    line = max(1, min(line_number, len(lines)))
    return sum(len(s) + 1 for s in lines[: line - 1])


def step_zoom(current: int, delta: int) -> int:
    """Move zoom by `delta` steps, staying inside [ZOOM_MIN, ZOOM_MAX]."""
    return max(ZOOM_MIN, min(ZOOM_MAX, current + delta * ZOOM_STEP))
