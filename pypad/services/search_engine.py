from __future__ import annotations

import re

from pypad.domain.models import Direction, Span


def _compile(pattern: str, match_case: bool) -> re.Pattern[str]:
    # The pattern is literal text; escaping keeps regex metacharacters inert.
    return re.compile(re.escape(pattern), 0 if match_case else re.IGNORECASE)


def _forward(rx: re.Pattern[str], buffer: str, start: int, stop: int) -> Span | None:
    m = rx.search(buffer, start, stop)
    return Span(m.start(), m.end()) if m else None


def _backward(rx: re.Pattern[str], buffer: str, width: int, lower: int, upper: int) -> Span | None:
    """Last match lying entirely inside buffer[lower:upper]."""
    for begin in range(upper - width, lower - 1, -1):
        m = rx.fullmatch(buffer, begin, begin + width)
        if m:
            return Span(m.start(), m.end())
    return None


def search(
    buffer: str,
    pattern: str,
    from_position: int,
    direction: Direction = Direction.FORWARD,
    match_case: bool = False,
) -> Span | None:
    """
    Find `pattern` in `buffer` starting at `from_position`, wrapping once.

    Forward returns the first match starting at or after `from_position`;
    if there is none, the buffer is searched again from the start up to
    `from_position`. Backward returns the last match ending at or before
    `from_position`, then retries from the end of the buffer.
    """
    if not pattern:
        return None

    size = len(buffer)
    pos = max(0, min(from_position, size))
    rx = _compile(pattern, match_case)
    width = len(pattern)

    if direction is Direction.FORWARD:
        hit = _forward(rx, buffer, pos, size)
        if hit is None:
            hit = _forward(rx, buffer, 0, min(size, pos + width - 1))
        return hit

    hit = _backward(rx, buffer, width, 0, pos)
    if hit is None:
        hit = _backward(rx, buffer, width, max(0, pos - width + 1), size)
    return hit
