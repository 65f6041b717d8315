from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class Mode(Enum):
    """Syntax category of a document."""

    PLAIN = "plain"
    MARKUP = "markup"

    @property
    def label(self) -> str:
        return "Plain Text" if self is Mode.PLAIN else "Markdown"

    @property
    def title_tag(self) -> str:
        return "[Plain]" if self is Mode.PLAIN else "[Markdown]"

    @property
    def default_filename(self) -> str:
        return "Untitled.txt" if self is Mode.PLAIN else "Untitled.md"

    @classmethod
    def parse(cls, value: str | None, default: Mode | None = None) -> Mode:
        s = (value or "").strip().lower()
        for m in cls:
            if m.value == s:
                return m
        return default or cls.PLAIN


class Direction(Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


class CloseChoice(Enum):
    SAVE = "save"
    DISCARD = "discard"
    CANCEL = "cancel"


@dataclass(frozen=True)
class Span:
    start: int
    end: int


@dataclass
class SearchState:
    pattern: str = ""
    match_case: bool = False


@dataclass(frozen=True)
class Credential:
    secret: str
    expires_at: float

    def __repr__(self) -> str:
        return f"Credential(secret='***', expires_at={self.expires_at!r})"
