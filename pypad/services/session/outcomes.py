from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from pypad.domain.errors import PadError


class InputKind(Enum):
    """What the UI must ask the user before a parked operation can continue."""

    SECRET = auto()
    SAVE_LOCATION = auto()
    SAVE_DISCARD_CANCEL = auto()


@dataclass(frozen=True)
class InputRequest:
    kind: InputKind
    title: str
    text: str
    suggested_name: str | None = None


class Status(Enum):
    COMPLETED = auto()
    NEEDS_INPUT = auto()
    REJECTED = auto()
    FAILED = auto()
    CLOSE = auto()


@dataclass(frozen=True)
class Outcome:
    """Result of a session command, telling the caller what to do next."""

    status: Status
    request: InputRequest | None = None
    error: PadError | None = None

    @classmethod
    def completed(cls) -> Outcome:
        return cls(Status.COMPLETED)

    @classmethod
    def needs(cls, request: InputRequest) -> Outcome:
        return cls(Status.NEEDS_INPUT, request=request)

    @classmethod
    def rejected(cls) -> Outcome:
        return cls(Status.REJECTED)

    @classmethod
    def failed(cls, error: PadError) -> Outcome:
        return cls(Status.FAILED, error=error)

    @classmethod
    def close(cls) -> Outcome:
        return cls(Status.CLOSE)

    @property
    def ok(self) -> bool:
        return self.status in (Status.COMPLETED, Status.CLOSE)

    @property
    def needs_input(self) -> bool:
        return self.status is Status.NEEDS_INPUT
