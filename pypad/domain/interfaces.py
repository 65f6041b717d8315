from __future__ import annotations
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol, Iterable, runtime_checkable

from pypad.domain.models import Mode


class IFileService(Protocol):
    """Read/write text files. Writes should be atomic when possible."""

    def read_text(self, path: Path) -> str: ...
    def write_text_atomic(self, path: Path, text: str) -> None: ...


class ISettingsService(Protocol):
    """Persist and retrieve lightweight UI state."""

    def get_geometry(self) -> bytes | None: ...
    def set_geometry(self, blob: bytes) -> None: ...
    def get_recent(self) -> list[str]: ...
    def set_recent(self, recent: Iterable[str]) -> None: ...


class IConfigService(Protocol):
    """Read-only access to the INI configuration."""

    def get(self, section: str, key: str, default: str | None = None) -> str | None: ...
    def get_int(self, section: str, key: str, default: int | None = None) -> int | None: ...
    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None: ...
    def as_dict(self) -> Mapping[str, Mapping[str, str]]: ...
    def app_version(self) -> str: ...


class IAppConfig(IConfigService, Protocol):
    def get_version(self) -> str: ...


class IPrivilegeHelper(Protocol):
    """Runs the OS privilege-escalation helper with a secret on stdin."""

    def validate(self, secret: str) -> int: ...
    def copy(self, source: Path, dest: Path, secret: str) -> int: ...


@runtime_checkable
class IDocumentView(Protocol):
    """
    Everything a DocumentSession may ask of its window.

    Offsets are Python string indices into the session's text; adapters
    translate them to widget positions.
    """

    # text widget
    def replace_content(self, text: str) -> None: ...
    def replace_range(self, start: int, end: int, text: str) -> None: ...
    def select_range(self, start: int, end: int) -> None: ...
    def scroll_to_range(self, start: int, end: int) -> None: ...

    # window chrome
    def set_title(self, title: str) -> None: ...
    def set_elevated_indicator_visible(self, visible: bool) -> None: ...
    def apply_mode(self, mode: Mode) -> None: ...

    # feedback
    def show_status(self, text: str) -> None: ...
    def show_info(self, title: str, text: str) -> None: ...
    def show_warning(self, title: str, text: str) -> None: ...
    def show_error(self, title: str, text: str) -> None: ...
