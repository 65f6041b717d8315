from __future__ import annotations

import os
from pathlib import Path

# Run Qt headless when no display is available.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtCore import QSettings
from PyQt6.QtWidgets import QApplication

from pypad.domain.models import Mode
from pypad.services.elevation import CredentialCache, PrivilegedWriter
from pypad.services.file_service import FileService
from pypad.services.session import DocumentSession
from pypad.services.settings_service import SettingsService


# --- Fallback QApplication fixture (works with or without pytest-qt) ---
@pytest.fixture(scope="session")
def qapp():
    """Provide a QApplication for tests that need Qt.
    Creates one if not present; reuses existing otherwise.
    """
    app = QApplication.instance()
    created = False
    if app is None:
        app = QApplication([])
        created = True
    try:
        yield app
    finally:
        # Don't forcibly quit a shared app; only close if we created it here.
        if created:
            app.quit()


# --- Fakes shared by the session / presenter / elevation tests ---


class FakeHelper:
    """Privilege helper double: accepts one password and copies files itself."""

    def __init__(self, password: str = "hunter2", *, copy_status: int | None = None) -> None:
        self.password = password
        self.copy_status = copy_status
        self.calls: list[tuple] = []

    def validate(self, secret: str) -> int:
        self.calls.append(("validate", secret))
        return 0 if secret == self.password else 1

    def copy(self, source: Path, dest: Path, secret: str) -> int:
        self.calls.append(("copy", Path(source), Path(dest), secret))
        if self.copy_status is not None:
            return self.copy_status
        if secret != self.password:
            return 1
        Path(dest).write_text(Path(source).read_text(encoding="utf-8"), encoding="utf-8")
        return 0


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeView:
    """Records every IDocumentView call; mirrors a text widget in `content`."""

    def __init__(self) -> None:
        self.content = ""
        self.calls: list[tuple] = []
        self.title = ""
        self.indicator = False
        self.mode: Mode | None = None
        self.selection: tuple[int, int] | None = None
        self.fail_replace = False
        # Set to session.on_text_changed to mimic a widget emitting textChanged.
        self.on_change = None

    def _log(self, *call) -> None:
        self.calls.append(call)

    def _echo(self) -> None:
        if self.on_change is not None:
            self.on_change(self.content)

    def names(self) -> list[str]:
        return [c[0] for c in self.calls]

    def replace_content(self, text: str) -> None:
        if self.fail_replace:
            raise RuntimeError("widget gone")
        self._log("replace_content", text)
        self.content = text
        self._echo()

    def replace_range(self, start: int, end: int, text: str) -> None:
        self._log("replace_range", start, end, text)
        self.content = self.content[:start] + text + self.content[end:]
        self._echo()

    def select_range(self, start: int, end: int) -> None:
        self._log("select_range", start, end)
        self.selection = (start, end)

    def scroll_to_range(self, start: int, end: int) -> None:
        self._log("scroll_to_range", start, end)

    def set_title(self, title: str) -> None:
        self._log("set_title", title)
        self.title = title

    def set_elevated_indicator_visible(self, visible: bool) -> None:
        self._log("indicator", visible)
        self.indicator = visible

    def apply_mode(self, mode: Mode) -> None:
        self._log("apply_mode", mode)
        self.mode = mode

    def show_status(self, text: str) -> None:
        self._log("status", text)

    def show_info(self, title: str, text: str) -> None:
        self._log("info", title, text)

    def show_warning(self, title: str, text: str) -> None:
        self._log("warning", title, text)

    def show_error(self, title: str, text: str) -> None:
        self._log("error", title, text)


class FakeDialogs:
    """Answers file and password prompts from scripted queues."""

    def __init__(self) -> None:
        self.open_paths: list[Path | None] = []
        self.save_paths: list[Path | None] = []
        self.secrets: list[str | None] = []
        self.save_starts: list[str | None] = []

    def get_open_file(self, parent, caption, start_dir, filter_str):
        return self.open_paths.pop(0)

    def get_save_file(self, parent, caption, start_path, filter_str):
        self.save_starts.append(start_path)
        return self.save_paths.pop(0)

    def get_secret(self, parent, title, label):
        return self.secrets.pop(0)


class FakeMessages:
    """Message port double; records what was shown and replays scripted answers."""

    def __init__(self) -> None:
        self.shown: list[tuple[str, str]] = []
        self.asked: list[str] = []
        self.yes = True
        self.choices: list = []

    def info(self, parent, title, text):
        self.shown.append(("info", title))

    def warning(self, parent, title, text):
        self.shown.append(("warning", title))

    def error(self, parent, title, text):
        self.shown.append(("error", title))

    def ask(self, parent, title, text, kind=None):
        self.asked.append(title)
        return self.yes

    def ask_save_discard_cancel(self, parent, title, text):
        self.asked.append(title)
        return self.choices.pop(0)


# --- Other common fixtures ---


@pytest.fixture()
def tmp_settings_path(tmp_path: Path) -> Path:
    return tmp_path / "settings.ini"


@pytest.fixture()
def qsettings(tmp_settings_path: Path) -> QSettings:
    # Use an INI file so we don't touch system registry / platform stores
    s = QSettings(str(tmp_settings_path), QSettings.Format.IniFormat)
    s.clear()
    return s


@pytest.fixture()
def settings_service(qsettings: QSettings) -> SettingsService:
    return SettingsService(qsettings)


@pytest.fixture()
def file_service() -> FileService:
    return FileService()


@pytest.fixture()
def helper() -> FakeHelper:
    return FakeHelper()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def view() -> FakeView:
    return FakeView()


@pytest.fixture()
def make_session(view, helper, clock, tmp_path):
    """Build a DocumentSession over real file I/O, the fake helper and a fake clock."""
    stage = tmp_path / "stage"
    stage.mkdir()

    def make(mode: Mode = Mode.PLAIN) -> DocumentSession:
        files = FileService()
        session = DocumentSession(
            view,
            files=files,
            writer=PrivilegedWriter(files, helper, staging_dir=stage),
            credentials=CredentialCache(helper, ttl_seconds=300, clock=clock),
            mode=mode,
        )
        view.on_change = session.on_text_changed
        return session

    return make


@pytest.fixture()
def session(make_session) -> DocumentSession:
    return make_session()


@pytest.fixture()
def dialogs() -> FakeDialogs:
    return FakeDialogs()


@pytest.fixture()
def messages() -> FakeMessages:
    return FakeMessages()
