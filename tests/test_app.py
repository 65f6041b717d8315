from __future__ import annotations

import logging
from pathlib import Path
from types import SimpleNamespace

import pytest

import pypad.app as app_mod


# ----------------------------
# Fakes (Qt + composition)
# ----------------------------


class FakeQApplication:
    org_name: str | None = None
    app_name: str | None = None
    last: FakeQApplication | None = None

    def __init__(self, argv: list[str]) -> None:
        self.argv = list(argv)
        self.exec_called = 0
        FakeQApplication.last = self

    @classmethod
    def setOrganizationName(cls, name: str) -> None:
        cls.org_name = name

    @classmethod
    def setApplicationName(cls, name: str) -> None:
        cls.app_name = name

    def exec(self) -> int:
        self.exec_called += 1
        return 0


class FakeWindow:
    def __init__(self) -> None:
        self.shown = False

    def show(self) -> None:
        self.shown = True


class FakeContainer:
    instances: list[FakeContainer] = []

    def __init__(self, config_path: Path | None) -> None:
        self.config_path = config_path
        self.config = SimpleNamespace(log_level=lambda: logging.INFO, loaded_from=None)
        self.built: dict = {}
        self.window = FakeWindow()
        FakeContainer.instances.append(self)

    @classmethod
    def default(cls, qsettings=None, *, config_path=None, **_kw) -> FakeContainer:
        return cls(config_path)

    def build_main_window(self, *, start_path=None, mode=None) -> FakeWindow:
        self.built = {"start_path": start_path, "mode": mode}
        return self.window


@pytest.fixture()
def fakes(monkeypatch):
    FakeContainer.instances.clear()
    levels: list = []
    monkeypatch.setattr(app_mod, "QApplication", FakeQApplication)
    monkeypatch.setattr(app_mod, "Container", FakeContainer)
    monkeypatch.setattr(app_mod, "configure_logging", levels.append)
    return levels


# ----------------------------
# Tests
# ----------------------------


def test_parser_accepts_file_and_options():
    args = app_mod.build_parser().parse_args(["notes.md", "--mode", "markup", "--log-level", "debug"])
    assert args.file == Path("notes.md")
    assert args.mode == "markup"
    assert args.log_level == "DEBUG"


def test_parser_rejects_unknown_log_level():
    with pytest.raises(SystemExit):
        app_mod.build_parser().parse_args(["--log-level", "bogus"])


def test_parser_rejects_unknown_mode():
    with pytest.raises(SystemExit):
        app_mod.build_parser().parse_args(["--mode", "rtf"])


def test_run_app_wires_window(fakes, tmp_path):
    cfg = tmp_path / "c.ini"
    rc = app_mod.run_app(["pypad", "a.txt", "--mode", "markup", "--config", str(cfg)])

    assert rc == 0
    c = FakeContainer.instances[0]
    assert c.config_path == cfg
    assert c.built["start_path"] == Path("a.txt")
    assert c.built["mode"] is app_mod.Mode.MARKUP
    assert c.window.shown
    assert FakeQApplication.org_name == "PyPad"
    assert FakeQApplication.last.exec_called == 1
    # level comes from config when not given on the command line
    assert fakes == [logging.INFO]


def test_run_app_cli_log_level_and_qt_args(fakes):
    app_mod.run_app(["pypad", "--log-level", "DEBUG", "-style=fusion"])

    assert fakes == ["DEBUG"]
    assert FakeQApplication.last.argv == ["pypad", "-style=fusion"]
    assert FakeContainer.instances[0].built["start_path"] is None
    assert FakeContainer.instances[0].built["mode"] is None


def test_configure_logging_accepts_names(monkeypatch):
    seen = {}
    monkeypatch.setattr(app_mod.logging, "basicConfig", lambda **kw: seen.update(kw))
    app_mod.configure_logging("debug")
    assert seen["level"] == "DEBUG"
