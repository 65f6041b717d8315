from pathlib import Path

import pytest

from pypad.domain.errors import WriteAuthError, WriteCopyError, WriteIoError
from pypad.services.elevation.privileged_writer import PrivilegedWriter
from pypad.services.file_service import FileService
from pypad.utils.constants import STAGING_FILE_NAME


class BrokenFiles:
    def read_text(self, path):
        raise OSError("nope")

    def write_text_atomic(self, path, text):
        raise PermissionError(f"denied: {path}")


class ExplodingHelper:
    def validate(self, secret):
        raise FileNotFoundError("sudo")

    def copy(self, source, dest, secret):
        raise FileNotFoundError("sudo")


@pytest.fixture()
def stage_dir(tmp_path) -> Path:
    d = tmp_path / "stage"
    d.mkdir()
    return d


def test_staging_path_uses_fixed_name(helper, stage_dir):
    w = PrivilegedWriter(FileService(), helper, staging_dir=stage_dir)
    assert w.staging_path == stage_dir / STAGING_FILE_NAME


def test_direct_write(helper, stage_dir, tmp_path):
    dest = tmp_path / "a.txt"
    PrivilegedWriter(FileService(), helper, staging_dir=stage_dir).write(dest, "hello")
    assert dest.read_text(encoding="utf-8") == "hello"
    assert helper.calls == []


def test_direct_write_failure_is_io_error(helper, tmp_path):
    w = PrivilegedWriter(BrokenFiles(), helper, staging_dir=tmp_path)
    with pytest.raises(WriteIoError) as ei:
        w.write(tmp_path / "a.txt", "x")
    assert ei.value.path == tmp_path / "a.txt"


def test_elevated_write_copies_and_removes_staging(helper, stage_dir, tmp_path):
    dest = tmp_path / "root_owned.conf"
    w = PrivilegedWriter(FileService(), helper, staging_dir=stage_dir)
    w.write(dest, "key=value\n", secret="hunter2")

    assert dest.read_text(encoding="utf-8") == "key=value\n"
    assert helper.calls == [("copy", w.staging_path, dest, "hunter2")]
    assert not w.staging_path.exists()


def test_elevated_copy_failure_leaves_destination_untouched(helper, stage_dir, tmp_path):
    dest = tmp_path / "root_owned.conf"
    dest.write_text("original", encoding="utf-8")
    w = PrivilegedWriter(FileService(), helper, staging_dir=stage_dir)

    with pytest.raises(WriteCopyError):
        w.write(dest, "changed", secret="wrong")

    assert dest.read_text(encoding="utf-8") == "original"
    assert not w.staging_path.exists()


def test_helper_that_cannot_start_is_auth_error(stage_dir, tmp_path):
    w = PrivilegedWriter(FileService(), ExplodingHelper(), staging_dir=stage_dir)
    with pytest.raises(WriteAuthError):
        w.write(tmp_path / "x", "data", secret="pw")
    assert not w.staging_path.exists()


def test_staging_write_failure_is_io_error(helper, tmp_path):
    w = PrivilegedWriter(BrokenFiles(), helper, staging_dir=tmp_path)
    with pytest.raises(WriteIoError):
        w.write(tmp_path / "x", "data", secret="hunter2")
    assert helper.calls == []


def test_staging_dir_that_is_a_file_is_io_error(helper, tmp_path):
    not_a_dir = tmp_path / "notadir"
    not_a_dir.write_text("", encoding="utf-8")
    w = PrivilegedWriter(FileService(), helper, staging_dir=not_a_dir)

    with pytest.raises(WriteIoError):
        w.write(tmp_path / "dest.txt", "data", secret="hunter2")
    assert helper.calls == []


def refuse_unlink(self, missing_ok=False):
    raise PermissionError("owned by another user")


def test_staging_cleanup_failure_does_not_fail_save(helper, stage_dir, tmp_path, monkeypatch, caplog):
    dest = tmp_path / "dest.txt"
    w = PrivilegedWriter(FileService(), helper, staging_dir=stage_dir)

    monkeypatch.setattr(Path, "unlink", refuse_unlink)
    with caplog.at_level("WARNING", logger="pypad.services.elevation.privileged_writer"):
        w.write(dest, "data", secret="hunter2")

    assert dest.read_text(encoding="utf-8") == "data"
    assert "could not remove staging file" in caplog.text


def test_staging_cleanup_failure_keeps_copy_error(helper, stage_dir, tmp_path, monkeypatch):
    w = PrivilegedWriter(FileService(), helper, staging_dir=stage_dir)
    monkeypatch.setattr(Path, "unlink", refuse_unlink)

    with pytest.raises(WriteCopyError):
        w.write(tmp_path / "dest.txt", "data", secret="wrong")
