import pytest
from pypad.services.file_service import FileService


def test_file_service_read_write_atomic_success(tmp_path):
    fs = FileService()
    p = tmp_path / "a.txt"
    fs.write_text_atomic(p, "hello")
    assert p.read_text(encoding="utf-8") == "hello"
    assert fs.read_text(p) == "hello"


def test_file_service_utf8_roundtrip(tmp_path):
    fs = FileService()
    p = tmp_path / "u.md"
    fs.write_text_atomic(p, "naïve 😀\n")
    assert fs.read_text(p) == "naïve 😀\n"


def test_file_service_read_text_missing(tmp_path):
    fs = FileService()
    p = tmp_path / "missing.txt"
    with pytest.raises(FileNotFoundError):
        fs.read_text(p)


def test_file_service_read_text_not_utf8(tmp_path):
    p = tmp_path / "bin.txt"
    p.write_bytes(b"\xff\xfe\xfa")
    with pytest.raises(UnicodeDecodeError):
        FileService().read_text(p)


def test_file_service_write_atomic_open_fail(monkeypatch, tmp_path):
    class FakeQSaveFile:
        def __init__(self, *_):
            pass

        def open(self, *_):
            return False

        def errorString(self):
            return "denied"

    fs = FileService()
    p = tmp_path / "x.txt"
    monkeypatch.setattr("pypad.services.file_service.QSaveFile", FakeQSaveFile, raising=True)
    with pytest.raises(PermissionError, match="denied"):
        fs.write_text_atomic(p, "data")


def test_file_service_write_atomic_commit_fail(monkeypatch, tmp_path):
    class FakeQSaveFile:
        def __init__(self, *_):
            self._data = b""

        def open(self, *_):
            return True

        def write(self, b):
            self._data += b

        def commit(self):
            return False

        def errorString(self):
            return "disk full"

    fs = FileService()
    p = tmp_path / "x.txt"
    monkeypatch.setattr("pypad.services.file_service.QSaveFile", FakeQSaveFile, raising=True)
    with pytest.raises(OSError):
        fs.write_text_atomic(p, "data")
