from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import QIODevice, QSaveFile

from pypad.domain.interfaces import IFileService

logger = logging.getLogger(__name__)


class FileService(IFileService):
    """UTF-8 text reads and atomic writes (QSaveFile writes a temp file and renames it)."""

    def read_text(self, path: Path) -> str:
        text = path.read_text(encoding="utf-8")
        logger.debug("read %d chars from %s", len(text), path)
        return text

    def write_text_atomic(self, path: Path, text: str) -> None:
        sf = QSaveFile(str(path))
        if not sf.open(QIODevice.OpenModeFlag.WriteOnly):
            raise PermissionError(f"Cannot open for write: {path} ({sf.errorString()})")
        sf.write(text.encode("utf-8"))
        if not sf.commit():
            raise OSError(f"Commit failed for: {path} ({sf.errorString()})")
        logger.debug("wrote %d chars to %s", len(text), path)
