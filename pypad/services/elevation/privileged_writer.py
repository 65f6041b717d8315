from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from pypad.domain.errors import WriteAuthError, WriteCopyError, WriteIoError
from pypad.domain.interfaces import IFileService, IPrivilegeHelper
from pypad.utils.constants import STAGING_FILE_NAME

logger = logging.getLogger(__name__)


class PrivilegedWriter:
    """
    Writes a document either directly or through the privilege helper.

    Elevated writes go through a fixed staging file that the helper copies
    over the destination, so the destination is never partially written.
    Whether to elevate is the caller's decision.
    """

    def __init__(
        self,
        files: IFileService,
        helper: IPrivilegeHelper,
        *,
        staging_dir: Path | None = None,
    ) -> None:
        self._files = files
        self._helper = helper
        self._staging = (staging_dir or Path(tempfile.gettempdir())) / STAGING_FILE_NAME

    @property
    def staging_path(self) -> Path:
        return self._staging

    def write(self, path: Path, content: str, secret: str | None = None) -> None:
        if secret is None:
            self._write_direct(path, content)
        else:
            self._write_elevated(path, content, secret)

    def _write_direct(self, path: Path, content: str) -> None:
        try:
            self._files.write_text_atomic(path, content)
        except OSError as e:
            raise WriteIoError(path, f"Failed to write file: {e}") from e
        logger.info("saved %s", path)

    def _write_elevated(self, path: Path, content: str, secret: str) -> None:
        staging = self._staging
        try:
            try:
                self._files.write_text_atomic(staging, content)
            except OSError as e:
                raise WriteIoError(path, f"Failed to write temp file: {e}") from e

            try:
                status = self._helper.copy(staging, path, secret)
            except OSError as e:
                raise WriteAuthError(path, f"Failed to run privilege helper: {e}") from e

            if status != 0:
                raise WriteCopyError(path, f"Sudo save failed (exit status {status})")
        finally:
            self._remove_staging()
        logger.info("saved %s with elevated privileges", path)

    def _remove_staging(self) -> None:
        # must not mask the write outcome
        try:
            self._staging.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("could not remove staging file %s: %s", self._staging, e)
