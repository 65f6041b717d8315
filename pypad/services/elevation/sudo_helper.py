from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from pypad.domain.interfaces import IPrivilegeHelper
from pypad.utils.constants import DEFAULT_HELPER

logger = logging.getLogger(__name__)


class SudoHelper(IPrivilegeHelper):
    """
    Thin wrapper around the `sudo` binary (or a compatible helper).

    The secret is written to the helper's stdin followed by a newline
    (`-S`), and the helper's own output is discarded. Both calls block
    until the child exits and return its exit status; a helper that cannot
    be started raises OSError.
    """

    def __init__(self, executable: str = DEFAULT_HELPER) -> None:
        self._exe = executable

    @property
    def executable(self) -> str:
        return self._exe

    def validate(self, secret: str) -> int:
        # -k ignores any cached OS timestamp so the secret itself is checked
        return self._run(["-S", "-v", "-k"], secret)

    def copy(self, source: Path, dest: Path, secret: str) -> int:
        return self._run(["-S", "cp", str(source), str(dest)], secret)

    def _run(self, args: Sequence[str], secret: str) -> int:
        cmd = [self._exe, *args]
        logger.debug("running helper: %s", " ".join(cmd))
        proc = subprocess.run(
            cmd,
            input=f"{secret}\n",
            text=True,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
        logger.debug("helper exited with status %s", proc.returncode)
        return proc.returncode
