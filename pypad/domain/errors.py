"""Error taxonomy shared by the elevation services and the document session."""

from __future__ import annotations

from pathlib import Path


class PadError(Exception):
    """Base class for every error the session surfaces to the user."""

    title = "Error"


class AuthFailed(PadError):
    title = "Invalid Password"

    def __init__(self, message: str = "The password was rejected.") -> None:
        super().__init__(message)


class AuthCancelled(PadError):
    title = "Sudo Mode"

    def __init__(self, message: str = "No password was entered.") -> None:
        super().__init__(message)


class WriteError(PadError):
    title = "Save Error"

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(message)
        self.path = path


class WriteIoError(WriteError):
    """Ordinary file I/O failed (direct write or staging file)."""


class WriteAuthError(WriteError):
    """The privilege-escalation helper could not be started."""


class WriteCopyError(WriteError):
    """The helper ran but exited with a failure status."""


class SaveFailed(PadError):
    title = "Save Error"

    def __init__(self, path: Path, cause: PadError) -> None:
        super().__init__(f"Failed to save {path}:\n{cause}")
        self.path = path
        self.cause = cause


class LoadFailed(PadError):
    title = "Open Error"

    def __init__(self, path: Path, cause: BaseException) -> None:
        super().__init__(f"Failed to open file:\n{cause}")
        self.path = path
        self.cause = cause
