"""Domain layer: interfaces, simple models (dataclasses) and errors."""

from .errors import (
    AuthCancelled,
    AuthFailed,
    LoadFailed,
    PadError,
    SaveFailed,
    WriteAuthError,
    WriteCopyError,
    WriteError,
    WriteIoError,
)
from .interfaces import (
    IAppConfig,
    IConfigService,
    IDocumentView,
    IFileService,
    IPrivilegeHelper,
    ISettingsService,
)
from .models import CloseChoice, Credential, Direction, Mode, SearchState, Span

__all__ = [
    "IFileService",
    "ISettingsService",
    "IConfigService",
    "IAppConfig",
    "IPrivilegeHelper",
    "IDocumentView",
    "Mode",
    "Direction",
    "CloseChoice",
    "Span",
    "SearchState",
    "Credential",
    "PadError",
    "AuthFailed",
    "AuthCancelled",
    "WriteError",
    "WriteIoError",
    "WriteAuthError",
    "WriteCopyError",
    "SaveFailed",
    "LoadFailed",
]
