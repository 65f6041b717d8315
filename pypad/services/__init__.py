"""Concrete service implementations: files, settings, history and search."""

from .file_service import FileService
from .history import SnapshotHistory
from .search_engine import search
from .settings_service import SettingsService

__all__ = ["FileService", "SettingsService", "SnapshotHistory", "search"]
