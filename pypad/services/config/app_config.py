from __future__ import annotations

import logging
import re
import sys
import tempfile
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from pypad.domain.interfaces import IAppConfig
from pypad.domain.models import Mode
from pypad.services.config.ini_config_service import IniConfigService
from pypad.utils.constants import CREDENTIAL_TTL_SECONDS, DEFAULT_HELPER

_VERSION_RE = re.compile(r"^v?(\d+\.\d+\.\d+)(?:[-+].*)?$", re.IGNORECASE)


def _project_root_fallback() -> Path:
    """
    Best-effort project root resolution that also works in PyInstaller:
      - PyInstaller onefile/onedir uses sys._MEIPASS as bundle root
      - dev mode uses this file location to walk upward
    """
    meipass = getattr(sys, "_MEIPASS", None)  # type: ignore[attr-defined]
    if meipass:
        return Path(meipass)

    # pypad/services/config/app_config.py -> parents[3] = repository root
    return Path(__file__).resolve().parents[3]


def _read_version_file(version_path: Path) -> str | None:
    try:
        raw = version_path.read_text(encoding="utf-8").strip()
    except OSError:
        return None

    m = _VERSION_RE.match(raw)
    return m.group(1) if m else None


@dataclass(frozen=True)
class AppConfig(IAppConfig):
    """
    Adapter that wraps IniConfigService and adds get_version() from <root>/version file.

    Precedence for version:
      1) <project_root>/version file (semantic e.g. v0.1.0)
      2) ini_config_service.app_version() (fallback)
      3) "0.0.0"
    """

    ini: IniConfigService
    project_root: Path

    def get_version(self) -> str:
        v = _read_version_file(self.project_root / "version")
        if v:
            return v

        v2 = (self.ini.app_version() or "").strip()
        if v2:
            m = _VERSION_RE.match(v2)
            return m.group(1) if m else v2

        return "0.0.0"

    # ---- typed editor settings ----

    def default_mode(self) -> Mode:
        return Mode.parse(self.get("editor", "default_mode"), Mode.PLAIN)

    def helper_executable(self) -> str:
        return (self.get("elevation", "helper") or "").strip() or DEFAULT_HELPER

    def credential_ttl_seconds(self) -> int:
        ttl = self.get_int("elevation", "credential_ttl_seconds", CREDENTIAL_TTL_SECONDS)
        return ttl if ttl and ttl > 0 else CREDENTIAL_TTL_SECONDS

    def staging_dir(self) -> Path:
        raw = (self.get("elevation", "staging_dir") or "").strip()
        return Path(raw).expanduser() if raw else Path(tempfile.gettempdir())

    def log_level(self) -> int:
        name = (self.get("logging", "level") or "WARNING").strip().upper()
        level = logging.getLevelName(name)
        return level if isinstance(level, int) else logging.WARNING

    # ---- delegate IniConfigService methods (full surface) ----

    def get(self, section: str, key: str, default: str | None = None) -> str | None:
        return self.ini.get(section, key, default)

    def get_int(self, section: str, key: str, default: int | None = None) -> int | None:
        return self.ini.get_int(section, key, default)

    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None:
        return self.ini.get_bool(section, key, default)

    def as_dict(self) -> Mapping[str, Mapping[str, str]]:
        return self.ini.as_dict()

    def app_version(self) -> str:
        return self.ini.app_version()

    @property
    def loaded_from(self) -> Path | None:
        return self.ini.loaded_from


def build_app_config(
    *, explicit_ini: Path | None = None, project_root: Path | None = None
) -> AppConfig:
    root = project_root or _project_root_fallback()
    ini = IniConfigService(explicit_path=explicit_ini, project_root=root)
    return AppConfig(ini=ini, project_root=root)
