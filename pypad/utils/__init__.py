"""App constants and utilities."""

from .constants import (
    APP_NAME,
    APP_ORG,
    CREDENTIAL_TTL_SECONDS,
    DEFAULT_HELPER,
    MAX_RECENTS,
    SETTINGS_GEOMETRY,
    SETTINGS_RECENTS,
    STAGING_FILE_NAME,
)

__all__ = [
    "APP_ORG",
    "APP_NAME",
    "SETTINGS_GEOMETRY",
    "SETTINGS_RECENTS",
    "MAX_RECENTS",
    "DEFAULT_HELPER",
    "CREDENTIAL_TTL_SECONDS",
    "STAGING_FILE_NAME",
]
