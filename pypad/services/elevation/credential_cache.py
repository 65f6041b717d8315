from __future__ import annotations

import logging
import time
from collections.abc import Callable

from pypad.domain.interfaces import IPrivilegeHelper
from pypad.domain.models import Credential
from pypad.utils.constants import CREDENTIAL_TTL_SECONDS

logger = logging.getLogger(__name__)


class CredentialCache:
    """Holds the elevated-write secret for a fixed lifetime. Expiry is checked lazily."""

    def __init__(
        self,
        helper: IPrivilegeHelper,
        *,
        ttl_seconds: int = CREDENTIAL_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._helper = helper
        self._ttl = ttl_seconds
        self._clock = clock
        self._credential: Credential | None = None

    @property
    def credential(self) -> Credential | None:
        return self._credential

    @property
    def is_active(self) -> bool:
        """True while elevated mode is on, whether or not the secret has expired."""
        return self._credential is not None

    def now(self) -> float:
        return self._clock()

    def set(self, secret: str) -> None:
        self._credential = Credential(secret=secret, expires_at=self._clock() + self._ttl)

    def is_valid(self, now: float | None = None) -> bool:
        if self._credential is None:
            return False
        at = self._clock() if now is None else now
        return at <= self._credential.expires_at

    def clear(self) -> None:
        self._credential = None

    def validate(self, secret: str) -> bool:
        try:
            status = self._helper.validate(secret)
        except OSError as e:
            logger.warning("privilege helper could not be run: %s", e)
            return False
        if status != 0:
            logger.info("privilege helper rejected the password (status %s)", status)
            return False
        return True
