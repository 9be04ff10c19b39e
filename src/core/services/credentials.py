"""Resolución de la credencial de sesión (cookie NYT-S).

Si el usuario pasa un token se usa tal cual. Si no, se consultan los cookie
stores en orden y se toma la primera cookie válida (nombre con el marcador y
sin expirar).
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Iterable, Sequence

from core.domain.errors import NoCredentialFound
from core.domain.models import CookieRecord, Credential
from core.interfaces.cookie_store import CookieStore

logger = logging.getLogger(__name__)

DEFAULT_COOKIE_NAME = "NYT-S"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def find_valid_cookie(
    records: Iterable[CookieRecord],
    *,
    marker: str,
    now: datetime,
    source: str,
) -> Credential | None:
    """Primera cookie cuyo nombre contiene `marker` y que sigue vigente en `now`."""

    for record in records:
        if marker not in record.name:
            continue
        credential = Credential(value=record.value, expires=record.expires, source=source)
        if credential.is_usable(now):
            return credential
    return None


class CredentialResolver:
    def __init__(
        self,
        stores: Sequence[CookieStore],
        *,
        marker: str = DEFAULT_COOKIE_NAME,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._stores = list(stores)
        self._marker = marker
        self._clock = clock

    @property
    def store_names(self) -> list[str]:
        return [store.name for store in self._stores]

    def resolve(self, supplied_token: str | None = None) -> Credential:
        if supplied_token:
            return Credential(value=supplied_token, source="supplied")

        for store in self._stores:
            try:
                records = store.list_cookies()
            except Exception as exc:
                logger.debug("cookie store %s unavailable: %s", store.name, exc)
                continue

            now = self._clock()
            credential = find_valid_cookie(records, marker=self._marker, now=now, source=store.name)
            if credential is None:
                continue

            remaining = credential.remaining(now)
            if remaining is not None:
                logger.info("token expires in %s", remaining)
            logger.debug("using %s cookie from %s", self._marker, store.name)
            return credential

        raise NoCredentialFound(self._marker, self.store_names)
