"""Cookie stores de navegador (rookiepy).

Un `BrowserCookieStore` por navegador; el orden de la lista que construye
`build_cookie_stores` es el orden de prioridad del resolver.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

import rookiepy

from core.config import AppSettings
from core.domain.models import CookieRecord
from core.interfaces.cookie_store import CookieStore

logger = logging.getLogger(__name__)

SUPPORTED_BROWSERS = (
    "firefox",
    "chrome",
    "chromium",
    "brave",
    "edge",
    "opera",
    "vivaldi",
    "safari",
)

Loader = Callable[..., list[dict[str, Any]]]


class BrowserCookieStore(CookieStore):
    """Lee cookies del almacenamiento local de un navegador."""

    def __init__(
        self,
        browser: str,
        *,
        domains: Iterable[str] | None = None,
        loader: Loader | None = None,
    ) -> None:
        self.name = browser.strip().lower()
        self._domains = list(domains) if domains else None
        self._loader = loader

    def _resolve_loader(self) -> Loader:
        if self._loader is not None:
            return self._loader
        if self.name not in SUPPORTED_BROWSERS:
            raise ValueError(
                f"unsupported browser {self.name!r}; expected one of: {', '.join(SUPPORTED_BROWSERS)}"
            )
        # Algunos navegadores (safari) solo existen en ciertas plataformas.
        loader = getattr(rookiepy, self.name, None)
        if loader is None:
            raise RuntimeError(f"{self.name} cookies are not available on this platform")
        return loader

    def list_cookies(self) -> list[CookieRecord]:
        raw = self._resolve_loader()(self._domains)
        records: list[CookieRecord] = []
        for item in raw:
            if not isinstance(item, dict):
                continue
            if not item.get("name") or item.get("value") is None:
                continue
            records.append(CookieRecord.model_validate(item))
        logger.debug("%s cookie store returned %d cookies", self.name, len(records))
        return records


def build_cookie_stores(settings: AppSettings | None = None) -> list[CookieStore]:
    """Crea los stores configurados, en orden de prioridad."""

    settings = settings or AppSettings()
    return [
        BrowserCookieStore(browser, domains=settings.cookie_domains)
        for browser in settings.browsers
    ]
