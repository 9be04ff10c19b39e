"""Errores del dominio.

Los errores "fatales" detienen la ejecución completa; la CLI los traduce a
un exit code distinto de cero. Un payload inválido no es un error: es un
`FetchResult` con estado `skipped`.
"""

from __future__ import annotations

from datetime import date


class XwordError(Exception):
    """Base de todos los errores de xword-pdf."""


class InvalidDateFormat(XwordError, ValueError):
    def __init__(self, text: str) -> None:
        super().__init__(f"Invalid date {text!r}: expected YYYY-MM-DD")
        self.text = text


class DateTooEarly(XwordError, ValueError):
    def __init__(self, value: date, minimum: date) -> None:
        super().__init__(f"Invalid date {value.isoformat()} is before {minimum.isoformat()}")
        self.value = value
        self.minimum = minimum


class InvalidRange(XwordError):
    def __init__(self, start: date, end: date) -> None:
        super().__init__(
            f"Invalid start/end date: `end` ({end.isoformat()}) should be >= `start` ({start.isoformat()})"
        )
        self.start = start
        self.end = end


class NoCredentialFound(XwordError):
    def __init__(self, cookie_name: str, stores: list[str]) -> None:
        where = ", ".join(stores) if stores else "no configured cookie stores"
        super().__init__(f"failed to find {cookie_name} cookie in {where}")
        self.cookie_name = cookie_name
        self.stores = stores


class FuturePuzzleRequested(XwordError):
    def __init__(self, requested: date, today: date) -> None:
        super().__init__(
            f"cannot download future puzzles ({requested.isoformat()} is after {today.isoformat()})"
        )
        self.requested = requested
        self.today = today


class PuzzleTransportError(XwordError):
    """La petición HTTP falló antes de recibir un cuerpo."""

    def __init__(self, url: str, cause: Exception) -> None:
        super().__init__(f"request to {url} failed: {cause}")
        self.url = url
        self.cause = cause
