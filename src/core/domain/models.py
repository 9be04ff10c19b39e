"""Modelos del dominio (Pydantic v2).

Estos modelos describen *qué* es la información (cookies, credenciales,
destinos y resultados de descarga), no *cómo* se obtiene.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class CookieRecord(BaseModel):
    """Una cookie tal como la devuelve un cookie store de navegador."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., description="Nombre de la cookie.")
    value: str = Field(..., description="Valor opaco de la cookie.")
    expires: datetime | None = Field(
        default=None,
        description="Expiración (UTC). None para cookies de sesión.",
    )
    domain: str | None = Field(default=None, description="Dominio de la cookie.")

    @field_validator("expires", mode="before")
    @classmethod
    def _parse_expires(cls, value: object) -> object:
        # Los cookie stores entregan timestamps unix en segundos.
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return datetime.fromtimestamp(value, tz=timezone.utc)
        return value

    @field_validator("expires")
    @classmethod
    def _normalize_expires(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value)


class Credential(BaseModel):
    """Token de sesión usado para autenticar cada descarga.

    Una vez seleccionado se usa durante toda la ejecución; no se re-valida
    por petición.
    """

    model_config = ConfigDict(frozen=True)

    value: str = Field(..., min_length=1, description="Token opaco (valor de NYT-S).")
    expires: datetime | None = Field(default=None, description="Expiración (UTC), si se conoce.")
    source: str = Field(default="supplied", description="Origen: 'supplied' o el nombre del navegador.")

    @field_validator("expires")
    @classmethod
    def _normalize_expires(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value)

    def is_usable(self, now: datetime) -> bool:
        return self.expires is None or self.expires > _as_utc(now)

    def remaining(self, now: datetime) -> timedelta | None:
        if self.expires is None:
            return None
        return self.expires - _as_utc(now)


class FetchTarget(BaseModel):
    """Destino derivado de una fecha: URL remota + ruta local."""

    model_config = ConfigDict(frozen=True)

    day: date
    url: str
    path: Path


class FetchStatus(str, Enum):
    SAVED = "saved"
    SKIPPED = "skipped"
    FATAL = "fatal"


class FetchReason(str, Enum):
    FUTURE_DATE = "future-date"
    INVALID_PAYLOAD = "invalid-payload"
    END_BEFORE_START = "end-before-start"
    TRANSPORT_ERROR = "transport-error"
    NO_CREDENTIAL = "no-credential"


class FetchResult(BaseModel):
    """Resultado de procesar una fecha."""

    day: date
    status: FetchStatus
    path: Path | None = None
    reason: FetchReason | None = None
    preview: str | None = Field(
        default=None,
        description="Inicio del cuerpo cuando no es un PDF (diagnóstico).",
    )
