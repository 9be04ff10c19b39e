"""Contrato de cookie stores.

Cada proveedor (un navegador concreto, un stub en tests) expone la lista de
cookies que conoce; el resolver de credenciales hace el escaneo genérico.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import CookieRecord


@runtime_checkable
class CookieStore(Protocol):
    """Contrato mínimo para una fuente de cookies.

    Reglas de diseño:
    - `name` identifica la fuente en logs y mensajes de error.
    - `list_cookies` puede lanzar si el navegador/perfil no está disponible;
      el resolver lo trata como "sin coincidencias".
    """

    name: str

    def list_cookies(self) -> list[CookieRecord]:
        """Devuelve las cookies del store (posiblemente vacía)."""

        ...
