"""Configuración del Core.

Centraliza variables de entorno (pydantic-settings) para que la CLI, el
pipeline y los adaptadores (HTTP, cookie stores) lean la misma configuración.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from dotenv import set_key
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "xword-pdf"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "xword-pdf"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "xword-pdf"
    return Path.home() / ".config" / "xword-pdf"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Guarda variables en el .env global del usuario (crea el archivo si falta)."""

    env_path = env_path or get_user_env_file()
    if not env_path.exists():
        env_path.parent.mkdir(parents=True, exist_ok=True)
        env_path.write_text("# xword-pdf user config (.env)\n", encoding="utf-8")

    for key, value in values.items():
        if value is not None:
            set_key(env_path, key, value, quote_mode="never")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación."""

    model_config = SettingsConfigDict(
        env_prefix="XWORD_PDF_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    base_url: str = Field(
        default="https://www.nytimes.com",
        min_length=8,
        description="Host del servicio de crucigramas (sin barra final).",
    )
    token: str | None = Field(
        default=None,
        description="Token NYT-S por defecto si no se pasa --token.",
    )
    cookie_name: str = Field(
        default="NYT-S",
        min_length=1,
        description="Substring que identifica la cookie de sesión.",
    )
    cookie_domains: list[str] = Field(
        default_factory=lambda: ["nytimes.com"],
        description="Dominios a consultar en los cookie stores del navegador.",
    )
    browsers: list[str] = Field(
        default_factory=lambda: ["firefox", "chrome", "brave", "safari"],
        min_length=1,
        description="Navegadores consultados en orden de prioridad.",
    )

    request_delay_seconds: float = Field(
        default=1.0,
        ge=0,
        description="Pausa fija entre peticiones (segundos).",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="xword-pdf/0.1 (+https://local)",
        min_length=1,
        description="User-Agent para las descargas.",
    )
    preview_bytes: int = Field(
        default=255,
        ge=0,
        le=4096,
        description="Bytes del cuerpo mostrados cuando la respuesta no es un PDF.",
    )
