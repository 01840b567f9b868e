"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que el servicio y el dispatcher lean config de forma consistente.

La configuración es de solo lectura tras construirse: la comparten todas las
invocaciones en curso sin estado mutable.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SERVICE_URL = "http://gateway-a.watsonplatform.net/visual-recognition/api"
RECOMMENDED_VERSION_DATE = "2015-12-02"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "visual-recognition"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "visual-recognition"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "visual-recognition"
    return Path.home() / ".config" / "visual-recognition"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Configuración central del cliente.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - `version_date` es opcional aquí: su ausencia se reporta al construir el
      servicio como `ConfigurationError`, no al leer el entorno.
    """

    model_config = SettingsConfigDict(
        env_prefix="VISUAL_RECOGNITION_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
        frozen=True,
    )

    url: str = Field(
        default=DEFAULT_SERVICE_URL,
        min_length=8,
        description="Base URL del servicio.",
    )
    api_key: str | None = Field(
        default=None,
        description="API key; se inyecta como query param `api_key`.",
    )
    version_date: str | None = Field(
        default=None,
        description=f"Versión de la API (token `version`), p.ej. {RECOMMENDED_VERSION_DATE}.",
    )
    http_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="visual-recognition-v3/0.1",
        min_length=1,
        description="User-Agent para las peticiones.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging de la CLI (DEBUG, INFO, WARNING...).",
    )
