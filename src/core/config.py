"""Configuración del cliente.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- El dispatcher HTTP y la fachada leen la misma configuración.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.credentials import AccessTokenType

PRODUCTION_BASE_URL = "https://api.uber.com"
SANDBOX_BASE_URL = "https://sandbox-api.uber.com"
DEFAULT_API_VERSION = "v1.2"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "rideshare-sdk"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "rideshare-sdk"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "rideshare-sdk"
    return Path.home() / ".config" / "rideshare-sdk"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Las claves existentes que no aparecen en `values` se conservan.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# rideshare-sdk user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class ClientSettings(BaseSettings):
    """Configuración central del cliente.

    Orden de carga: variables de entorno, `.env` del proyecto y luego el
    `.env` global del usuario.
    """

    model_config = SettingsConfigDict(
        env_prefix="RIDESHARE_",
        extra="ignore",
        case_sensitive=False,
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    access_token: str | None = Field(
        default=None,
        description="Token de acceso (client u OAuth de usuario, o server token).",
    )
    token_type: AccessTokenType = Field(
        default=AccessTokenType.CLIENT,
        description="Tipo de token: 'client' (Bearer) o 'server' (Token).",
    )
    base_url: str = Field(
        default=PRODUCTION_BASE_URL,
        min_length=8,
        description="URL base de la API; todas las rutas son relativas a ella.",
    )
    sandbox: bool = Field(
        default=False,
        description="Usar el host sandbox cuando `base_url` es el de producción.",
    )
    api_version: str = Field(
        default=DEFAULT_API_VERSION,
        min_length=1,
        description="Segmento de versión interpolado en cada ruta (p.ej. 'v1.2').",
    )
    http_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Timeout por request (segundos). None => default del transporte.",
    )
    user_agent: str = Field(
        default="rideshare-sdk/0.1",
        min_length=1,
        description="User-Agent enviado en cada request.",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Nivel de logging para la CLI.",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    def resolved_base_url(self) -> str:
        """URL base efectiva (sin barra final)."""

        base = self.base_url.rstrip("/")
        if self.sandbox and base == PRODUCTION_BASE_URL:
            return SANDBOX_BASE_URL
        return base
