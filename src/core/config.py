"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP) lean config de forma consistente.
- El router solo recibe `Config` (la credencial); el resto de ajustes son
  de los adaptadores y de la CLI.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import Config


class MissingCredentialError(ValueError):
    """No hay REST API key de Kakao/Daum Map configurada."""


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "chat-router"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "chat-router"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "chat-router"
    return Path.home() / ".config" / "chat-router"


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


def write_user_env_vars(values: dict[str, str]) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# chat-router user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación."""

    model_config = SettingsConfigDict(
        env_prefix="CHAT_ROUTER_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    daummap_app_key: str | None = Field(
        default=None,
        description="REST API key de Kakao/Daum Map (necesaria para comandos de calidad del aire).",
    )

    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="Mozilla/5.0 (X11; Linux x86_64) chat-router/0.1",
        min_length=1,
        description="User-Agent para las peticiones HTTP.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging de la CLI (DEBUG, INFO, WARNING, ...).",
    )

    geocoding_max_pages: int = Field(
        default=3,
        ge=1,
        le=45,
        description="Páginas máximas por búsqueda en Kakao Local (la API corta en 45).",
    )
    howto_max_candidates: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Preguntas de StackOverflow a visitar antes de rendirse.",
    )

    daumdic_base_url: str = Field(default="https://dic.daum.net", min_length=8)
    daummap_base_url: str = Field(default="https://dapi.kakao.com", min_length=8)
    airkorea_base_url: str = Field(default="http://m.airkorea.or.kr", min_length=8)
    howto_search_url: str = Field(
        default="https://www.google.com/search",
        min_length=8,
        description="Buscador usado para localizar preguntas de StackOverflow.",
    )

    def to_config(self) -> Config:
        """Credencial por petición para el router."""

        if not self.daummap_app_key:
            raise MissingCredentialError(
                "CHAT_ROUTER_DAUMMAP_APP_KEY is not set (run `chat-router doctor setup-key`)."
            )
        return Config(daummap_app_key=self.daummap_app_key)
