"""Configuración del cliente.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que el transporte HTTP y las operaciones lean config de forma
  consistente (URL, credenciales, timeouts, periodos de polling).
"""

from __future__ import annotations

import os
import re
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core import __version__

ARPIO_URL = "https://api.arpio.io/api"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "arpio"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "arpio"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "arpio"
    return Path.home() / ".config" / "arpio"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _unquote_env_value(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] == "'":
        return value[1:-1]
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return re.sub(r'\\(["\\])', r"\1", value[1:-1])
    return value


def _quote_env_value(value: str) -> str:
    """Comillas dobles (con escapes) si el valor no sobrevive tal cual a python-dotenv."""

    if value and not re.search(r"[\s'\"#\\]", value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip().removeprefix("export ").strip()
        if key:
            data[key] = _unquote_env_value(value.strip())
    return data


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# Arpio client user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={_quote_env_value(existing[key])}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class ArpioSettings(BaseSettings):
    """Configuración central del cliente.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core.
    - Version/commit del user-agent son config, no estado global mutable.
    """

    model_config = SettingsConfigDict(
        env_prefix="ARPIO_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_url: str = Field(
        default=ARPIO_URL,
        min_length=8,
        description="URL base de la API de Arpio.",
    )
    account_id: str | None = Field(
        default=None,
        description="Cuenta Arpio sobre la que opera el cliente.",
    )
    api_key_id: str | None = Field(
        default=None,
        description="ID de la API key (no puede contener ':').",
    )
    api_key_secret: str | None = Field(
        default=None,
        description="Secreto de la API key.",
    )

    tls_insecure_skip_verify: bool = Field(
        default=False,
        description="Desactiva la verificación TLS (solo entornos de desarrollo).",
    )
    http_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout por request (segundos).",
    )

    app_poll_seconds: float = Field(
        default=5.0,
        ge=0,
        description="Intervalo entre intentos al esperar una aplicación.",
    )
    recovery_point_poll_seconds: float = Field(
        default=5.0,
        ge=0,
        description="Intervalo entre intentos al esperar un recovery point.",
    )

    client_version: str = Field(
        default=__version__,
        min_length=1,
        description="Versión reportada en el User-Agent.",
    )
    client_commit: str = Field(
        default="unknown",
        min_length=1,
        description="Commit reportado en el User-Agent.",
    )

    @property
    def user_agent(self) -> str:
        return f"arpio-client-python/{self.client_version}/{self.client_commit}"
