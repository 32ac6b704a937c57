"""Configuración del cliente.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Un único objeto inmutable que comparten el dispatcher y todos los recursos.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from keyoku import __version__

DEFAULT_BASE_URL = "https://api.keyoku.dev"
DEFAULT_TIMEOUT_SECONDS = 30.0


_APP_DIR = "keyoku"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (Windows, macOS o XDG)."""

    if sys.platform.startswith("win"):
        root = Path(os.environ.get("APPDATA") or Path.home())
    elif sys.platform == "darwin":
        root = Path.home() / "Library" / "Application Support"
    else:
        root = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
    return root / _APP_DIR


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def _parse_env_lines(text: str) -> dict[str, str]:
    """`KEY=VALUE` por línea; ignora comentarios, líneas sin `=` y `export `."""

    parsed: dict[str, str] = {}
    for line in (raw.strip() for raw in text.splitlines()):
        if line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        key, sep, value = line.partition("=")
        key = key.strip()
        if sep and key:
            parsed[key] = _unquote(value.strip())
    return parsed


def read_user_env_vars() -> dict[str, str]:
    env_path = get_user_env_file()
    if not env_path.is_file():
        return {}
    return _parse_env_lines(env_path.read_text(encoding="utf-8"))


def write_user_env_vars(values: dict[str, str | None]) -> Path:
    """Fusiona `values` en el .env del usuario. Un valor `None` borra la clave."""

    merged = read_user_env_vars()
    for key, value in values.items():
        if value is None:
            merged.pop(key, None)
        else:
            merged[key] = value

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)
    body = "".join(f"{key}={merged[key]}\n" for key in sorted(merged))
    env_path.write_text("# Keyoku user config\n" + body, encoding="utf-8")
    return env_path


class KeyokuSettings(BaseSettings):
    """Configuración inmutable del cliente.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el cliente.
    - Los argumentos explícitos del constructor tienen prioridad sobre el entorno.
    """

    model_config = SettingsConfigDict(
        env_prefix="KEYOKU_",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_key: str | None = Field(
        default=None,
        description="API key enviada como credencial Bearer.",
    )
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        min_length=8,
        description="URL base del servicio (sin barra final).",
    )
    timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        gt=0,
        description="Timeout por request (segundos).",
    )
    entity_id: str | None = Field(
        default=None,
        description="Identificador de tenant/entidad enviado en cada request (opcional).",
    )
    user_agent: str = Field(
        default=f"keyoku-python/{__version__}",
        min_length=1,
        description="Identificador de cliente enviado como User-Agent.",
    )

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("entity_id", "api_key")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None
