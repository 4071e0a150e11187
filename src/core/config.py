"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Un único objeto de configuración, construido una vez al arrancar y pasado
  explícitamente al pipeline: no hay estado global mutable.
"""

from __future__ import annotations

import os
import re
import sys
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.buffer import INITIAL_BUFFER_SIZE, MAX_RESPONSE_SIZE
from core.domain.models import (
    DEFAULT_DATETIME,
    DEFAULT_FORMAT,
    DEFAULT_LOCATION,
    DEFAULT_PARAMETERS,
    RequestConfig,
)
from core.url_builder import API_BASE_URL, API_MAX_URL_LENGTH

_APP_DIR_NAME = "meteo-cli"


def _platform_config_base() -> Path:
    if sys.platform.startswith("win"):
        return Path(os.environ.get("APPDATA") or Path.home())
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    return Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario: APPDATA, Application Support o XDG."""

    return _platform_config_base() / _APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


# python-dotenv no corta en ` #` dentro de comillas simples, donde solo `\\` y
# `\'` son escapes. Sí expande `${...}` en cualquier valor: `${:-$}` (variable
# sin nombre con default `$`) resuelve a un `$` literal.
_SINGLE_QUOTE_ESCAPE_RE = re.compile(r"\\([\\'])")
_LITERAL_INTERPOLATION = "${"
_ESCAPED_INTERPOLATION = "${:-$}{"


def _quote_env_value(value: str) -> str:
    escaped = value.replace(_LITERAL_INTERPOLATION, _ESCAPED_INTERPOLATION)
    escaped = escaped.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def _unquote_env_value(raw: str) -> str:
    value = raw.strip()
    if len(value) >= 2 and value[0] == value[-1] == "'":
        value = _SINGLE_QUOTE_ESCAPE_RE.sub(r"\1", value[1:-1])
        return value.replace(_ESCAPED_INTERPOLATION, _LITERAL_INTERPOLATION)
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value


def read_user_env_vars(env_path: Path) -> dict[str, str]:
    """Lee un .env escrito por `write_user_env_vars` (o editado a mano)."""

    if not env_path.exists():
        return {}

    values: dict[str, str] = {}
    for line in env_path.read_text(encoding="utf-8").splitlines():
        key, sep, raw = line.partition("=")
        key = key.strip()
        if not sep or not key or key.startswith("#"):
            continue
        values[key] = _unquote_env_value(raw)
    return values


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Los valores se guardan entre comillas simples para que contraseñas con
    `$`, `#` o espacios sobrevivan a la lectura de pydantic-settings.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    merged = read_user_env_vars(env_path)
    merged.update({k: v for k, v in values.items() if v is not None})

    lines = ["# meteo-cli user config (.env)"]
    lines.extend(f"{key}={_quote_env_value(merged[key])}" for key in sorted(merged))
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Las credenciales se leen de `METEOMATICS_USERNAME` y
    `METEOMATICS_PASSWORD`. Aquí pueden faltar: la ausencia se reporta como
    `MissingCredentials` en la etapa de validación, no al cargar settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="METEOMATICS_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    username: str | None = Field(
        default=None,
        description="Usuario de la API Meteomatics.",
    )
    password: str | None = Field(
        default=None,
        repr=False,
        description="Contraseña de la API Meteomatics.",
    )

    base_url: str = Field(
        default=API_BASE_URL,
        min_length=8,
        description="Base URL de la API (sin barra final).",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout total de la petición (segundos).",
    )
    user_agent: str = Field(
        default="meteo-cli/0.1",
        min_length=1,
        description="User-Agent enviado a la API.",
    )

    max_url_length: int = Field(
        default=API_MAX_URL_LENGTH,
        ge=16,
        description="Longitud máxima de la URL, terminador incluido.",
    )
    initial_buffer_size: int = Field(
        default=INITIAL_BUFFER_SIZE,
        ge=1,
        description="Capacidad inicial del buffer de respuesta (bytes).",
    )
    max_response_size: int = Field(
        default=MAX_RESPONSE_SIZE,
        ge=1,
        description="Techo duro del body bufferizado (bytes).",
    )

    default_datetime: str = Field(default=DEFAULT_DATETIME, min_length=1)
    default_parameters: str = Field(default=DEFAULT_PARAMETERS, min_length=1)
    default_location: str = Field(default=DEFAULT_LOCATION, min_length=1)
    default_format: str = Field(default=DEFAULT_FORMAT, min_length=1)

    @model_validator(mode="after")
    def _check_buffer_sizes(self) -> "AppSettings":
        if self.initial_buffer_size > self.max_response_size:
            raise ValueError("initial_buffer_size must not exceed max_response_size")
        return self

    def request_config(
        self,
        *,
        datetime: str | None = None,
        parameters: str | None = None,
        location: str | None = None,
        format: str | None = None,
    ) -> RequestConfig:
        """Compone la consulta a partir de credenciales + overrides opcionales."""

        return RequestConfig(
            username=self.username,
            password=self.password,
            datetime=datetime or self.default_datetime,
            parameters=parameters or self.default_parameters,
            location=location or self.default_location,
            format=format or self.default_format,
        )
