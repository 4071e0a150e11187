"""Validación de la consulta antes de tocar la red."""

from __future__ import annotations

from core.domain.errors import ConfigError, MissingCredentials
from core.domain.models import RequestConfig


def validate_config(config: RequestConfig | None) -> None:
    """Falla con `MissingCredentials` si falta usuario o contraseña.

    El resto de campos no se valida aquí; `build_url` se encarga del límite
    de longitud.
    """

    if config is None:
        raise ConfigError("No request configuration given")

    if not config.username or not config.password:
        raise MissingCredentials(
            "Missing credentials: set METEOMATICS_USERNAME and METEOMATICS_PASSWORD"
        )
