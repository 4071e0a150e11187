"""Construcción de la URL de la API.

Formato fijo: `<base>/<datetime>/<parameters>/<location>/<format>`.

Nota:
- Los segmentos se insertan tal cual, sin percent-encoding: la API espera
  `:` y `,` literales en parámetros y coordenadas.
"""

from __future__ import annotations

from core.domain.errors import UrlError, UrlTooLong
from core.domain.models import RequestConfig

API_BASE_URL = "https://api.meteomatics.com"
API_MAX_URL_LENGTH = 512


def build_url(
    config: RequestConfig,
    *,
    base_url: str = API_BASE_URL,
    max_length: int = API_MAX_URL_LENGTH,
) -> str:
    """Formatea la URL o falla con `UrlTooLong`; nunca la trunca.

    `max_length` cuenta un byte de terminador, así que la URL útil puede tener
    como mucho `max_length - 1` bytes.
    """

    if max_length <= 0:
        raise UrlError(f"Invalid max URL length: {max_length}")

    segments = (config.datetime, config.parameters, config.location, config.format)
    url = "/".join((base_url.rstrip("/"), *segments))

    required = len(url.encode("utf-8")) + 1
    if required > max_length:
        raise UrlTooLong(required, max_length)
    return url
