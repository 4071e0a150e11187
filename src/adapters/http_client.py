"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeout, headers y verificación TLS en un único builder.
- Traduce errores de httpx a `NetworkError` para que el Core no dependa de la
  librería.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import logging

import httpx

from core.config import AppSettings
from core.domain.errors import NetworkError, ResourceError
from core.interfaces.sink import ByteSink

logger = logging.getLogger(__name__)

_ERROR_SNIPPET_CHARS = 300


def build_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` síncrono con defaults seguros.

    La verificación TLS (certificado y hostname) siempre está activa; no hay
    setting para desactivarla.
    """

    settings = settings or AppSettings()
    headers = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        verify=True,
        follow_redirects=False,
        headers=headers,
        transport=transport,
    )


def _content_length(response: httpx.Response) -> int | None:
    raw = response.headers.get("Content-Length")
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _read_error_snippet(response: httpx.Response, *, limit: int) -> str:
    """Lee como mucho `limit` bytes del body de error; el resto se descarta al cerrar."""

    collected = bytearray()
    for chunk in response.iter_bytes():
        collected += chunk[: limit - len(collected)]
        if len(collected) >= limit:
            break
    return collected.decode("utf-8", errors="replace")


def fetch_into(
    client: httpx.Client,
    url: str,
    *,
    username: str,
    password: str,
    sink: ByteSink,
) -> int:
    """GET autenticado (Basic) que empuja cada chunk del body en `sink`.

    Devuelve el total de bytes recibidos. Cualquier fallo de transporte, de
    estado HTTP o del propio `sink` se reporta como `NetworkError`; en este
    último caso la transferencia se corta en el chunk que falló.
    """

    logger.debug("GET %s", url)
    received = 0
    try:
        with client.stream("GET", url, auth=httpx.BasicAuth(username, password)) as response:
            logger.debug("HTTP %s from %s", response.status_code, response.url.host)

            if response.status_code >= 400:
                limit = min(_ERROR_SNIPPET_CHARS, sink.max_capacity)
                snippet = _read_error_snippet(response, limit=limit)
                raise NetworkError(
                    f"HTTP {response.status_code} from API. Body: {snippet}",
                    status_code=response.status_code,
                )

            declared = _content_length(response)
            if declared is not None and declared > sink.max_capacity:
                raise NetworkError(
                    f"Response too large: Content-Length {declared} exceeds {sink.max_capacity} bytes",
                    status_code=response.status_code,
                )

            for chunk in response.iter_bytes():
                try:
                    received += sink.append(chunk)
                except ResourceError as exc:
                    raise NetworkError(
                        f"Transfer aborted: {exc}",
                        status_code=response.status_code,
                    ) from exc
    except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as exc:
        raise NetworkError(f"{type(exc).__name__}: {exc}") from exc

    logger.debug("received %d bytes", received)
    return received
