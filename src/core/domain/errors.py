"""Taxonomía de errores del dominio.

Por qué una jerarquía propia:
- Cada etapa del pipeline falla con un tipo concreto (config, URL, recursos,
  red, JSON) y la CLI decide el código de salida sin inspeccionar mensajes.
- Los adaptadores traducen excepciones de librerías (httpx, json) a estos
  tipos para que el Core no dependa de ellas.
"""

from __future__ import annotations


class WeatherError(Exception):
    """Base de todos los fallos esperados del pipeline."""

    kind = "weather"


class ConfigError(WeatherError):
    """Configuración ausente o inválida, detectada antes de cualquier I/O."""

    kind = "config"


class MissingCredentials(ConfigError):
    kind = "missing_credentials"


class UrlError(WeatherError):
    kind = "url"


class UrlTooLong(UrlError):
    kind = "url_too_long"

    def __init__(self, length: int, max_length: int) -> None:
        super().__init__(
            f"URL needs {length} bytes (including terminator) but the limit is {max_length}"
        )
        self.length = length
        self.max_length = max_length


class ResourceError(WeatherError):
    """Agotamiento de recursos al bufferizar la respuesta."""

    kind = "resource"


class AllocationError(ResourceError):
    kind = "allocation"


class CapacityExceededError(ResourceError):
    kind = "capacity_exceeded"

    def __init__(self, required: int, max_capacity: int) -> None:
        super().__init__(
            f"Response too large: needs {required} bytes, ceiling is {max_capacity} bytes"
        )
        self.required = required
        self.max_capacity = max_capacity


class NetworkError(WeatherError):
    """Fallo de transporte (conexión, TLS, timeout) o respuesta HTTP de error."""

    kind = "network"

    def __init__(self, cause: str, *, status_code: int | None = None) -> None:
        super().__init__(cause)
        self.cause = cause
        self.status_code = status_code


class JsonError(WeatherError):
    kind = "json"


class ParseError(JsonError):
    kind = "parse"

    def __init__(self, message: str, *, line: int, column: int, offset: int) -> None:
        super().__init__(f"JSON parsing error on line {line}, column {column}: {message}")
        self.message = message
        self.line = line
        self.column = column
        self.offset = offset
