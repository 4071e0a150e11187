"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Una petición es un valor inmutable: `frozen=True` impide que una etapa del
  pipeline altere lo que otra ya validó.
- Los campos aceptan credenciales vacías a propósito: rechazarlas es trabajo
  de `core.validation`, que devuelve un error tipado en vez de un
  `ValidationError` genérico.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

DEFAULT_DATETIME = "2024-10-23T00:00:00Z"
# Meteomatics parameter syntax is <name>:<unit>, e.g. t_2m:C is the
# temperature 2m above ground in Celsius.
DEFAULT_PARAMETERS = "t_2m:C,precip_1h:mm,wind_speed_10m:ms"
# San Francisco (lat,lon)
DEFAULT_LOCATION = "37.7749,-122.4194"
DEFAULT_FORMAT = "json"


class RequestConfig(BaseModel):
    """Una consulta completa a la API: credenciales + los cuatro segmentos de ruta."""

    model_config = ConfigDict(frozen=True)

    username: str | None = Field(
        default=None,
        description="Usuario de la API (METEOMATICS_USERNAME).",
    )
    password: str | None = Field(
        default=None,
        repr=False,
        description="Contraseña de la API (METEOMATICS_PASSWORD). Nunca se imprime.",
    )
    datetime: str = Field(
        default=DEFAULT_DATETIME,
        description="Instante o rango ISO-8601 (primer segmento de ruta).",
    )
    parameters: str = Field(
        default=DEFAULT_PARAMETERS,
        description="Lista de parámetros separados por comas.",
    )
    location: str = Field(
        default=DEFAULT_LOCATION,
        description="Coordenadas 'lat,lon' u otra especificación de ubicación.",
    )
    format: str = Field(
        default=DEFAULT_FORMAT,
        description="Formato de salida solicitado a la API.",
    )
