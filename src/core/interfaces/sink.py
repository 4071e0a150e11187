"""Contrato del destino de bytes del fetcher.

Por qué Protocol:
- El adaptador HTTP solo necesita `append`; no conoce `ResponseBuffer`.
- Permite sustituir el buffer por un stub en tests sin herencia.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ByteSink(Protocol):
    """Acumulador al que se empujan los chunks del body en orden de llegada."""

    @property
    def max_capacity(self) -> int: ...

    def append(self, chunk: bytes) -> int:
        """Añade `chunk` al final y devuelve los bytes escritos.

        Debe lanzar `ResourceError` si no puede aceptar el chunk; en ese caso
        la transferencia se aborta.
        """

        ...
