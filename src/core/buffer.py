"""Buffer de respuesta con crecimiento por duplicación y techo duro.

Por qué un buffer propio en vez de `response.read()`:
- El body llega en chunks de tamaño arbitrario; el techo (`max_capacity`)
  protege la memoria frente a un servidor que responde de más.
- Duplicar la capacidad amortiza el coste de realocar a O(1) por byte.

Invariante: `size <= capacity <= max_capacity`.
"""

from __future__ import annotations

import logging
from types import TracebackType

from core.domain.errors import AllocationError, CapacityExceededError

logger = logging.getLogger(__name__)

INITIAL_BUFFER_SIZE = 4096
MAX_RESPONSE_SIZE = 10 * 1024 * 1024


class ResponseBuffer:
    """Acumulador append-only de bytes.

    Se usa como context manager: la memoria se libera al salir del bloque,
    tanto si la petición terminó bien como si falló.
    """

    def __init__(
        self,
        initial_capacity: int = INITIAL_BUFFER_SIZE,
        max_capacity: int = MAX_RESPONSE_SIZE,
    ) -> None:
        if initial_capacity <= 0 or max_capacity <= 0:
            raise ValueError("buffer capacities must be positive")
        if initial_capacity > max_capacity:
            raise ValueError(
                f"initial capacity {initial_capacity} exceeds max capacity {max_capacity}"
            )

        try:
            self._data = bytearray(initial_capacity)
        except MemoryError as exc:
            raise AllocationError(f"Failed to allocate {initial_capacity} bytes") from exc

        self._size = 0
        self._max_capacity = max_capacity
        self._released = False

    @property
    def size(self) -> int:
        return self._size

    @property
    def capacity(self) -> int:
        return len(self._data)

    @property
    def max_capacity(self) -> int:
        return self._max_capacity

    @property
    def released(self) -> bool:
        return self._released

    @property
    def data(self) -> bytes:
        """Copia inmutable de exactamente `size` bytes."""

        return bytes(self._data[: self._size])

    def __len__(self) -> int:
        return self._size

    def _grow(self, required: int) -> None:
        if required > self._max_capacity:
            raise CapacityExceededError(required, self._max_capacity)

        new_capacity = max(self.capacity, 1)
        while new_capacity < required:
            new_capacity *= 2
        new_capacity = min(new_capacity, self._max_capacity)

        try:
            # extend() deja el contenido previo intacto si falla.
            self._data.extend(bytes(new_capacity - self.capacity))
        except MemoryError as exc:
            raise AllocationError(f"Failed to grow buffer to {new_capacity} bytes") from exc

        logger.debug("response buffer grown to %d bytes", new_capacity)

    def append(self, chunk: bytes) -> int:
        """Añade `chunk` al final lógico y devuelve cuántos bytes se escribieron.

        Si el chunk no cabe ni siquiera en `max_capacity`, lanza
        `CapacityExceededError` sin escribir nada.
        """

        if self._released:
            raise ValueError("append on a released buffer")

        n = len(chunk)
        if n == 0:
            return 0

        end = self._size + n
        if end > self.capacity:
            self._grow(end)

        self._data[self._size : end] = chunk
        self._size = end
        return n

    def release(self) -> None:
        """Libera el almacenamiento. Idempotente."""

        self._data = bytearray()
        self._size = 0
        self._released = True

    def __enter__(self) -> ResponseBuffer:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()
