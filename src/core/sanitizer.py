"""Parseo y redacción de la respuesta.

La API podría devolver (eco) campos de credenciales; aquí se garantiza que
`user`, `password` y `credentials` nunca llegan a la salida, estén o no en
la respuesta original.
"""

from __future__ import annotations

import json
from typing import Any

from core.domain.errors import ParseError

SENSITIVE_KEYS: tuple[str, ...] = ("user", "password", "credentials")


def parse_json(raw: bytes | str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ParseError(exc.msg, line=exc.lineno, column=exc.colno, offset=exc.pos) from exc
    except UnicodeDecodeError as exc:
        raise ParseError(exc.reason, line=1, column=1, offset=exc.start) from exc
    except (RecursionError, ValueError) as exc:
        # Sintácticamente válido pero no representable: anidamiento excesivo o
        # enteros por encima del límite de dígitos del intérprete.
        raise ParseError(str(exc), line=1, column=1, offset=0) from exc


def strip_sensitive_keys(document: Any) -> Any:
    """Elimina las claves sensibles de primer nivel (in place). Idempotente."""

    if isinstance(document, dict):
        for key in SENSITIVE_KEYS:
            document.pop(key, None)
    return document


def sanitize(raw: bytes | str) -> Any:
    """Parsea `raw` como un único documento JSON y lo redacta."""

    return strip_sensitive_keys(parse_json(raw))
