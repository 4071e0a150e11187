"""Exportación JSON del documento saneado.

Por qué JSON indentado:
- Salida legible en terminal y estable para pipelines (`| jq`).
- El mismo render sirve para stdout y para persistir a fichero.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.domain.errors import JsonError


def render_json(document: Any, *, indent: int = 2) -> str:
    """Serializa `document` preservando el orden de claves de la API."""

    try:
        return json.dumps(document, ensure_ascii=False, indent=indent)
    except (TypeError, ValueError) as exc:
        raise JsonError(f"Failed to format JSON output: {exc}") from exc


def export_json(*, document: Any, output_path: Path) -> Path:
    """Exporta el documento a JSON UTF-8 (con salto de línea final)."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_json(document) + "\n", encoding="utf-8")
    return output_path
