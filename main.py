"""Entry point de desarrollo (sin instalar el paquete).

Uso, desde la raíz del repo:
- `python -m main fetch --location 47.37,8.54`

Los paquetes (`cli`, `core`, `adapters`) viven en `src/`; sin un
`pip install -e .` hay que añadir ese directorio a `sys.path` a mano.
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> None:
    src = Path(__file__).resolve().parent / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
