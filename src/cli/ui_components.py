"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Todo lo que renderiza aquí va a stderr: stdout queda reservado al JSON.
"""

from __future__ import annotations

import traceback

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.errors import WeatherError
from core.services.weather_pipeline import PipelineResult


def print_banner(console: Console) -> None:
    title = Text("meteo-cli", style="bold cyan")
    subtitle = Text("Meteomatics API • one request, one answer", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def error_location(exc: BaseException) -> str | None:
    """`archivo:línea` donde se lanzó la excepción (último frame)."""

    frames = traceback.extract_tb(exc.__traceback__)
    if not frames:
        return None
    last = frames[-1]
    return f"{last.filename}:{last.lineno}"


def build_error_panel(result: PipelineResult) -> Panel:
    """Panel con etapa, tipo de error, mensaje y ubicación."""

    error: WeatherError | None = result.error
    body = Text()
    stage = result.failed_at.value if result.failed_at else "unknown"
    body.append("Stage: ", style="bold")
    body.append(f"failed after '{stage}'\n")
    if error is not None:
        body.append("Kind: ", style="bold")
        body.append(f"{error.kind} ({type(error).__name__})\n")
        body.append("Error: ", style="bold")
        body.append(f"{error}\n")
        location = error_location(error)
        if location:
            body.append(f"at {location}", style="dim")

    return Panel(body, title=Text("Error", style="bold red"), border_style="red")


def build_checks_table(title: str) -> Table:
    table = Table(title=title)
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table
