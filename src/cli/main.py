"""Meteomatics CLI.

`fetch` prints the sanitized JSON on stdout; diagnostics, logs and errors go
to stderr so the output can be piped straight into other tools.
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from adapters.json_exporter import export_json, render_json
from cli import doctor
from cli.ui_components import build_error_panel
from core.config import AppSettings
from core.domain.errors import JsonError
from core.services.weather_pipeline import PipelineHooks, PipelineStage, run_pipeline

app = typer.Typer(no_args_is_help=True, help="Query the Meteomatics weather API.")
app.add_typer(doctor.app, name="doctor")

_err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, show_path=verbose)],
        force=True,
    )
    # httpx/httpcore are chatty at DEBUG and would log headers.
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


@app.command()
def fetch(
    datetime: str | None = typer.Option(None, "--datetime", help="ISO-8601 instant or range."),
    parameters: str | None = typer.Option(
        None, "--parameters", help="Comma separated parameters, e.g. t_2m:C,precip_1h:mm."
    ),
    location: str | None = typer.Option(None, "--location", help="'lat,lon' location."),
    fmt: str | None = typer.Option(None, "--format", help="Output format requested from the API."),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Also write the sanitized JSON to this file."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr."),
) -> None:
    """Fetch one forecast and print it as pretty JSON."""

    _configure_logging(verbose)

    try:
        settings = AppSettings()
    except ValidationError as exc:
        _err_console.print(f"[red]Invalid configuration:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    request = settings.request_config(
        datetime=datetime,
        parameters=parameters,
        location=location,
        format=fmt,
    )

    def on_stage(stage: PipelineStage) -> None:
        logger.info("stage: %s", stage.value)

    result = run_pipeline(settings=settings, request=request, hooks=PipelineHooks(stage=on_stage))
    if not result.ok:
        logger.debug("stages: %s", " -> ".join(s.value for s in result.history))
        _err_console.print(build_error_panel(result))
        raise typer.Exit(code=1)

    try:
        rendered = render_json(result.document)
        if output is not None:
            export_json(document=result.document, output_path=output)
    except (JsonError, OSError) as exc:
        logger.error("could not write output: %s", exc)
        raise typer.Exit(code=1) from exc

    typer.echo(rendered)
    if output is not None:
        _err_console.print(f"[green]Saved JSON to:[/green] {output}")


def run() -> None:
    app()
