"""Doctor command for environment diagnostics."""

from __future__ import annotations

import httpx
import typer
from rich.console import Console

from adapters.http_client import build_client
from cli.ui_components import build_checks_table, print_banner
from core.config import AppSettings, get_user_env_file, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and credential setup.")

_console = Console(stderr=True)


def _check_http(settings: AppSettings) -> tuple[bool, str]:
    """Unauthenticated HEAD against the API host; any HTTP answer counts as reachable."""

    try:
        with build_client(settings) as client:
            response = client.head(settings.base_url)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, f"{type(exc).__name__}: {exc}"


@app.command()
def run(
    offline: bool = typer.Option(False, "--offline", help="Skip the connectivity check."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    print_banner(_console)

    table = build_checks_table("meteo-cli Doctor")

    # Credentials (values are never shown)
    table.add_row(
        "Username",
        "OK" if settings.username else "MISSING",
        "METEOMATICS_USERNAME",
    )
    table.add_row(
        "Password",
        "OK" if settings.password else "MISSING",
        "METEOMATICS_PASSWORD",
    )
    table.add_row("Base URL", "OK", settings.base_url)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("Response ceiling", "OK", f"{settings.max_response_size} bytes")

    ok_http = True
    if offline:
        table.add_row("HTTPS connectivity", "SKIPPED", "--offline")
    else:
        ok_http, detail_http = _check_http(settings)
        table.add_row("HTTPS connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not (settings.username and settings.password):
        _console.print(
            "\n[yellow]Note:[/yellow] run `meteo-cli doctor setup-credentials` "
            "or export METEOMATICS_USERNAME / METEOMATICS_PASSWORD."
        )
        raise typer.Exit(code=1)
    if not ok_http:
        raise typer.Exit(code=1)


@app.command(name="setup-credentials")
def setup_credentials() -> None:
    """Interactive credential setup (stores them in the user config .env)."""

    username = typer.prompt("Meteomatics username").strip()
    password = typer.prompt("Meteomatics password", hide_input=True).strip()

    if not username or not password:
        raise typer.BadParameter("username and password are required")

    env_path = write_user_env_vars(
        {
            "METEOMATICS_USERNAME": username,
            "METEOMATICS_PASSWORD": password,
        },
        env_path=get_user_env_file(),
    )

    _console.print(f"[green]Saved credentials to:[/green] {env_path}")
