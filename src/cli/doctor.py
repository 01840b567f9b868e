"""Doctor command for environment diagnostics."""

from __future__ import annotations

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_client
from core.config import RECOMMENDED_VERSION_DATE, AppSettings, get_user_env_file

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_http(settings: AppSettings) -> tuple[bool, str]:
    try:
        with build_client(settings) as client:
            response = client.get("/")
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc)


@app.command()
def run(
    offline: bool = typer.Option(False, "--offline", help="Skip the connectivity check."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="Visual Recognition Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Service URL", "OK", settings.url)
    if settings.version_date:
        table.add_row("version_date", "OK", settings.version_date)
    else:
        table.add_row("version_date", "FAIL", f"Set VISUAL_RECOGNITION_VERSION_DATE (e.g. {RECOMMENDED_VERSION_DATE})")
    if settings.api_key:
        table.add_row("API key", "OK", "Set")
    else:
        table.add_row("API key", "MISSING", f"Set VISUAL_RECOGNITION_API_KEY or add it to {get_user_env_file()}")

    ok_http = True
    if not offline:
        ok_http, detail_http = _check_http(settings)
        table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not settings.version_date or not ok_http:
        raise typer.Exit(code=1)
