"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings, ClientConfig

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(config: ClientConfig) -> tuple[bool, str]:
    url = f"{config.root_url}/pokemon"
    try:
        async with build_async_client(config) as client:
            response = await client.get(url, params={"limit": 1})
        return response.is_success, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc) or type(exc).__name__


def _check_favorites(path: Path) -> tuple[bool, str]:
    """The favorites file (or its parent directory) must be writable."""

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        probe = path.parent / ".doctor_probe"
        probe.write_text("ok", encoding="utf-8")
        probe.unlink(missing_ok=True)
        return True, str(path)
    except OSError as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    config = settings.client_config()

    table = Table(title="POKEDEX-D2 Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Base URL", "OK", config.root_url)
    table.add_row(
        "Retry policy",
        "OK",
        f"{config.max_retries} attempts, {config.timeout_ms} ms timeout, "
        f"{config.backoff_base_ms} ms backoff base",
    )
    table.add_row(
        "Detail fan-out",
        "OK",
        "unbounded" if config.detail_concurrency is None else f"max {config.detail_concurrency}",
    )

    ok_http, detail_http = asyncio.run(_check_http(config))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    ok_fav, detail_fav = _check_favorites(settings.favorites_path)
    table.add_row("Favorites store", "OK" if ok_fav else "FAIL", detail_fav)

    _console.print(table)

    if not ok_http:
        _console.print(
            "\n[yellow]Note:[/yellow] check POKEDEX_D2_API_BASE_URL or your network connection."
        )
