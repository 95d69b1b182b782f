"""CLI principal (Typer).

Commands are thin: they build a `CatalogClient` from `AppSettings`, call the
core and render with Rich. `ApiError` is printed as a panel and turned into
exit code 1.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from adapters.favorites_store import FavoritesStore
from adapters.json_exporter import export_records_json
from adapters.pokeapi_client import CatalogClient
from cli import doctor
from cli.ui_components import (
    build_counts_text,
    build_error_panel,
    build_record_panel,
    build_records_table,
)
from core.config import AppSettings
from core.domain.errors import ApiError
from core.domain.language import Language
from core.domain.models import FilterCriteria
from core.logging_utils import configure_logging
from core.services.catalog_pipeline import CatalogRequest, PipelineHooks, load_catalog

app = typer.Typer(no_args_is_help=True, help="Browse the PokéAPI catalog from the terminal.")
favorites_app = typer.Typer(no_args_is_help=True, help="Manage favorite records.")
app.add_typer(favorites_app, name="favorites")
app.add_typer(doctor.app, name="doctor")

_console = Console()


@dataclass
class CliState:
    settings: AppSettings
    language: Language

    def client(self) -> CatalogClient:
        return CatalogClient(self.settings.client_config(), language=self.language)

    def favorites(self) -> FavoritesStore:
        return FavoritesStore(self.settings.favorites_path)


def _state(ctx: typer.Context) -> CliState:
    state = ctx.obj
    if not isinstance(state, CliState):
        settings = AppSettings()
        state = CliState(settings=settings, language=settings.default_language)
        ctx.obj = state
    return state


def _fail(error: ApiError) -> None:
    _console.print(build_error_panel(error))
    raise typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    spanish: bool = typer.Option(False, "--spanish", help="Mensajes de error en español."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING..."),
) -> None:
    settings = AppSettings()
    configure_logging(log_level or settings.log_level, settings.log_format)
    language = Language.SPANISH if spanish else settings.default_language
    ctx.obj = CliState(settings=settings, language=language)


@app.command("list")
def list_records(
    ctx: typer.Context,
    count: Optional[int] = typer.Option(None, "--count", "-n", min=1, help="Records to load."),
    search: str = typer.Option("", "--search", "-s", help="Substring of the name."),
    tag: Optional[str] = typer.Option(None, "--tag", "-t", help="Only records with this tag."),
    favorites_only: bool = typer.Option(False, "--favorites-only", "-f"),
    case_sensitive: bool = typer.Option(False, "--case-sensitive"),
    settled: bool = typer.Option(
        False,
        "--settled",
        help="Keep the records that loaded when some detail requests fail.",
    ),
    json_path: Optional[Path] = typer.Option(None, "--json", help="Export the filtered records."),
) -> None:
    """Load the first N records and show the filtered view."""

    state = _state(ctx)
    favorite_ids = state.favorites().load()
    request = CatalogRequest(
        count=count or state.settings.default_count,
        criteria=FilterCriteria(
            search=search,
            tag=tag,
            favorites_only=favorites_only,
            case_sensitive=case_sensitive,
        ),
        settled=settled,
    )
    hooks = PipelineHooks(warning=lambda msg: _console.print(f"[yellow]Warning:[/yellow] {msg}"))

    async def _run():
        async with state.client() as client:
            return await load_catalog(
                source=client,
                request=request,
                favorite_ids=favorite_ids,
                hooks=hooks,
            )

    try:
        result = asyncio.run(_run())
    except ApiError as exc:
        _fail(exc)
        return

    _console.print(build_records_table(result.filtered, favorite_ids))
    _console.print(build_counts_text(result.counts, result.tags))

    if json_path is not None:
        out = export_records_json(records=result.filtered, output_path=json_path)
        _console.print(f"[green]Exported:[/green] {out}")


@app.command()
def show(
    ctx: typer.Context,
    identifier: str = typer.Argument(..., help="Record id or name."),
) -> None:
    """Detail view of one record."""

    state = _state(ctx)
    key: int | str = int(identifier) if identifier.isdigit() else identifier

    async def _run():
        async with state.client() as client:
            return await client.get_details(key)

    try:
        record = asyncio.run(_run())
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    except ApiError as exc:
        _fail(exc)
        return

    favorite = state.favorites().contains(record.id)
    _console.print(build_record_panel(record, favorite=favorite))


@app.command()
def tags(ctx: typer.Context) -> None:
    """List every tag known to the remote catalog."""

    state = _state(ctx)

    async def _run():
        async with state.client() as client:
            return await client.get_all_tags()

    try:
        names = asyncio.run(_run())
    except ApiError as exc:
        _fail(exc)
        return

    for name in sorted(names):
        _console.print(name)


@favorites_app.command("list")
def favorites_list(ctx: typer.Context) -> None:
    store = _state(ctx).favorites()
    ids = store.load_ids()
    if not ids:
        _console.print("[dim]No favorites yet.[/dim]")
        return
    for record_id in ids:
        _console.print(str(record_id))


@favorites_app.command("add")
def favorites_add(ctx: typer.Context, record_id: int = typer.Argument(..., min=1)) -> None:
    added = _state(ctx).favorites().add(record_id)
    _console.print(f"Added {record_id}" if added else f"{record_id} is already a favorite")


@favorites_app.command("remove")
def favorites_remove(ctx: typer.Context, record_id: int = typer.Argument(..., min=1)) -> None:
    removed = _state(ctx).favorites().remove(record_id)
    _console.print(f"Removed {record_id}" if removed else f"{record_id} was not a favorite")


@favorites_app.command("toggle")
def favorites_toggle(ctx: typer.Context, record_id: int = typer.Argument(..., min=1)) -> None:
    now_favorite = _state(ctx).favorites().toggle(record_id)
    _console.print(f"{record_id} is {'now' if now_favorite else 'no longer'} a favorite")


@favorites_app.command("clear")
def favorites_clear(ctx: typer.Context) -> None:
    _state(ctx).favorites().clear()
    _console.print("Favorites cleared")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
