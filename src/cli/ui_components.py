"""Componentes de UI para CLI (Rich).

Keeps rendering details out of the command functions so tables and panels
can be reused across commands.
"""

from __future__ import annotations

from typing import Container, Iterable

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.errors import ApiError
from core.domain.models import Record
from core.formatting import format_id, format_name
from core.services.derivation import StageCounts


def build_records_table(
    records: Iterable[Record],
    favorite_ids: Container[int] = (),
    *,
    title: str = "Records",
) -> Table:
    table = Table(title=title)
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("Name", style="cyan")
    table.add_column("Tags", style="magenta")
    table.add_column("Height (m)", justify="right")
    table.add_column("Weight (kg)", justify="right")
    table.add_column("★", style="yellow", justify="center")

    for record in records:
        table.add_row(
            format_id(record.id),
            format_name(record.name),
            ", ".join(record.tags),
            f"{record.height_m:g}",
            f"{record.weight_kg:g}",
            "★" if record.id in favorite_ids else "",
        )
    return table


def build_counts_text(counts: StageCounts, tags: list[str]) -> Text:
    text = Text()
    text.append(
        f"{counts.total} loaded → {counts.after_search} after search → "
        f"{counts.after_tag} after tag → {counts.after_favorites} shown\n",
        style="dim",
    )
    if tags:
        text.append("Tags: ", style="bold")
        text.append(", ".join(tags))
    return text


def build_record_panel(record: Record, *, favorite: bool = False) -> Panel:
    """Detail view: summary, stats and abilities of one record."""

    header = Text()
    header.append(f"#{format_id(record.id)} {format_name(record.name)}", style="bold cyan")
    if favorite:
        header.append("  ★", style="yellow")
    header.append(f"\nTags: {', '.join(record.tags)}")
    header.append(f"\nHeight: {record.height_m:g} m   Weight: {record.weight_kg:g} kg")
    if record.base_experience is not None:
        header.append(f"\nBase experience: {record.base_experience}")

    stats = Table(title="Stats", show_header=True, expand=False)
    stats.add_column("Stat", style="green")
    stats.add_column("Base", justify="right")
    stats.add_column("Effort", justify="right", style="dim")
    for entry in record.stats:
        stats.add_row(format_name(entry.stat.name), str(entry.base_stat), str(entry.effort))

    abilities = Text("Abilities: ", style="bold")
    abilities.append(
        ", ".join(
            format_name(a.ability.name) + (" (hidden)" if a.is_hidden else "")
            for a in sorted(record.abilities, key=lambda a: a.slot)
        )
        or "—"
    )

    parts: list[object] = [header, stats, abilities]
    if record.image_url:
        parts.append(Text(f"Image: {record.image_url}", style="dim"))
    return Panel(Group(*parts), border_style="cyan")


def build_error_panel(error: ApiError) -> Panel:
    body = Text(error.message, style="bold")
    if error.status:
        body.append(f"\nStatus: {error.status}", style="dim")
    if error.detail:
        body.append(f"\nDetail: {error.detail}", style="dim")
    return Panel(body, title=Text("Error", style="bold red"), border_style="red")
