"""Rich rendering utilities for unit listings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rich.console import Console

    from modorder._unit import Unit


def _format_symbols(symbols: Sequence[str]) -> str:
    if not symbols:
        return "[dim]-[/dim]"
    return escape(", ".join(symbols))


def render_unit_table(units: Sequence[Unit], console: Console) -> None:
    """Render units, in the given order, as a Rich table.

    Args:
        units: Units to render.
        console: Rich Console to output to.

    """
    if not units:
        console.print("[dim]No inputs[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Input", style="bold")
    table.add_column("Provides", style="green")
    table.add_column("Requires", style="yellow")

    for position, unit in enumerate(units, start=1):
        table.add_row(
            str(position),
            escape(unit.name),
            _format_symbols(unit.provides),
            _format_symbols(unit.requires),
        )

    console.print(table)
    console.print(f"\n[dim]Total: {len(units)} inputs[/dim]")
