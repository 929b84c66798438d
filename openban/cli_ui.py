"""Shared CLI UI primitives for Open Ban.

Wraps Rich to provide a consistent visual identity.
CLI code should import from here, never from rich directly.
"""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.theme import Theme

# ---------------------------------------------------------------------------
# Theme & singletons
# ---------------------------------------------------------------------------

THEME = Theme(
    {
        "info": "dim",
        "warning": "yellow",
        "error": "bold red",
        "success": "green",
        "accent": "cyan",
        "heading": "bold",
        "key": "bold",
        "dim": "dim",
    }
)

console = Console(theme=THEME, highlight=False)

# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------

_MAX_WIDTH = 80


def _panel_width() -> int:
    return min(console.width, _MAX_WIDTH)


def success(msg: str) -> None:
    """Green checkmark + message."""
    console.print(f"  [green]✓[/] {msg}")


def error(msg: str, hint: Optional[str] = None) -> None:
    """Red X + message, optional dim hint."""
    console.print(f"  [red]✗[/] {msg}", style="bold red")
    if hint:
        console.print(f"    [dim]{hint}[/]")


def warning(msg: str) -> None:
    """Yellow warning prefix + message."""
    console.print(f"  [yellow]![/] {msg}")


def dim(msg: str) -> None:
    """Print dim secondary text."""
    console.print(f"  [dim]{msg}[/]")


def config_panel(title: str, items: dict[str, str]) -> None:
    """Panel showing key-value summary."""
    body = "\n".join(f"[bold]{k}:[/] {v}" for k, v in items.items())

    console.print()
    console.print(
        Panel(
            body,
            title=title,
            title_align="left",
            border_style="dim",
            width=_panel_width(),
            padding=(0, 1),
        )
    )


def make_table(title: str, columns: list[str], rows: list[list[str]]) -> None:
    """Build and print a Rich table."""
    table = Table(
        title=title,
        title_style="bold",
        show_header=True,
        header_style="bold dim",
        border_style="dim",
        width=_panel_width(),
        show_lines=False,
        padding=(0, 1),
    )
    for col in columns:
        table.add_column(col)
    for row in rows:
        table.add_row(*row)
    console.print()
    console.print(table)
