"""
Console report generator for cbac.

Prints a resolved matrix as a Rich table: content items down the side,
access kinds across the top, and an icon per cell.
"""

from typing import Any, Iterable

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text


# Cell icons
ICON_ALLOWED = "[green]✓[/green]"
ICON_DENIED = "[red]✗[/red]"


def generate_console_report(
    matrix: dict[Any, dict[Any, bool]],
    subject: Any = None,
    accesses: Iterable[Any] | None = None,
    console: Console | None = None,
    title: str | None = None,
) -> None:
    """
    Print a resolved matrix.

    Args:
        matrix: Resolved matrix (content -> access -> allowed)
        subject: Subject the matrix was resolved for (shown in the header)
        accesses: Column order (defaults to the keys of the first row)
        console: Rich Console instance (creates one if not provided)
        title: Optional configuration name shown in the header
    """
    if console is None:
        console = Console()

    columns = list(accesses) if accesses is not None else _columns(matrix)

    _print_header(console, subject, title)
    console.print()

    table = Table(show_header=True, header_style="bold")
    table.add_column("Content", style="cyan")
    for access in columns:
        table.add_column(escape(str(access)), justify="center")

    for content, policy in matrix.items():
        cells = [ICON_ALLOWED if policy.get(access) else ICON_DENIED for access in columns]
        table.add_row(escape(str(content)), *cells)

    console.print(table)
    console.print()

    allowed, total = count_allowed(matrix)
    console.print(f"[dim]Contents: {len(matrix)} | Allowed: {allowed} | Denied: {total - allowed}[/dim]")


def count_allowed(matrix: dict[Any, dict[Any, bool]]) -> tuple[int, int]:
    """Return (allowed cells, total cells)."""
    values = [value for policy in matrix.values() for value in policy.values()]
    return sum(values), len(values)


def _columns(matrix: dict[Any, dict[Any, bool]]) -> list[Any]:
    for policy in matrix.values():
        return list(policy)
    return []


def _print_header(console: Console, subject: Any, title: str | None) -> None:
    """Print the report header."""
    header = Text()
    header.append(" Access matrix", style="bold")
    if title:
        header.append(" │ ", style="dim")
        header.append(title, style="bold magenta")
    if subject is not None:
        header.append(" │ ", style="dim")
        header.append(str(subject), style="bold cyan")

    console.print(Panel(header, expand=False))
