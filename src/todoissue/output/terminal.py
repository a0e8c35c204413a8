"""Rich terminal reporter — marker tables and planned actions."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from todoissue.reconcile.models import ReconciliationPlan
from todoissue.scanner.engine import ExtractionResult
from todoissue.tracker.sync import SyncReport

_KIND_STYLE = {
    "addition": "bold black on green",
    "deletion": "bold white on red",
}

_KIND_ICON = {
    "addition": "+",
    "deletion": "-",
}


def _kind_pill(kind: str) -> Text:
    return Text(f" {_KIND_ICON.get(kind, '?')} {kind.upper()} ", style=_KIND_STYLE.get(kind, ""))


def render(
    result: ExtractionResult,
    *,
    console: Optional[Console] = None,
    show_summary: bool = True,
) -> None:
    """Print extracted markers to the terminal using Rich."""
    console = console or Console(stderr=True)

    if not result.items:
        console.print()
        console.print("[bold green]No TODO markers added or removed.[/bold green]")
        if show_summary:
            _print_summary(console, result)
        return

    console.print()
    table = Table(
        title="TODO Markers",
        show_lines=True,
        title_style="bold",
        border_style="dim",
    )
    table.add_column("Change", justify="center", width=14)
    table.add_column("Title", style="cyan", min_width=20)
    table.add_column("File", style="magenta")
    table.add_column("Line", justify="right", style="green")
    table.add_column("Labels", style="yellow")

    for item in result.items:
        table.add_row(
            _kind_pill(item.change_kind.value),
            Text(item.title),
            Text(item.file),
            str(item.line),
            Text(", ".join(item.labels)),
        )

    console.print(table)

    if show_summary:
        _print_summary(console, result)


def render_plan(plan: ReconciliationPlan, *, console: Optional[Console] = None) -> None:
    console = console or Console(stderr=True)
    console.print()
    if plan.is_empty:
        console.print("[dim]Nothing to create or close.[/dim]")
        return
    for close in plan.closes:
        console.print(f"[red]close[/red]  #{close.issue_id}  {escape(close.title)}")
    for create in plan.creates:
        labels = escape(", ".join(create.item.labels))
        console.print(f"[green]create[/green] {escape(str(create.item))}  [dim]{labels}[/dim]")


def render_report(report: SyncReport, *, console: Optional[Console] = None) -> None:
    console = console or Console(stderr=True)
    console.print()
    console.print(f"[dim]Issues closed:[/dim]  {len(report.closed)}")
    console.print(f"[dim]Issues created:[/dim] {len(report.created)}")


def _print_summary(console: Console, result: ExtractionResult) -> None:
    console.print()
    console.print(f"[dim]Files scanned:[/dim]  {len(result.scanned_files)}")
    console.print(f"[dim]Added:[/dim]          {len(result.additions)}")
    console.print(f"[dim]Removed:[/dim]        {len(result.deletions)}")
    console.print(f"[dim]Skipped:[/dim]        {len(result.skipped_files)}")
    console.print(f"[dim]Duration:[/dim]       {result.duration_ms:.0f}ms")
