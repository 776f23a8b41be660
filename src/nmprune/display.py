"""Rich terminal display for nmprune."""

import os

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from nmprune.models import DeletionSummary, ScanReport, format_bytes

console = Console()

SELECT_ALL_INPUTS = ("all", "a", "*", "0")


def pluralize_directory(count: int) -> str:
    """'directory' or 'directories'."""
    return "directory" if count == 1 else "directories"


def project_name(path: str) -> str:
    """Name of the project that owns a node_modules directory."""
    return os.path.basename(os.path.dirname(path.rstrip(os.sep))) or path


def show_scan_header(root: str) -> None:
    """Announce the scan root."""
    console.print(f"\n[cyan]Scanning: {escape(root)}[/cyan]\n")


def show_spinner() -> Progress:
    """Create a transient spinner with a single status line."""
    return Progress(
        SpinnerColumn(),
        TextColumn("{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )


def show_scan_failed(message: str) -> None:
    """Report a scan that could not start."""
    console.print("[red]✖[/red] Failed to scan directory")
    console.print(f"[red]{escape(message)}[/red]")


def show_nothing_found() -> None:
    console.print("[green]✔[/green] Scan complete")
    console.print("[yellow]\nNo node_modules directories found.\n[/yellow]")


def show_scan_report(report: ScanReport) -> None:
    """Display found directories as a numbered table, largest first."""
    console.print(
        f"[green]✔[/green] Found {report.count} node_modules "
        f"{pluralize_directory(report.count)} ({format_bytes(report.total_bytes)} total)\n"
    )

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Path")
    table.add_column("Size", justify="right")

    for i, entry in enumerate(report.entries, 1):
        table.add_row(str(i), escape(entry.path), f"[dim]{entry.size_human}[/dim]")

    console.print(table)


def parse_selection(text: str, count: int) -> list[int] | None:
    """
    Parse a selection of 1-based item numbers.

    Accepts comma separated numbers and ranges ("1,3-5"), or one of
    SELECT_ALL_INPUTS for everything. Empty input selects nothing.

    Returns:
        Sorted 0-based indices, or None if the input is invalid
    """
    stripped = text.strip().lower()
    if not stripped:
        return []
    if stripped in SELECT_ALL_INPUTS:
        return list(range(count))

    selected: set[int] = set()
    for part in stripped.split(","):
        part = part.strip()
        if not part:
            continue

        if "-" in part:
            start_str, _, end_str = part.partition("-")
            if not (start_str.strip().isdecimal() and end_str.strip().isdecimal()):
                return None
            start, end = int(start_str), int(end_str)
            if start > end:
                start, end = end, start
        elif part.isdecimal():
            start = end = int(part)
        else:
            return None

        if start < 1 or end > count:
            return None
        selected.update(range(start - 1, end))

    return sorted(selected)


def prompt_selection(report: ScanReport) -> list[str]:
    """Ask which directories to delete. Returns paths in display order."""
    console.print(
        f"\n[bold]Select directories to delete[/bold] "
        f"[dim](numbers or ranges like 1,3-5; 'all' for all "
        f"{format_bytes(report.total_bytes)}; Enter for none)[/dim]"
    )

    while True:
        user_input = console.input("[bold cyan]Select:[/bold cyan] ")
        indices = parse_selection(user_input, report.count)
        if indices is not None:
            return [report.entries[i].path for i in indices]
        console.print(f"[yellow]Please enter numbers between 1 and {report.count}, or 'all'[/yellow]")


def confirm_action(message: str) -> bool:
    """Ask for confirmation, defaulting to no."""
    from rich.prompt import Confirm

    return Confirm.ask(message, default=False, console=console)


def show_nothing_selected() -> None:
    console.print("[yellow]\nNo directories selected. Exiting.\n[/yellow]")


def show_cancelled() -> None:
    console.print("[yellow]\nDeletion cancelled.\n[/yellow]")


def show_deletion_summary(summary: DeletionSummary, freed_bytes: int) -> None:
    """Display the result of a bulk deletion."""
    noun = pluralize_directory(summary.deleted)

    if summary.all_succeeded:
        console.print(
            f"[green]✔ Deleted {summary.deleted} {noun}, freed {format_bytes(freed_bytes)}[/green]"
        )
    else:
        console.print(
            f"[yellow]⚠ Deleted {summary.deleted} {noun}, {summary.failed} failed[/yellow]"
        )
        console.print("[red]\nFailed to delete:[/red]")
        for error in summary.errors:
            console.print(f"[red]  {escape(error.path)}: {escape(error.error)}[/red]")

    console.print()
