"""CLI interface for nmprune."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from nmprune import __version__
from nmprune.cleaner import delete_all
from nmprune.config import ENV_PREFIX, Settings
from nmprune.display import (
    confirm_action,
    console,
    pluralize_directory,
    project_name,
    prompt_selection,
    show_cancelled,
    show_deletion_summary,
    show_nothing_found,
    show_nothing_selected,
    show_scan_failed,
    show_scan_header,
    show_scan_report,
    show_spinner,
)
from nmprune.finder import RootInaccessibleError
from nmprune.log import configure_logging
from nmprune.models import format_bytes
from nmprune.sizer import scan

log = logging.getLogger(__name__)

app = typer.Typer(
    name="nmprune",
    help="Find node_modules directories, see how big they are, and delete the ones you pick.",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"nmprune version {__version__}")
        raise typer.Exit()


@app.command()
def main(
    root: Path = typer.Argument(
        Path("."),
        help="Directory to search (defaults to the current directory).",
        show_default=False,
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
    select_all: bool = typer.Option(
        False, "--all", "-a", help="Select every directory found instead of prompting."
    ),
    concurrency: Optional[int] = typer.Option(
        None,
        "--concurrency",
        "-j",
        min=1,
        envvar=f"{ENV_PREFIX}CONCURRENCY",
        help="Maximum filesystem operations in flight while scanning.",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", envvar=f"{ENV_PREFIX}VERBOSE", help="Show debug logging."
    ),
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Scan ROOT for node_modules directories and delete the selected ones."""
    settings = Settings.from_options(concurrency=concurrency, verbose=verbose)
    configure_logging(settings.verbose)

    target = root.expanduser().resolve()
    show_scan_header(str(target))

    try:
        with show_spinner() as spinner:
            spinner.add_task("Scanning for node_modules...", total=None)
            report = scan(target, max_concurrency=settings.max_concurrency)
    except RootInaccessibleError as e:
        log.debug("Scan of %s failed", target, exc_info=True)
        show_scan_failed(str(e))
        raise typer.Exit(1)

    if report.is_empty:
        show_nothing_found()
        raise typer.Exit(0)

    show_scan_report(report)

    selected = report.paths if select_all else prompt_selection(report)
    if not selected:
        show_nothing_selected()
        raise typer.Exit(0)

    selected_bytes = report.size_of_paths(selected)

    if not yes:
        count = len(selected)
        question = (
            f"Are you sure you want to delete {count} {pluralize_directory(count)} "
            f"({format_bytes(selected_bytes)})?"
        )
        if not confirm_action(question):
            show_cancelled()
            raise typer.Exit(0)

    with show_spinner() as spinner:
        task = spinner.add_task("Deleting directories...", total=len(selected))

        def update_progress(current: int, total: int, path: str) -> None:
            spinner.update(
                task,
                completed=current,
                description=f"Deleting {current}/{total}: {escape(project_name(path))}",
            )

        summary = delete_all(selected, on_progress=update_progress)

    show_deletion_summary(summary, selected_bytes)


if __name__ == "__main__":
    app()
