"""Rich terminal display for devjunk."""

import time
from typing import Callable

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from devjunk.categories import JunkKind
from devjunk.models import CleanPlan, CleanResult, ScanProgress, ScanResult, format_size

console = Console()

# Longest path shown before truncating from the left
MAX_PATH_WIDTH = 58


def truncate_path(path: str, width: int = MAX_PATH_WIDTH) -> str:
    """Shorten a path from the left, keeping its tail."""
    if len(path) <= width:
        return path
    return "..." + path[-(width - 3) :]


def show_scan_result(result: ScanResult) -> None:
    """Display scan results as a table with totals."""
    if not result.items:
        console.print("[yellow]No junk directories found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Path")
    table.add_column("Type", style="cyan")
    table.add_column("Size", justify="right")
    table.add_column("Files", justify="right")

    for item in result.items:
        table.add_row(
            escape(truncate_path(str(item.path))),
            item.kind.display_name(),
            format_size(item.size_bytes),
            str(item.file_count),
        )

    console.print(table)
    console.print(
        f"[bold]Total: {result.item_count} directories, "
        f"{format_size(result.total_size_bytes)}, "
        f"{result.total_file_count} files[/bold]"
    )


def show_clean_plan(plan: CleanPlan, result: ScanResult) -> None:
    """Display what a clean plan is about to remove."""
    if plan.dry_run:
        console.print("[yellow]DRY RUN - No files will be deleted[/yellow]\n")

    planned = set(plan.paths)
    total = sum(i.size_bytes for i in result.items if i.path in planned)
    console.print(
        f"[bold]This will delete {plan.count} directories ({format_size(total)}).[/bold]"
    )


def show_clean_result(result: CleanResult) -> None:
    """Display result of a clean operation."""
    console.print()

    if result.was_dry_run:
        console.print("[yellow]DRY RUN - No files were deleted[/yellow]")

    if result.deleted:
        action = "Would delete" if result.was_dry_run else "Deleted"
        console.print(
            f"[green]✓[/green] {action}: {result.deleted_count} directories "
            f"({format_size(result.bytes_freed)})"
        )
    elif not result.failed:
        console.print("[dim]Nothing to delete.[/dim]")

    if result.failed:
        console.print(f"[red]✗ Failed to delete {result.failed_count} directories:[/red]")
        for failure in result.failed:
            console.print(f"   {escape(str(failure.path))} - {escape(failure.error)}")


def show_junk_kinds() -> None:
    """List supported junk kinds and their patterns."""
    table = Table(title="Supported Junk Types", show_header=True, header_style="bold")
    table.add_column("ID", style="bold")
    table.add_column("Type")
    table.add_column("Patterns")
    table.add_column("Description", style="dim")

    for kind in JunkKind.all():
        table.add_row(
            kind.value, kind.display_name(), ", ".join(kind.patterns()), kind.description()
        )

    console.print(table)


def show_scanning_progress() -> Progress:
    """Create a spinner for scanning (total work is unknown)."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )


def describe_progress(progress: ScanProgress) -> str:
    return (
        f"Scanning... {progress.directories_scanned} dirs, "
        f"{progress.items_found} found ({format_size(progress.bytes_found)})"
    )


class ProgressThrottle:
    """Drops progress updates arriving within ``interval`` seconds of the last one."""

    def __init__(self, interval: float = 0.05, clock: Callable[[], float] = time.monotonic) -> None:
        self.interval = interval
        self._clock = clock
        self._last = float("-inf")

    def ready(self) -> bool:
        now = self._clock()
        if now - self._last >= self.interval:
            self._last = now
            return True
        return False


def confirm_action(message: str) -> bool:
    """Ask for confirmation."""
    from rich.prompt import Confirm

    return Confirm.ask(message)
