"""CLI interface for devjunk."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from devjunk import __version__
from devjunk.categories import JunkKind, find_kinds
from devjunk.cleaner import build_clean_plan, execute_clean
from devjunk.display import (
    ProgressThrottle,
    confirm_action,
    console,
    describe_progress,
    show_clean_plan,
    show_clean_result,
    show_junk_kinds,
    show_scan_result,
    show_scanning_progress,
)
from devjunk.errors import DevJunkError, MultipleErrors
from devjunk.export import CleanResultRecord, JunkKindRecord, ScanResultRecord, to_json
from devjunk.models import ScanConfig, ScanProgress, ScanResult
from devjunk.scanner import scan, scan_with_progress

# Create Typer app
app = typer.Typer(
    name="devjunk",
    help="Find and clean development junk (node_modules, target, .venv, caches)",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"devjunk version {__version__}")
        raise typer.Exit()


def setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: int = typer.Option(
        0, "--verbose", "-V", count=True, help="Increase verbosity (-V info, -VV debug)"
    ),
) -> None:
    """devjunk - scan and clean development build/cache directories."""
    setup_logging(verbose)


def build_scan_config(
    paths: Optional[list[Path]],
    max_depth: Optional[int],
    include_hidden: bool,
    excludes: Optional[list[Path]],
    kinds: Optional[list[str]],
) -> ScanConfig:
    """Map command-line options onto a ScanConfig."""
    roots = [p.expanduser().absolute() for p in (paths or [Path(".")])]
    config = ScanConfig.new(roots).with_hidden(include_hidden)

    if max_depth is not None:
        config = config.with_max_depth(max_depth)

    if excludes:
        config = config.with_excludes([p.expanduser().absolute() for p in excludes])

    if kinds:
        selected = find_kinds(kinds)
        if not selected:
            console.print(f"[red]Unknown junk type: {', '.join(kinds)}[/red]")
            console.print("Run [bold]devjunk types[/bold] to list supported types")
            raise typer.Exit(1)
        config = config.with_patterns(selected)

    return config


def run_scan(config: ScanConfig, quiet: bool) -> ScanResult:
    """Scan with a spinner (unless quiet), turning engine errors into exit code 1."""
    try:
        if quiet:
            return scan(config)

        throttle = ProgressThrottle()
        with show_scanning_progress() as progress:
            task = progress.add_task("Scanning...", total=None)

            def update_progress(update: ScanProgress) -> None:
                if throttle.ready():
                    progress.update(task, description=describe_progress(update))

            return scan_with_progress(config, update_progress)
    except DevJunkError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)


PathsArgument = typer.Argument(None, help="Paths to scan (defaults to current directory)")
MaxDepthOption = typer.Option(None, "--max-depth", "-d", min=0, help="Maximum depth to scan")
ExcludeOption = typer.Option(
    None, "--exclude", "-e", help="Path to skip, with everything below it (repeatable)"
)
KindOption = typer.Option(None, "--kind", "-k", help="Only look for this junk type (repeatable)")


@app.command(name="scan")
def scan_command(
    paths: Optional[list[Path]] = PathsArgument,
    max_depth: Optional[int] = MaxDepthOption,
    include_hidden: bool = typer.Option(
        False, "--include-hidden", help="Descend into hidden directories"
    ),
    exclude: Optional[list[Path]] = ExcludeOption,
    kind: Optional[list[str]] = KindOption,
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
) -> None:
    """Scan directories for development junk."""
    config = build_scan_config(paths, max_depth, include_hidden, exclude, kind)
    result = run_scan(config, quiet=json_output)

    if json_output:
        typer.echo(to_json(ScanResultRecord.from_result(result)))
    else:
        show_scan_result(result)


@app.command()
def clean(
    paths: Optional[list[Path]] = PathsArgument,
    dry_run: bool = typer.Option(False, "--dry-run", help="Simulate without deleting"),
    max_depth: Optional[int] = MaxDepthOption,
    exclude: Optional[list[Path]] = ExcludeOption,
    kind: Optional[list[str]] = KindOption,
    yes: bool = typer.Option(False, "-y", "--yes", help="Skip confirmation prompt"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
) -> None:
    """Scan, then delete every junk directory found."""
    config = build_scan_config(paths, max_depth, False, exclude, kind)
    result = run_scan(config, quiet=json_output)

    if not result.items and not json_output:
        console.print("[yellow]No junk directories found.[/yellow]")
        return

    plan = build_clean_plan(result, result.paths, dry_run)

    if not json_output:
        show_scan_result(result)
        console.print()
        show_clean_plan(plan, result)

    if plan.paths and not yes and not dry_run:
        if json_output:
            console.print("[red]Error: --json requires --yes or --dry-run[/red]")
            raise typer.Exit(1)
        if not confirm_action("Continue?"):
            console.print("[yellow]Aborted[/yellow]")
            raise typer.Exit(0)

    clean_result = execute_clean(plan)

    if json_output:
        typer.echo(to_json(CleanResultRecord.from_result(clean_result)))
    else:
        show_clean_result(clean_result)

    if not clean_result.is_success():
        if clean_result.failed_count > 1 and not json_output:
            console.print(f"[red]Error: {MultipleErrors(clean_result.failed_count)}[/red]")
        raise typer.Exit(1)


@app.command(name="types")
def list_types(
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
) -> None:
    """List supported junk types."""
    if json_output:
        typer.echo(to_json([JunkKindRecord.from_kind(k) for k in JunkKind.all()]))
    else:
        show_junk_kinds()


if __name__ == "__main__":
    app()
