"""Clean planning and execution for devjunk."""

import logging
import shutil
from pathlib import Path
from typing import Callable, Iterable

from devjunk.errors import DeletionError
from devjunk.models import CleanFailure, CleanPlan, CleanResult, ScanResult
from devjunk.recursive_scanner import is_under
from devjunk.scanner import get_directory_size

log = logging.getLogger(__name__)


def build_clean_plan(
    result: ScanResult,
    selection: Iterable[Path],
    dry_run: bool = False,
) -> CleanPlan:
    """
    Build a clean plan from scan results and selected paths.

    Only paths present in the scan result can be planned. Selected paths
    that are not in the result are ignored.

    Args:
        result: Scan result with all discovered items
        selection: Paths chosen for deletion
        dry_run: Whether the plan only simulates deletion

    Returns:
        CleanPlan with the selected paths in scan-result order
    """
    selected = {Path(p) for p in selection}
    paths = [item.path for item in result.items if item.path in selected]

    ignored = len(selected) - len(set(paths))
    if ignored:
        log.debug("Ignoring %d selected path(s) not in scan result", ignored)

    return CleanPlan(paths=paths, dry_run=dry_run)


def delete_directory(path: Path) -> int:
    """
    Delete a directory and everything in it.

    Args:
        path: Directory to delete

    Returns:
        Bytes freed (measured before deletion)

    Raises:
        DeletionError: The tree could not be removed
    """
    size = get_directory_size(path)
    try:
        shutil.rmtree(path)
    except OSError as e:
        raise DeletionError(path, e) from e
    return size


def execute_clean(
    plan: CleanPlan,
    progress_callback: Callable[[str, int], None] | None = None,
) -> CleanResult:
    """
    Execute a clean plan.

    Paths are handled in plan order. A path inside one already deleted in
    this run is skipped. In a dry run nothing is touched and existing paths
    are reported as deleted. In a real run paths that no longer exist are
    skipped, and a failed deletion is recorded without stopping the batch.

    Args:
        plan: Paths to delete and the dry-run flag
        progress_callback: Optional callback(path, bytes_freed) per deletion

    Returns:
        CleanResult with deleted paths, failures and bytes freed
    """
    result = CleanResult(was_dry_run=plan.dry_run)
    deleted: list[Path] = []

    for path in plan.paths:
        path = Path(path)

        if is_under(path, deleted):
            log.debug("Skipping %s: covered by a deleted parent", path)
            continue

        if not path.exists():
            log.debug("Skipping %s: no longer exists", path)
            continue

        if plan.dry_run:
            size = get_directory_size(path)
        else:
            try:
                size = delete_directory(path)
            except DeletionError as e:
                log.warning("%s", e)
                result.failed.append(CleanFailure(path=path, error=str(e)))
                continue

        result.bytes_freed += size
        result.deleted.append(path)
        deleted.append(path)

        if progress_callback:
            progress_callback(str(path), size)

    log.info(
        "%s %d director%s (%d bytes), %d failed",
        "Would delete" if plan.dry_run else "Deleted",
        result.deleted_count,
        "y" if result.deleted_count == 1 else "ies",
        result.bytes_freed,
        result.failed_count,
    )
    return result
