"""Directory sizing and scan orchestration for devjunk."""

import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Iterable

from devjunk.errors import DevJunkIOError, MetadataError, NotADirectory, PathNotFound
from devjunk.models import ScanConfig, ScanItem, ScanProgress, ScanResult

log = logging.getLogger(__name__)

ProgressCallback = Callable[[ScanProgress], None]

# Below this many visited entries a directory is summed on the calling thread
PARALLEL_THRESHOLD = 1000

# Files per task when summing in parallel
CHUNK_SIZE = 256

# Report progress every N directories visited (matches are always reported)
PROGRESS_INTERVAL = 64


# =============================================================================
# Size Aggregation
# =============================================================================


def _file_size(path: str) -> int:
    """Size of a single file, without following symlinks."""
    try:
        return os.lstat(path).st_size
    except OSError as e:
        raise MetadataError(Path(path), e) from e


def _collect_files(path: Path) -> tuple[int, list[str]]:
    """
    Walk a directory tree without following symlinks.

    Returns:
        Tuple of (entries_visited, regular_file_paths). The root itself
        counts as one visited entry.
    """
    visited = 1
    files: list[str] = []
    stack = [os.fspath(path)]

    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as entries:
                for entry in entries:
                    visited += 1
                    try:
                        if entry.is_dir(follow_symlinks=False):
                            stack.append(entry.path)
                        elif entry.is_file(follow_symlinks=False):
                            files.append(entry.path)
                    except OSError:
                        continue
        except OSError as e:
            log.debug("Skipping unreadable directory %s: %s", current, e)

    return visited, files


def _sum_files(paths: Iterable[str]) -> tuple[int, int]:
    """Sum sizes of files; unreadable files count for nothing."""
    total_size = 0
    file_count = 0
    for p in paths:
        try:
            total_size += _file_size(p)
        except MetadataError as e:
            log.debug("%s", e)
            continue
        file_count += 1
    return total_size, file_count


def _chunks(items: list[str], size: int) -> list[list[str]]:
    return [items[i : i + size] for i in range(0, len(items), size)]


def get_directory_stats(path: Path) -> tuple[int, int]:
    """
    Calculate total size and file count of a directory.

    Small trees are summed sequentially. Trees with PARALLEL_THRESHOLD or
    more entries have their file metadata read on a thread pool, one chunk
    per task, and the partial sums are reduced here.

    Args:
        path: Directory to measure

    Returns:
        Tuple of (total_bytes, file_count)
    """
    visited, files = _collect_files(path)

    if visited < PARALLEL_THRESHOLD:
        return _sum_files(files)

    with ThreadPoolExecutor() as executor:
        partials = list(executor.map(_sum_files, _chunks(files, CHUNK_SIZE)))

    return sum(p[0] for p in partials), sum(p[1] for p in partials)


def get_directory_size(path: Path) -> int:
    """Total size of a directory in bytes."""
    return get_directory_stats(path)[0]


# =============================================================================
# Scan Orchestration
# =============================================================================


def validate_roots(roots: Iterable[Path]) -> None:
    """
    Check every root before any scanning starts.

    Raises:
        PathNotFound: A root does not exist
        NotADirectory: A root is not a directory
    """
    for root in roots:
        root = Path(root)
        if not root.exists():
            raise PathNotFound(root)
        if not root.is_dir():
            raise NotADirectory(root)


class _ProgressReporter:
    """Aggregates counts from all root workers into ScanProgress snapshots."""

    def __init__(self, callback: ProgressCallback) -> None:
        self._callback = callback
        self._lock = threading.Lock()
        self._directories = 0
        self._items = 0
        self._bytes = 0

    def directory(self, path: Path) -> None:
        with self._lock:
            self._directories += 1
            if self._directories % PROGRESS_INTERVAL == 0:
                self._emit(path)

    def item(self, item: ScanItem) -> None:
        with self._lock:
            self._items += 1
            self._bytes += item.size_bytes
            self._emit(item.path)

    def finish(self, path: str = "") -> None:
        with self._lock:
            self._emit(path)

    def _emit(self, path) -> None:
        self._callback(
            ScanProgress(
                current_path=str(path),
                directories_scanned=self._directories,
                items_found=self._items,
                bytes_found=self._bytes,
            )
        )


def scan(config: ScanConfig) -> ScanResult:
    """
    Scan directories according to the given configuration.

    Args:
        config: Roots, kinds and traversal options

    Returns:
        ScanResult with every junk directory found, largest first

    Raises:
        PathNotFound, NotADirectory: A root failed validation (nothing is scanned)
    """
    return scan_with_progress(config, None)


def scan_with_progress(
    config: ScanConfig,
    progress_callback: ProgressCallback | None,
) -> ScanResult:
    """
    Scan directories, reporting progress as the walk proceeds.

    Each root is walked on its own worker. The callback is called with
    ScanProgress snapshots from worker threads; calls never overlap, but
    they are not rate-limited, so slow consumers should throttle.

    Args:
        config: Roots, kinds and traversal options
        progress_callback: Optional callback(ScanProgress)

    Returns:
        ScanResult with every junk directory found, largest first
    """
    from devjunk.recursive_scanner import scan_root

    validate_roots(config.roots)

    reporter = _ProgressReporter(progress_callback) if progress_callback else None
    on_directory = reporter.directory if reporter else None
    on_item = reporter.item if reporter else None

    items: list[ScanItem] = []
    try:
        if len(config.roots) <= 1:
            for root in config.roots:
                items.extend(scan_root(root, config, on_directory, on_item))
        else:
            with ThreadPoolExecutor() as executor:
                futures = [
                    executor.submit(scan_root, root, config, on_directory, on_item)
                    for root in config.roots
                ]
                for future in futures:
                    items.extend(future.result())
    except OSError as e:
        # Entry-level errors are handled by the walker; anything else is fatal
        raise DevJunkIOError(e) from e

    result = ScanResult(items=items)
    result.sort_by_size()

    if reporter:
        reporter.finish()

    log.info(
        "Scanned %d root(s): %d junk directories, %d bytes",
        len(config.roots),
        result.item_count,
        result.total_size_bytes,
    )
    return result
