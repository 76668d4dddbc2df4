"""Recursive discovery of junk directories beneath a root.

Matched directories are opaque: once a directory is classified as junk the
walk never descends into it, so nested matches (node_modules inside
node_modules) are reported only through their outermost ancestor.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Generator, Iterable

from devjunk.categories import JunkKind, classify
from devjunk.errors import PermissionDenied, TraversalError
from devjunk.models import ScanConfig, ScanItem
from devjunk.scanner import get_directory_stats

log = logging.getLogger(__name__)


def is_under(path: Path, bases: Iterable[Path]) -> bool:
    """True if path equals or is nested under any of the bases."""
    return any(path == base or path.is_relative_to(base) for base in bases)


def is_hidden_name(name: str) -> bool:
    return name.startswith(".")


def find_junk_directories(
    root: Path,
    config: ScanConfig,
    on_directory: Callable[[Path], None] | None = None,
) -> Generator[tuple[Path, JunkKind], None, None]:
    """
    Find junk directories beneath a root.

    Uses os.scandir and never follows symlinks. For every entry the filters
    run in order: excluded paths, hidden names, already-matched trees. Only
    directories are classified; a match is yielded and not descended into.
    Entries that cannot be read are skipped.

    The root itself is classified too, but is never hidden-filtered.

    Args:
        root: Directory to walk (already validated)
        config: Kinds, excludes, depth limit and hidden-directory option
        on_directory: Optional callback(path) for every directory entered

    Yields:
        (path, kind) for each outermost matching directory
    """
    root = Path(root)
    kinds = list(config.include_patterns)
    excludes = [Path(p) for p in config.exclude_paths]
    matched: set[Path] = set()

    def _hidden_skipped(name: str) -> bool:
        if config.include_hidden or not is_hidden_name(name):
            return False
        # Hidden junk like .venv is still inspected
        return classify(name, kinds) is None

    def _walk(start: Path) -> Generator[tuple[Path, JunkKind], None, None]:
        stack: list[tuple[Path, int]] = [(start, 0)]

        while stack:
            directory, depth = stack.pop()

            if config.max_depth is not None and depth >= config.max_depth:
                continue
            if directory in matched:
                continue

            if on_directory:
                on_directory(directory)

            try:
                with os.scandir(directory) as it:
                    entries = list(it)
            except PermissionError:
                log.debug("Skipping %s", PermissionDenied(directory))
                continue
            except OSError as e:
                log.debug("Skipping %s", TraversalError(directory, e))
                continue

            subdirectories: list[Path] = []
            for entry in entries:
                try:
                    entry_path = Path(entry.path)

                    if excludes and is_under(entry_path, excludes):
                        log.debug("Excluded %s", entry_path)
                        continue

                    if _hidden_skipped(entry.name):
                        continue

                    if entry_path in matched:
                        continue

                    if not entry.is_dir(follow_symlinks=False):
                        continue

                    kind = classify(entry.name, kinds)
                except OSError as e:
                    log.debug("Skipping unreadable entry %s: %s", entry.path, e)
                    continue

                if kind is not None:
                    matched.add(entry_path)
                    yield entry_path, kind
                else:
                    subdirectories.append(entry_path)

            # Reversed so directories are entered in listing order
            stack.extend((sub, depth + 1) for sub in reversed(subdirectories))

    if excludes and is_under(root, excludes):
        return

    root_kind = classify(root.name, kinds)
    if root_kind is not None:
        matched.add(root)
        yield root, root_kind
        return

    yield from _walk(root)


def scan_root(
    root: Path,
    config: ScanConfig,
    on_directory: Callable[[Path], None] | None = None,
    on_item: Callable[[ScanItem], None] | None = None,
) -> list[ScanItem]:
    """
    Scan a single root and measure every junk directory found.

    Args:
        root: Directory to scan (already validated)
        config: Scan configuration
        on_directory: Optional callback(path) for every directory entered
        on_item: Optional callback(ScanItem) for each junk directory found

    Returns:
        ScanItems in discovery order
    """
    items: list[ScanItem] = []

    for path, kind in find_junk_directories(root, config, on_directory):
        size_bytes, file_count = get_directory_stats(path)
        item = ScanItem(path=path, kind=kind, size_bytes=size_bytes, file_count=file_count)
        items.append(item)
        log.debug("Found %s (%s): %d bytes, %d files", path, kind.value, size_bytes, file_count)

        if on_item:
            on_item(item)

    return items
