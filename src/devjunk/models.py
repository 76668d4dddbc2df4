"""Data models for devjunk."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from devjunk.categories import JunkKind, all_kinds


def format_size(size_bytes: int) -> str:
    """Format bytes to human-readable string (binary units, two decimals)."""
    kb = 1024
    mb = kb * 1024
    gb = mb * 1024

    if size_bytes >= gb:
        return f"{size_bytes / gb:.2f} GB"
    elif size_bytes >= mb:
        return f"{size_bytes / mb:.2f} MB"
    elif size_bytes >= kb:
        return f"{size_bytes / kb:.2f} KB"
    else:
        return f"{size_bytes} B"


class ScanConfig(BaseModel):
    """Configuration for scanning directories.

    Immutable once built; the ``with_*`` helpers return modified copies.
    """

    model_config = ConfigDict(frozen=True)

    roots: list[Path] = Field(default_factory=list, description="Root directories to scan")
    include_patterns: list[JunkKind] = Field(
        default_factory=all_kinds,
        description="Kinds to search for (default: all known kinds)",
    )
    exclude_paths: list[Path] = Field(
        default_factory=list,
        description="Paths skipped together with their subtrees",
    )
    max_depth: Optional[int] = Field(
        None,
        ge=0,
        description="Maximum levels below each root to visit (None = unlimited)",
    )
    include_hidden: bool = Field(
        False,
        description="Descend into hidden directories (junk like .venv is always inspected)",
    )

    @classmethod
    def new(cls, roots: list[Path]) -> "ScanConfig":
        """Create a config for the given roots with default options."""
        return cls(roots=[Path(r) for r in roots])

    def with_max_depth(self, depth: int) -> "ScanConfig":
        return self.model_validate({**self.model_dump(), "max_depth": depth})

    def with_hidden(self, include: bool) -> "ScanConfig":
        return self.model_copy(update={"include_hidden": include})

    def with_patterns(self, patterns: list[JunkKind]) -> "ScanConfig":
        return self.model_copy(update={"include_patterns": list(patterns)})

    def with_excludes(self, paths: list[Path]) -> "ScanConfig":
        return self.model_copy(update={"exclude_paths": [Path(p) for p in paths]})


class ScanItem(BaseModel):
    """A single junk directory found by a scan."""

    model_config = ConfigDict(frozen=True)

    path: Path = Field(..., description="Full path to the junk directory")
    kind: JunkKind = Field(..., description="Type of junk")
    size_bytes: int = Field(0, ge=0, description="Total size in bytes")
    file_count: int = Field(0, ge=0, description="Total number of files")

    @property
    def size_human(self) -> str:
        return format_size(self.size_bytes)


class ScanResult(BaseModel):
    """Result of a scan operation.

    Totals are derived from ``items`` on every access.
    """

    items: list[ScanItem] = Field(default_factory=list)

    @property
    def total_size_bytes(self) -> int:
        """Total size of all items in bytes."""
        return sum(i.size_bytes for i in self.items)

    @property
    def total_file_count(self) -> int:
        """Total file count across all items."""
        return sum(i.file_count for i in self.items)

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def paths(self) -> list[Path]:
        return [i.path for i in self.items]

    def sort_by_size(self) -> None:
        """Sort items by size, largest first."""
        self.items.sort(key=lambda i: i.size_bytes, reverse=True)

    def sort_by_path(self) -> None:
        self.items.sort(key=lambda i: i.path)


class ScanProgress(BaseModel):
    """Progress snapshot handed to scan progress callbacks."""

    model_config = ConfigDict(frozen=True)

    current_path: str = Field("", description="Directory currently being scanned")
    directories_scanned: int = Field(0, description="Directories visited so far")
    items_found: int = Field(0, description="Junk directories found so far")
    bytes_found: int = Field(0, description="Bytes in junk directories found so far")


class CleanPlan(BaseModel):
    """Plan for deleting junk directories."""

    paths: list[Path] = Field(default_factory=list, description="Paths to delete")
    dry_run: bool = Field(False, description="Whether this is a dry run")

    @property
    def count(self) -> int:
        return len(self.paths)


class CleanFailure(BaseModel):
    """A path that could not be deleted."""

    path: Path
    error: str


class CleanResult(BaseModel):
    """Result of executing a clean plan."""

    deleted: list[Path] = Field(default_factory=list, description="Deleted paths")
    failed: list[CleanFailure] = Field(
        default_factory=list, description="Paths that failed to delete"
    )
    bytes_freed: int = Field(0, description="Total bytes freed")
    was_dry_run: bool = Field(False, description="Whether this was a dry run")

    @property
    def deleted_count(self) -> int:
        """Number of successfully deleted items."""
        return len(self.deleted)

    @property
    def failed_count(self) -> int:
        """Number of failed items."""
        return len(self.failed)

    def is_success(self) -> bool:
        """Whether every deletion succeeded."""
        return not self.failed
