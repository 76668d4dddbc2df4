"""devjunk - find and clean development junk directories."""

__version__ = "0.1.0"

from devjunk.categories import JunkKind
from devjunk.cleaner import build_clean_plan, execute_clean
from devjunk.errors import (
    DeletionError,
    DevJunkError,
    DevJunkIOError,
    MetadataError,
    MultipleErrors,
    NotADirectory,
    PathNotFound,
    PermissionDenied,
    TraversalError,
)
from devjunk.models import (
    CleanFailure,
    CleanPlan,
    CleanResult,
    ScanConfig,
    ScanItem,
    ScanProgress,
    ScanResult,
    format_size,
)
from devjunk.scanner import scan, scan_with_progress

__all__ = [
    "CleanFailure",
    "CleanPlan",
    "CleanResult",
    "DeletionError",
    "DevJunkError",
    "DevJunkIOError",
    "JunkKind",
    "MetadataError",
    "MultipleErrors",
    "NotADirectory",
    "PathNotFound",
    "PermissionDenied",
    "ScanConfig",
    "ScanItem",
    "ScanProgress",
    "ScanResult",
    "TraversalError",
    "build_clean_plan",
    "execute_clean",
    "format_size",
    "scan",
    "scan_with_progress",
]
