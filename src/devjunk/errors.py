"""Error types for devjunk."""

from pathlib import Path
from typing import Optional


class DevJunkError(Exception):
    """Base class for errors raised by devjunk."""


class PathNotFound(DevJunkError):
    """A configured root does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"Path does not exist: {self.path}")


class NotADirectory(DevJunkError):
    """A configured root exists but is not a directory."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"Path is not a directory: {self.path}")


class PermissionDenied(DevJunkError):
    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"Permission denied: {self.path}")


class _PathCauseError(DevJunkError):
    """Error about a path that wraps the underlying OSError."""

    action = "Failed"

    def __init__(self, path: Path, cause: Optional[BaseException] = None) -> None:
        self.path = Path(path)
        self.cause = cause
        message = f"{self.action}: {self.path}"
        if cause is not None:
            message = f"{message} ({cause})"
        super().__init__(message)


class TraversalError(_PathCauseError):
    """I/O failure while walking a directory."""

    action = "Failed to traverse directory"


class DeletionError(_PathCauseError):
    """Recursive removal of a directory failed."""

    action = "Failed to delete"


class MetadataError(_PathCauseError):
    """Size or file-count metadata could not be read."""

    action = "Failed to get metadata for"


class DevJunkIOError(DevJunkError):
    """Generic I/O failure."""

    def __init__(self, cause: OSError) -> None:
        self.cause = cause
        super().__init__(f"IO error: {cause}")


class MultipleErrors(DevJunkError):
    """Summary of a batch in which several operations failed."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"Multiple errors occurred: {count} errors")
