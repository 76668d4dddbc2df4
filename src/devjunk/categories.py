"""Junk directory kinds and their name patterns for devjunk."""

from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field


class KindInfo(BaseModel):
    """Static catalog entry for a junk kind."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Human-readable display name")
    patterns: tuple[str, ...] = Field(..., description="Literal directory names matched")
    description: str = Field("", description="What these directories contain")


class JunkKind(str, Enum):
    """Kinds of development junk directories.

    Member values are the stable identifiers used on the command line and
    in exported records.
    """

    PYTHON_VENV = "python_venv"
    PYTHON_TOX = "python_tox"
    PYTHON_CACHE = "python_cache"
    MYPY_CACHE = "mypy_cache"
    PYTEST_CACHE = "pytest_cache"
    NODE_MODULES = "node_modules"
    RUST_TARGET = "rust_target"
    BUILD_DIR = "build_dir"
    DIST_DIR = "dist_dir"
    OUT_DIR = "out_dir"
    GO_VENDOR = "go_vendor"
    NEXT_DIR = "next_dir"
    NUXT_DIR = "nuxt_dir"

    @classmethod
    def all(cls) -> list["JunkKind"]:
        """All known kinds in catalog order."""
        return list(KINDS)

    @classmethod
    def from_name(cls, name: str) -> Optional["JunkKind"]:
        """Identify the kind of a directory from its name."""
        return classify(name)

    def patterns(self) -> tuple[str, ...]:
        """Directory name patterns for this kind."""
        return KINDS[self].patterns

    def display_name(self) -> str:
        """Human-readable name."""
        return KINDS[self].name

    def description(self) -> str:
        return KINDS[self].description

    def matches_name(self, name: str) -> bool:
        """Check if a directory name matches this kind exactly."""
        return name in KINDS[self].patterns

    def __str__(self) -> str:
        return self.display_name()


# Catalog order is significant: classification is first match wins
KINDS: dict[JunkKind, KindInfo] = {
    # =============================================================================
    # PYTHON
    # =============================================================================
    JunkKind.PYTHON_VENV: KindInfo(
        name="Python Venv",
        patterns=(".venv", "venv"),
        description="Python virtual environments, recreated with pip or uv",
    ),
    JunkKind.PYTHON_TOX: KindInfo(
        name="Python Tox",
        patterns=(".tox",),
        description="Per-environment virtualenvs built by tox",
    ),
    JunkKind.PYTHON_CACHE: KindInfo(
        name="Python Cache",
        patterns=("__pycache__",),
        description="Compiled bytecode, regenerated on next import",
    ),
    JunkKind.MYPY_CACHE: KindInfo(
        name="Mypy Cache",
        patterns=(".mypy_cache",),
        description="Incremental type-checking cache",
    ),
    JunkKind.PYTEST_CACHE: KindInfo(
        name="Pytest Cache",
        patterns=(".pytest_cache",),
        description="Last-failed and step-wise state kept by pytest",
    ),
    # =============================================================================
    # JAVASCRIPT
    # =============================================================================
    JunkKind.NODE_MODULES: KindInfo(
        name="Node Modules",
        patterns=("node_modules",),
        description="Installed npm/yarn/pnpm dependencies",
    ),
    # =============================================================================
    # BUILD OUTPUT
    # =============================================================================
    JunkKind.RUST_TARGET: KindInfo(
        name="Rust Target",
        patterns=("target",),
        description="Cargo build output",
    ),
    JunkKind.BUILD_DIR: KindInfo(
        name="Build Dir",
        patterns=("build",),
        description="Generic build output",
    ),
    JunkKind.DIST_DIR: KindInfo(
        name="Dist Dir",
        patterns=("dist",),
        description="Packaged distribution artifacts",
    ),
    JunkKind.OUT_DIR: KindInfo(
        name="Out Dir",
        patterns=("out",),
        description="Generic compiler output",
    ),
    JunkKind.GO_VENDOR: KindInfo(
        name="Go Vendor",
        patterns=("vendor",),
        description="Vendored Go module sources, restored with 'go mod vendor'",
    ),
    # =============================================================================
    # FRAMEWORK CACHES
    # =============================================================================
    JunkKind.NEXT_DIR: KindInfo(
        name="Next.js",
        patterns=(".next",),
        description="Next.js build and dev-server cache",
    ),
    JunkKind.NUXT_DIR: KindInfo(
        name="Nuxt.js",
        patterns=(".nuxt",),
        description="Nuxt.js generated build directory",
    ),
}


def all_kinds() -> list[JunkKind]:
    """Get all kinds in catalog order."""
    return list(KINDS)


def get_kind(kind_id: str) -> JunkKind | None:
    """Get a kind by its stable identifier."""
    try:
        return JunkKind(kind_id)
    except ValueError:
        return None


def matches(kind: JunkKind, name: str) -> bool:
    """Exact, case-sensitive match of a directory name against a kind."""
    return kind.matches_name(name)


def classify(name: str, kinds: Iterable[JunkKind] | None = None) -> JunkKind | None:
    """
    Classify a directory name.

    Args:
        name: Directory name (not a path)
        kinds: Kinds to consider, in priority order (default: whole catalog)

    Returns:
        The first kind whose patterns contain the name, or None
    """
    candidates = KINDS if kinds is None else kinds
    for kind in candidates:
        if name in KINDS[kind].patterns:
            return kind
    return None


def find_kinds(filters: Iterable[str]) -> list[JunkKind]:
    """
    Resolve loose user filters to kinds.

    A filter selects every kind whose identifier or display name contains it,
    ignoring case. Result keeps catalog order.
    """
    lowered = [f.lower() for f in filters if f]
    return [
        kind
        for kind, info in KINDS.items()
        if any(f in kind.value or f in info.name.lower() for f in lowered)
    ]
