"""UI-facing records for scan and clean results.

Paths become strings and sizes get a precomputed human-readable form.
Keys are camelCase, as front ends expect.
"""

import json

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from devjunk.categories import JunkKind
from devjunk.models import CleanResult, ScanItem, ScanProgress, ScanResult, format_size


class Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ScanItemRecord(Record):
    path: str
    kind: str = Field(..., description="Stable kind identifier")
    kind_display: str
    size_bytes: int
    size_display: str
    file_count: int

    @classmethod
    def from_item(cls, item: ScanItem) -> "ScanItemRecord":
        return cls(
            path=str(item.path),
            kind=item.kind.value,
            kind_display=item.kind.display_name(),
            size_bytes=item.size_bytes,
            size_display=format_size(item.size_bytes),
            file_count=item.file_count,
        )


class ScanResultRecord(Record):
    items: list[ScanItemRecord]
    total_size_bytes: int
    total_size_display: str
    total_file_count: int
    item_count: int

    @classmethod
    def from_result(cls, result: ScanResult) -> "ScanResultRecord":
        return cls(
            items=[ScanItemRecord.from_item(i) for i in result.items],
            total_size_bytes=result.total_size_bytes,
            total_size_display=format_size(result.total_size_bytes),
            total_file_count=result.total_file_count,
            item_count=result.item_count,
        )


class CleanFailureRecord(Record):
    path: str
    error: str


class CleanResultRecord(Record):
    deleted: list[str]
    deleted_count: int
    failed: list[CleanFailureRecord]
    failed_count: int
    bytes_freed: int
    bytes_freed_display: str
    was_dry_run: bool
    is_success: bool

    @classmethod
    def from_result(cls, result: CleanResult) -> "CleanResultRecord":
        return cls(
            deleted=[str(p) for p in result.deleted],
            deleted_count=result.deleted_count,
            failed=[CleanFailureRecord(path=str(f.path), error=f.error) for f in result.failed],
            failed_count=result.failed_count,
            bytes_freed=result.bytes_freed,
            bytes_freed_display=format_size(result.bytes_freed),
            was_dry_run=result.was_dry_run,
            is_success=result.is_success(),
        )


class JunkKindRecord(Record):
    id: str
    display_name: str
    patterns: list[str]
    description: str

    @classmethod
    def from_kind(cls, kind: JunkKind) -> "JunkKindRecord":
        return cls(
            id=kind.value,
            display_name=kind.display_name(),
            patterns=list(kind.patterns()),
            description=kind.description(),
        )


class ScanProgressRecord(Record):
    current_path: str
    items_found: int
    directories_scanned: int
    bytes_found: int

    @classmethod
    def from_progress(cls, progress: ScanProgress) -> "ScanProgressRecord":
        return cls(
            current_path=progress.current_path,
            items_found=progress.items_found,
            directories_scanned=progress.directories_scanned,
            bytes_found=progress.bytes_found,
        )


def scan_result_to_dict(result: ScanResult) -> dict:
    return ScanResultRecord.from_result(result).model_dump(by_alias=True)


def clean_result_to_dict(result: CleanResult) -> dict:
    return CleanResultRecord.from_result(result).model_dump(by_alias=True)


def junk_kind_to_dict(kind: JunkKind) -> dict:
    return JunkKindRecord.from_kind(kind).model_dump(by_alias=True)


def progress_to_dict(progress: ScanProgress) -> dict:
    return ScanProgressRecord.from_progress(progress).model_dump(by_alias=True)


def to_json(record: Record | list[Record], indent: int = 2) -> str:
    """Serialize a record (or list of records) with camelCase keys."""
    if isinstance(record, list):
        return json.dumps([r.model_dump(by_alias=True) for r in record], indent=indent)
    return record.model_dump_json(by_alias=True, indent=indent)
