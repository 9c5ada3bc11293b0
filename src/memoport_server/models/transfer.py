"""
Import/export request and result models.

Per-record import results are small tagged dataclasses; the aggregator folds
them into an ImportResult.
"""
from dataclasses import dataclass, field
from typing import Union

from pydantic import BaseModel, Field


class ImportOptions(BaseModel):
    """Options controlling how a snapshot is merged into the store."""

    overwrite_existing: bool = Field(False, description="Update memos whose UID already exists")
    validate_only: bool = Field(False, description="Dry run: validate without writing")
    preserve_timestamps: bool = Field(True, description="Keep the snapshot's created/updated times")
    skip_attachments: bool = False
    skip_relations: bool = False


@dataclass
class ImportOutcome:
    """What happened to one record that was accepted."""
    created: bool = False
    applied: bool = False  # False under dry run
    attachments_imported: int = 0
    relations_imported: int = 0
    warnings: list[str] = field(default_factory=list)


@dataclass
class RecordSuccess:
    uid: str
    outcome: ImportOutcome


@dataclass
class RecordWarning:
    """Record accepted, but something was degraded or skipped."""
    uid: str
    outcome: ImportOutcome
    messages: list[str] = field(default_factory=list)


@dataclass
class RecordReject:
    uid: str
    reason: str


RecordResult = Union[RecordSuccess, RecordWarning, RecordReject]


class ImportSummary(BaseModel):
    total_memos: int = 0
    created_count: int = 0
    updated_count: int = 0
    attachments_imported: int = 0
    relations_imported: int = 0
    duration_ms: int = 0


class ImportResult(BaseModel):
    """Batch summary of an import."""

    imported_count: int = 0
    skipped_count: int = 0
    validation_errors: int = 0
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    summary: ImportSummary = Field(default_factory=ImportSummary)


class ExportResult(BaseModel):
    """Encoded snapshot plus its metadata."""

    data: bytes
    format: str = "json"
    filename: str
    memo_count: int = 0
    size_bytes: int = 0
