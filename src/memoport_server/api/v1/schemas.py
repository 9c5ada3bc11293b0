"""
API request/response schemas for memoport endpoints.

These schemas define the HTTP API interface separate from core domain models.
Snapshot bytes travel base64-encoded inside JSON bodies.
"""
from typing import Any, Optional

from pydantic import BaseModel, Field

from memoport_server.models.memo import Attachment, Location, Memo, Visibility
from memoport_server.models.transfer import ImportSummary


# Export API Schemas
class ExportMemosRequest(BaseModel):
    """Request schema for exporting the caller's memos."""

    format: str = Field("", description="Snapshot format; empty means json")
    filter: str = Field("", description="Filter expression, e.g. 'tag in [\"work\"] && pinned == true'")
    exclude_archived: bool = Field(False, description="Only export memos that are not archived")
    include_attachments: bool = Field(True, description="List attachment metadata per memo")
    include_relations: bool = Field(True, description="List relations per memo")


class ExportMemosResponse(BaseModel):
    """Response schema for an export."""

    data: str = Field(..., description="Base64 encoded snapshot")
    format: str = Field(..., description="Snapshot format")
    filename: str = Field(..., description="Suggested download filename")
    memo_count: int = Field(..., description="Number of memos in the snapshot")
    size_bytes: int = Field(..., description="Size of the decoded snapshot in bytes")


# Import API Schemas
class ImportMemosRequest(BaseModel):
    """Request schema for importing a snapshot."""

    data: str = Field(..., description="Base64 encoded snapshot")
    format: str = Field("", description="Snapshot format; empty means json")
    overwrite_existing: bool = Field(False, description="Update memos whose UID already exists")
    validate_only: bool = Field(False, description="Validate without writing anything")
    preserve_timestamps: bool = Field(True, description="Keep created/updated times from the snapshot")
    skip_attachments: bool = Field(False, description="Ignore attachment references")
    skip_relations: bool = Field(False, description="Ignore relation references")


class ImportMemosResponse(BaseModel):
    """Response schema for an import."""

    imported_count: int = 0
    skipped_count: int = 0
    validation_errors: int = 0
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    summary: ImportSummary = Field(default_factory=ImportSummary)


# Memo API Schemas
class MemoCreateRequest(BaseModel):
    """Request schema for creating a memo."""

    content: str = Field(..., description="Memo text")
    visibility: Visibility = Field(Visibility.PRIVATE, description="Visibility level")
    pinned: bool = Field(False, description="Pin the memo")
    location: Optional[Location] = Field(None, description="Optional location")


class MemoResponse(BaseModel):
    """Response schema for single memo operations."""

    memo: Memo


class AttachmentCreateRequest(BaseModel):
    """Attachment descriptor to record on a memo; no file contents are uploaded."""

    filename: str = Field(..., min_length=1, description="File name")
    type: str = Field("", description="MIME type")
    size: int = Field(0, ge=0, description="Size in bytes")


class AttachmentResponse(BaseModel):
    attachment: Attachment


# Instance settings API Schemas
class InstanceSettingsUpdateRequest(BaseModel):
    content_length_limit: int = Field(..., gt=0, description="Maximum memo content size in UTF-8 bytes")


class InstanceSettingsResponse(BaseModel):
    content_length_limit: int


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error details")
