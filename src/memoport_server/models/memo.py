"""
Memo domain models for memoport.

These are the store-side shapes: internal integer ids, owner ids and the
derived payload. Nothing here is portable across systems except ``uid``.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Visibility(str, Enum):
    """Who can see a memo."""

    PRIVATE = "PRIVATE"
    PROTECTED = "PROTECTED"
    PUBLIC = "PUBLIC"


class RowStatus(str, Enum):
    """Lifecycle status of a memo row."""

    NORMAL = "NORMAL"
    ARCHIVED = "ARCHIVED"


class RelationType(str, Enum):
    """Kind of link between two memos."""

    REFERENCE = "REFERENCE"
    COMMENT = "COMMENT"  # memo_id is a comment on related_memo_id


class Location(BaseModel):
    """Geographic location attached to a memo."""

    placeholder: str = Field("", description="Human readable label")
    latitude: float = Field(0.0, description="Latitude in degrees")
    longitude: float = Field(0.0, description="Longitude in degrees")


class MemoProperty(BaseModel):
    """Properties derived from memo content."""

    has_link: bool = False
    has_task_list: bool = False
    has_code: bool = False
    has_incomplete_tasks: bool = False


class MemoPayload(BaseModel):
    """Structured data stored alongside memo content."""

    tags: list[str] = Field(default_factory=list, description="Tags (order irrelevant)")
    location: Optional[Location] = Field(None, description="Optional location")
    property: MemoProperty = Field(default_factory=MemoProperty, description="Derived content properties")


class Memo(BaseModel):
    """A stored memo."""

    model_config = {"from_attributes": True}

    # Identity
    id: int = Field(..., description="Internal id (not stable across systems)")
    uid: str = Field(..., description="Globally unique, portable identifier")
    creator_id: int = Field(..., description="Owning user id")
    row_status: RowStatus = Field(RowStatus.NORMAL, description="Normal or archived")

    # Content
    content: str = Field("", description="Memo text")
    visibility: Visibility = Field(Visibility.PRIVATE, description="Visibility level")
    pinned: bool = Field(False, description="Pinned to the top of the owner's list")
    payload: MemoPayload = Field(default_factory=MemoPayload, description="Tags, location and properties")

    # Timestamps
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), description="Creation timestamp")
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), description="Last update timestamp")
    display_time: Optional[datetime] = Field(None, description="Explicit display timestamp, if any")


class MemoCreate(BaseModel):
    """Input for creating a memo row."""

    uid: str
    creator_id: int
    content: str = ""
    visibility: Visibility = Visibility.PRIVATE
    pinned: bool = False
    row_status: RowStatus = RowStatus.NORMAL
    payload: MemoPayload = Field(default_factory=MemoPayload)
    created_at: Optional[datetime] = None  # None = now
    updated_at: Optional[datetime] = None  # None = now
    display_time: Optional[datetime] = None


class FindMemo(BaseModel):
    """Criteria for listing memos."""

    creator_id: Optional[int] = None
    row_status: Optional[RowStatus] = None
    exclude_comments: bool = False
    filter: Optional[str] = Field(None, description="Query-language filter expression")


class Attachment(BaseModel):
    """Metadata of a file attached to a memo (no binary payload)."""

    id: int = 0
    uid: str
    memo_id: Optional[int] = None
    creator_id: Optional[int] = None
    filename: str = ""
    type: str = Field("", description="MIME type")
    size: int = Field(0, ge=0, description="Size in bytes")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class MemoRelation(BaseModel):
    """Directed link from one memo to another, by internal id."""

    memo_id: int
    related_memo_id: int
    type: RelationType = RelationType.REFERENCE
