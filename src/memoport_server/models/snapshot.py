"""
Portable snapshot models.

A snapshot carries memos between systems. Records reference each other only
by ``uid``; internal ids never appear here.
"""
from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .memo import Location

SNAPSHOT_VERSION = "1.0"


class AttachmentRef(BaseModel):
    """Descriptive reference to an attachment (no binary data)."""

    uid: str = ""
    filename: str = ""
    type: str = Field("", description="MIME type")
    size: int = Field(0, description="Size in bytes")


class RelationRef(BaseModel):
    """Reference to another memo by UID."""

    model_config = ConfigDict(populate_by_name=True)

    related_uid: str = Field(
        "",
        validation_alias=AliasChoices("related_uid", "related_memo_uid"),
        description="UID of the related memo",
    )
    type: str = Field("REFERENCE", description="Relation kind (REFERENCE or COMMENT)")


class Record(BaseModel):
    """One memo in portable form."""

    uid: str = Field("", description="Portable identity, the only merge key")
    content: str = ""
    visibility: str = Field("PRIVATE", description="Kept as text so unknown values can degrade")
    pinned: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    display_time: Optional[datetime] = None
    tags: list[str] = Field(default_factory=list)
    location: Optional[Location] = None
    attachments: list[AttachmentRef] = Field(default_factory=list)
    relations: list[RelationRef] = Field(default_factory=list)


class Snapshot(BaseModel):
    """Versioned, ordered collection of records."""

    model_config = ConfigDict(populate_by_name=True)

    version: Optional[str] = Field(None, description="Snapshot schema version")
    exported_at: Optional[datetime] = None
    records: list[Record] = Field(
        default_factory=list,
        validation_alias=AliasChoices("records", "memos"),
    )


class ExportOptions(BaseModel):
    """Options controlling which memos go into a snapshot."""

    filter: str = Field("", description="Query-language filter; empty means all")
    exclude_archived: bool = False
    include_attachments: bool = True
    include_relations: bool = True
