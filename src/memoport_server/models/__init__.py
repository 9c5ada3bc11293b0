"""
Core domain models for memoport.

Exports the store-side memo models, the portable snapshot models and the
import/export result models.
"""
from .memo import (
    Attachment,
    FindMemo,
    Location,
    Memo,
    MemoCreate,
    MemoPayload,
    MemoProperty,
    MemoRelation,
    RelationType,
    RowStatus,
    Visibility,
)
from .snapshot import (
    SNAPSHOT_VERSION,
    AttachmentRef,
    ExportOptions,
    Record,
    RelationRef,
    Snapshot,
)
from .transfer import (
    ExportResult,
    ImportOptions,
    ImportOutcome,
    ImportResult,
    ImportSummary,
    RecordReject,
    RecordResult,
    RecordSuccess,
    RecordWarning,
)
from .auth import AuthIdentity

__all__ = [
    # Memo models
    "Memo",
    "MemoCreate",
    "MemoPayload",
    "MemoProperty",
    "Location",
    "Visibility",
    "RowStatus",
    "FindMemo",
    "Attachment",
    "MemoRelation",
    "RelationType",
    # Snapshot models
    "SNAPSHOT_VERSION",
    "Snapshot",
    "Record",
    "AttachmentRef",
    "RelationRef",
    "ExportOptions",
    # Transfer models
    "ImportOptions",
    "ImportOutcome",
    "ImportResult",
    "ImportSummary",
    "RecordSuccess",
    "RecordWarning",
    "RecordReject",
    "RecordResult",
    "ExportResult",
    # Auth models
    "AuthIdentity",
]
