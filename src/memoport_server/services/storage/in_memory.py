"""
In-memory storage backend for testing.

Provides a complete storage implementation that stores all data in memory.
Data is lost on service restart - use only for testing.
"""
from logging import Logger
from typing import Optional

from scitrera_app_framework import Variables

from .base import StorageBackend, StoragePluginBase
from .filter import compile_filter
from ...models.memo import Attachment, FindMemo, Memo, MemoCreate, MemoRelation, RelationType
from ...utils import utc_now, ensure_utc

UPDATABLE_MEMO_FIELDS = frozenset({
    "content", "visibility", "pinned", "payload", "row_status",
    "created_at", "updated_at", "display_time",
})


class MemoryStorageBackend(StorageBackend):
    """
    In-memory storage backend for testing.

    All data is stored in dictionaries and lost on restart.
    """

    def __init__(self, v: Variables = None):
        super().__init__(v)
        self._memos: dict[int, Memo] = {}
        self._uid_index: dict[str, int] = {}  # uid -> memo id
        self._attachments: dict[int, Attachment] = {}
        self._relations: dict[tuple[int, int, RelationType], MemoRelation] = {}
        self._settings: dict[str, str] = {}
        self._next_memo_id = 1
        self._next_attachment_id = 1
        self.logger.info("Initialized MemoryStorageBackend")

    async def connect(self) -> None:
        """Initialize storage (no-op for in-memory)."""
        self.logger.info("In-memory storage connected")

    async def disconnect(self) -> None:
        """Close storage (no-op for in-memory)."""
        self.logger.info("In-memory storage disconnected")

    async def health_check(self) -> bool:
        """Always healthy."""
        return True

    # ========== Memo Operations ==========

    async def create_memo(self, create: MemoCreate) -> Memo:
        if create.uid in self._uid_index:
            raise ValueError(f"memo with UID {create.uid} already exists")

        now = utc_now()
        memo = Memo(
            id=self._next_memo_id,
            uid=create.uid,
            creator_id=create.creator_id,
            row_status=create.row_status,
            content=create.content,
            visibility=create.visibility,
            pinned=create.pinned,
            payload=create.payload.model_copy(deep=True),
            created_at=ensure_utc(create.created_at) or now,
            updated_at=ensure_utc(create.updated_at) or now,
            display_time=ensure_utc(create.display_time),
        )
        self._next_memo_id += 1
        self._memos[memo.id] = memo
        self._uid_index[memo.uid] = memo.id
        self.logger.debug("Created memo %s (id=%s)", memo.uid, memo.id)
        return memo.model_copy(deep=True)

    async def get_memo(self, memo_id: int) -> Optional[Memo]:
        memo = self._memos.get(memo_id)
        return memo.model_copy(deep=True) if memo else None

    async def get_memo_by_uid(self, uid: str) -> Optional[Memo]:
        memo_id = self._uid_index.get(uid)
        if memo_id is None:
            return None
        return await self.get_memo(memo_id)

    async def update_memo(self, memo_id: int, **updates) -> Optional[Memo]:
        memo = self._memos.get(memo_id)
        if memo is None:
            return None

        unknown = set(updates) - UPDATABLE_MEMO_FIELDS
        if unknown:
            raise ValueError(f"cannot update memo fields: {', '.join(sorted(unknown))}")

        if "updated_at" not in updates:
            updates["updated_at"] = utc_now()

        data = memo.model_dump()
        data.update(updates)
        updated = Memo.model_validate(data)
        updated.created_at = ensure_utc(updated.created_at)
        updated.updated_at = ensure_utc(updated.updated_at)
        updated.display_time = ensure_utc(updated.display_time)

        self._memos[memo_id] = updated
        return updated.model_copy(deep=True)

    async def delete_memo(self, memo_id: int) -> bool:
        memo = self._memos.pop(memo_id, None)
        if memo is None:
            return False
        self._uid_index.pop(memo.uid, None)
        self._attachments = {k: a for k, a in self._attachments.items() if a.memo_id != memo_id}
        self._relations = {
            k: r for k, r in self._relations.items()
            if r.memo_id != memo_id and r.related_memo_id != memo_id
        }
        return True

    async def list_memos(self, find: FindMemo) -> list[Memo]:
        matches = compile_filter(find.filter)

        comment_ids = set()
        if find.exclude_comments:
            comment_ids = {r.memo_id for r in self._relations.values() if r.type == RelationType.COMMENT}

        results = []
        for memo in self._memos.values():
            if find.creator_id is not None and memo.creator_id != find.creator_id:
                continue
            if find.row_status is not None and memo.row_status != find.row_status:
                continue
            if memo.id in comment_ids:
                continue
            if not matches(memo):
                continue
            results.append(memo.model_copy(deep=True))

        results.sort(key=lambda m: (m.created_at, m.id))
        return results

    # ========== Attachment Operations ==========

    async def create_attachment(self, attachment: Attachment) -> Attachment:
        stored = attachment.model_copy(update={"id": self._next_attachment_id})
        self._next_attachment_id += 1
        self._attachments[stored.id] = stored
        return stored.model_copy()

    async def list_attachments(self, memo_id: int) -> list[Attachment]:
        return [a.model_copy() for a in self._attachments.values() if a.memo_id == memo_id]

    # ========== Relation Operations ==========

    async def create_memo_relation(self, relation: MemoRelation) -> MemoRelation:
        key = (relation.memo_id, relation.related_memo_id, relation.type)
        self._relations[key] = relation.model_copy()
        return relation

    async def list_memo_relations(self, memo_id: int) -> list[MemoRelation]:
        return [r.model_copy() for r in self._relations.values() if r.memo_id == memo_id]

    # ========== Instance Settings ==========

    async def get_instance_setting(self, key: str) -> Optional[str]:
        return self._settings.get(key)

    async def set_instance_setting(self, key: str, value: str) -> None:
        self._settings[key] = value


class MemoryStoragePlugin(StoragePluginBase):
    """Plugin for in-memory storage backend."""

    PROVIDER_NAME = 'memory'

    def initialize(self, v: Variables, logger: Logger) -> MemoryStorageBackend:
        return MemoryStorageBackend(v=v)
