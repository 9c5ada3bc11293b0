"""
Default snapshot builder.

Memos are scoped to the requester regardless of the filter, comment memos
are left out, and relations are rewritten from internal ids to UIDs.
"""
from logging import Logger

from scitrera_app_framework import get_logger
from scitrera_app_framework.api import Variables

from ..storage import EXT_STORAGE_BACKEND, StorageBackend
from .base import SnapshotBuilder, SnapshotBuilderPluginBase
from ...models.auth import AuthIdentity
from ...models.memo import FindMemo, Memo, RowStatus
from ...models.snapshot import (
    SNAPSHOT_VERSION, AttachmentRef, ExportOptions, Record, RelationRef, Snapshot,
)
from ...utils import utc_now


class DefaultSnapshotBuilder(SnapshotBuilder):
    """Default snapshot builder implementation."""

    def __init__(self, storage: StorageBackend, v: Variables = None):
        self.storage = storage
        self.logger = get_logger(v, name=self.__class__.__name__)

    async def build(self, identity: AuthIdentity, options: ExportOptions) -> Snapshot:
        find = FindMemo(
            creator_id=identity.user_id,
            row_status=RowStatus.NORMAL if options.exclude_archived else None,
            exclude_comments=True,
            filter=options.filter or None,
        )
        memos = await self.storage.list_memos(find)

        records = []
        for memo in memos:
            try:
                records.append(await self._to_record(memo, options))
            except Exception as e:
                self.logger.warning("Failed to convert memo %s (id=%s) for export: %s", memo.uid, memo.id, e)

        self.logger.info(
            "Built snapshot for user %s: %d of %d memos",
            identity.user_id, len(records), len(memos),
        )
        return Snapshot(version=SNAPSHOT_VERSION, exported_at=utc_now(), records=records)

    async def _to_record(self, memo: Memo, options: ExportOptions) -> Record:
        record = Record(
            uid=memo.uid,
            content=memo.content,
            visibility=memo.visibility.value,
            pinned=memo.pinned,
            created_at=memo.created_at,
            updated_at=memo.updated_at,
            display_time=memo.display_time,
            tags=list(memo.payload.tags),
            location=memo.payload.location,
        )

        if options.include_attachments:
            attachments = await self.storage.list_attachments(memo.id)
            record.attachments = [
                AttachmentRef(uid=a.uid, filename=a.filename, type=a.type, size=a.size)
                for a in attachments
            ]

        if options.include_relations:
            for relation in await self.storage.list_memo_relations(memo.id):
                target = await self.storage.get_memo(relation.related_memo_id)
                if target is None:
                    continue
                record.relations.append(RelationRef(related_uid=target.uid, type=relation.type.value))

        return record


class DefaultSnapshotBuilderPlugin(SnapshotBuilderPluginBase):
    """Default snapshot builder plugin."""
    PROVIDER_NAME = 'default'

    def initialize(self, v: Variables, logger: Logger) -> SnapshotBuilder:
        return DefaultSnapshotBuilder(storage=self.get_extension(EXT_STORAGE_BACKEND, v), v=v)
