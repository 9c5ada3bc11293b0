"""
Reference importer that links relations by UID.

Relation targets are resolved against memos already in storage, so a target
that appears later in the same snapshot is only linked if it was imported
before. Attachments are still skipped since binaries are not transferred.
"""
from logging import Logger

from scitrera_app_framework import get_logger
from scitrera_app_framework.api import Variables

from ..storage import EXT_STORAGE_BACKEND, StorageBackend
from .base import ReferenceImporter, ReferenceImporterPluginBase, ReferenceImportResult
from .none import attachments_skipped_warning
from ...models.memo import Memo, MemoRelation, RelationType
from ...models.snapshot import AttachmentRef, RelationRef


class RelationLinkingReferenceImporter(ReferenceImporter):

    def __init__(self, storage: StorageBackend, v: Variables = None):
        self.storage = storage
        self.logger = get_logger(v, name=self.__class__.__name__)

    async def import_attachments(self, memo: Memo, attachments: list[AttachmentRef]) -> ReferenceImportResult:
        return ReferenceImportResult(warnings=[attachments_skipped_warning(memo.uid)])

    async def import_relations(self, memo: Memo, relations: list[RelationRef]) -> ReferenceImportResult:
        result = ReferenceImportResult()
        for ref in relations:
            try:
                relation_type = RelationType(ref.type)
            except ValueError:
                result.warnings.append(f"Unknown relation type {ref.type} for memo {memo.uid}, skipped")
                continue

            target = await self.storage.get_memo_by_uid(ref.related_uid)
            if target is None:
                result.warnings.append(f"Related memo {ref.related_uid} for memo {memo.uid} not found, skipped")
                continue

            await self.storage.create_memo_relation(
                MemoRelation(memo_id=memo.id, related_memo_id=target.id, type=relation_type)
            )
            result.imported += 1

        self.logger.debug("Linked %d of %d relations for memo %s", result.imported, len(relations), memo.uid)
        return result


class RelationLinkingReferenceImporterPlugin(ReferenceImporterPluginBase):
    PROVIDER_NAME = 'relations'

    def initialize(self, v: Variables, logger: Logger) -> ReferenceImporter:
        return RelationLinkingReferenceImporter(storage=self.get_extension(EXT_STORAGE_BACKEND, v), v=v)
