"""Reference importer that imports nothing and says so."""
from logging import Logger

from scitrera_app_framework.api import Variables

from .base import ReferenceImporter, ReferenceImporterPluginBase, ReferenceImportResult
from ...models.memo import Memo
from ...models.snapshot import AttachmentRef, RelationRef


def attachments_skipped_warning(uid: str) -> str:
    return f"Attachments for memo {uid} were skipped (attachment import not yet implemented)"


def relations_skipped_warning(uid: str) -> str:
    return f"Relations for memo {uid} were skipped (relation import not yet implemented)"


class NoneReferenceImporter(ReferenceImporter):

    async def import_attachments(self, memo: Memo, attachments: list[AttachmentRef]) -> ReferenceImportResult:
        return ReferenceImportResult(warnings=[attachments_skipped_warning(memo.uid)])

    async def import_relations(self, memo: Memo, relations: list[RelationRef]) -> ReferenceImportResult:
        return ReferenceImportResult(warnings=[relations_skipped_warning(memo.uid)])


class NoneReferenceImporterPlugin(ReferenceImporterPluginBase):
    PROVIDER_NAME = 'none'

    def initialize(self, v: Variables, logger: Logger) -> ReferenceImporter:
        return NoneReferenceImporter()

    def get_dependencies(self, v: Variables):
        return ()
