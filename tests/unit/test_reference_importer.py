"""
Unit tests for reference importers.
"""
import pytest

from memoport_server.models.memo import MemoCreate, RelationType
from memoport_server.models.snapshot import AttachmentRef, RelationRef
from memoport_server.models.transfer import ImportOptions, RecordWarning
from memoport_server.services.reconciler import DefaultImportReconciler
from memoport_server.services.reference_importer import (
    NoneReferenceImporter, RelationLinkingReferenceImporter,
)


@pytest.mark.asyncio
class TestNoneReferenceImporter:

    async def test_everything_is_skipped(self, storage):
        memo = await storage.create_memo(MemoCreate(uid="m", creator_id=1))
        importer = NoneReferenceImporter()

        attachments = await importer.import_attachments(memo, [AttachmentRef(uid="a")])
        relations = await importer.import_relations(memo, [RelationRef(related_uid="x")])

        assert attachments.imported == 0
        assert attachments.warnings == [
            "Attachments for memo m were skipped (attachment import not yet implemented)"
        ]
        assert relations.imported == 0
        assert relations.warnings == [
            "Relations for memo m were skipped (relation import not yet implemented)"
        ]


@pytest.mark.asyncio
class TestRelationLinkingReferenceImporter:

    async def test_links_existing_targets(self, storage):
        source = await storage.create_memo(MemoCreate(uid="src", creator_id=1))
        target = await storage.create_memo(MemoCreate(uid="dst", creator_id=1))
        importer = RelationLinkingReferenceImporter(storage)

        result = await importer.import_relations(source, [RelationRef(related_uid="dst", type="REFERENCE")])

        assert result.imported == 1
        assert result.warnings == []
        relations = await storage.list_memo_relations(source.id)
        assert [(r.related_memo_id, r.type) for r in relations] == [(target.id, RelationType.REFERENCE)]

    async def test_missing_target_and_unknown_type(self, storage):
        source = await storage.create_memo(MemoCreate(uid="src", creator_id=1))
        await storage.create_memo(MemoCreate(uid="dst", creator_id=1))
        importer = RelationLinkingReferenceImporter(storage)

        result = await importer.import_relations(source, [
            RelationRef(related_uid="ghost"),
            RelationRef(related_uid="dst", type="MENTION"),
        ])

        assert result.imported == 0
        assert result.warnings == [
            "Related memo ghost for memo src not found, skipped",
            "Unknown relation type MENTION for memo src, skipped",
        ]
        assert await storage.list_memo_relations(source.id) == []

    async def test_attachments_still_skipped(self, storage):
        memo = await storage.create_memo(MemoCreate(uid="m", creator_id=1))
        result = await RelationLinkingReferenceImporter(storage).import_attachments(memo, [AttachmentRef(uid="a")])
        assert result.imported == 0
        assert len(result.warnings) == 1

    async def test_counts_flow_into_outcome(self, storage, instance_settings, identity, make_record):
        reconciler = DefaultImportReconciler(storage, instance_settings, RelationLinkingReferenceImporter(storage))

        await reconciler.reconcile(identity, make_record("b"), ImportOptions())
        result = await reconciler.reconcile(
            identity,
            make_record("a", relations=[RelationRef(related_uid="b"), RelationRef(related_uid="later")]),
            ImportOptions(),
        )

        assert isinstance(result, RecordWarning)
        assert result.outcome.relations_imported == 1
        assert result.messages == ["Related memo later for memo a not found, skipped"]
