"""
Default import reconciler.

Per record, in order, stopping at the first failure:

1. Reject records without a UID.
2. Look the UID up across the whole store.
3. Reject if it exists and overwriting is off.
4. Check content length against the current instance limit.
5. Parse visibility; unknown values degrade to PRIVATE with a warning.
6. Resolve timestamps.
7. Stop here for dry runs.
8. Update the existing memo or create a new one owned by the importer.
9. Hand attachments and relations to the reference importer.
"""
from datetime import datetime
from logging import Logger
from scitrera_app_framework import get_logger
from scitrera_app_framework.api import Variables

from ..storage import EXT_STORAGE_BACKEND, StorageBackend
from ..instance_settings import EXT_INSTANCE_SETTINGS_SERVICE, InstanceSettingsService
from ..reference_importer import EXT_REFERENCE_IMPORTER, ReferenceImporter
from ..memo import ContentTooLongError, check_content_length
from .base import ImportReconciler, ImportReconcilerPluginBase
from ...models.auth import AuthIdentity
from ...models.memo import Memo, MemoCreate, MemoPayload, Visibility
from ...models.snapshot import Record
from ...models.transfer import (
    ImportOptions, ImportOutcome, RecordReject, RecordResult, RecordSuccess, RecordWarning,
)
from ...utils import utc_now, rebuild_payload


class DefaultImportReconciler(ImportReconciler):
    """Default import reconciler implementation."""

    def __init__(
            self,
            storage: StorageBackend,
            instance_settings: InstanceSettingsService,
            reference_importer: ReferenceImporter,
            v: Variables = None,
    ):
        self.storage = storage
        self.instance_settings = instance_settings
        self.reference_importer = reference_importer
        self.logger = get_logger(v, name=self.__class__.__name__)

    async def reconcile(self, identity: AuthIdentity, record: Record, options: ImportOptions) -> RecordResult:
        uid = record.uid
        if not uid:
            return self._reject(uid, "memo UID is required")

        try:
            existing = await self.storage.get_memo_by_uid(uid)
        except Exception as e:
            return self._reject(uid, f"failed to check for existing memo: {e}")

        if existing is not None and not options.overwrite_existing:
            return self._reject(uid, f"memo with UID {uid} already exists")

        # limit is re-read per record so a concurrent change applies immediately
        try:
            limit = await self.instance_settings.get_content_length_limit()
        except Exception as e:
            return self._reject(uid, f"failed to get instance memo related setting: {e}")
        try:
            check_content_length(record.content, limit)
        except ContentTooLongError as e:
            return self._reject(uid, str(e))

        warnings: list[str] = []
        try:
            visibility = Visibility(record.visibility)
        except ValueError:
            warnings.append(f"Unknown visibility {record.visibility} for memo {uid}, defaulting to PRIVATE")
            visibility = Visibility.PRIVATE

        now = utc_now()
        if options.preserve_timestamps:
            created_at = record.created_at or now
            updated_at = record.updated_at or now
        else:
            created_at = updated_at = now

        if options.validate_only:
            self.logger.debug("Validated memo %s (dry run)", uid)
            return self._result(uid, ImportOutcome(created=False, applied=False, warnings=warnings))

        created = existing is None
        try:
            if created:
                memo = await self._create(identity, record, visibility, options, created_at, updated_at)
            else:
                memo = await self._update(existing, record, visibility, options, created_at, updated_at)
        except Exception as e:
            action = "create memo" if created else "update existing memo"
            return self._reject(uid, f"failed to {action}: {e}")

        outcome = ImportOutcome(created=created, applied=True, warnings=warnings)
        await self._import_references(memo, record, options, outcome)

        self.logger.debug("%s memo %s", "Created" if created else "Updated", uid)
        return self._result(uid, outcome)

    async def _update(
            self,
            existing: Memo,
            record: Record,
            visibility: Visibility,
            options: ImportOptions,
            created_at: datetime,
            updated_at: datetime,
    ) -> Memo:
        # snapshot tags are kept as-is; only the derived properties follow the new content
        payload = MemoPayload(
            tags=list(record.tags),
            location=record.location,
            property=rebuild_payload(record.content).property,
        )
        updates = dict(
            content=record.content,
            visibility=visibility,
            pinned=record.pinned,
            payload=payload,
        )
        if options.preserve_timestamps:
            updates.update(created_at=created_at, updated_at=updated_at)
            # snapshots without a display time leave the stored one alone
            if record.display_time is not None:
                updates['display_time'] = record.display_time

        memo = await self.storage.update_memo(existing.id, **updates)
        if memo is None:
            raise ValueError(f"memo with UID {record.uid} no longer exists")
        return memo

    async def _create(
            self,
            identity: AuthIdentity,
            record: Record,
            visibility: Visibility,
            options: ImportOptions,
            created_at: datetime,
            updated_at: datetime,
    ) -> Memo:
        create = MemoCreate(
            uid=record.uid,
            creator_id=identity.user_id,
            content=record.content,
            visibility=visibility,
            pinned=record.pinned,
            payload=rebuild_payload(record.content, record.location),
            created_at=created_at,
            updated_at=updated_at,
            display_time=record.display_time if options.preserve_timestamps else None,
        )
        return await self.storage.create_memo(create)

    async def _import_references(self, memo: Memo, record: Record, options: ImportOptions,
                                 outcome: ImportOutcome) -> None:
        if record.attachments and not options.skip_attachments:
            try:
                result = await self.reference_importer.import_attachments(memo, record.attachments)
                outcome.attachments_imported += result.imported
                outcome.warnings.extend(result.warnings)
            except Exception as e:
                self.logger.warning("Attachment import failed for memo %s: %s", memo.uid, e)
                outcome.warnings.append(f"Failed to import attachments for memo {memo.uid}: {e}")

        if record.relations and not options.skip_relations:
            try:
                result = await self.reference_importer.import_relations(memo, record.relations)
                outcome.relations_imported += result.imported
                outcome.warnings.extend(result.warnings)
            except Exception as e:
                self.logger.warning("Relation import failed for memo %s: %s", memo.uid, e)
                outcome.warnings.append(f"Failed to import relations for memo {memo.uid}: {e}")

    def _reject(self, uid: str, reason: str) -> RecordReject:
        self.logger.warning("Skipping memo %s: %s", uid, reason)
        return RecordReject(uid=uid, reason=reason)

    @staticmethod
    def _result(uid: str, outcome: ImportOutcome) -> RecordResult:
        if outcome.warnings:
            return RecordWarning(uid=uid, outcome=outcome, messages=list(outcome.warnings))
        return RecordSuccess(uid=uid, outcome=outcome)


class DefaultImportReconcilerPlugin(ImportReconcilerPluginBase):
    """Default import reconciler plugin."""
    PROVIDER_NAME = 'default'

    def initialize(self, v: Variables, logger: Logger) -> ImportReconciler:
        return DefaultImportReconciler(
            storage=self.get_extension(EXT_STORAGE_BACKEND, v),
            instance_settings=self.get_extension(EXT_INSTANCE_SETTINGS_SERVICE, v),
            reference_importer=self.get_extension(EXT_REFERENCE_IMPORTER, v),
            v=v,
        )
