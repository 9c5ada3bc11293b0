"""Default transfer service implementation."""
import time
from logging import Logger

from scitrera_app_framework import get_logger
from scitrera_app_framework.api import Variables

from ..snapshot import (
    EXT_SNAPSHOT_SERVICE, SnapshotBuilder, encode_snapshot, decode_snapshot, check_version,
)
from ..reconciler import EXT_RECONCILER_SERVICE, ImportReconciler, aggregate_results
from .base import TransferService, TransferServicePluginBase, resolve_format
from ...models.auth import AuthIdentity
from ...models.snapshot import ExportOptions
from ...models.transfer import ExportResult, ImportOptions, ImportResult
from ...utils import format_compact, utc_now


def export_filename(exported_at) -> str:
    return f"memos_export_{format_compact(exported_at)}.json"


class DefaultTransferService(TransferService):
    """Default transfer service implementation."""

    def __init__(self, snapshot_builder: SnapshotBuilder, reconciler: ImportReconciler, v: Variables = None):
        self.snapshot_builder = snapshot_builder
        self.reconciler = reconciler
        self.logger = get_logger(v, name=self.__class__.__name__)

    async def export_memos(self, identity: AuthIdentity, format: str, options: ExportOptions) -> ExportResult:
        format = resolve_format('export', format)

        snapshot = await self.snapshot_builder.build(identity, options)
        data = encode_snapshot(snapshot)

        result = ExportResult(
            data=data,
            format=format,
            filename=export_filename(snapshot.exported_at or utc_now()),
            memo_count=len(snapshot.records),
            size_bytes=len(data),
        )
        self.logger.info(
            "Exported %d memos for user %s (%d bytes)",
            result.memo_count, identity.user_id, result.size_bytes,
        )
        return result

    async def import_memos(self, identity: AuthIdentity, data: bytes, format: str,
                           options: ImportOptions) -> ImportResult:
        format = resolve_format('import', format)
        started = time.monotonic()

        snapshot = decode_snapshot(data)
        check_version(snapshot)

        self.logger.info(
            "Importing %d memos for user %s (overwrite=%s, validate_only=%s)",
            len(snapshot.records), identity.user_id, options.overwrite_existing, options.validate_only,
        )

        results = []
        for record in snapshot.records:
            results.append(await self.reconciler.reconcile(identity, record, options))

        duration_ms = int((time.monotonic() - started) * 1000)
        result = aggregate_results(
            results,
            total=len(snapshot.records),
            duration_ms=duration_ms,
            validate_only=options.validate_only,
        )
        self.logger.info(
            "Import finished for user %s: imported=%d skipped=%d created=%d updated=%d in %dms",
            identity.user_id, result.imported_count, result.skipped_count,
            result.summary.created_count, result.summary.updated_count, duration_ms,
        )
        return result


class DefaultTransferServicePlugin(TransferServicePluginBase):
    """Default transfer service plugin."""
    PROVIDER_NAME = 'default'

    def initialize(self, v: Variables, logger: Logger) -> TransferService:
        return DefaultTransferService(
            snapshot_builder=self.get_extension(EXT_SNAPSHOT_SERVICE, v),
            reconciler=self.get_extension(EXT_RECONCILER_SERVICE, v),
            v=v,
        )
