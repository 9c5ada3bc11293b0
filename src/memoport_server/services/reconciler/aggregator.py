"""Fold per-record import results into a batch summary."""
from typing import Iterable

from ...models.transfer import (
    ImportResult, ImportSummary, RecordReject, RecordResult, RecordWarning,
)


def reject_message(uid: str, reason: str) -> str:
    return f"Failed to import memo {uid}: {reason}"


def aggregate_results(
        results: Iterable[RecordResult],
        total: int,
        duration_ms: int,
        validate_only: bool = False,
) -> ImportResult:
    """
    Summarize ordered per-record results.

    Rejected records count as skipped (and as validation errors under
    ``validate_only``). Accepted records count as imported; only records that
    were actually written count as created or updated.

    Args:
        results: Per-record results in snapshot order
        total: Number of records in the snapshot
        duration_ms: Batch duration measured by the caller
        validate_only: Whether the batch was a dry run

    Returns:
        ImportResult with errors and warnings in record order
    """
    result = ImportResult(summary=ImportSummary(total_memos=total, duration_ms=duration_ms))
    summary = result.summary

    for item in results:
        if isinstance(item, RecordReject):
            result.skipped_count += 1
            if validate_only:
                result.validation_errors += 1
            result.errors.append(reject_message(item.uid, item.reason))
            continue

        result.imported_count += 1
        outcome = item.outcome
        if outcome.applied:
            if outcome.created:
                summary.created_count += 1
            else:
                summary.updated_count += 1
        summary.attachments_imported += outcome.attachments_imported
        summary.relations_imported += outcome.relations_imported

        if isinstance(item, RecordWarning):
            result.warnings.extend(item.messages)

    return result
