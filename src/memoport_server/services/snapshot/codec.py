"""
Snapshot serialization.

Snapshots are pretty-printed UTF-8 JSON with a 2-space indent. Optional
fields that are absent (location, display_time) are omitted from the output.
"""
from ...models.snapshot import SNAPSHOT_VERSION, Snapshot


class SnapshotDecodeError(ValueError):
    """Snapshot bytes could not be parsed."""


class UnsupportedSnapshotVersionError(ValueError):
    """Snapshot version is missing or not supported."""

    def __init__(self, version):
        super().__init__(f"unsupported import data version: {version if version is not None else ''}")
        self.version = version


def encode_snapshot(snapshot: Snapshot) -> bytes:
    return snapshot.model_dump_json(indent=2, exclude_none=True).encode("utf-8")


def decode_snapshot(data: bytes) -> Snapshot:
    """
    Parse snapshot bytes.

    Raises:
        SnapshotDecodeError: On malformed JSON or a structurally invalid
            snapshot. No partial snapshot is ever returned.
    """
    try:
        return Snapshot.model_validate_json(data)
    except ValueError as e:  # pydantic ValidationError is a ValueError
        raise SnapshotDecodeError(f"failed to parse import data: {e}") from e


def check_version(snapshot: Snapshot) -> None:
    if snapshot.version != SNAPSHOT_VERSION:
        raise UnsupportedSnapshotVersionError(snapshot.version)
