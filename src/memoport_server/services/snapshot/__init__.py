"""Snapshot builder and serializer package."""
from .base import (
    SnapshotBuilderPluginBase,
    EXT_SNAPSHOT_SERVICE,
    SnapshotBuilder,
)
from .codec import (
    SnapshotDecodeError,
    UnsupportedSnapshotVersionError,
    encode_snapshot,
    decode_snapshot,
    check_version,
)
from .default import DefaultSnapshotBuilder, DefaultSnapshotBuilderPlugin

from scitrera_app_framework import Variables, get_extension


def get_snapshot_builder(v: Variables = None) -> SnapshotBuilder:
    """Get the snapshot builder instance."""
    return get_extension(EXT_SNAPSHOT_SERVICE, v)


__all__ = (
    'SnapshotBuilder',
    'SnapshotBuilderPluginBase',
    'get_snapshot_builder',
    'EXT_SNAPSHOT_SERVICE',
    'SnapshotDecodeError',
    'UnsupportedSnapshotVersionError',
    'encode_snapshot',
    'decode_snapshot',
    'check_version',
    'DefaultSnapshotBuilder',
    'DefaultSnapshotBuilderPlugin',
)
