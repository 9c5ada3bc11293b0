"""
Transfer Service - Base classes.

Orchestrates export (builder -> serializer) and import (serializer ->
version check -> reconciler -> aggregator).
"""
from abc import ABC, abstractmethod

from scitrera_app_framework.api import Plugin, Variables, enabled_option_pattern

from ...config import MEMOPORT_TRANSFER_SERVICE, DEFAULT_MEMOPORT_TRANSFER_SERVICE
from ...models.auth import AuthIdentity
from ...models.snapshot import ExportOptions
from ...models.transfer import ExportResult, ImportOptions, ImportResult

from .._constants import EXT_SNAPSHOT_SERVICE, EXT_RECONCILER_SERVICE, EXT_TRANSFER_SERVICE

FORMAT_JSON = 'json'
SUPPORTED_FORMATS = (FORMAT_JSON,)


class UnsupportedFormatError(ValueError):
    """Requested transfer format is not supported."""

    def __init__(self, direction: str, format: str):
        super().__init__(f"unsupported {direction} format: {format}")
        self.format = format


def resolve_format(direction: str, format: str | None) -> str:
    """Empty means json; anything unsupported raises UnsupportedFormatError."""
    if not format:
        return FORMAT_JSON
    if format not in SUPPORTED_FORMATS:
        raise UnsupportedFormatError(direction, format)
    return format


class TransferService(ABC):
    """Interface for transfer service."""

    @abstractmethod
    async def export_memos(self, identity: AuthIdentity, format: str, options: ExportOptions) -> ExportResult:
        """
        Export the identity's memos as an encoded snapshot.

        Raises:
            UnsupportedFormatError: If ``format`` is not supported
            FilterError: If the export filter is invalid
        """
        pass

    @abstractmethod
    async def import_memos(self, identity: AuthIdentity, data: bytes, format: str,
                           options: ImportOptions) -> ImportResult:
        """
        Import an encoded snapshot on behalf of the identity.

        Raises:
            UnsupportedFormatError: If ``format`` is not supported
            SnapshotDecodeError: If ``data`` is not a valid snapshot
            UnsupportedSnapshotVersionError: If the snapshot version is not supported
        """
        pass


# noinspection PyAbstractClass
class TransferServicePluginBase(Plugin):
    """Base plugin for transfer service - extensible for custom implementations."""
    PROVIDER_NAME: str = None

    def name(self) -> str:
        return f"{EXT_TRANSFER_SERVICE}|{self.PROVIDER_NAME}"

    def extension_point_name(self, v: Variables) -> str:
        return EXT_TRANSFER_SERVICE

    def is_enabled(self, v: Variables) -> bool:
        return enabled_option_pattern(self, v, MEMOPORT_TRANSFER_SERVICE, self_attr='PROVIDER_NAME')

    def on_registration(self, v: Variables) -> None:
        v.set_default_value(MEMOPORT_TRANSFER_SERVICE, DEFAULT_MEMOPORT_TRANSFER_SERVICE)

    def get_dependencies(self, v: Variables):
        return (EXT_SNAPSHOT_SERVICE, EXT_RECONCILER_SERVICE)
