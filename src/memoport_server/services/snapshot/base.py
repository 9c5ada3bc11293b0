"""
Snapshot Service - Base classes.

Builds portable snapshots from the requester's own memos.
"""
from abc import ABC, abstractmethod

from scitrera_app_framework.api import Plugin, Variables, enabled_option_pattern

from ...config import MEMOPORT_SNAPSHOT_SERVICE, DEFAULT_MEMOPORT_SNAPSHOT_SERVICE
from ...models.auth import AuthIdentity
from ...models.snapshot import ExportOptions, Snapshot

from .._constants import EXT_STORAGE_BACKEND, EXT_SNAPSHOT_SERVICE


class SnapshotBuilder(ABC):
    """Interface for snapshot builder."""

    @abstractmethod
    async def build(self, identity: AuthIdentity, options: ExportOptions) -> Snapshot:
        """
        Assemble a snapshot of the identity's memos.

        Raises:
            FilterError: If ``options.filter`` is invalid
        """
        pass


# noinspection PyAbstractClass
class SnapshotBuilderPluginBase(Plugin):
    """Base plugin for snapshot builder - extensible for custom implementations."""
    PROVIDER_NAME: str = None

    def name(self) -> str:
        return f"{EXT_SNAPSHOT_SERVICE}|{self.PROVIDER_NAME}"

    def extension_point_name(self, v: Variables) -> str:
        return EXT_SNAPSHOT_SERVICE

    def is_enabled(self, v: Variables) -> bool:
        return enabled_option_pattern(self, v, MEMOPORT_SNAPSHOT_SERVICE, self_attr='PROVIDER_NAME')

    def on_registration(self, v: Variables) -> None:
        v.set_default_value(MEMOPORT_SNAPSHOT_SERVICE, DEFAULT_MEMOPORT_SNAPSHOT_SERVICE)

    def get_dependencies(self, v: Variables):
        return (EXT_STORAGE_BACKEND,)
