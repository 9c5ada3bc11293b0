"""
Import Reconciler - Base classes.

The reconciler decides, for one decoded record, whether to create, update or
reject it, applies the decision unless the import is a dry run, and reports
a tagged per-record result.
"""
from abc import ABC, abstractmethod

from scitrera_app_framework.api import Plugin, Variables, enabled_option_pattern

from ...config import MEMOPORT_RECONCILER_SERVICE, DEFAULT_MEMOPORT_RECONCILER_SERVICE
from ...models.auth import AuthIdentity
from ...models.snapshot import Record
from ...models.transfer import ImportOptions, RecordResult

from .._constants import (
    EXT_STORAGE_BACKEND, EXT_INSTANCE_SETTINGS_SERVICE, EXT_REFERENCE_IMPORTER, EXT_RECONCILER_SERVICE,
)


class ImportReconciler(ABC):
    """Interface for import reconciler."""

    @abstractmethod
    async def reconcile(self, identity: AuthIdentity, record: Record, options: ImportOptions) -> RecordResult:
        """
        Reconcile one record against the store.

        Record-level failures are returned as RecordReject rather than raised.
        """
        pass


# noinspection PyAbstractClass
class ImportReconcilerPluginBase(Plugin):
    """Base plugin for import reconciler - extensible for custom implementations."""
    PROVIDER_NAME: str = None

    def name(self) -> str:
        return f"{EXT_RECONCILER_SERVICE}|{self.PROVIDER_NAME}"

    def extension_point_name(self, v: Variables) -> str:
        return EXT_RECONCILER_SERVICE

    def is_enabled(self, v: Variables) -> bool:
        return enabled_option_pattern(self, v, MEMOPORT_RECONCILER_SERVICE, self_attr='PROVIDER_NAME')

    def on_registration(self, v: Variables) -> None:
        v.set_default_value(MEMOPORT_RECONCILER_SERVICE, DEFAULT_MEMOPORT_RECONCILER_SERVICE)

    def get_dependencies(self, v: Variables):
        return (EXT_STORAGE_BACKEND, EXT_INSTANCE_SETTINGS_SERVICE, EXT_REFERENCE_IMPORTER)
