"""
Reference Importer - Base classes.

Attachments and relations of an imported memo are handed to a reference
importer after the memo itself is written. Providers decide how much of
them can be reconstructed.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from scitrera_app_framework.api import Plugin, Variables, enabled_option_pattern

from ...config import MEMOPORT_REFERENCE_IMPORTER, DEFAULT_MEMOPORT_REFERENCE_IMPORTER
from ...models.memo import Memo
from ...models.snapshot import AttachmentRef, RelationRef

from .._constants import EXT_STORAGE_BACKEND, EXT_REFERENCE_IMPORTER


@dataclass
class ReferenceImportResult:
    """Counts and warnings from importing one memo's references."""

    imported: int = 0
    warnings: list[str] = field(default_factory=list)


class ReferenceImporter(ABC):
    """Interface for reference importers."""

    @abstractmethod
    async def import_attachments(self, memo: Memo, attachments: list[AttachmentRef]) -> ReferenceImportResult:
        """Import attachment references for a memo that was just written."""
        pass

    @abstractmethod
    async def import_relations(self, memo: Memo, relations: list[RelationRef]) -> ReferenceImportResult:
        """Import relation references for a memo that was just written."""
        pass


# noinspection PyAbstractClass
class ReferenceImporterPluginBase(Plugin):
    """Base plugin for reference importers - extensible for custom implementations."""
    PROVIDER_NAME: str = None

    def name(self) -> str:
        return f"{EXT_REFERENCE_IMPORTER}|{self.PROVIDER_NAME}"

    def extension_point_name(self, v: Variables) -> str:
        return EXT_REFERENCE_IMPORTER

    def is_enabled(self, v: Variables) -> bool:
        return enabled_option_pattern(self, v, MEMOPORT_REFERENCE_IMPORTER, self_attr='PROVIDER_NAME')

    def on_registration(self, v: Variables) -> None:
        v.set_default_value(MEMOPORT_REFERENCE_IMPORTER, DEFAULT_MEMOPORT_REFERENCE_IMPORTER)

    def get_dependencies(self, v: Variables):
        return (EXT_STORAGE_BACKEND,)
