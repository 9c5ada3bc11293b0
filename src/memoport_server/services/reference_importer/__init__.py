"""Reference importer package (attachments and relations of imported memos)."""
from .base import (
    ReferenceImporterPluginBase,
    EXT_REFERENCE_IMPORTER,
    ReferenceImporter,
    ReferenceImportResult,
)
from .none import NoneReferenceImporter, NoneReferenceImporterPlugin
from .relations import RelationLinkingReferenceImporter, RelationLinkingReferenceImporterPlugin

from scitrera_app_framework import Variables, get_extension


def get_reference_importer(v: Variables = None) -> ReferenceImporter:
    """Get the reference importer instance."""
    return get_extension(EXT_REFERENCE_IMPORTER, v)


__all__ = (
    'ReferenceImporter',
    'ReferenceImporterPluginBase',
    'ReferenceImportResult',
    'get_reference_importer',
    'EXT_REFERENCE_IMPORTER',
    'NoneReferenceImporter',
    'NoneReferenceImporterPlugin',
    'RelationLinkingReferenceImporter',
    'RelationLinkingReferenceImporterPlugin',
)
