"""Import reconciler package."""
from .base import (
    ImportReconcilerPluginBase,
    EXT_RECONCILER_SERVICE,
    ImportReconciler,
)
from .aggregator import aggregate_results, reject_message
from .default import DefaultImportReconciler, DefaultImportReconcilerPlugin

from scitrera_app_framework import Variables, get_extension


def get_import_reconciler(v: Variables = None) -> ImportReconciler:
    """Get the import reconciler instance."""
    return get_extension(EXT_RECONCILER_SERVICE, v)


__all__ = (
    'ImportReconciler',
    'ImportReconcilerPluginBase',
    'get_import_reconciler',
    'EXT_RECONCILER_SERVICE',
    'aggregate_results',
    'reject_message',
    'DefaultImportReconciler',
    'DefaultImportReconcilerPlugin',
)
