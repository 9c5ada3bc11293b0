"""Transfer (export / import) service package."""
from .base import (
    TransferServicePluginBase,
    EXT_TRANSFER_SERVICE,
    TransferService,
    UnsupportedFormatError,
    resolve_format,
    FORMAT_JSON,
)
from .default import DefaultTransferService, DefaultTransferServicePlugin, export_filename

from scitrera_app_framework import Variables, get_extension


def get_transfer_service(v: Variables = None) -> TransferService:
    """Get the transfer service instance."""
    return get_extension(EXT_TRANSFER_SERVICE, v)


__all__ = (
    'TransferService',
    'TransferServicePluginBase',
    'get_transfer_service',
    'EXT_TRANSFER_SERVICE',
    'UnsupportedFormatError',
    'resolve_format',
    'FORMAT_JSON',
    'DefaultTransferService',
    'DefaultTransferServicePlugin',
    'export_filename',
)
