"""Memo service package."""
from .base import (
    MemoServicePluginBase,
    EXT_MEMO_SERVICE,
    MemoService,
    ContentTooLongError,
    MemoNotFoundError,
    check_content_length,
)
from .default import DefaultMemoService, DefaultMemoServicePlugin

from scitrera_app_framework import Variables, get_extension


def get_memo_service(v: Variables = None) -> MemoService:
    """Get the memo service instance."""
    return get_extension(EXT_MEMO_SERVICE, v)


__all__ = (
    'MemoService',
    'MemoServicePluginBase',
    'get_memo_service',
    'EXT_MEMO_SERVICE',
    'ContentTooLongError',
    'MemoNotFoundError',
    'check_content_length',
    'DefaultMemoService',
    'DefaultMemoServicePlugin',
)
