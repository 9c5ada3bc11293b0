"""
Memo Service - Base classes.

Native memo authoring. Imported memos go through the same content limit and
payload rebuild as memos created here.
"""
from abc import ABC, abstractmethod
from typing import Optional

from scitrera_app_framework.api import Plugin, Variables, enabled_option_pattern

from ...config import MEMOPORT_MEMO_SERVICE, DEFAULT_MEMOPORT_MEMO_SERVICE
from ...models.auth import AuthIdentity
from ...models.memo import Attachment, Location, Memo, Visibility

from .._constants import EXT_STORAGE_BACKEND, EXT_INSTANCE_SETTINGS_SERVICE, EXT_MEMO_SERVICE


class ContentTooLongError(ValueError):
    """Memo content exceeds the instance limit."""

    def __init__(self, limit: int):
        super().__init__(f"content too long (max {limit} characters)")
        self.limit = limit


class MemoNotFoundError(LookupError):
    """No memo with that UID is owned by the caller."""

    def __init__(self, uid: str):
        super().__init__(f"memo not found: {uid}")
        self.uid = uid


def check_content_length(content: str, limit: int) -> None:
    """
    Raise ContentTooLongError if ``content`` is over ``limit``.

    Length is measured in UTF-8 bytes.
    """
    if len(content.encode("utf-8")) > limit:
        raise ContentTooLongError(limit)


class MemoService(ABC):
    """Interface for memo service."""

    @abstractmethod
    async def create_memo(
            self,
            identity: AuthIdentity,
            content: str,
            visibility: Visibility = Visibility.PRIVATE,
            pinned: bool = False,
            location: Optional[Location] = None,
    ) -> Memo:
        """Create a memo owned by ``identity`` with a fresh UID."""
        pass

    @abstractmethod
    async def get_memo(self, uid: str) -> Optional[Memo]:
        """Get a memo by UID."""
        pass

    @abstractmethod
    async def delete_memo(self, identity: AuthIdentity, uid: str) -> None:
        """Delete one of the caller's memos with its attachments and relations."""
        pass

    @abstractmethod
    async def add_attachment(
            self,
            identity: AuthIdentity,
            uid: str,
            filename: str,
            mime_type: str = "",
            size: int = 0,
    ) -> Attachment:
        """
        Record attachment metadata on one of the caller's memos.

        Only the descriptor is stored; file contents live elsewhere.
        """
        pass


# noinspection PyAbstractClass
class MemoServicePluginBase(Plugin):
    """Base plugin for memo service - extensible for custom implementations."""
    PROVIDER_NAME: str = None

    def name(self) -> str:
        return f"{EXT_MEMO_SERVICE}|{self.PROVIDER_NAME}"

    def extension_point_name(self, v: Variables) -> str:
        return EXT_MEMO_SERVICE

    def is_enabled(self, v: Variables) -> bool:
        return enabled_option_pattern(self, v, MEMOPORT_MEMO_SERVICE, self_attr='PROVIDER_NAME')

    def on_registration(self, v: Variables) -> None:
        v.set_default_value(MEMOPORT_MEMO_SERVICE, DEFAULT_MEMOPORT_MEMO_SERVICE)

    def get_dependencies(self, v: Variables):
        return (EXT_STORAGE_BACKEND, EXT_INSTANCE_SETTINGS_SERVICE)
