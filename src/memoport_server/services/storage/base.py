"""Abstract storage backend interface."""
from abc import ABC, abstractmethod
from logging import Logger
from typing import Optional

from scitrera_app_framework import get_logger
from scitrera_app_framework.api import Variables, Plugin, enabled_option_pattern

from ...config import MEMOPORT_STORAGE_BACKEND, DEFAULT_MEMOPORT_STORAGE_BACKEND
from ...models.memo import Attachment, FindMemo, Memo, MemoCreate, MemoRelation

from .._constants import EXT_STORAGE_BACKEND


class StorageBackend(ABC):
    """
    Abstract base class for storage backends.

    Memos have an internal integer ``id`` that is only meaningful inside one
    store, and a ``uid`` that is unique across the whole store.
    """

    def __init__(self, v: Variables = None):
        self.logger = get_logger(v, name=self.__class__.__name__)

    # Lifecycle
    @abstractmethod
    async def connect(self) -> None:
        """Initialize storage connection."""
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Close storage connection."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if storage is healthy."""
        pass

    # Memo operations
    @abstractmethod
    async def create_memo(self, create: MemoCreate) -> Memo:
        """Store a new memo. Raises ValueError if the UID is already taken."""
        pass

    @abstractmethod
    async def get_memo(self, memo_id: int) -> Optional[Memo]:
        """Get memo by internal id."""
        pass

    @abstractmethod
    async def get_memo_by_uid(self, uid: str) -> Optional[Memo]:
        """Get memo by UID, regardless of owner."""
        pass

    @abstractmethod
    async def update_memo(self, memo_id: int, **updates) -> Optional[Memo]:
        """
        Update memo fields.

        ``updated_at`` is set to now unless it is passed explicitly.
        Returns None if the memo does not exist.
        """
        pass

    @abstractmethod
    async def delete_memo(self, memo_id: int) -> bool:
        """Delete a memo along with its attachments and relations."""
        pass

    @abstractmethod
    async def list_memos(self, find: FindMemo) -> list[Memo]:
        """
        List memos matching the criteria, oldest first.

        Raises:
            FilterError: If ``find.filter`` is not a valid expression
        """
        pass

    # Attachment operations
    @abstractmethod
    async def create_attachment(self, attachment: Attachment) -> Attachment:
        """Store attachment metadata."""
        pass

    @abstractmethod
    async def list_attachments(self, memo_id: int) -> list[Attachment]:
        """List attachment metadata for a memo."""
        pass

    # Relation operations
    @abstractmethod
    async def create_memo_relation(self, relation: MemoRelation) -> MemoRelation:
        """Create (or keep) a relation between two memos."""
        pass

    @abstractmethod
    async def list_memo_relations(self, memo_id: int) -> list[MemoRelation]:
        """List relations whose source is the given memo."""
        pass

    # Instance settings
    @abstractmethod
    async def get_instance_setting(self, key: str) -> Optional[str]:
        """Get a raw instance setting value."""
        pass

    @abstractmethod
    async def set_instance_setting(self, key: str, value: str) -> None:
        """Persist a raw instance setting value."""
        pass


# noinspection PyAbstractClass
class StoragePluginBase(Plugin):
    PROVIDER_NAME: str = None

    def name(self) -> str:
        return f"{EXT_STORAGE_BACKEND}|{self.PROVIDER_NAME}"

    def extension_point_name(self, v: Variables) -> str:
        return EXT_STORAGE_BACKEND

    def is_enabled(self, v: Variables) -> bool:
        return enabled_option_pattern(self, v, MEMOPORT_STORAGE_BACKEND, self_attr='PROVIDER_NAME')

    def on_registration(self, v: Variables) -> None:
        v.set_default_value(MEMOPORT_STORAGE_BACKEND, DEFAULT_MEMOPORT_STORAGE_BACKEND)

    async def async_ready(self, v: Variables, logger: Logger, value: object | None) -> None:
        if isinstance(value, StorageBackend):
            try:
                await value.connect()
                logger.info("Storage backend '%s' connected successfully.", self.PROVIDER_NAME)
            except Exception as e:
                logger.error("Error connecting storage backend '%s': %s", self.PROVIDER_NAME, e)
                raise
        return

    async def async_stopping(self, v: Variables, logger: Logger, value: object | None) -> None:
        if isinstance(value, StorageBackend):
            try:
                await value.disconnect()
                logger.info("Storage backend '%s' disconnected successfully.", self.PROVIDER_NAME)
            except Exception as e:
                logger.error("Error disconnecting storage backend '%s': %s", self.PROVIDER_NAME, e)
        return
