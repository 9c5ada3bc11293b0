"""Default memo service implementation."""
from logging import Logger
from typing import Optional

from scitrera_app_framework import get_logger
from scitrera_app_framework.api import Variables

from ..storage import EXT_STORAGE_BACKEND, StorageBackend
from ..instance_settings import EXT_INSTANCE_SETTINGS_SERVICE, InstanceSettingsService
from .base import MemoNotFoundError, MemoService, MemoServicePluginBase, check_content_length
from ...models.auth import AuthIdentity
from ...models.memo import Attachment, Location, Memo, MemoCreate, Visibility
from ...utils import generate_uid, rebuild_payload


class DefaultMemoService(MemoService):
    """Default memo service implementation."""

    def __init__(self, storage: StorageBackend, instance_settings: InstanceSettingsService, v: Variables = None):
        self.storage = storage
        self.instance_settings = instance_settings
        self.logger = get_logger(v, name=self.__class__.__name__)

    async def create_memo(
            self,
            identity: AuthIdentity,
            content: str,
            visibility: Visibility = Visibility.PRIVATE,
            pinned: bool = False,
            location: Optional[Location] = None,
    ) -> Memo:
        limit = await self.instance_settings.get_content_length_limit()
        check_content_length(content, limit)

        memo = await self.storage.create_memo(MemoCreate(
            uid=generate_uid(),
            creator_id=identity.user_id,
            content=content,
            visibility=visibility,
            pinned=pinned,
            payload=rebuild_payload(content, location),
        ))
        self.logger.info("Created memo %s for user %s", memo.uid, identity.user_id)
        return memo

    async def get_memo(self, uid: str) -> Optional[Memo]:
        return await self.storage.get_memo_by_uid(uid)

    async def _owned_memo(self, identity: AuthIdentity, uid: str) -> Memo:
        memo = await self.storage.get_memo_by_uid(uid)
        if memo is None or memo.creator_id != identity.user_id:
            raise MemoNotFoundError(uid)
        return memo

    async def delete_memo(self, identity: AuthIdentity, uid: str) -> None:
        memo = await self._owned_memo(identity, uid)
        await self.storage.delete_memo(memo.id)
        self.logger.info("Deleted memo %s for user %s", uid, identity.user_id)

    async def add_attachment(
            self,
            identity: AuthIdentity,
            uid: str,
            filename: str,
            mime_type: str = "",
            size: int = 0,
    ) -> Attachment:
        memo = await self._owned_memo(identity, uid)
        attachment = await self.storage.create_attachment(Attachment(
            uid=generate_uid(),
            memo_id=memo.id,
            creator_id=identity.user_id,
            filename=filename,
            type=mime_type,
            size=size,
        ))
        self.logger.debug("Attached %s to memo %s", filename, uid)
        return attachment


class DefaultMemoServicePlugin(MemoServicePluginBase):
    """Default memo service plugin."""
    PROVIDER_NAME = 'default'

    def initialize(self, v: Variables, logger: Logger) -> MemoService:
        return DefaultMemoService(
            storage=self.get_extension(EXT_STORAGE_BACKEND, v),
            instance_settings=self.get_extension(EXT_INSTANCE_SETTINGS_SERVICE, v),
            v=v,
        )
