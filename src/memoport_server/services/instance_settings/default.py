"""Default instance settings service backed by the primary storage."""
from logging import Logger

from scitrera_app_framework import get_logger
from scitrera_app_framework.api import Variables

from ..storage import EXT_STORAGE_BACKEND, StorageBackend
from .base import (
    InstanceSettingsService,
    InstanceSettingsServicePluginBase,
    SETTING_CONTENT_LENGTH_LIMIT,
)
from ...config import MEMOPORT_CONTENT_LENGTH_LIMIT, DEFAULT_MEMOPORT_CONTENT_LENGTH_LIMIT


class DefaultInstanceSettingsService(InstanceSettingsService):
    """
    Reads settings from storage on every call, so changes made while an
    import is running apply to the remaining records.
    """

    def __init__(self, storage: StorageBackend,
                 default_content_length_limit: int = DEFAULT_MEMOPORT_CONTENT_LENGTH_LIMIT,
                 v: Variables = None):
        self.storage = storage
        self.default_content_length_limit = default_content_length_limit
        self.logger = get_logger(v, name=self.__class__.__name__)

    async def get_content_length_limit(self) -> int:
        raw = await self.storage.get_instance_setting(SETTING_CONTENT_LENGTH_LIMIT)
        if raw is None:
            return self.default_content_length_limit
        try:
            return int(raw)
        except ValueError:
            self.logger.warning("Ignoring invalid %s setting: %r", SETTING_CONTENT_LENGTH_LIMIT, raw)
            return self.default_content_length_limit

    async def set_content_length_limit(self, limit: int) -> None:
        if limit <= 0:
            raise ValueError("content length limit must be positive")
        await self.storage.set_instance_setting(SETTING_CONTENT_LENGTH_LIMIT, str(limit))
        self.logger.info("Content length limit set to %d", limit)


class DefaultInstanceSettingsServicePlugin(InstanceSettingsServicePluginBase):
    """Default instance settings service plugin."""
    PROVIDER_NAME = 'default'

    def initialize(self, v: Variables, logger: Logger) -> InstanceSettingsService:
        storage: StorageBackend = self.get_extension(EXT_STORAGE_BACKEND, v)
        return DefaultInstanceSettingsService(
            storage=storage,
            default_content_length_limit=v.environ(
                MEMOPORT_CONTENT_LENGTH_LIMIT,
                default=DEFAULT_MEMOPORT_CONTENT_LENGTH_LIMIT,
                type_fn=int,
            ),
            v=v,
        )
