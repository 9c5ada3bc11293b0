"""
Instance Settings Service - Base classes.

Instance settings are host-wide values stored in the primary storage, such
as the memo content length limit.
"""
from abc import ABC, abstractmethod

from scitrera_app_framework.api import Plugin, Variables, enabled_option_pattern

from ...config import (
    MEMOPORT_INSTANCE_SETTINGS_SERVICE, DEFAULT_MEMOPORT_INSTANCE_SETTINGS_SERVICE,
    MEMOPORT_CONTENT_LENGTH_LIMIT, DEFAULT_MEMOPORT_CONTENT_LENGTH_LIMIT,
)

from .._constants import EXT_STORAGE_BACKEND, EXT_INSTANCE_SETTINGS_SERVICE

# Storage key of the content length limit setting
SETTING_CONTENT_LENGTH_LIMIT = 'memo_content_length_limit'


class InstanceSettingsService(ABC):
    """Interface for instance settings service."""

    @abstractmethod
    async def get_content_length_limit(self) -> int:
        """Current memo content limit in UTF-8 bytes."""
        pass

    @abstractmethod
    async def set_content_length_limit(self, limit: int) -> None:
        """Persist a new memo content limit."""
        pass


# noinspection PyAbstractClass
class InstanceSettingsServicePluginBase(Plugin):
    """Base plugin for instance settings service - extensible for custom implementations."""
    PROVIDER_NAME: str = None

    def name(self) -> str:
        return f"{EXT_INSTANCE_SETTINGS_SERVICE}|{self.PROVIDER_NAME}"

    def extension_point_name(self, v: Variables) -> str:
        return EXT_INSTANCE_SETTINGS_SERVICE

    def is_enabled(self, v: Variables) -> bool:
        return enabled_option_pattern(self, v, MEMOPORT_INSTANCE_SETTINGS_SERVICE, self_attr='PROVIDER_NAME')

    def on_registration(self, v: Variables) -> None:
        v.set_default_value(MEMOPORT_INSTANCE_SETTINGS_SERVICE, DEFAULT_MEMOPORT_INSTANCE_SETTINGS_SERVICE)
        v.set_default_value(MEMOPORT_CONTENT_LENGTH_LIMIT, DEFAULT_MEMOPORT_CONTENT_LENGTH_LIMIT)

    def get_dependencies(self, v: Variables):
        return (EXT_STORAGE_BACKEND,)
