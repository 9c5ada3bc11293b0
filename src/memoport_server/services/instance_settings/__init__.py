"""Instance settings service package."""
from .base import (
    InstanceSettingsServicePluginBase,
    EXT_INSTANCE_SETTINGS_SERVICE,
    InstanceSettingsService,
    SETTING_CONTENT_LENGTH_LIMIT,
)
from .default import DefaultInstanceSettingsService, DefaultInstanceSettingsServicePlugin

from scitrera_app_framework import Variables, get_extension


def get_instance_settings_service(v: Variables = None) -> InstanceSettingsService:
    """Get the instance settings service instance."""
    return get_extension(EXT_INSTANCE_SETTINGS_SERVICE, v)


__all__ = (
    'InstanceSettingsService',
    'InstanceSettingsServicePluginBase',
    'get_instance_settings_service',
    'EXT_INSTANCE_SETTINGS_SERVICE',
    'SETTING_CONTENT_LENGTH_LIMIT',
    'DefaultInstanceSettingsService',
    'DefaultInstanceSettingsServicePlugin',
)
