"""
Instance settings endpoints.

Endpoints:
- GET /api/v1/instance/settings - Read instance settings
- PUT /api/v1/instance/settings - Change instance settings

A new content length limit applies to the next record an import checks,
including records later in an import that is already running.
"""
import logging

from fastapi import APIRouter, HTTPException, Depends, status
from scitrera_app_framework import Plugin, Variables

from .. import EXT_MULTI_API_ROUTERS
from ...lifecycle.fastapi import get_logger
from ...models.auth import AuthIdentity
from ...services.instance_settings import InstanceSettingsService

from .deps import get_identity, get_instance_settings_service
from .schemas import ErrorResponse, InstanceSettingsResponse, InstanceSettingsUpdateRequest

router = APIRouter(tags=["instance"])


@router.get("/api/v1/instance/settings", response_model=InstanceSettingsResponse)
async def get_settings(
        identity: AuthIdentity = Depends(get_identity),
        settings: InstanceSettingsService = Depends(get_instance_settings_service),
) -> InstanceSettingsResponse:
    return InstanceSettingsResponse(content_length_limit=await settings.get_content_length_limit())


@router.put(
    "/api/v1/instance/settings",
    response_model=InstanceSettingsResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid setting value"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)
async def update_settings(
        request: InstanceSettingsUpdateRequest,
        identity: AuthIdentity = Depends(get_identity),
        settings: InstanceSettingsService = Depends(get_instance_settings_service),
        logger: logging.Logger = Depends(get_logger),
) -> InstanceSettingsResponse:
    try:
        await settings.set_content_length_limit(request.content_length_limit)
        logger.info("User %s set content length limit to %d", identity.user_id, request.content_length_limit)
        return InstanceSettingsResponse(content_length_limit=await settings.get_content_length_limit())
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error("Failed to update instance settings: %s", e, exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update settings")


class InstanceAPIPlugin(Plugin):

    def extension_point_name(self, v: Variables) -> str:
        return EXT_MULTI_API_ROUTERS

    def initialize(self, v: Variables, logger: logging.Logger) -> object | None:
        return router

    def is_enabled(self, v: Variables) -> bool:
        return False  # registered only as a multi-extension

    def is_multi_extension(self, v: Variables) -> bool:
        return True
