"""Shared FastAPI dependencies for v1 API."""

import logging

from fastapi import Depends, HTTPException, Request
from scitrera_app_framework import Variables, get_extension

from ...lifecycle.fastapi import get_logger, get_variables_dep
from ...models.auth import AuthIdentity
from ...services.authentication import AuthenticationService, AuthenticationError, EXT_AUTHENTICATION_SERVICE
from ...services.instance_settings import InstanceSettingsService, EXT_INSTANCE_SETTINGS_SERVICE
from ...services.memo import MemoService, EXT_MEMO_SERVICE
from ...services.transfer import TransferService, EXT_TRANSFER_SERVICE


async def get_auth_service(v: Variables = Depends(get_variables_dep)) -> AuthenticationService:
    """Get authentication service instance."""
    return get_extension(EXT_AUTHENTICATION_SERVICE, v)


async def get_memo_service(v: Variables = Depends(get_variables_dep)) -> MemoService:
    """Get memo service instance."""
    return get_extension(EXT_MEMO_SERVICE, v)


async def get_instance_settings_service(v: Variables = Depends(get_variables_dep)) -> InstanceSettingsService:
    return get_extension(EXT_INSTANCE_SETTINGS_SERVICE, v)


async def get_transfer_service(v: Variables = Depends(get_variables_dep)) -> TransferService:
    """Get transfer service instance."""
    return get_extension(EXT_TRANSFER_SERVICE, v)


async def get_identity(
        http_request: Request,
        auth_service: AuthenticationService = Depends(get_auth_service),
        logger: logging.Logger = Depends(get_logger),
) -> AuthIdentity:
    """Resolve the caller, mapping authentication failures to their HTTP status."""
    try:
        return await auth_service.authenticate(http_request)
    except AuthenticationError as e:
        logger.warning("Authentication failed: %s", e)
        raise HTTPException(status_code=e.status_code, detail=e.message)
