"""Liveness and storage readiness endpoints."""
import logging

from fastapi import APIRouter, status, Depends
from fastapi.responses import JSONResponse
from scitrera_app_framework import Plugin, Variables

from ..lifecycle.fastapi import get_logger, get_variables_dep
from ..services.storage import get_storage_backend
from . import EXT_MULTI_API_ROUTERS

router = APIRouter(tags=['health'])


@router.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check(
        v: Variables = Depends(get_variables_dep),
        logger: logging.Logger = Depends(get_logger),
) -> JSONResponse:
    """200 while the memo store answers its health check, 503 otherwise."""
    try:
        connected = await get_storage_backend(v).health_check()
    except Exception as e:
        logger.error("Storage health check failed: %s", e)
        connected = False

    body = {
        "status": "ready" if connected else "not_ready",
        "services": {"database": "connected" if connected else "disconnected"},
    }
    code = status.HTTP_200_OK if connected else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(content=body, status_code=code)


class HealthAPIPlugin(Plugin):

    def extension_point_name(self, v: Variables) -> str:
        return EXT_MULTI_API_ROUTERS

    def is_enabled(self, v: Variables) -> bool:
        return False  # registered only as a multi-extension

    def initialize(self, v: Variables, logger: logging.Logger) -> object | None:
        return router

    def is_multi_extension(self, v: Variables) -> bool:
        return True
