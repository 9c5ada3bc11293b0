"""
Memo API endpoints.

Endpoints:
- POST /api/v1/memos:export - Export the caller's memos as a snapshot
- POST /api/v1/memos:import - Import a snapshot for the caller
- POST /api/v1/memos - Create a memo
- GET /api/v1/memos/{uid} - Get a memo by UID
- DELETE /api/v1/memos/{uid} - Delete a memo
- POST /api/v1/memos/{uid}/attachments - Record attachment metadata on a memo
"""
import base64
import binascii
import logging

from fastapi import APIRouter, HTTPException, Depends, Response, status
from scitrera_app_framework import Plugin, Variables

from .. import EXT_MULTI_API_ROUTERS
from ...lifecycle.fastapi import get_logger
from ...models.auth import AuthIdentity
from ...models.snapshot import ExportOptions
from ...models.transfer import ImportOptions
from ...services.memo import MemoNotFoundError, MemoService
from ...services.transfer import TransferService

from .deps import get_identity, get_memo_service, get_transfer_service
from .schemas import (
    AttachmentCreateRequest,
    AttachmentResponse,
    ExportMemosRequest,
    ExportMemosResponse,
    ImportMemosRequest,
    ImportMemosResponse,
    MemoCreateRequest,
    MemoResponse,
    ErrorResponse,
)

router = APIRouter(tags=["memos"])


def _decode_data(data: str) -> bytes:
    try:
        return base64.b64decode("".join(data.split()), validate=True)
    except binascii.Error as e:
        raise ValueError(f"invalid base64 data: {e}") from e


@router.post(
    "/api/v1/memos:export",
    response_model=ExportMemosResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid format or filter"},
        401: {"model": ErrorResponse, "description": "Authentication failed"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)
async def export_memos(
        request: ExportMemosRequest,
        identity: AuthIdentity = Depends(get_identity),
        transfer_service: TransferService = Depends(get_transfer_service),
        logger: logging.Logger = Depends(get_logger),
) -> ExportMemosResponse:
    """
    Export the caller's memos.

    Only memos created by the caller are exported, whatever the filter says.
    """
    try:
        result = await transfer_service.export_memos(
            identity,
            request.format,
            ExportOptions(
                filter=request.filter,
                exclude_archived=request.exclude_archived,
                include_attachments=request.include_attachments,
                include_relations=request.include_relations,
            ),
        )
        return ExportMemosResponse(
            data=base64.b64encode(result.data).decode("ascii"),
            format=result.format,
            filename=result.filename,
            memo_count=result.memo_count,
            size_bytes=result.size_bytes,
        )
    except HTTPException:
        raise
    except ValueError as e:
        logger.warning("Invalid export request: %s", e)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error("Failed to export memos for user %s: %s", identity.user_id, e, exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to export memos")


@router.post(
    "/api/v1/memos:import",
    response_model=ImportMemosResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid format, data or snapshot version"},
        401: {"model": ErrorResponse, "description": "Authentication failed"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)
async def import_memos(
        request: ImportMemosRequest,
        identity: AuthIdentity = Depends(get_identity),
        transfer_service: TransferService = Depends(get_transfer_service),
        logger: logging.Logger = Depends(get_logger),
) -> ImportMemosResponse:
    """
    Import a snapshot for the caller.

    Records are reconciled one by one; a rejected record is reported in
    ``errors`` and does not stop the batch.
    """
    try:
        result = await transfer_service.import_memos(
            identity,
            _decode_data(request.data),
            request.format,
            ImportOptions(
                overwrite_existing=request.overwrite_existing,
                validate_only=request.validate_only,
                preserve_timestamps=request.preserve_timestamps,
                skip_attachments=request.skip_attachments,
                skip_relations=request.skip_relations,
            ),
        )
        return ImportMemosResponse(**result.model_dump())
    except HTTPException:
        raise
    except ValueError as e:
        logger.warning("Invalid import request: %s", e)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error("Failed to import memos for user %s: %s", identity.user_id, e, exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to import memos")


@router.post(
    "/api/v1/memos",
    response_model=MemoResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        401: {"model": ErrorResponse, "description": "Authentication failed"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)
async def create_memo(
        request: MemoCreateRequest,
        identity: AuthIdentity = Depends(get_identity),
        memo_service: MemoService = Depends(get_memo_service),
        logger: logging.Logger = Depends(get_logger),
) -> MemoResponse:
    """Create a memo owned by the caller."""
    try:
        memo = await memo_service.create_memo(
            identity,
            content=request.content,
            visibility=request.visibility,
            pinned=request.pinned,
            location=request.location,
        )
        return MemoResponse(memo=memo)
    except HTTPException:
        raise
    except ValueError as e:
        logger.warning("Invalid memo creation request: %s", e)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error("Failed to create memo: %s", e, exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create memo")


@router.get(
    "/api/v1/memos/{uid}",
    response_model=MemoResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Memo not found"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)
async def get_memo(
        uid: str,
        identity: AuthIdentity = Depends(get_identity),
        memo_service: MemoService = Depends(get_memo_service),
        logger: logging.Logger = Depends(get_logger),
) -> MemoResponse:
    """Get a memo by UID."""
    try:
        memo = await memo_service.get_memo(uid)
        if memo is None or memo.creator_id != identity.user_id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Memo not found: {uid}")
        return MemoResponse(memo=memo)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("Failed to get memo %s: %s", uid, e, exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to get memo")


@router.delete(
    "/api/v1/memos/{uid}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        404: {"model": ErrorResponse, "description": "Memo not found"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)
async def delete_memo(
        uid: str,
        identity: AuthIdentity = Depends(get_identity),
        memo_service: MemoService = Depends(get_memo_service),
        logger: logging.Logger = Depends(get_logger),
) -> Response:
    """Delete one of the caller's memos with its attachments and relations."""
    try:
        await memo_service.delete_memo(identity, uid)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except MemoNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Memo not found: {uid}")
    except Exception as e:
        logger.error("Failed to delete memo %s: %s", uid, e, exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete memo")


@router.post(
    "/api/v1/memos/{uid}/attachments",
    response_model=AttachmentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"model": ErrorResponse, "description": "Memo not found"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)
async def add_attachment(
        uid: str,
        request: AttachmentCreateRequest,
        identity: AuthIdentity = Depends(get_identity),
        memo_service: MemoService = Depends(get_memo_service),
        logger: logging.Logger = Depends(get_logger),
) -> AttachmentResponse:
    """
    Record attachment metadata on one of the caller's memos.

    Exports list it under the memo when ``include_attachments`` is set.
    """
    try:
        attachment = await memo_service.add_attachment(
            identity, uid, filename=request.filename, mime_type=request.type, size=request.size,
        )
        return AttachmentResponse(attachment=attachment)
    except MemoNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Memo not found: {uid}")
    except Exception as e:
        logger.error("Failed to add attachment to memo %s: %s", uid, e, exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to add attachment")


class MemosAPIPlugin(Plugin):
    """Plugin to register memo API routes."""

    def extension_point_name(self, v: Variables) -> str:
        return EXT_MULTI_API_ROUTERS

    def initialize(self, v: Variables, logger: logging.Logger) -> object | None:
        return router

    def is_enabled(self, v: Variables) -> bool:
        return False  # disable "single" extension for a multi-extension plugin

    def is_multi_extension(self, v: Variables) -> bool:
        return True
