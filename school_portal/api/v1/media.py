# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Media upload endpoints (editors and administrators)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status

from school_portal.api.dependencies import get_media_service, require_editor
from school_portal.api.middleware.auth import CurrentUser
from school_portal.domains.media import MediaService, MediaStorageError, MediaValidationError
from school_portal.models.common import MessageResponse
from school_portal.models.media import UploadResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/upload",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload file",
    description="Store an image or office/PDF document and return its public URL.",
)
async def upload_file(
    file: UploadFile = File(...),
    current_user: CurrentUser = Depends(require_editor),
    service: MediaService = Depends(get_media_service),
) -> UploadResponse:
    """Upload a file.

    Raises:
        HTTPException: 400 for refused files, 502 if storage fails.
    """
    # At most one byte past the limit.
    data = await file.read(service.max_bytes + 1)
    try:
        return await service.upload(file.filename, file.content_type, data)
    except MediaValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except MediaStorageError as e:
        logger.error("Upload failed: %s", str(e))
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))


@router.delete("", response_model=MessageResponse, summary="Delete file")
async def delete_file(
    path: Annotated[str, Query(description="Storage path returned by the upload")],
    current_user: CurrentUser = Depends(require_editor),
    service: MediaService = Depends(get_media_service),
) -> MessageResponse:
    try:
        await service.delete(path)
    except MediaValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except MediaStorageError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    return MessageResponse(message="File deleted")
