# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Video library endpoints (editors and administrators)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from school_portal.api.dependencies import get_video_service, require_editor
from school_portal.api.middleware.auth import CurrentUser
from school_portal.domains.videos import VideoNotFoundError, VideoService, VideoValidationError
from school_portal.models.common import MessageResponse
from school_portal.models.media import VideoSchema

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[VideoSchema], summary="List videos")
async def list_videos(
    current_user: CurrentUser = Depends(require_editor),
    service: VideoService = Depends(get_video_service),
) -> list[VideoSchema]:
    return await service.list_videos()


@router.post("", response_model=VideoSchema, summary="Save video")
async def save_video(
    data: VideoSchema,
    current_user: CurrentUser = Depends(require_editor),
    service: VideoService = Depends(get_video_service),
) -> VideoSchema:
    try:
        return await service.save_video(data)
    except VideoValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except VideoNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{video_id}", response_model=MessageResponse, summary="Delete video")
async def delete_video(
    video_id: str,
    current_user: CurrentUser = Depends(require_editor),
    service: VideoService = Depends(get_video_service),
) -> MessageResponse:
    try:
        await service.delete_video(video_id)
    except VideoNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MessageResponse(message="Video deleted")
