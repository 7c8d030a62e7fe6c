# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Photo gallery endpoints (editors and administrators).

- GET / - List albums
- POST / - Save an album
- GET /{album_id} - Album with its images
- DELETE /{album_id} - Delete an album and its images
- POST /images - Add an image to an album
- DELETE /images/{image_id} - Delete an image
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from school_portal.api.dependencies import get_gallery_service, require_editor
from school_portal.api.middleware.auth import CurrentUser
from school_portal.domains.gallery import (
    AlbumNotFoundError,
    GalleryService,
    GalleryValidationError,
    ImageNotFoundError,
)
from school_portal.models.common import MessageResponse
from school_portal.models.media import AlbumDetail, AlbumSchema, GalleryImageSchema

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[AlbumSchema], summary="List albums")
async def list_albums(
    current_user: CurrentUser = Depends(require_editor),
    service: GalleryService = Depends(get_gallery_service),
) -> list[AlbumSchema]:
    return await service.list_albums()


@router.post("", response_model=AlbumSchema, summary="Save album")
async def save_album(
    data: AlbumSchema,
    current_user: CurrentUser = Depends(require_editor),
    service: GalleryService = Depends(get_gallery_service),
) -> AlbumSchema:
    try:
        return await service.save_album(data)
    except GalleryValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except AlbumNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post(
    "/images",
    response_model=GalleryImageSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Add image",
)
async def add_image(
    data: GalleryImageSchema,
    current_user: CurrentUser = Depends(require_editor),
    service: GalleryService = Depends(get_gallery_service),
) -> GalleryImageSchema:
    try:
        return await service.add_image(data)
    except GalleryValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except AlbumNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/images/{image_id}", response_model=MessageResponse, summary="Delete image")
async def delete_image(
    image_id: str,
    current_user: CurrentUser = Depends(require_editor),
    service: GalleryService = Depends(get_gallery_service),
) -> MessageResponse:
    try:
        await service.delete_image(image_id)
    except ImageNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MessageResponse(message="Image deleted")


@router.get("/{album_id}", response_model=AlbumDetail, summary="Get album")
async def get_album(
    album_id: str,
    current_user: CurrentUser = Depends(require_editor),
    service: GalleryService = Depends(get_gallery_service),
) -> AlbumDetail:
    try:
        return await service.get_album(album_id)
    except AlbumNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{album_id}", response_model=MessageResponse, summary="Delete album")
async def delete_album(
    album_id: str,
    current_user: CurrentUser = Depends(require_editor),
    service: GalleryService = Depends(get_gallery_service),
) -> MessageResponse:
    try:
        await service.delete_album(album_id)
    except AlbumNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MessageResponse(message="Album deleted")
