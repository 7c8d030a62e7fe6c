# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Introduction page endpoints (editors and administrators)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from school_portal.api.dependencies import get_introduction_service, require_editor
from school_portal.api.middleware.auth import CurrentUser
from school_portal.domains.introductions import (
    IntroductionNotFoundError,
    IntroductionService,
    IntroductionSlugExistsError,
)
from school_portal.models.common import MessageResponse
from school_portal.models.content import IntroductionSchema

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[IntroductionSchema], summary="List introduction pages")
async def list_introductions(
    current_user: CurrentUser = Depends(require_editor),
    service: IntroductionService = Depends(get_introduction_service),
) -> list[IntroductionSchema]:
    """List every page, hidden ones included."""
    return await service.list_all()


@router.post("", response_model=IntroductionSchema, summary="Save introduction page")
async def save_introduction(
    data: IntroductionSchema,
    current_user: CurrentUser = Depends(require_editor),
    service: IntroductionService = Depends(get_introduction_service),
) -> IntroductionSchema:
    try:
        return await service.save(data)
    except IntroductionSlugExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except IntroductionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{page_id}", response_model=MessageResponse, summary="Delete introduction page")
async def delete_introduction(
    page_id: str,
    current_user: CurrentUser = Depends(require_editor),
    service: IntroductionService = Depends(get_introduction_service),
) -> MessageResponse:
    try:
        await service.delete(page_id)
    except IntroductionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MessageResponse(message="Introduction page deleted")
