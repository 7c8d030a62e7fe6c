# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Display block endpoints (editors and administrators)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from school_portal.api.dependencies import get_block_service, require_editor
from school_portal.api.middleware.auth import CurrentUser
from school_portal.domains.blocks import BlockNotFoundError, BlockService
from school_portal.models.common import MessageResponse, OrderUpdate
from school_portal.models.site import DisplayBlockSchema

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[DisplayBlockSchema], summary="List blocks")
async def list_blocks(
    current_user: CurrentUser = Depends(require_editor),
    service: BlockService = Depends(get_block_service),
) -> list[DisplayBlockSchema]:
    return await service.list_blocks()


@router.post("", response_model=DisplayBlockSchema, summary="Save block")
async def save_block(
    data: DisplayBlockSchema,
    current_user: CurrentUser = Depends(require_editor),
    service: BlockService = Depends(get_block_service),
) -> DisplayBlockSchema:
    """Create a block, or update it when ``id`` is a stored id."""
    try:
        return await service.save_block(data)
    except BlockNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/order", response_model=MessageResponse, summary="Reorder blocks")
async def save_block_order(
    data: list[OrderUpdate],
    current_user: CurrentUser = Depends(require_editor),
    service: BlockService = Depends(get_block_service),
) -> MessageResponse:
    await service.save_block_order(data)
    return MessageResponse(message="Block order saved")


@router.delete("/{block_id}", response_model=MessageResponse, summary="Delete block")
async def delete_block(
    block_id: str,
    current_user: CurrentUser = Depends(require_editor),
    service: BlockService = Depends(get_block_service),
) -> MessageResponse:
    try:
        await service.delete_block(block_id)
    except BlockNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MessageResponse(message="Block deleted")
