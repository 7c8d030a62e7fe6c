# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Navigation menu endpoints (administrators only).

- GET / - List entries
- PUT / - Save a batch of entries
- POST / - Append an entry
- POST /{item_id}/move - Move an entry up or down
- DELETE /{item_id} - Delete an entry
- GET /system-paths - Built-in pages usable as targets
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from school_portal.api.dependencies import get_menu_service, require_admin
from school_portal.api.middleware.auth import CurrentUser
from school_portal.domains.menu import (
    MenuItemNotFoundError,
    MenuService,
    MenuValidationError,
    system_paths,
)
from school_portal.models.common import MessageResponse
from school_portal.models.site import MenuItemCreate, MenuItemSchema, MenuMoveRequest, SystemPath

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[MenuItemSchema], summary="List menu")
async def list_menu(
    current_user: CurrentUser = Depends(require_admin),
    service: MenuService = Depends(get_menu_service),
) -> list[MenuItemSchema]:
    """List menu entries in order."""
    return await service.list_menu()


@router.get("/system-paths", response_model=list[SystemPath], summary="List system pages")
async def list_system_paths(
    current_user: CurrentUser = Depends(require_admin),
) -> list[SystemPath]:
    """List the built-in pages selectable as menu targets."""
    return system_paths()


@router.put("", response_model=list[MenuItemSchema], summary="Save menu")
async def save_menu(
    data: list[MenuItemSchema],
    current_user: CurrentUser = Depends(require_admin),
    service: MenuService = Depends(get_menu_service),
) -> list[MenuItemSchema]:
    """Save a batch of entries and return the whole menu.

    Raises:
        HTTPException: 400 for an unusable path, 404 for an unknown entry.
    """
    try:
        return await service.save_menu(data)
    except MenuValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except MenuItemNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post(
    "",
    response_model=MenuItemSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Add menu entry",
)
async def add_menu_item(
    data: MenuItemCreate,
    current_user: CurrentUser = Depends(require_admin),
    service: MenuService = Depends(get_menu_service),
) -> MenuItemSchema:
    """Append an entry at the end of the menu.

    Raises:
        HTTPException: 400 for an unusable path.
    """
    try:
        return await service.add_menu_item(data.label, data.path)
    except MenuValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/{item_id}/move", response_model=list[MenuItemSchema], summary="Move menu entry")
async def move_menu_item(
    item_id: str,
    data: MenuMoveRequest,
    current_user: CurrentUser = Depends(require_admin),
    service: MenuService = Depends(get_menu_service),
) -> list[MenuItemSchema]:
    """Move an entry one step and return the renumbered menu."""
    try:
        return await service.move_menu_item(item_id, data.direction)
    except MenuItemNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{item_id}", response_model=MessageResponse, summary="Delete menu entry")
async def delete_menu_item(
    item_id: str,
    current_user: CurrentUser = Depends(require_admin),
    service: MenuService = Depends(get_menu_service),
) -> MessageResponse:
    """Delete an entry."""
    try:
        await service.delete_menu_item(item_id)
    except MenuItemNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MessageResponse(message="Menu item deleted")
