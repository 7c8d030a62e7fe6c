# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Account administration endpoints (administrators only).

- GET / - List accounts
- GET /{user_id} - Get an account
- PATCH /{user_id} - Change name, role, avatar or active flag
- DELETE /{user_id} - Delete an account (never your own)
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from school_portal.api.dependencies import get_user_service, require_admin
from school_portal.api.middleware.auth import CurrentUser
from school_portal.domains.users import UserNotFoundError, UserService, UserValidationError
from school_portal.models.common import MessageResponse
from school_portal.models.people import UserResponse, UserUpdateRequest

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[UserResponse], summary="List users")
async def list_users(
    current_user: CurrentUser = Depends(require_admin),
    service: UserService = Depends(get_user_service),
) -> list[UserResponse]:
    return await service.list_users()


@router.get("/{user_id}", response_model=UserResponse, summary="Get user")
async def get_user(
    user_id: str,
    current_user: CurrentUser = Depends(require_admin),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    try:
        return await service.get_user(user_id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.patch("/{user_id}", response_model=UserResponse, summary="Update user")
async def update_user(
    user_id: str,
    data: UserUpdateRequest,
    current_user: CurrentUser = Depends(require_admin),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Apply changes to an account."""
    logger.info("Updating user: %s, by=%s", user_id, current_user.id)
    try:
        return await service.update_user(user_id, data)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{user_id}", response_model=MessageResponse, summary="Delete user")
async def delete_user(
    user_id: str,
    current_user: CurrentUser = Depends(require_admin),
    service: UserService = Depends(get_user_service),
) -> MessageResponse:
    """Delete an account.

    Raises:
        HTTPException: 400 when deleting your own account, 404 if unknown.
    """
    try:
        await service.delete_user(user_id, acting_user_id=current_user.id)
    except UserValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MessageResponse(message="User deleted")
