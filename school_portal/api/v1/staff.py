# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Staff directory endpoints (editors and administrators)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from school_portal.api.dependencies import get_staff_service, require_editor
from school_portal.api.middleware.auth import CurrentUser
from school_portal.domains.staff import StaffNotFoundError, StaffService, StaffValidationError
from school_portal.models.common import MessageResponse
from school_portal.models.people import StaffMemberSchema

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[StaffMemberSchema], summary="List staff")
async def list_staff(
    current_user: CurrentUser = Depends(require_editor),
    service: StaffService = Depends(get_staff_service),
) -> list[StaffMemberSchema]:
    return await service.list_staff()


@router.post("", response_model=StaffMemberSchema, summary="Save staff member")
async def save_staff_member(
    data: StaffMemberSchema,
    current_user: CurrentUser = Depends(require_editor),
    service: StaffService = Depends(get_staff_service),
) -> StaffMemberSchema:
    try:
        return await service.save_staff_member(data)
    except StaffValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StaffNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{member_id}", response_model=MessageResponse, summary="Delete staff member")
async def delete_staff_member(
    member_id: str,
    current_user: CurrentUser = Depends(require_editor),
    service: StaffService = Depends(get_staff_service),
) -> MessageResponse:
    try:
        await service.delete_staff_member(member_id)
    except StaffNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MessageResponse(message="Staff member deleted")
