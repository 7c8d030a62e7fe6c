# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Document library endpoints (editors and administrators)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from school_portal.api.dependencies import get_document_service, require_editor
from school_portal.api.middleware.auth import CurrentUser
from school_portal.domains.documents import (
    DocumentNotFoundError,
    DocumentService,
    DocumentValidationError,
)
from school_portal.models.common import MessageResponse
from school_portal.models.content import DocumentSchema

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[DocumentSchema], summary="List documents")
async def list_documents(
    category_id: Annotated[str | None, Query(alias="categoryId")] = None,
    current_user: CurrentUser = Depends(require_editor),
    service: DocumentService = Depends(get_document_service),
) -> list[DocumentSchema]:
    return await service.list_documents(category_id=category_id)


@router.post("", response_model=DocumentSchema, summary="Save document")
async def save_document(
    data: DocumentSchema,
    current_user: CurrentUser = Depends(require_editor),
    service: DocumentService = Depends(get_document_service),
) -> DocumentSchema:
    try:
        return await service.save_document(data)
    except DocumentValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{document_id}", response_model=MessageResponse, summary="Delete document")
async def delete_document(
    document_id: str,
    current_user: CurrentUser = Depends(require_editor),
    service: DocumentService = Depends(get_document_service),
) -> MessageResponse:
    try:
        await service.delete_document(document_id)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MessageResponse(message="Document deleted")
