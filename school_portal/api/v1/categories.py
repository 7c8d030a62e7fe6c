# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Category endpoints (editors and administrators).

- GET/POST /posts, DELETE /posts/{id} - News categories
- GET/POST /documents, DELETE /documents/{id} - Document categories
- PUT /order - Reorder categories of either kind
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from school_portal.api.dependencies import get_category_service, require_editor
from school_portal.api.middleware.auth import CurrentUser
from school_portal.domains.categories import (
    CategoryNotFoundError,
    CategoryService,
    CategorySlugExistsError,
)
from school_portal.models.common import MessageResponse, OrderUpdate
from school_portal.models.content import DocCategorySchema, PostCategorySchema

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_http_error(error: Exception) -> HTTPException:
    if isinstance(error, CategorySlugExistsError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))


@router.get("/posts", response_model=list[PostCategorySchema], summary="List news categories")
async def list_post_categories(
    current_user: CurrentUser = Depends(require_editor),
    service: CategoryService = Depends(get_category_service),
) -> list[PostCategorySchema]:
    return await service.list_post_categories()


@router.post("/posts", response_model=PostCategorySchema, summary="Save news category")
async def save_post_category(
    data: PostCategorySchema,
    current_user: CurrentUser = Depends(require_editor),
    service: CategoryService = Depends(get_category_service),
) -> PostCategorySchema:
    try:
        return await service.save_post_category(data)
    except (CategoryNotFoundError, CategorySlugExistsError) as e:
        raise _to_http_error(e)


@router.delete("/posts/{category_id}", response_model=MessageResponse, summary="Delete news category")
async def delete_post_category(
    category_id: str,
    current_user: CurrentUser = Depends(require_editor),
    service: CategoryService = Depends(get_category_service),
) -> MessageResponse:
    try:
        await service.delete_post_category(category_id)
    except CategoryNotFoundError as e:
        raise _to_http_error(e)
    return MessageResponse(message="Category deleted")


@router.get("/documents", response_model=list[DocCategorySchema], summary="List document categories")
async def list_doc_categories(
    current_user: CurrentUser = Depends(require_editor),
    service: CategoryService = Depends(get_category_service),
) -> list[DocCategorySchema]:
    return await service.list_doc_categories()


@router.post("/documents", response_model=DocCategorySchema, summary="Save document category")
async def save_doc_category(
    data: DocCategorySchema,
    current_user: CurrentUser = Depends(require_editor),
    service: CategoryService = Depends(get_category_service),
) -> DocCategorySchema:
    try:
        return await service.save_doc_category(data)
    except (CategoryNotFoundError, CategorySlugExistsError) as e:
        raise _to_http_error(e)


@router.delete(
    "/documents/{category_id}",
    response_model=MessageResponse,
    summary="Delete document category",
)
async def delete_doc_category(
    category_id: str,
    current_user: CurrentUser = Depends(require_editor),
    service: CategoryService = Depends(get_category_service),
) -> MessageResponse:
    try:
        await service.delete_doc_category(category_id)
    except CategoryNotFoundError as e:
        raise _to_http_error(e)
    return MessageResponse(message="Category deleted")


@router.put("/order", response_model=MessageResponse, summary="Reorder categories")
async def save_category_order(
    data: list[OrderUpdate],
    current_user: CurrentUser = Depends(require_editor),
    service: CategoryService = Depends(get_category_service),
) -> MessageResponse:
    await service.save_category_order(data)
    return MessageResponse(message="Category order saved")
