# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""News post endpoints (editors and administrators).

This module provides endpoints for the post editor:
- GET / - List posts with search, status and category filters
- GET /{post_id} - Get a post
- POST / - Save a post (create, or update when ``id`` is stored)
- DELETE /{post_id} - Delete a post
- POST /draft - Generate a first draft with the writing assistant
- POST /youtube-embed - Turn a YouTube link into an embeddable snippet
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from school_portal.api.dependencies import get_content_drafter, get_post_service, require_editor
from school_portal.api.middleware.auth import CurrentUser
from school_portal.domains.posts import (
    ContentDraftError,
    ContentDrafter,
    ContentDraftValidationError,
    PostNotFoundError,
    PostService,
    PostValidationError,
    embed_youtube,
)
from school_portal.models.common import MessageResponse
from school_portal.models.content import (
    ContentDraftRequest,
    ContentDraftResponse,
    PostResponse,
    PostSaveRequest,
    PostStatus,
    YouTubeEmbedRequest,
    YouTubeEmbedResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[PostResponse], summary="List posts")
async def list_posts(
    search: Annotated[str | None, Query(description="Search in titles")] = None,
    post_status: Annotated[PostStatus | None, Query(alias="status", description="Filter by status")] = None,
    category: Annotated[str | None, Query(description="Filter by category slug")] = None,
    current_user: CurrentUser = Depends(require_editor),
    service: PostService = Depends(get_post_service),
) -> list[PostResponse]:
    """List posts, newest first."""
    return await service.list_posts(search=search, status=post_status, category=category)


@router.post("/draft", response_model=ContentDraftResponse, summary="Draft content")
async def draft_content(
    data: ContentDraftRequest,
    current_user: CurrentUser = Depends(require_editor),
    drafter: ContentDrafter = Depends(get_content_drafter),
) -> ContentDraftResponse:
    """Ask the writing assistant for a draft.

    Raises:
        HTTPException: 400 without a title, 503 if the assistant is unavailable.
    """
    try:
        return await drafter.draft_content(data.title, data.kind)
    except ContentDraftValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except ContentDraftError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message)


@router.post("/youtube-embed", response_model=YouTubeEmbedResponse, summary="Embed YouTube video")
async def youtube_embed(
    data: YouTubeEmbedRequest,
    current_user: CurrentUser = Depends(require_editor),
) -> YouTubeEmbedResponse:
    """Build the iframe snippet for a YouTube link."""
    try:
        return embed_youtube(data.url)
    except PostValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/{post_id}", response_model=PostResponse, summary="Get post")
async def get_post(
    post_id: str,
    current_user: CurrentUser = Depends(require_editor),
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    try:
        return await service.get_post(post_id)
    except PostNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("", response_model=PostResponse, summary="Save post")
async def save_post(
    data: PostSaveRequest,
    current_user: CurrentUser = Depends(require_editor),
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    """Create or update a post.

    Raises:
        HTTPException: 400 for missing title or content, 404 for an unknown id.
    """
    logger.info("Saving post: id=%s, by=%s", data.id, current_user.id)
    try:
        return await service.save_post(data)
    except PostValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PostNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{post_id}", response_model=MessageResponse, summary="Delete post")
async def delete_post(
    post_id: str,
    current_user: CurrentUser = Depends(require_editor),
    service: PostService = Depends(get_post_service),
) -> MessageResponse:
    try:
        await service.delete_post(post_id)
    except PostNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MessageResponse(message="Post deleted")
