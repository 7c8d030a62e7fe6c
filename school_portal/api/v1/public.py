# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Public site endpoints.

These endpoints are PUBLIC (no authentication required) and serve the
school website:
- GET /shell - Configuration, menu, visitor counters and ticker
- GET /home - Home page composed from display blocks
- GET /news, GET /news/{id_or_slug} - News list and detail
- GET /documents/{category_slug} - Documents of one category
- GET /staff, /gallery, /gallery/{album_id}, /videos, /introductions
- POST /visits - Visit heartbeat
- GET /stats - Visitor counters
- GET /events - Server-sent change notifications
"""

import json
import logging
from typing import Annotated, AsyncIterator

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import StreamingResponse

from school_portal.api.dependencies import (
    get_category_service,
    get_event_bus,
    get_gallery_service,
    get_introduction_service,
    get_menu_service,
    get_public_service,
    get_site_config_service,
    get_staff_service,
    get_video_service,
    get_visitor_service,
)
from school_portal.api.middleware.rate_limit import RATE_LIMIT_TRACK_VISIT, get_ip_only, limiter
from school_portal.domains.analytics import VisitorService
from school_portal.domains.categories import CategoryService
from school_portal.domains.gallery import AlbumNotFoundError, GalleryService
from school_portal.domains.introductions import IntroductionService
from school_portal.domains.menu import MenuService
from school_portal.domains.public import PublicNotFoundError, PublicSiteService
from school_portal.domains.site_config import SiteConfigService
from school_portal.domains.staff import StaffService
from school_portal.domains.videos import VideoService
from school_portal.infrastructure.events import EventBus, EventPatterns, subscribe_stream
from school_portal.models.analytics import TrackVisitRequest, TrackVisitResponse, VisitorStats
from school_portal.models.common import PaginatedResponse
from school_portal.models.content import IntroductionSchema, PostCategorySchema, PostResponse
from school_portal.models.media import AlbumDetail, AlbumSchema, VideoSchema
from school_portal.models.people import StaffMemberSchema
from school_portal.models.public import DocumentsPage, HomePage, NewsDetail, SiteShell, TickerItem
from school_portal.models.site import MenuItemSchema, SchoolConfigSchema

logger = logging.getLogger(__name__)

router = APIRouter()

# Seconds between keep-alive comments on an idle event stream
KEEPALIVE_SECONDS = 15.0


# =========================================================================
# Shell
# =========================================================================


@router.get("/shell", response_model=SiteShell, summary="Page shell")
async def get_shell(service: PublicSiteService = Depends(get_public_service)) -> SiteShell:
    """Everything the header, menu and footer need in one call."""
    return await service.get_shell()


@router.get("/config", response_model=SchoolConfigSchema, summary="School configuration")
async def get_config(
    service: SiteConfigService = Depends(get_site_config_service),
) -> SchoolConfigSchema:
    return await service.get_config()


@router.get("/menu", response_model=list[MenuItemSchema], summary="Navigation menu")
async def get_menu(service: MenuService = Depends(get_menu_service)) -> list[MenuItemSchema]:
    return await service.list_menu()


@router.get("/ticker", response_model=list[TickerItem], summary="News ticker")
async def get_ticker(service: PublicSiteService = Depends(get_public_service)) -> list[TickerItem]:
    return await service.get_ticker()


# =========================================================================
# Home and news
# =========================================================================


@router.get("/home", response_model=HomePage, summary="Home page")
async def get_home(service: PublicSiteService = Depends(get_public_service)) -> HomePage:
    """Home page blocks resolved with their content."""
    return await service.get_home()


@router.get("/categories", response_model=list[PostCategorySchema], summary="News categories")
async def list_news_categories(
    service: CategoryService = Depends(get_category_service),
) -> list[PostCategorySchema]:
    return await service.list_post_categories()


@router.get("/news", response_model=PaginatedResponse[PostResponse], summary="News list")
async def list_news(
    category: Annotated[str | None, Query(description="Category slug")] = None,
    limit: Annotated[int, Query(ge=1, le=50)] = 12,
    offset: Annotated[int, Query(ge=0)] = 0,
    service: PublicSiteService = Depends(get_public_service),
) -> PaginatedResponse[PostResponse]:
    """Published news, newest first."""
    return await service.list_news(category=category, limit=limit, offset=offset)


@router.get("/news/{id_or_slug}", response_model=NewsDetail, summary="News detail")
async def get_news_detail(
    id_or_slug: str,
    service: PublicSiteService = Depends(get_public_service),
) -> NewsDetail:
    """Published post with category, related posts, sidebar and share links.

    Raises:
        HTTPException: 404 if the post does not exist or is not published.
    """
    try:
        return await service.get_news_detail(id_or_slug)
    except PublicNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


# =========================================================================
# Other pages
# =========================================================================


@router.get("/documents/{category_slug}", response_model=DocumentsPage, summary="Documents")
async def get_documents_page(
    category_slug: str,
    service: PublicSiteService = Depends(get_public_service),
) -> DocumentsPage:
    """Documents of a category ("official" or "resource" by default)."""
    try:
        return await service.get_documents_page(category_slug)
    except PublicNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/staff", response_model=list[StaffMemberSchema], summary="Staff directory")
async def list_staff(service: StaffService = Depends(get_staff_service)) -> list[StaffMemberSchema]:
    return await service.list_staff()


@router.get("/gallery", response_model=list[AlbumSchema], summary="Albums")
async def list_albums(service: GalleryService = Depends(get_gallery_service)) -> list[AlbumSchema]:
    return await service.list_albums()


@router.get("/gallery/{album_id}", response_model=AlbumDetail, summary="Album")
async def get_album(
    album_id: str,
    service: GalleryService = Depends(get_gallery_service),
) -> AlbumDetail:
    try:
        return await service.get_album(album_id)
    except AlbumNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/videos", response_model=list[VideoSchema], summary="Videos")
async def list_videos(service: VideoService = Depends(get_video_service)) -> list[VideoSchema]:
    return await service.list_videos()


@router.get("/introductions", response_model=list[IntroductionSchema], summary="Introduction pages")
async def list_introductions(
    service: IntroductionService = Depends(get_introduction_service),
) -> list[IntroductionSchema]:
    return await service.list_visible()


@router.get("/introductions/{slug}", response_model=IntroductionSchema, summary="Introduction page")
async def get_introduction(
    slug: str,
    service: IntroductionService = Depends(get_introduction_service),
) -> IntroductionSchema:
    page = await service.get_by_slug(slug)
    if page is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Page '{slug}' not found")
    return page


# =========================================================================
# Visitors
# =========================================================================


@router.post("/visits", response_model=TrackVisitResponse, summary="Track visit")
@limiter.limit(RATE_LIMIT_TRACK_VISIT, key_func=get_ip_only)
async def track_visit(
    request: Request,
    data: TrackVisitRequest,
    service: VisitorService = Depends(get_visitor_service),
) -> TrackVisitResponse:
    """Record a heartbeat; the session is counted once per local day."""
    return await service.track_visit(data.session_id)


@router.get("/stats", response_model=VisitorStats, summary="Visitor counters")
async def get_stats(service: VisitorService = Depends(get_visitor_service)) -> VisitorStats:
    return await service.get_visitor_stats()


# =========================================================================
# Change stream
# =========================================================================


def format_sse(event: str, data: dict) -> str:
    """Encode one server-sent event."""
    return f"event: {event}\ndata: {json.dumps(data, ensure_ascii=False)}\n\n"


@router.get(
    "/events",
    summary="Change notifications",
    description="""
Server-sent events announcing content changes so open pages can refresh.

**Event Types:**
- `ready`: Stream established
- `post.created`, `post.updated`, `post.deleted`: A news post changed
- `menu.updated`: The navigation menu changed
- `config.updated`: The school configuration changed
""",
)
async def stream_events(
    request: Request,
    bus: EventBus = Depends(get_event_bus),
) -> StreamingResponse:
    """Stream change notifications using SSE."""

    async def event_generator() -> AsyncIterator[str]:
        async with subscribe_stream(bus, EventPatterns.PUBLIC_CHANGES) as subscription:
            yield format_sse("ready", {"patterns": list(EventPatterns.PUBLIC_CHANGES)})
            while not await request.is_disconnected():
                event = await subscription.next_event(timeout=KEEPALIVE_SECONDS)
                if event is None:
                    yield ": keep-alive\n\n"
                    continue
                yield format_sse(event.event_type, event.to_dict())

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",  # Disable nginx buffering
        },
    )
