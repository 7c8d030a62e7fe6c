# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

This module provides dependency functions for FastAPI endpoints.
Dependencies are used to:
- Get database sessions
- Get authenticated users and enforce roles
- Get service instances

Example:
    @router.get("/posts")
    async def list_posts(
        service: PostService = Depends(get_post_service),
        current_user: CurrentUser = Depends(require_editor),
    ):
        ...
"""

import logging
from typing import Annotated, AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from school_portal.api.middleware.auth import CurrentUser, get_current_user
from school_portal.core.config import get_settings
from school_portal.domains.analytics import VisitorService
from school_portal.domains.auth.jwt import JWTManager
from school_portal.domains.auth.password import PasswordHasher
from school_portal.domains.auth.service import AuthService
from school_portal.domains.blocks import BlockService
from school_portal.domains.categories import CategoryService
from school_portal.domains.dashboard import DashboardService
from school_portal.domains.documents import DocumentService
from school_portal.domains.gallery import GalleryService
from school_portal.domains.introductions import IntroductionService
from school_portal.domains.media import MediaService
from school_portal.domains.menu import MenuService
from school_portal.domains.posts import ContentDrafter, PostService
from school_portal.domains.public import PublicSiteService
from school_portal.domains.site_config import SiteConfigService
from school_portal.domains.staff import StaffService
from school_portal.domains.users import UserService
from school_portal.domains.videos import VideoService
from school_portal.infrastructure.database.connection import (
    close_database,
    get_session,
    init_database,
)
from school_portal.infrastructure.events import EventBus
from school_portal.infrastructure.events import get_event_bus as _get_event_bus
from school_portal.infrastructure.storage import get_storage

logger = logging.getLogger(__name__)


async def init_db() -> None:
    """Initialize the database connection pool."""
    await init_database(get_settings())


async def close_db() -> None:
    """Close the database connection pool."""
    await close_database()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get a database session.

    Yields:
        AsyncSession committed on success and rolled back on error.
    """
    async with get_session() as session:
        yield session


# =========================================================================
# Authentication Dependencies
# =========================================================================


def get_optional_user(request: Request) -> CurrentUser | None:
    """Get current user if authenticated, None otherwise."""
    return get_current_user(request)


def require_auth(request: Request) -> CurrentUser:
    """Require authenticated user.

    Raises:
        HTTPException: If not authenticated.
    """
    user = get_current_user(request)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_admin(request: Request) -> CurrentUser:
    """Require an administrator.

    Raises:
        HTTPException: If not authenticated or not admin.
    """
    user = require_auth(request)
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user


def require_editor(request: Request) -> CurrentUser:
    """Require an editor or an administrator.

    Raises:
        HTTPException: If not authenticated or not allowed to manage content.
    """
    user = require_auth(request)
    if not user.is_editor:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Editor or admin access required",
        )
    return user


# =========================================================================
# Service Dependencies
# =========================================================================


def get_jwt_manager() -> JWTManager:
    """Get JWT manager instance."""
    return JWTManager(get_settings().jwt)


def get_password_hasher() -> PasswordHasher:
    """Get password hasher instance."""
    return PasswordHasher()


def get_event_bus() -> EventBus:
    """Get the process-wide event bus."""
    return _get_event_bus()


async def get_auth_service(
    db: AsyncSession = Depends(get_db),
    jwt_manager: JWTManager = Depends(get_jwt_manager),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
) -> AuthService:
    """Get AuthService instance."""
    return AuthService(db, jwt_manager, password_hasher)


async def get_visitor_service(db: AsyncSession = Depends(get_db)) -> VisitorService:
    """Get VisitorService instance."""
    return VisitorService(db, get_settings().site, event_bus=get_event_bus())


async def get_site_config_service(db: AsyncSession = Depends(get_db)) -> SiteConfigService:
    """Get SiteConfigService instance."""
    return SiteConfigService(db, event_bus=get_event_bus())


async def get_menu_service(db: AsyncSession = Depends(get_db)) -> MenuService:
    """Get MenuService instance."""
    return MenuService(db, event_bus=get_event_bus())


async def get_post_service(db: AsyncSession = Depends(get_db)) -> PostService:
    """Get PostService instance."""
    return PostService(db, event_bus=get_event_bus())


def get_content_drafter() -> ContentDrafter:
    """Get the writing assistant."""
    return ContentDrafter(get_settings().ai)


async def get_category_service(db: AsyncSession = Depends(get_db)) -> CategoryService:
    """Get CategoryService instance."""
    return CategoryService(db)


async def get_document_service(db: AsyncSession = Depends(get_db)) -> DocumentService:
    """Get DocumentService instance."""
    return DocumentService(db)


async def get_block_service(db: AsyncSession = Depends(get_db)) -> BlockService:
    """Get BlockService instance."""
    return BlockService(db)


async def get_staff_service(db: AsyncSession = Depends(get_db)) -> StaffService:
    """Get StaffService instance."""
    return StaffService(db)


async def get_gallery_service(db: AsyncSession = Depends(get_db)) -> GalleryService:
    """Get GalleryService instance."""
    return GalleryService(db)


async def get_video_service(db: AsyncSession = Depends(get_db)) -> VideoService:
    """Get VideoService instance."""
    return VideoService(db)


async def get_introduction_service(db: AsyncSession = Depends(get_db)) -> IntroductionService:
    """Get IntroductionService instance."""
    return IntroductionService(db)


async def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    """Get UserService instance."""
    return UserService(db)


def get_media_service() -> MediaService:
    """Get MediaService bound to the configured storage backend."""
    return MediaService(get_storage(), max_bytes=get_settings().storage.max_upload_bytes)


async def get_dashboard_service(
    db: AsyncSession = Depends(get_db),
    visitor_service: VisitorService = Depends(get_visitor_service),
) -> DashboardService:
    """Get DashboardService instance."""
    return DashboardService(db, visitor_service)


async def get_public_service(
    config_service: SiteConfigService = Depends(get_site_config_service),
    menu_service: MenuService = Depends(get_menu_service),
    visitor_service: VisitorService = Depends(get_visitor_service),
    post_service: PostService = Depends(get_post_service),
    block_service: BlockService = Depends(get_block_service),
    category_service: CategoryService = Depends(get_category_service),
    document_service: DocumentService = Depends(get_document_service),
    staff_service: StaffService = Depends(get_staff_service),
    video_service: VideoService = Depends(get_video_service),
) -> PublicSiteService:
    """Get PublicSiteService composed from the per-domain services."""
    return PublicSiteService(
        config_service=config_service,
        menu_service=menu_service,
        visitor_service=visitor_service,
        post_service=post_service,
        block_service=block_service,
        category_service=category_service,
        document_service=document_service,
        staff_service=staff_service,
        video_service=video_service,
        settings=get_settings().site,
    )


# =========================================================================
# Type Aliases for Cleaner Endpoint Signatures
# =========================================================================

DB = Annotated[AsyncSession, Depends(get_db)]
OptionalUser = Annotated[CurrentUser | None, Depends(get_optional_user)]
AuthenticatedUser = Annotated[CurrentUser, Depends(require_auth)]
AdminUser = Annotated[CurrentUser, Depends(require_admin)]
EditorUser = Annotated[CurrentUser, Depends(require_editor)]
