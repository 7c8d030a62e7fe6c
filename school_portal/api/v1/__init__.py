# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

This package contains all v1 API endpoint definitions.
Each module provides a FastAPI router for a specific domain.

Modules:
    auth: Registration, sign-in, token refresh and profile.
    public: Public website (no authentication).
    config: School configuration (admin).
    menu: Navigation menu (admin).
    users: Account administration (admin).
    blocks, categories, posts, documents, staff, gallery, videos,
    introductions, media, dashboard: Content management (editor or admin).
"""

from fastapi import APIRouter

from school_portal.api.v1 import (
    auth,
    blocks,
    categories,
    config,
    dashboard,
    documents,
    gallery,
    introductions,
    media,
    menu,
    posts,
    public,
    staff,
    users,
    videos,
)

# Create the main v1 router
router = APIRouter(prefix="/api/v1")

router.include_router(auth.router, prefix="/auth", tags=["Authentication"])

# Administrator-only areas
router.include_router(config.router, prefix="/config", tags=["Configuration"])
router.include_router(menu.router, prefix="/menu", tags=["Menu"])
router.include_router(users.router, prefix="/users", tags=["Users"])

# Content management
router.include_router(blocks.router, prefix="/blocks", tags=["Display Blocks"])
router.include_router(categories.router, prefix="/categories", tags=["Categories"])
router.include_router(posts.router, prefix="/posts", tags=["Posts"])
router.include_router(documents.router, prefix="/documents", tags=["Documents"])
router.include_router(staff.router, prefix="/staff", tags=["Staff"])
router.include_router(gallery.router, prefix="/gallery", tags=["Gallery"])
router.include_router(videos.router, prefix="/videos", tags=["Videos"])
router.include_router(introductions.router, prefix="/introductions", tags=["Introductions"])
router.include_router(media.router, prefix="/media", tags=["Media"])
router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])

# Public routes (no authentication required)
router.include_router(public.router, prefix="/public", tags=["Public"])

__all__ = ["router"]
