# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Admin dashboard summary."""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from school_portal.domains.analytics import VisitorService
from school_portal.domains.posts.service import PUBLISHED, to_post_response
from school_portal.infrastructure.database.models import (
    Category,
    Document,
    Post,
    StaffMember,
    UserProfile,
)
from school_portal.models.analytics import CategoryViews, DashboardStats
from school_portal.models.content import PostResponse

logger = logging.getLogger(__name__)

LATEST_POSTS = 5
UNCATEGORIZED = "Chưa phân loại"


class DashboardService:
    """Aggregates the numbers shown on the admin dashboard.

    Attributes:
        _db: Async database session.
        _visitors: Visitor service providing the counter widget values.
    """

    def __init__(self, db: AsyncSession, visitor_service: VisitorService) -> None:
        self._db = db
        self._visitors = visitor_service

    async def get_stats(self) -> DashboardStats:
        """Compute the dashboard summary.

        Returns:
            Content counts, views per category, latest posts and visitor stats.
        """
        status_counts = await self._db.execute(
            select(Post.status, func.count(Post.id), func.coalesce(func.sum(Post.views), 0))
            .group_by(Post.status)
        )
        post_count = published = total_views = 0
        for status, count, views in status_counts.all():
            post_count += count
            total_views += int(views or 0)
            if status == PUBLISHED:
                published = count

        stats = DashboardStats(
            total_views=total_views,
            post_count=post_count,
            published_count=published,
            draft_count=post_count - published,
            document_count=await self._count(Document),
            staff_count=await self._count(StaffMember),
            user_count=await self._count(UserProfile),
            views_by_category=await self._views_by_category(),
            latest_posts=await self._latest_posts(),
            visitors=await self._visitors.get_visitor_stats(),
        )
        logger.debug("Dashboard computed: posts=%d views=%d", post_count, total_views)
        return stats

    async def _count(self, model: type) -> int:
        result = await self._db.execute(select(func.count()).select_from(model))
        return result.scalar() or 0

    async def _views_by_category(self) -> list[CategoryViews]:
        result = await self._db.execute(
            select(Post.category, func.coalesce(func.sum(Post.views), 0))
            .group_by(Post.category)
            .order_by(func.coalesce(func.sum(Post.views), 0).desc())
        )
        rows = result.all()

        names_result = await self._db.execute(
            select(Category.slug, Category.name).where(Category.module_type == "news")
        )
        names = dict(names_result.all())

        return [
            CategoryViews(
                category=slug or "",
                name=names.get(slug, slug) if slug else UNCATEGORIZED,
                views=int(views or 0),
            )
            for slug, views in rows
        ]

    async def _latest_posts(self) -> list[PostResponse]:
        result = await self._db.execute(
            select(Post).order_by(Post.created_at.desc()).limit(LATEST_POSTS)
        )
        return [to_post_response(row) for row in result.scalars().all()]
