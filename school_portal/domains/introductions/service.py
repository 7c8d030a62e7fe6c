# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pages of the "about the school" section."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from school_portal.infrastructure.database.models import SchoolIntroduction
from school_portal.models.content import IntroductionSchema
from school_portal.utils.text import is_persisted_id, slugify

logger = logging.getLogger(__name__)


class IntroductionServiceError(Exception):
    """Base exception for introduction service errors."""

    pass


class IntroductionNotFoundError(IntroductionServiceError):
    """Raised when an introduction page is not found."""

    pass


class IntroductionSlugExistsError(IntroductionServiceError):
    """Raised when another page already uses the slug."""

    pass


class IntroductionService:
    """Service for introduction pages.

    Attributes:
        _db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def list_all(self) -> list[IntroductionSchema]:
        """List every page by order, hidden ones included."""
        result = await self._db.execute(
            select(SchoolIntroduction).order_by(SchoolIntroduction.order_index.asc())
        )
        return [self._to_response(row) for row in result.scalars().all()]

    async def list_visible(self) -> list[IntroductionSchema]:
        """List visible pages by order."""
        result = await self._db.execute(
            select(SchoolIntroduction)
            .where(SchoolIntroduction.is_visible.is_(True))
            .order_by(SchoolIntroduction.order_index.asc())
        )
        return [self._to_response(row) for row in result.scalars().all()]

    async def get_by_slug(self, slug: str, visible_only: bool = True) -> IntroductionSchema | None:
        """Find a page by slug.

        Args:
            slug: Page slug.
            visible_only: Treat hidden pages as missing.
        """
        row = await self._get_by_slug(slug)
        if row is None or (visible_only and not row.is_visible):
            return None
        return self._to_response(row)

    async def save(self, page: IntroductionSchema) -> IntroductionSchema:
        """Create or update a page. A missing slug is derived from the title.

        Raises:
            IntroductionNotFoundError: If updating a page that does not exist.
            IntroductionSlugExistsError: If another page uses the slug.
        """
        slug = page.slug.strip() if page.slug and page.slug.strip() else slugify(page.title)
        existing = await self._get_by_slug(slug)

        if is_persisted_id(page.id):
            row = await self._get_by_id(page.id)
        else:
            row = SchoolIntroduction()

        if existing is not None and existing.id != row.id:
            raise IntroductionSlugExistsError(f"Introduction slug '{slug}' already exists")
        if row.id is None:
            self._db.add(row)

        row.title = page.title.strip()
        row.slug = slug
        row.content = page.content
        row.image_url = page.image_url
        row.order_index = page.order
        row.is_visible = page.is_visible

        await self._db.commit()
        await self._db.refresh(row)

        logger.info("Introduction saved: %s (%s)", row.id, row.slug)
        return self._to_response(row)

    async def delete(self, page_id: str) -> None:
        """Delete a page.

        Raises:
            IntroductionNotFoundError: If the page does not exist.
        """
        row = await self._get_by_id(page_id)
        await self._db.delete(row)
        await self._db.commit()
        logger.info("Introduction deleted: %s", page_id)

    async def _get_by_slug(self, slug: str) -> SchoolIntroduction | None:
        result = await self._db.execute(
            select(SchoolIntroduction).where(SchoolIntroduction.slug == slug)
        )
        return result.scalar_one_or_none()

    async def _get_by_id(self, page_id: str) -> SchoolIntroduction:
        row = await self._db.get(SchoolIntroduction, page_id) if is_persisted_id(page_id) else None
        if row is None:
            raise IntroductionNotFoundError(f"Introduction {page_id} not found")
        return row

    @staticmethod
    def _to_response(row: SchoolIntroduction) -> IntroductionSchema:
        return IntroductionSchema(
            id=row.id,
            title=row.title,
            slug=row.slug,
            content=row.content,
            image_url=row.image_url,
            order=row.order_index,
            is_visible=row.is_visible,
        )
