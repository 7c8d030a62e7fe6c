# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Category service for news and document categories.

Both kinds share the ``categories`` table and are told apart by
``module_type``: "news" for post categories, "documents" for document
categories. Each kind is exposed through its own view model.

Example:
    >>> service = CategoryService(db)
    >>> categories = await service.list_post_categories()
    >>> await service.save_category_order([OrderUpdate(id=c.id, order=i) for i, c in enumerate(categories)])
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from school_portal.infrastructure.database.models import Category
from school_portal.models.common import OrderUpdate
from school_portal.models.content import DocCategorySchema, PostCategorySchema
from school_portal.utils.text import is_persisted_id, slugify

logger = logging.getLogger(__name__)

NEWS_MODULE = "news"
DOCUMENTS_MODULE = "documents"


class CategoryServiceError(Exception):
    """Base exception for category service errors."""

    pass


class CategoryNotFoundError(CategoryServiceError):
    """Raised when a category is not found."""

    pass


class CategorySlugExistsError(CategoryServiceError):
    """Raised when a slug is already used by another category of the same kind."""

    pass


class CategoryService:
    """Service for managing post and document categories.

    Attributes:
        _db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize the category service.

        Args:
            db: Async database session.
        """
        self._db = db

    # =========================================================================
    # Post categories
    # =========================================================================

    async def list_post_categories(self) -> list[PostCategorySchema]:
        """List news categories by display order."""
        rows = await self._list(NEWS_MODULE)
        return [self._to_post_category(row) for row in rows]

    async def get_post_category_by_slug(self, slug: str) -> PostCategorySchema | None:
        """Find a news category by its slug."""
        row = await self._get_by_slug(NEWS_MODULE, slug)
        return self._to_post_category(row) if row else None

    async def save_post_category(self, category: PostCategorySchema) -> PostCategorySchema:
        """Create or update a news category.

        Raises:
            CategoryNotFoundError: If updating a category that does not exist.
            CategorySlugExistsError: If the slug is taken.
        """
        row = await self._save(
            NEWS_MODULE,
            category_id=category.id,
            name=category.name,
            slug=category.slug,
            order=category.order,
        )
        return self._to_post_category(row)

    async def delete_post_category(self, category_id: str) -> None:
        """Delete a news category.

        Raises:
            CategoryNotFoundError: If the category does not exist.
        """
        await self._delete(NEWS_MODULE, category_id)

    # =========================================================================
    # Document categories
    # =========================================================================

    async def list_doc_categories(self) -> list[DocCategorySchema]:
        """List document categories by display order."""
        rows = await self._list(DOCUMENTS_MODULE)
        return [self._to_doc_category(row) for row in rows]

    async def get_doc_category_by_slug(self, slug: str) -> DocCategorySchema | None:
        """Find a document category by its slug."""
        row = await self._get_by_slug(DOCUMENTS_MODULE, slug)
        return self._to_doc_category(row) if row else None

    async def save_doc_category(self, category: DocCategorySchema) -> DocCategorySchema:
        """Create or update a document category.

        Raises:
            CategoryNotFoundError: If updating a category that does not exist.
            CategorySlugExistsError: If the slug is taken.
        """
        row = await self._save(
            DOCUMENTS_MODULE,
            category_id=category.id,
            name=category.name,
            slug=category.slug,
            order=category.order,
            description=category.description,
        )
        return self._to_doc_category(row)

    async def delete_doc_category(self, category_id: str) -> None:
        """Delete a document category.

        Raises:
            CategoryNotFoundError: If the category does not exist.
        """
        await self._delete(DOCUMENTS_MODULE, category_id)

    # =========================================================================
    # Ordering
    # =========================================================================

    async def save_category_order(self, updates: list[OrderUpdate]) -> None:
        """Persist a new display order for any categories.

        Unknown ids are skipped.
        """
        ids = [update.id for update in updates]
        result = await self._db.execute(select(Category).where(Category.id.in_(ids)))
        rows = {row.id: row for row in result.scalars().all()}

        for update in updates:
            row = rows.get(update.id)
            if row is not None:
                row.display_order = update.order

        await self._db.commit()
        logger.info("Category order saved: %d categories", len(rows))

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _list(self, module_type: str) -> list[Category]:
        result = await self._db.execute(
            select(Category)
            .where(Category.module_type == module_type)
            .order_by(Category.display_order.asc(), Category.name.asc())
        )
        return list(result.scalars().all())

    async def _get_by_slug(self, module_type: str, slug: str) -> Category | None:
        result = await self._db.execute(
            select(Category).where(Category.module_type == module_type, Category.slug == slug)
        )
        return result.scalar_one_or_none()

    async def _get_by_id(self, module_type: str, category_id: str) -> Category | None:
        if not is_persisted_id(category_id):
            return None
        row = await self._db.get(Category, category_id)
        if row is None or row.module_type != module_type:
            return None
        return row

    async def _save(
        self,
        module_type: str,
        category_id: str | None,
        name: str,
        slug: str | None,
        order: int,
        description: str | None = None,
    ) -> Category:
        slug = slug.strip() if slug and slug.strip() else slugify(name)

        existing = await self._get_by_slug(module_type, slug)

        if is_persisted_id(category_id):
            row = await self._get_by_id(module_type, category_id)
            if row is None:
                raise CategoryNotFoundError(f"Category {category_id} not found")
            if existing is not None and existing.id != row.id:
                raise CategorySlugExistsError(f"Category slug '{slug}' already exists")
            row.name = name
            row.slug = slug
            row.display_order = order
            if module_type == DOCUMENTS_MODULE:
                row.description = description
            action = "updated"
        else:
            if existing is not None:
                raise CategorySlugExistsError(f"Category slug '{slug}' already exists")
            row = Category(
                name=name,
                slug=slug,
                module_type=module_type,
                display_order=order,
                description=description,
                is_active=True,
            )
            self._db.add(row)
            action = "created"

        await self._db.commit()
        await self._db.refresh(row)

        logger.info("Category %s: %s (module=%s, slug=%s)", action, row.id, module_type, slug)
        return row

    async def _delete(self, module_type: str, category_id: str) -> None:
        row = await self._get_by_id(module_type, category_id)
        if row is None:
            raise CategoryNotFoundError(f"Category {category_id} not found")

        await self._db.delete(row)
        await self._db.commit()
        logger.info("Category deleted: %s", category_id)

    @staticmethod
    def _to_post_category(row: Category) -> PostCategorySchema:
        return PostCategorySchema(
            id=row.id,
            name=row.name,
            slug=row.slug,
            color="blue",
            order=row.display_order,
        )

    @staticmethod
    def _to_doc_category(row: Category) -> DocCategorySchema:
        return DocCategorySchema(
            id=row.id,
            name=row.name,
            slug=row.slug,
            description=row.description,
            order=row.display_order,
        )
