# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Portal database seed data.

This module provides the starting content of a new site:
- Categories: default news and document categories
- Menu: the standard navigation bar
- Display blocks: a hero, a news grid and sidebar widgets

Every seeder is idempotent: it does nothing when its table already has rows.
"""

import asyncio
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from school_portal.domains.menu.service import SYSTEM_PATHS
from school_portal.infrastructure.database.models import (
    Category,
    DisplayBlock,
    MenuItem,
)

logger = logging.getLogger(__name__)


async def _is_empty(session: AsyncSession, model: type) -> bool:
    result = await session.execute(select(func.count()).select_from(model))
    return (result.scalar() or 0) == 0


async def seed_categories(session: AsyncSession) -> list[Category]:
    """Seed the default news and document categories.

    Args:
        session: Database session.

    Returns:
        List of created categories (empty when the table was not empty).
    """
    if not await _is_empty(session, Category):
        return []

    categories_data = [
        {"name": "Tin tức", "slug": "tin-tuc", "module_type": "news", "display_order": 1},
        {"name": "Thông báo", "slug": "thong-bao", "module_type": "news", "display_order": 2},
        {"name": "Hoạt động", "slug": "hoat-dong", "module_type": "news", "display_order": 3},
        {
            "name": "Văn bản - Công văn",
            "slug": "official",
            "module_type": "documents",
            "description": "Văn bản chỉ đạo, công văn của nhà trường",
            "display_order": 1,
        },
        {
            "name": "Tài nguyên",
            "slug": "resource",
            "module_type": "documents",
            "description": "Tài liệu học tập, biểu mẫu",
            "display_order": 2,
        },
    ]

    categories = [Category(**data) for data in categories_data]
    session.add_all(categories)
    await session.flush()
    logger.info("Seeded %d categories", len(categories))
    return categories


async def seed_menu(session: AsyncSession) -> list[MenuItem]:
    """Seed the standard navigation bar."""
    if not await _is_empty(session, MenuItem):
        return []

    items = [
        MenuItem(label=label, path=path, order_index=index)
        for index, (path, label) in enumerate(SYSTEM_PATHS.items(), start=1)
    ]
    session.add_all(items)
    await session.flush()
    logger.info("Seeded %d menu items", len(items))
    return items


async def seed_blocks(session: AsyncSession) -> list[DisplayBlock]:
    """Seed a usable home page layout."""
    if not await _is_empty(session, DisplayBlock):
        return []

    blocks_data = [
        {"name": "Tin nổi bật", "position": "main", "type": "hero", "order_index": 1,
         "item_count": 3, "html_content": "featured"},
        {"name": "Tin tức - Sự kiện", "position": "main", "type": "grid", "order_index": 2,
         "item_count": 6, "html_content": "all"},
        {"name": "Thông báo", "position": "sidebar", "type": "list", "order_index": 1,
         "item_count": 5, "html_content": "thong-bao"},
        {"name": "Văn bản mới", "position": "sidebar", "type": "docs", "order_index": 2,
         "item_count": 5},
        {"name": "Thống kê truy cập", "position": "sidebar", "type": "stats", "order_index": 3},
    ]

    blocks = [DisplayBlock(**data) for data in blocks_data]
    session.add_all(blocks)
    await session.flush()
    logger.info("Seeded %d display blocks", len(blocks))
    return blocks


async def seed_portal_database(session: AsyncSession) -> dict:
    """Seed the portal database with initial data.

    The school configuration row is not seeded; the site
    serves the built-in fallback configuration until an admin saves one.

    Args:
        session: Database session.

    Returns:
        Dictionary with seeded entities.
    """
    logger.info("Seeding portal database...")

    categories = await seed_categories(session)
    menu = await seed_menu(session)
    blocks = await seed_blocks(session)

    await session.commit()

    logger.info("Portal database seeding complete")

    return {
        "categories": categories,
        "menu_items": menu,
        "display_blocks": blocks,
    }


if __name__ == "__main__":
    from school_portal.core.config import get_settings
    from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

    async def main():
        engine = create_async_engine(get_settings().db.url)
        async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

        async with async_session() as session:
            await seed_portal_database(session)

        await engine.dispose()

    asyncio.run(main())
