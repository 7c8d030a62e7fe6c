# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Display blocks composing the home page and the sidebar.

A block has a type deciding how it renders (hero, grid, list, highlight,
docs, staff, video, stats, html) and a position (main column or sidebar).
For post-bearing types ``html_content`` names the post source.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from school_portal.infrastructure.database.models import DisplayBlock
from school_portal.models.common import OrderUpdate
from school_portal.models.site import DisplayBlockSchema
from school_portal.utils.text import is_persisted_id

logger = logging.getLogger(__name__)


class BlockServiceError(Exception):
    """Base exception for block service errors."""

    pass


class BlockNotFoundError(BlockServiceError):
    """Raised when a block is not found."""

    pass


def to_block_response(row: DisplayBlock) -> DisplayBlockSchema:
    """Convert a block row to its API representation."""
    return DisplayBlockSchema(
        id=row.id,
        name=row.name,
        position=row.position,
        type=row.type,
        order=row.order_index,
        item_count=row.item_count or 5,
        is_visible=row.is_visible,
        html_content=row.html_content,
        target_page=row.target_page or "all",
        custom_color=row.custom_color,
        custom_text_color=row.custom_text_color,
    )


class BlockService:
    """Service for display blocks.

    Attributes:
        _db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def list_blocks(self, visible_only: bool = False) -> list[DisplayBlockSchema]:
        """List blocks by order.

        Args:
            visible_only: Skip hidden blocks.
        """
        stmt = select(DisplayBlock)
        if visible_only:
            stmt = stmt.where(DisplayBlock.is_visible.is_(True))
        stmt = stmt.order_by(DisplayBlock.order_index.asc())

        result = await self._db.execute(stmt)
        return [to_block_response(row) for row in result.scalars().all()]

    async def save_block(self, block: DisplayBlockSchema) -> DisplayBlockSchema:
        """Create or update a block.

        Raises:
            BlockNotFoundError: If updating a block that does not exist.
        """
        if is_persisted_id(block.id):
            row = await self._get_by_id(block.id)
        else:
            row = DisplayBlock()
            self._db.add(row)

        row.name = block.name
        row.position = block.position
        row.type = block.type
        row.order_index = block.order
        row.item_count = block.item_count
        row.is_visible = block.is_visible
        row.html_content = block.html_content
        row.target_page = block.target_page
        row.custom_color = block.custom_color
        row.custom_text_color = block.custom_text_color

        await self._db.commit()
        await self._db.refresh(row)

        logger.info("Block saved: %s (%s/%s)", row.id, row.position, row.type)
        return to_block_response(row)

    async def delete_block(self, block_id: str) -> None:
        """Delete a block.

        Raises:
            BlockNotFoundError: If the block does not exist.
        """
        row = await self._get_by_id(block_id)
        await self._db.delete(row)
        await self._db.commit()
        logger.info("Block deleted: %s", block_id)

    async def save_block_order(self, updates: list[OrderUpdate]) -> None:
        """Persist a new order for blocks. Unknown ids are skipped."""
        result = await self._db.execute(
            select(DisplayBlock).where(DisplayBlock.id.in_([u.id for u in updates]))
        )
        rows = {row.id: row for row in result.scalars().all()}
        for update in updates:
            if update.id in rows:
                rows[update.id].order_index = update.order

        await self._db.commit()
        logger.info("Block order saved: %d blocks", len(rows))

    async def _get_by_id(self, block_id: str) -> DisplayBlock:
        row = await self._db.get(DisplayBlock, block_id) if is_persisted_id(block_id) else None
        if row is None:
            raise BlockNotFoundError(f"Block {block_id} not found")
        return row
