# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Navigation menu service.

A menu entry points either at a built-in page (a system key such as
``news``), at an absolute http(s) URL, or at a site path starting with
``/``. Entries are kept in ``order_index`` order; moving an entry
renumbers the whole menu to 1..n.

Every change publishes ``menu.updated`` so open browsers refresh their
navigation bar.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from school_portal.infrastructure.database.models import MenuItem
from school_portal.infrastructure.events import EventBus, EventTypes, get_event_bus
from school_portal.models.common import MoveDirection
from school_portal.models.site import MenuItemSchema, SystemPath
from school_portal.utils.text import is_persisted_id

logger = logging.getLogger(__name__)

# Built-in pages selectable as menu targets, in display order
SYSTEM_PATHS: dict[str, str] = {
    "home": "Trang chủ",
    "intro": "Giới thiệu",
    "staff": "Đội ngũ",
    "news": "Tin tức",
    "documents": "Văn bản",
    "resources": "Tài nguyên",
    "gallery": "Thư viện ảnh",
    "contact": "Liên hệ",
}


class MenuServiceError(Exception):
    """Base exception for menu service errors."""

    pass


class MenuItemNotFoundError(MenuServiceError):
    """Raised when a menu entry is not found."""

    pass


class MenuValidationError(MenuServiceError):
    """Raised when a menu entry points nowhere usable."""

    pass


def is_valid_menu_path(path: str) -> bool:
    """Tell whether a path is a system key, an http(s) URL or a site path."""
    path = path.strip()
    if path in SYSTEM_PATHS:
        return True
    if path.startswith(("http://", "https://")):
        return len(path.split("://", 1)[1]) > 0
    return path.startswith("/")


def system_paths() -> list[SystemPath]:
    """List the built-in pages with their default labels."""
    return [SystemPath(key=key, label=label) for key, label in SYSTEM_PATHS.items()]


class MenuService:
    """Service for the navigation menu.

    Attributes:
        _db: Async database session.
        _event_bus: Bus receiving ``menu.updated`` events.
    """

    def __init__(self, db: AsyncSession, event_bus: EventBus | None = None) -> None:
        """Initialize the menu service.

        Args:
            db: Async database session.
            event_bus: Event bus; the process-wide bus when omitted.
        """
        self._db = db
        self._event_bus = event_bus or get_event_bus()

    async def list_menu(self) -> list[MenuItemSchema]:
        """List entries in menu order."""
        return [self._to_response(row) for row in await self._list_rows()]

    async def save_menu(self, items: list[MenuItemSchema]) -> list[MenuItemSchema]:
        """Save a batch of entries.

        Entries with a stored id are updated, the others inserted. Entries
        missing from the batch are left untouched.

        Args:
            items: Entries as edited in the menu manager.

        Returns:
            The whole menu after saving.

        Raises:
            MenuValidationError: If any entry has an unusable path.
            MenuItemNotFoundError: If an entry to update does not exist.
        """
        for item in items:
            self._validate_path(item.path)

        for item in items:
            if is_persisted_id(item.id):
                row = await self._get_by_id(item.id)
            else:
                row = MenuItem()
                self._db.add(row)
            row.label = item.label.strip()
            row.path = item.path.strip()
            row.order_index = item.order

        await self._db.commit()
        logger.info("Menu saved: %d entries", len(items))
        await self._publish_updated()
        return await self.list_menu()

    async def add_menu_item(self, label: str, path: str) -> MenuItemSchema:
        """Append an entry at the end of the menu.

        Raises:
            MenuValidationError: If the path is unusable.
        """
        self._validate_path(path)

        result = await self._db.execute(select(func.max(MenuItem.order_index)))
        next_order = (result.scalar() or 0) + 1

        row = MenuItem(label=label.strip(), path=path.strip(), order_index=next_order)
        self._db.add(row)
        await self._db.commit()
        await self._db.refresh(row)

        logger.info("Menu item created: %s (%s)", row.id, row.path)
        await self._publish_updated()
        return self._to_response(row)

    async def move_menu_item(self, item_id: str, direction: MoveDirection) -> list[MenuItemSchema]:
        """Swap an entry with its neighbour and renumber the menu to 1..n.

        Moving the first entry up or the last one down only renumbers.

        Raises:
            MenuItemNotFoundError: If the entry does not exist.
        """
        rows = await self._list_rows()
        index = next((i for i, row in enumerate(rows) if row.id == item_id), None)
        if index is None:
            raise MenuItemNotFoundError(f"Menu item {item_id} not found")

        target = index - 1 if direction == "up" else index + 1
        if 0 <= target < len(rows):
            rows[index], rows[target] = rows[target], rows[index]

        for position, row in enumerate(rows, start=1):
            row.order_index = position

        await self._db.commit()
        logger.info("Menu item moved %s: %s", direction, item_id)
        await self._publish_updated()
        return [self._to_response(row) for row in rows]

    async def delete_menu_item(self, item_id: str) -> None:
        """Delete an entry.

        Raises:
            MenuItemNotFoundError: If the entry does not exist.
        """
        row = await self._get_by_id(item_id)
        await self._db.delete(row)
        await self._db.commit()

        logger.info("Menu item deleted: %s", item_id)
        await self._publish_updated()

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _validate_path(path: str) -> None:
        if not is_valid_menu_path(path):
            raise MenuValidationError(
                f"Invalid menu path '{path}': use a system page, an http(s) URL or a path starting with '/'"
            )

    async def _list_rows(self) -> list[MenuItem]:
        result = await self._db.execute(
            select(MenuItem).order_by(MenuItem.order_index.asc(), MenuItem.created_at.asc())
        )
        return list(result.scalars().all())

    async def _get_by_id(self, item_id: str) -> MenuItem:
        row = await self._db.get(MenuItem, item_id) if is_persisted_id(item_id) else None
        if row is None:
            raise MenuItemNotFoundError(f"Menu item {item_id} not found")
        return row

    async def _publish_updated(self) -> None:
        await self._event_bus.publish(EventTypes.Menu.UPDATED, {})

    @staticmethod
    def _to_response(row: MenuItem) -> MenuItemSchema:
        return MenuItemSchema(id=row.id, label=row.label, path=row.path, order=row.order_index)
