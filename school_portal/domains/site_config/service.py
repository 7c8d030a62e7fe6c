# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School configuration service.

The portal keeps a single configuration row. Until an administrator saves
one, readers get FALLBACK_CONFIG so a fresh site still renders.

Example:
    >>> service = SiteConfigService(db)
    >>> config = await service.get_config()
    >>> config.name
    'Trường PTDTBT TH và THCS Suối Lư'
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from school_portal.infrastructure.database.models import SchoolConfig
from school_portal.infrastructure.events import EventBus, EventTypes, get_event_bus
from school_portal.models.site import FooterLink, SchoolConfigSchema

logger = logging.getLogger(__name__)

FALLBACK_SCHOOL_NAME = "Trường PTDTBT TH và THCS Suối Lư"

FALLBACK_CONFIG = SchoolConfigSchema(
    name=FALLBACK_SCHOOL_NAME,
    slogan="Trách nhiệm - Yêu thương - Sáng tạo",
    address="Huyện Điện Biên Đông, Tỉnh Điện Biên",
    banner_height=400,
    show_welcome_banner=True,
    home_news_count=6,
    home_show_program=True,
    primary_color="#1e3a8a",
    title_color="#fbbf24",
    title_shadow_color="rgba(0,0,0,0.8)",
    meta_title=FALLBACK_SCHOOL_NAME,
    meta_description=f"Cổng thông tin điện tử {FALLBACK_SCHOOL_NAME}",
    footer_links=[],
)

# Columns copied verbatim between the schema and the row
_CONFIG_FIELDS = (
    "name",
    "slogan",
    "logo_url",
    "favicon_url",
    "banner_url",
    "banner_height",
    "principal_name",
    "address",
    "phone",
    "email",
    "hotline",
    "map_url",
    "facebook",
    "youtube",
    "zalo",
    "website",
    "show_welcome_banner",
    "home_news_count",
    "home_show_program",
    "primary_color",
    "title_color",
    "title_shadow_color",
    "meta_title",
    "meta_description",
)


class SiteConfigService:
    """Service for reading and saving the school configuration.

    Attributes:
        _db: Async database session.
        _event_bus: Bus receiving ``config.updated`` events.
    """

    def __init__(self, db: AsyncSession, event_bus: EventBus | None = None) -> None:
        """Initialize the configuration service.

        Args:
            db: Async database session.
            event_bus: Event bus; the process-wide bus when omitted.
        """
        self._db = db
        self._event_bus = event_bus or get_event_bus()

    async def get_config(self) -> SchoolConfigSchema:
        """Get the school configuration, or the fallback when none is saved."""
        row = await self._get_row()
        if row is None:
            return FALLBACK_CONFIG.model_copy(deep=True)
        return self._to_response(row)

    async def save_config(self, config: SchoolConfigSchema) -> SchoolConfigSchema:
        """Update the configuration row, inserting it on first save.

        Args:
            config: Full configuration as edited in the settings screen.

        Returns:
            The stored configuration.
        """
        row = await self._get_row()
        values = {field: getattr(config, field) for field in _CONFIG_FIELDS}
        values["footer_links"] = [link.model_dump() for link in config.footer_links]

        if row is None:
            row = SchoolConfig(**values)
            self._db.add(row)
            action = "created"
        else:
            for field, value in values.items():
                setattr(row, field, value)
            action = "updated"

        await self._db.commit()
        await self._db.refresh(row)

        logger.info("School config %s: %s", action, row.id)
        await self._event_bus.publish(EventTypes.Config.UPDATED, {"id": row.id})
        return self._to_response(row)

    async def _get_row(self) -> SchoolConfig | None:
        result = await self._db.execute(
            select(SchoolConfig).order_by(SchoolConfig.created_at.asc()).limit(1)
        )
        return result.scalar_one_or_none()

    def _to_response(self, row: SchoolConfig) -> SchoolConfigSchema:
        data = {field: getattr(row, field) for field in _CONFIG_FIELDS}
        # Older rows may predate the columns with defaults
        data["banner_height"] = row.banner_height or FALLBACK_CONFIG.banner_height
        data["home_news_count"] = row.home_news_count or FALLBACK_CONFIG.home_news_count
        return SchoolConfigSchema(
            id=row.id,
            footer_links=[FooterLink.model_validate(link) for link in (row.footer_links or [])],
            **data,
        )
