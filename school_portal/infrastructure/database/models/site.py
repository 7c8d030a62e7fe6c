# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Site-wide presentation tables: configuration, menu and display blocks."""

from typing import Any

from sqlalchemy import JSON, Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from school_portal.infrastructure.database.models.base import (
    Base,
    TimestampMixin,
    UpdatedAtMixin,
    UUIDPrimaryKeyMixin,
)


class SchoolConfig(UUIDPrimaryKeyMixin, TimestampMixin, UpdatedAtMixin, Base):
    """Singleton row holding the school's identity, contact and theme settings."""

    __tablename__ = "school_config"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slogan: Mapped[str | None] = mapped_column(String(255))
    logo_url: Mapped[str | None] = mapped_column(Text)
    favicon_url: Mapped[str | None] = mapped_column(Text)
    banner_url: Mapped[str | None] = mapped_column(Text)
    banner_height: Mapped[int] = mapped_column(Integer, nullable=False, default=400)
    principal_name: Mapped[str | None] = mapped_column(String(255))
    address: Mapped[str | None] = mapped_column(String(500))
    phone: Mapped[str | None] = mapped_column(String(50))
    email: Mapped[str | None] = mapped_column(String(255))
    hotline: Mapped[str | None] = mapped_column(String(50))
    map_url: Mapped[str | None] = mapped_column(Text)
    facebook: Mapped[str | None] = mapped_column(Text)
    youtube: Mapped[str | None] = mapped_column(Text)
    zalo: Mapped[str | None] = mapped_column(Text)
    website: Mapped[str | None] = mapped_column(Text)
    show_welcome_banner: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    home_news_count: Mapped[int] = mapped_column(Integer, nullable=False, default=6)
    home_show_program: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    primary_color: Mapped[str | None] = mapped_column(String(50))
    title_color: Mapped[str | None] = mapped_column(String(50))
    title_shadow_color: Mapped[str | None] = mapped_column(String(50))
    meta_title: Mapped[str | None] = mapped_column(String(255))
    meta_description: Mapped[str | None] = mapped_column(Text)
    footer_links: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)


class MenuItem(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Entry of the public navigation bar."""

    __tablename__ = "menu_items"

    label: Mapped[str] = mapped_column(String(255), nullable=False)
    path: Mapped[str] = mapped_column(String(500), nullable=False)
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class DisplayBlock(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Configurable section of the home page or sidebar.

    For post-bearing block types ``html_content`` holds the post source:
    "all", "featured" or a category slug. For ``html`` blocks it is markup.
    """

    __tablename__ = "display_blocks"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    position: Mapped[str] = mapped_column(String(20), nullable=False, default="main")
    type: Mapped[str] = mapped_column(String(20), nullable=False, default="grid")
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    item_count: Mapped[int] = mapped_column(Integer, nullable=False, default=5)
    is_visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    html_content: Mapped[str | None] = mapped_column(Text)
    target_page: Mapped[str] = mapped_column(String(20), nullable=False, default="all")
    custom_color: Mapped[str | None] = mapped_column(String(50))
    custom_text_color: Mapped[str | None] = mapped_column(String(50))
