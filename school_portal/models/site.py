# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Schemas for school configuration, navigation menu and display blocks."""

from typing import Literal

from pydantic import Field

from school_portal.models.common import CamelModel, MoveDirection

BlockType = Literal["hero", "grid", "list", "highlight", "docs", "staff", "video", "stats", "html"]
BlockPosition = Literal["main", "sidebar"]
BlockTargetPage = Literal["all", "home", "detail"]


class FooterLink(CamelModel):
    """Custom link rendered in the site footer."""

    id: str = Field(..., description="Client-side identifier")
    label: str = Field(..., min_length=1, max_length=255)
    url: str = Field(..., min_length=1)


class SchoolConfigSchema(CamelModel):
    """School identity, contact details, theme and SEO settings."""

    id: str | None = None
    name: str = Field(..., min_length=1, max_length=255)
    slogan: str | None = None
    logo_url: str | None = None
    favicon_url: str | None = None
    banner_url: str | None = None
    banner_height: int = Field(default=400, ge=200, le=800)
    principal_name: str | None = None
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    hotline: str | None = None
    map_url: str | None = None
    facebook: str | None = None
    youtube: str | None = None
    zalo: str | None = None
    website: str | None = None
    show_welcome_banner: bool = True
    home_news_count: int = Field(default=6, ge=1, le=50)
    home_show_program: bool = True
    primary_color: str | None = None
    title_color: str | None = None
    title_shadow_color: str | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    footer_links: list[FooterLink] = Field(default_factory=list)


class MenuItemSchema(CamelModel):
    """Navigation entry. ``path`` is a system page key or a URL."""

    id: str | None = None
    label: str = Field(..., min_length=1, max_length=255)
    path: str = Field(..., min_length=1, max_length=500)
    order: int = Field(default=0, ge=0)


class MenuItemCreate(CamelModel):
    """Request to append an entry at the end of the menu."""

    label: str = Field(..., min_length=1, max_length=255)
    path: str = Field(..., min_length=1, max_length=500)


class MenuMoveRequest(CamelModel):
    """Request to move an entry one step up or down."""

    direction: MoveDirection


class SystemPath(CamelModel):
    """Built-in page selectable as a menu target."""

    key: str
    label: str


class DisplayBlockSchema(CamelModel):
    """Configurable section of the home page or sidebar."""

    id: str | None = None
    name: str = Field(..., min_length=1, max_length=255)
    position: BlockPosition = "main"
    type: BlockType = "grid"
    order: int = Field(default=0, ge=0)
    item_count: int = Field(default=5, ge=1, le=50)
    is_visible: bool = True
    html_content: str | None = None
    target_page: BlockTargetPage = "all"
    custom_color: str | None = None
    custom_text_color: str | None = None
