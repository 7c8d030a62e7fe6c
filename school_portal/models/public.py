# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Composite payloads served to the public site."""

from pydantic import Field

from school_portal.models.analytics import VisitorStats
from school_portal.models.common import CamelModel
from school_portal.models.content import DocCategorySchema, DocumentSchema, PostCategorySchema, PostResponse
from school_portal.models.media import VideoSchema
from school_portal.models.people import StaffMemberSchema
from school_portal.models.site import DisplayBlockSchema, MenuItemSchema, SchoolConfigSchema


class TickerItem(CamelModel):
    """Headline shown in the scrolling news ticker."""

    id: str
    title: str
    slug: str


class SiteShell(CamelModel):
    """Everything the page chrome needs: header, menu, footer, ticker."""

    config: SchoolConfigSchema
    menu: list[MenuItemSchema]
    stats: VisitorStats
    ticker: list[TickerItem]


class HomeBlock(CamelModel):
    """A display block resolved with the content it shows."""

    block: DisplayBlockSchema
    posts: list[PostResponse] = Field(default_factory=list)
    main: PostResponse | None = Field(None, description="Lead post of a hero block")
    subs: list[PostResponse] = Field(default_factory=list, description="Secondary hero posts")
    documents: list[DocumentSchema] = Field(default_factory=list)
    staff: list[StaffMemberSchema] = Field(default_factory=list)
    videos: list[VideoSchema] = Field(default_factory=list)


class HomePage(CamelModel):
    """Composed home page."""

    show_welcome_banner: bool
    main_blocks: list[HomeBlock]
    sidebar_blocks: list[HomeBlock]


class ShareLinks(CamelModel):
    """Social share URLs for a post."""

    url: str
    facebook: str
    zalo: str


class NewsDetail(CamelModel):
    """Post page with its surroundings."""

    post: PostResponse
    category: PostCategorySchema | None = None
    related: list[PostResponse] = Field(default_factory=list)
    sidebar_blocks: list[HomeBlock] = Field(default_factory=list)
    share: ShareLinks


class DocumentsPage(CamelModel):
    """Documents of one category."""

    category: DocCategorySchema | None = None
    documents: list[DocumentSchema]
