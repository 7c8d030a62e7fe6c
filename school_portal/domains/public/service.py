# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Composition of the public site.

The public pages are assembled from several domains at once: the page
shell (configuration, menu, visitor counters and news ticker), the home
page built from display blocks, news lists and the news detail page with
its sidebar, related posts and share links.

Home page rules:
- Only visible blocks are used, in order; blocks targeting only the
  detail page are skipped.
- The hero block is skipped when the welcome banner is turned off.
- Post-bearing blocks read their post source from ``html_content``:
  a category slug narrows to that category, "featured" and "all" take
  every published post. Hero blocks always take every published post.
- Staff blocks list the first ``item_count`` members by order.
- A block without posts is dropped unless its type renders other content.
- Hero blocks expose a lead post and the two posts after it.
"""

import logging
from urllib.parse import quote

from school_portal.core.config.settings import SiteSettings
from school_portal.domains.analytics import VisitorService
from school_portal.domains.blocks import BlockService
from school_portal.domains.categories import CategoryService
from school_portal.domains.documents import DocumentService
from school_portal.domains.menu import MenuService
from school_portal.domains.posts import PostService
from school_portal.domains.posts.service import SOURCE_ALL
from school_portal.domains.site_config import SiteConfigService
from school_portal.domains.staff import StaffService
from school_portal.domains.videos import VideoService
from school_portal.models.common import PaginatedResponse
from school_portal.models.content import PostResponse
from school_portal.models.public import (
    DocumentsPage,
    HomeBlock,
    HomePage,
    NewsDetail,
    ShareLinks,
    SiteShell,
    TickerItem,
)
from school_portal.models.site import DisplayBlockSchema

logger = logging.getLogger(__name__)

TICKER_SIZE = 10
RELATED_POSTS = 5
HERO_SUBS = 2
DEFAULT_ITEM_COUNT = 5

# Block types rendering something other than posts
NON_POST_TYPES = frozenset({"docs", "staff", "video", "stats", "html"})

FACEBOOK_SHARE = "https://www.facebook.com/sharer/sharer.php?u={url}&quote={title}"
ZALO_SHARE = "https://zalo.me/share?url={url}"


class PublicServiceError(Exception):
    """Base exception for public site errors."""

    pass


class PublicNotFoundError(PublicServiceError):
    """Raised when a public page does not exist or is not published."""

    pass


def build_share_links(base_url: str, slug: str, title: str) -> ShareLinks:
    """Build the public URL of a post and its social share links."""
    url = f"{base_url.rstrip('/')}/news/{slug}"
    encoded = quote(url, safe="")
    return ShareLinks(
        url=url,
        facebook=FACEBOOK_SHARE.format(url=encoded, title=quote(title, safe="")),
        zalo=ZALO_SHARE.format(url=encoded),
    )


class PublicSiteService:
    """Assembles the payloads of the public site.

    Attributes:
        _settings: Site settings (public base URL for share links).
    """

    def __init__(
        self,
        config_service: SiteConfigService,
        menu_service: MenuService,
        visitor_service: VisitorService,
        post_service: PostService,
        block_service: BlockService,
        category_service: CategoryService,
        document_service: DocumentService,
        staff_service: StaffService,
        video_service: VideoService,
        settings: SiteSettings | None = None,
    ) -> None:
        self._config = config_service
        self._menu = menu_service
        self._visitors = visitor_service
        self._posts = post_service
        self._blocks = block_service
        self._categories = category_service
        self._documents = document_service
        self._staff = staff_service
        self._videos = video_service
        self._settings = settings or SiteSettings()

    # =========================================================================
    # Shell
    # =========================================================================

    async def get_shell(self) -> SiteShell:
        """Configuration, menu, visitor counters and ticker in one payload."""
        return SiteShell(
            config=await self._config.get_config(),
            menu=await self._menu.list_menu(),
            stats=await self._visitors.get_visitor_stats(),
            ticker=await self.get_ticker(),
        )

    async def get_ticker(self) -> list[TickerItem]:
        """Latest published headlines."""
        posts = await self._posts.list_published(limit=TICKER_SIZE)
        return [TickerItem(id=post.id, title=post.title, slug=post.slug) for post in posts]

    # =========================================================================
    # Home
    # =========================================================================

    async def get_home(self) -> HomePage:
        """Compose the home page from the visible display blocks."""
        config = await self._config.get_config()
        blocks = await self._blocks.list_blocks(visible_only=True)

        resolved: list[HomeBlock] = []
        for block in blocks:
            if block.target_page == "detail":
                continue
            if block.type == "hero" and not config.show_welcome_banner:
                continue
            home_block = await self.resolve_block(block)
            if home_block is not None:
                resolved.append(home_block)

        return HomePage(
            show_welcome_banner=config.show_welcome_banner,
            main_blocks=[b for b in resolved if b.block.position == "main"],
            sidebar_blocks=[b for b in resolved if b.block.position == "sidebar"],
        )

    async def resolve_block(self, block: DisplayBlockSchema) -> HomeBlock | None:
        """Load the content of a block.

        Returns:
            The block with its content, or None for a post block without posts.
        """
        limit = block.item_count or DEFAULT_ITEM_COUNT

        if block.type in NON_POST_TYPES:
            home_block = HomeBlock(block=block)
            if block.type == "docs":
                home_block.documents = await self._documents.list_latest(limit)
            elif block.type == "staff":
                home_block.staff = await self._staff.list_staff(limit=limit)
            elif block.type == "video":
                home_block.videos = await self._videos.list_videos(limit=limit)
            return home_block

        source = SOURCE_ALL if block.type == "hero" else block.html_content
        posts = await self._posts.list_published(source=source, limit=limit)
        if not posts:
            logger.debug("Block without posts dropped: %s", block.id)
            return None

        home_block = HomeBlock(block=block, posts=posts)
        if block.type == "hero":
            home_block.main = posts[0]
            home_block.subs = posts[1 : 1 + HERO_SUBS]
        return home_block

    # =========================================================================
    # News
    # =========================================================================

    async def list_news(
        self,
        category: str | None = None,
        limit: int = 12,
        offset: int = 0,
    ) -> PaginatedResponse[PostResponse]:
        """One page of published news, optionally of one category."""
        source = category or None
        return PaginatedResponse[PostResponse](
            items=await self._posts.list_published(source=source, limit=limit, offset=offset),
            total=await self._posts.count_published(source=source),
            limit=limit,
            offset=offset,
        )

    async def get_news_detail(self, id_or_slug: str) -> NewsDetail:
        """Published post page. Counts one view.

        Raises:
            PublicNotFoundError: If no published post matches.
        """
        post = await self._posts.get_published(id_or_slug)
        if post is None:
            raise PublicNotFoundError(f"Post '{id_or_slug}' not found")

        await self._posts.increment_views(post.id)
        post = post.model_copy(update={"views": post.views + 1})

        category = (
            await self._categories.get_post_category_by_slug(post.category) if post.category else None
        )

        return NewsDetail(
            post=post,
            category=category,
            related=await self._posts.list_related(post, limit=RELATED_POSTS),
            sidebar_blocks=await self.get_sidebar_blocks(),
            share=build_share_links(self._settings.public_base_url, post.slug, post.title),
        )

    async def get_sidebar_blocks(self) -> list[HomeBlock]:
        """Sidebar blocks shown next to a post."""
        blocks = await self._blocks.list_blocks(visible_only=True)
        resolved: list[HomeBlock] = []
        for block in blocks:
            if block.position != "sidebar" or block.target_page == "home":
                continue
            home_block = await self.resolve_block(block)
            if home_block is not None:
                resolved.append(home_block)
        return resolved

    # =========================================================================
    # Documents
    # =========================================================================

    async def get_documents_page(self, category_slug: str) -> DocumentsPage:
        """Documents of the category with the given slug.

        Raises:
            PublicNotFoundError: If the category does not exist.
        """
        category = await self._categories.get_doc_category_by_slug(category_slug)
        if category is None:
            raise PublicNotFoundError(f"Document category '{category_slug}' not found")
        return DocumentsPage(
            category=category,
            documents=await self._documents.list_documents(category_id=category.id),
        )
