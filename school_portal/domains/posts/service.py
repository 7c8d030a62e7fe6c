# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""News post service.

Handles editorial CRUD for posts as well as the published-only queries
used by the public site (home blocks, news list, related posts, ticker).
Writes publish ``post.*`` events after the transaction commits.

Example:
    >>> service = PostService(db)
    >>> post = await service.save_post(PostSaveRequest(title="Khai giảng", content="..."))
    >>> await service.increment_views(post.id)
"""

import logging
from typing import Any

from sqlalchemy import Select, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from school_portal.infrastructure.database.models import Post
from school_portal.infrastructure.events import EventBus, EventTypes, get_event_bus
from school_portal.models.content import Attachment, PostResponse, PostSaveRequest, YouTubeEmbedResponse
from school_portal.utils.datetime import utc_now
from school_portal.utils.text import extract_youtube_id, is_persisted_id, slugify, youtube_embed_html

logger = logging.getLogger(__name__)

PUBLISHED = "published"
SOURCE_ALL = "all"
SOURCE_FEATURED = "featured"


class PostServiceError(Exception):
    """Base exception for post service errors."""

    pass


class PostNotFoundError(PostServiceError):
    """Raised when a post is not found."""

    pass


class PostValidationError(PostServiceError):
    """Raised when a post or a post helper input is invalid."""

    pass


def to_post_response(post: Post) -> PostResponse:
    """Convert a post row to its API representation."""
    return PostResponse(
        id=post.id,
        title=post.title,
        slug=post.slug,
        summary=post.summary,
        content=post.content,
        thumbnail=post.thumbnail,
        image_caption=post.image_caption,
        author=post.author,
        date=post.date,
        category=post.category,
        status=post.status,
        views=post.views or 0,
        is_featured=post.is_featured,
        show_on_home=post.show_on_home,
        block_ids=list(post.block_ids or []),
        tags=list(post.tags or []),
        attachments=[Attachment.model_validate(a) for a in post.attachments or []],
        created_at=post.created_at,
    )


def embed_youtube(url: str) -> YouTubeEmbedResponse:
    """Build the embeddable snippet for a YouTube link.

    Raises:
        PostValidationError: If no valid video id can be extracted.
    """
    video_id = extract_youtube_id(url)
    if video_id is None:
        raise PostValidationError("Invalid YouTube link")
    return YouTubeEmbedResponse(video_id=video_id, html=youtube_embed_html(video_id))


class PostService:
    """Service for news posts.

    Attributes:
        _db: Async database session.
        _event_bus: Bus receiving post events.
    """

    def __init__(self, db: AsyncSession, event_bus: EventBus | None = None) -> None:
        """Initialize the post service.

        Args:
            db: Async database session.
            event_bus: Event bus; the process-wide bus when omitted.
        """
        self._db = db
        self._event_bus = event_bus or get_event_bus()

    # =========================================================================
    # Editorial operations
    # =========================================================================

    async def list_posts(
        self,
        search: str | None = None,
        status: str | None = None,
        category: str | None = None,
    ) -> list[PostResponse]:
        """List posts for the editor, newest first.

        Args:
            search: Case-insensitive title filter.
            status: Only posts with this status.
            category: Only posts of this category slug.

        Returns:
            Matching posts ordered by date then creation time, descending.
        """
        stmt = select(Post)
        if search and search.strip():
            stmt = stmt.where(Post.title.ilike(f"%{search.strip()}%"))
        if status:
            stmt = stmt.where(Post.status == status)
        if category:
            stmt = stmt.where(Post.category == category)
        stmt = stmt.order_by(Post.date.desc(), Post.created_at.desc())

        result = await self._db.execute(stmt)
        return [to_post_response(row) for row in result.scalars().all()]

    async def get_post(self, post_id: str) -> PostResponse:
        """Get a post by id.

        Raises:
            PostNotFoundError: If the post does not exist.
        """
        return to_post_response(await self._get_by_id(post_id))

    async def get_post_by_slug(self, slug: str) -> PostResponse | None:
        """Find the most recent post with the given slug."""
        result = await self._db.execute(
            select(Post).where(Post.slug == slug).order_by(Post.date.desc()).limit(1)
        )
        row = result.scalar_one_or_none()
        return to_post_response(row) if row else None

    async def save_post(self, request: PostSaveRequest) -> PostResponse:
        """Create or update a post.

        Args:
            request: Post form. A stored UUID in ``id`` updates that post.

        Returns:
            The saved post.

        Raises:
            PostValidationError: If the title or content is empty.
            PostNotFoundError: If updating a post that does not exist.
        """
        title = request.title.strip()
        if not title:
            raise PostValidationError("Title is required")
        if not request.content or not request.content.strip():
            raise PostValidationError("Content is required")

        values: dict[str, Any] = {
            "title": title,
            "slug": request.slug.strip() if request.slug and request.slug.strip() else slugify(title),
            "summary": request.summary,
            "content": request.content,
            "thumbnail": request.thumbnail,
            "image_caption": request.image_caption,
            "author": request.author,
            "category": request.category or None,
            "status": request.status,
            "is_featured": request.is_featured,
            "show_on_home": request.show_on_home,
            "block_ids": list(request.block_ids),
            "tags": list(request.tags),
            "attachments": [a.model_dump() for a in request.attachments],
        }

        if is_persisted_id(request.id):
            post = await self._get_by_id(request.id)
            for key, value in values.items():
                setattr(post, key, value)
            if request.date is not None:
                post.date = request.date
            event_type = EventTypes.Post.UPDATED
        else:
            post = Post(**values, date=request.date or utc_now(), views=0)
            self._db.add(post)
            event_type = EventTypes.Post.CREATED

        await self._db.commit()
        await self._db.refresh(post)

        logger.info("Post %s: %s (%s)", event_type.split(".")[1], post.id, post.slug)
        await self._event_bus.publish(
            event_type,
            {"postId": post.id, "slug": post.slug, "status": post.status},
        )
        return to_post_response(post)

    async def delete_post(self, post_id: str) -> None:
        """Delete a post.

        Raises:
            PostNotFoundError: If the post does not exist.
        """
        post = await self._get_by_id(post_id)
        await self._db.delete(post)
        await self._db.commit()

        logger.info("Post deleted: %s", post_id)
        await self._event_bus.publish(EventTypes.Post.DELETED, {"postId": post_id})

    async def increment_views(self, post_id: str) -> None:
        """Add one view to a post."""
        await self._db.execute(
            update(Post).where(Post.id == post_id).values(views=Post.views + 1)
        )
        await self._db.commit()

    # =========================================================================
    # Published queries
    # =========================================================================

    async def list_published(
        self,
        source: str | None = None,
        limit: int = 5,
        offset: int = 0,
    ) -> list[PostResponse]:
        """List published posts for a post source.

        Args:
            source: A category slug, or "all", "featured" or empty for every post.
            limit: Maximum number of posts.
            offset: Number of posts to skip.

        Returns:
            Published posts, newest first.
        """
        stmt = self._published(source).order_by(Post.date.desc()).offset(offset).limit(limit)
        result = await self._db.execute(stmt)
        return [to_post_response(row) for row in result.scalars().all()]

    async def count_published(self, source: str | None = None) -> int:
        """Count published posts for a post source."""
        stmt = self._published(source).with_only_columns(func.count(Post.id)).order_by(None)
        result = await self._db.execute(stmt)
        return result.scalar() or 0

    async def get_published(self, id_or_slug: str) -> PostResponse | None:
        """Find a published post by id or slug."""
        condition = Post.id == id_or_slug if is_persisted_id(id_or_slug) else Post.slug == id_or_slug
        result = await self._db.execute(
            select(Post)
            .where(condition, Post.status == PUBLISHED)
            .order_by(Post.date.desc())
            .limit(1)
        )
        row = result.scalar_one_or_none()
        return to_post_response(row) if row else None

    async def list_related(self, post: PostResponse, limit: int = 5) -> list[PostResponse]:
        """Other published posts of the same category."""
        if not post.category:
            return []
        result = await self._db.execute(
            select(Post)
            .where(Post.status == PUBLISHED, Post.category == post.category, Post.id != post.id)
            .order_by(Post.date.desc())
            .limit(limit)
        )
        return [to_post_response(row) for row in result.scalars().all()]

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _published(source: str | None) -> Select:
        stmt = select(Post).where(Post.status == PUBLISHED)
        if source and source not in (SOURCE_ALL, SOURCE_FEATURED):
            stmt = stmt.where(Post.category == source)
        return stmt

    async def _get_by_id(self, post_id: str) -> Post:
        post = await self._db.get(Post, post_id) if is_persisted_id(post_id) else None
        if post is None:
            raise PostNotFoundError(f"Post {post_id} not found")
        return post
