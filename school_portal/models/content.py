# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Schemas for categories, posts, documents and introduction pages."""

from datetime import date as date_type
from datetime import datetime
from typing import Any, Literal

from pydantic import Field, field_validator

from school_portal.models.common import CamelModel
from school_portal.utils.text import parse_tags

PostStatus = Literal["published", "draft"]
DraftKind = Literal["news", "announcement"]


# ============================================================================
# Categories
# ============================================================================


class PostCategorySchema(CamelModel):
    """News category as seen by the post editor."""

    id: str | None = None
    name: str = Field(..., min_length=1, max_length=255)
    slug: str | None = Field(None, max_length=255)
    color: str = "blue"
    order: int = Field(default=0, ge=0)


class DocCategorySchema(CamelModel):
    """Document category as seen by the document manager."""

    id: str | None = None
    name: str = Field(..., min_length=1, max_length=255)
    slug: str | None = Field(None, max_length=255)
    description: str | None = None
    order: int = Field(default=0, ge=0)


# ============================================================================
# Posts
# ============================================================================


class Attachment(CamelModel):
    """File attached to a post."""

    name: str
    url: str


class PostSaveRequest(CamelModel):
    """Create or update a post. A stored UUID in ``id`` means update."""

    id: str | None = None
    title: str = Field(..., max_length=500)
    slug: str | None = Field(None, max_length=500)
    summary: str | None = None
    content: str = ""
    thumbnail: str | None = None
    image_caption: str | None = Field(None, max_length=500)
    author: str | None = Field(None, max_length=255)
    date: datetime | None = None
    category: str | None = None
    status: PostStatus = "draft"
    is_featured: bool = False
    show_on_home: bool = True
    block_ids: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    attachments: list[Attachment] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, value: Any) -> list[str]:
        """Accept tags as a list or a comma-separated string."""
        return parse_tags(value)


class PostResponse(CamelModel):
    """Post as returned by the API."""

    id: str
    title: str
    slug: str
    summary: str | None = None
    content: str
    thumbnail: str | None = None
    image_caption: str | None = None
    author: str | None = None
    date: datetime
    category: str | None = None
    status: PostStatus
    views: int = 0
    is_featured: bool = False
    show_on_home: bool = True
    block_ids: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    attachments: list[Attachment] = Field(default_factory=list)
    created_at: datetime | None = None


class ContentDraftRequest(CamelModel):
    """Ask the writing assistant for a draft."""

    title: str = Field(..., max_length=500)
    kind: DraftKind = "news"


class ContentDraftResponse(CamelModel):
    """Generated draft ready to drop into the post editor."""

    content: str = Field(..., description="HTML body")
    summary: str


class YouTubeEmbedRequest(CamelModel):
    """Turn a YouTube link into an embeddable snippet."""

    url: str


class YouTubeEmbedResponse(CamelModel):
    """Embeddable snippet for a YouTube video."""

    video_id: str
    html: str


# ============================================================================
# Documents
# ============================================================================


class DocumentSchema(CamelModel):
    """Official document or resource."""

    id: str | None = None
    number: str | None = Field(None, max_length=100)
    title: str = Field(..., max_length=500)
    date: str | None = Field(None, max_length=20)
    issued_on: date_type | None = None
    category_id: str | None = None
    download_url: str | None = None
    created_at: datetime | None = None


# ============================================================================
# Introductions
# ============================================================================


class IntroductionSchema(CamelModel):
    """Page of the introduction section."""

    id: str | None = None
    title: str = Field(..., min_length=1, max_length=500)
    slug: str | None = Field(None, max_length=500)
    content: str | None = None
    image_url: str | None = None
    order: int = Field(default=0, ge=0)
    is_visible: bool = True
