# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Editorial content tables: categories, posts, documents and introductions."""

from datetime import date as date_type
from datetime import datetime
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from school_portal.infrastructure.database.models.base import (
    Base,
    TimestampMixin,
    UpdatedAtMixin,
    UUIDPrimaryKeyMixin,
)
from school_portal.utils.datetime import utc_now


class Category(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Category shared by posts ("news") and documents ("documents", "files")."""

    __tablename__ = "categories"
    __table_args__ = (
        UniqueConstraint("module_type", "slug", name="uq_categories_module_slug"),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False)
    module_type: Mapped[str] = mapped_column(String(20), nullable=False, default="news")
    parent_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("categories.id", ondelete="SET NULL")
    )
    description: Mapped[str | None] = mapped_column(Text)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class Post(UUIDPrimaryKeyMixin, TimestampMixin, UpdatedAtMixin, Base):
    """News article. ``category`` stores the slug of a news category."""

    __tablename__ = "posts"
    __table_args__ = (
        Index("ix_posts_status_date", "status", "date"),
        Index("ix_posts_slug", "slug"),
    )

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    slug: Mapped[str] = mapped_column(String(500), nullable=False)
    summary: Mapped[str | None] = mapped_column(Text)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    thumbnail: Mapped[str | None] = mapped_column(Text)
    image_caption: Mapped[str | None] = mapped_column(String(500))
    author: Mapped[str | None] = mapped_column(String(255))
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utc_now)
    category: Mapped[str | None] = mapped_column(String(255))
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="draft")
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    show_on_home: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    block_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    attachments: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)


class Document(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Official document or downloadable resource."""

    __tablename__ = "documents"

    number: Mapped[str | None] = mapped_column(String(100))
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    date: Mapped[str | None] = mapped_column(String(20))
    issued_on: Mapped[date_type | None] = mapped_column(Date, index=True)
    category_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("categories.id", ondelete="SET NULL")
    )
    download_url: Mapped[str | None] = mapped_column(Text)


class SchoolIntroduction(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Page of the "about the school" section."""

    __tablename__ = "school_introductions"

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    slug: Mapped[str] = mapped_column(String(500), nullable=False, unique=True)
    content: Mapped[str | None] = mapped_column(Text)
    image_url: Mapped[str | None] = mapped_column(Text)
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
