# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Gallery albums, gallery images and embedded videos."""

from datetime import date

from sqlalchemy import Date, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from school_portal.infrastructure.database.models.base import (
    Base,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
)


class GalleryAlbum(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Photo album."""

    __tablename__ = "gallery_albums"

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    thumbnail: Mapped[str | None] = mapped_column(Text)
    created_date: Mapped[date | None] = mapped_column(Date)

    images: Mapped[list["GalleryImage"]] = relationship(
        back_populates="album",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class GalleryImage(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Image belonging to an album."""

    __tablename__ = "gallery_images"

    url: Mapped[str] = mapped_column(Text, nullable=False)
    caption: Mapped[str | None] = mapped_column(String(500))
    album_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("gallery_albums.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    album: Mapped[GalleryAlbum] = relationship(back_populates="images")


class Video(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """YouTube video shown in the video library and video blocks."""

    __tablename__ = "videos"

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    youtube_url: Mapped[str] = mapped_column(Text, nullable=False)
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
