# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Schemas for gallery albums, images, videos and uploads."""

from datetime import date, datetime

from pydantic import Field

from school_portal.models.common import CamelModel


class AlbumSchema(CamelModel):
    """Photo album."""

    id: str | None = None
    title: str = Field(..., min_length=1, max_length=500)
    description: str | None = None
    thumbnail: str | None = None
    created_date: date | None = None
    created_at: datetime | None = None


class GalleryImageSchema(CamelModel):
    """Image inside an album."""

    id: str | None = None
    url: str = Field(..., min_length=1)
    caption: str | None = Field(None, max_length=500)
    album_id: str


class AlbumDetail(AlbumSchema):
    """Album together with its images."""

    images: list[GalleryImageSchema] = Field(default_factory=list)


class VideoSchema(CamelModel):
    """YouTube video entry."""

    id: str | None = None
    title: str = Field(..., min_length=1, max_length=500)
    youtube_url: str = Field(..., min_length=1)
    order: int = Field(default=0, ge=0)
    video_id: str | None = Field(None, description="Extracted YouTube id")


class UploadResponse(CamelModel):
    """Location of a stored upload."""

    path: str
    url: str
    content_type: str
    size: int
