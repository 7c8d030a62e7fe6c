# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Video library service.

Videos are YouTube links; a link is only stored when an 11-character
video id can be extracted from it.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from school_portal.infrastructure.database.models import Video
from school_portal.models.media import VideoSchema
from school_portal.utils.text import extract_youtube_id, is_persisted_id

logger = logging.getLogger(__name__)


class VideoServiceError(Exception):
    """Base exception for video service errors."""

    pass


class VideoNotFoundError(VideoServiceError):
    """Raised when a video is not found."""

    pass


class VideoValidationError(VideoServiceError):
    """Raised when a video link is not a usable YouTube URL."""

    pass


class VideoService:
    """Service for the video library."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def list_videos(self, limit: int | None = None) -> list[VideoSchema]:
        """List videos by display order."""
        stmt = select(Video).order_by(Video.order_index.asc(), Video.created_at.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self._db.execute(stmt)
        return [self._to_response(row) for row in result.scalars().all()]

    async def save_video(self, video: VideoSchema) -> VideoSchema:
        """Create or update a video.

        Raises:
            VideoValidationError: If no video id can be extracted from the link.
            VideoNotFoundError: If updating a video that does not exist.
        """
        url = video.youtube_url.strip()
        if extract_youtube_id(url) is None:
            raise VideoValidationError(f"Invalid YouTube link: {url}")

        if is_persisted_id(video.id):
            row = await self._get_by_id(video.id)
        else:
            row = Video()
            self._db.add(row)

        row.title = video.title.strip()
        row.youtube_url = url
        row.order_index = video.order

        await self._db.commit()
        await self._db.refresh(row)

        logger.info("Video saved: %s", row.id)
        return self._to_response(row)

    async def delete_video(self, video_id: str) -> None:
        """Delete a video.

        Raises:
            VideoNotFoundError: If the video does not exist.
        """
        row = await self._get_by_id(video_id)
        await self._db.delete(row)
        await self._db.commit()
        logger.info("Video deleted: %s", video_id)

    async def _get_by_id(self, video_id: str) -> Video:
        row = await self._db.get(Video, video_id) if is_persisted_id(video_id) else None
        if row is None:
            raise VideoNotFoundError(f"Video {video_id} not found")
        return row

    @staticmethod
    def _to_response(row: Video) -> VideoSchema:
        return VideoSchema(
            id=row.id,
            title=row.title,
            youtube_url=row.youtube_url,
            order=row.order_index,
            video_id=extract_youtube_id(row.youtube_url),
        )
