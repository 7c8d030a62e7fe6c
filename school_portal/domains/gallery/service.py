# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Photo gallery service: albums and the images inside them.

Deleting an album removes its images through the foreign key cascade.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from school_portal.infrastructure.database.models import GalleryAlbum, GalleryImage
from school_portal.models.media import AlbumDetail, AlbumSchema, GalleryImageSchema
from school_portal.utils.text import is_persisted_id

logger = logging.getLogger(__name__)


class GalleryServiceError(Exception):
    """Base exception for gallery service errors."""

    pass


class AlbumNotFoundError(GalleryServiceError):
    """Raised when an album is not found."""

    pass


class ImageNotFoundError(GalleryServiceError):
    """Raised when an image is not found."""

    pass


class GalleryValidationError(GalleryServiceError):
    """Raised when an album or image is invalid."""

    pass


class GalleryService:
    """Service for albums and gallery images.

    Attributes:
        _db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    # =========================================================================
    # Albums
    # =========================================================================

    async def list_albums(self) -> list[AlbumSchema]:
        """List albums, newest first."""
        result = await self._db.execute(select(GalleryAlbum).order_by(GalleryAlbum.created_at.desc()))
        return [self._to_album(row) for row in result.scalars().all()]

    async def get_album(self, album_id: str) -> AlbumDetail:
        """Get an album with its images.

        Raises:
            AlbumNotFoundError: If the album does not exist.
        """
        album = await self._get_album(album_id)
        images = await self.list_images(album.id)
        return AlbumDetail(**self._to_album(album).model_dump(), images=images)

    async def save_album(self, album: AlbumSchema) -> AlbumSchema:
        """Create or update an album.

        Raises:
            GalleryValidationError: If the title is empty.
            AlbumNotFoundError: If updating an album that does not exist.
        """
        title = album.title.strip()
        if not title:
            raise GalleryValidationError("Album title is required")

        if is_persisted_id(album.id):
            row = await self._get_album(album.id)
        else:
            row = GalleryAlbum()
            self._db.add(row)

        row.title = title
        row.description = album.description
        row.thumbnail = album.thumbnail
        row.created_date = album.created_date

        await self._db.commit()
        await self._db.refresh(row)

        logger.info("Album saved: %s", row.id)
        return self._to_album(row)

    async def delete_album(self, album_id: str) -> None:
        """Delete an album and its images.

        Raises:
            AlbumNotFoundError: If the album does not exist.
        """
        row = await self._get_album(album_id)
        await self._db.delete(row)
        await self._db.commit()
        logger.info("Album deleted: %s", album_id)

    # =========================================================================
    # Images
    # =========================================================================

    async def list_images(self, album_id: str) -> list[GalleryImageSchema]:
        """List the images of an album in upload order."""
        result = await self._db.execute(
            select(GalleryImage)
            .where(GalleryImage.album_id == album_id)
            .order_by(GalleryImage.created_at.asc())
        )
        return [self._to_image(row) for row in result.scalars().all()]

    async def add_image(self, image: GalleryImageSchema) -> GalleryImageSchema:
        """Add an image to an album.

        Raises:
            GalleryValidationError: If the url is empty.
            AlbumNotFoundError: If the album does not exist.
        """
        url = image.url.strip()
        if not url:
            raise GalleryValidationError("Image url is required")
        album = await self._get_album(image.album_id)

        row = GalleryImage(url=url, caption=image.caption, album_id=album.id)
        self._db.add(row)
        await self._db.commit()
        await self._db.refresh(row)

        logger.info("Image added to album %s: %s", album.id, row.id)
        return self._to_image(row)

    async def delete_image(self, image_id: str) -> None:
        """Delete an image.

        Raises:
            ImageNotFoundError: If the image does not exist.
        """
        row = await self._db.get(GalleryImage, image_id) if is_persisted_id(image_id) else None
        if row is None:
            raise ImageNotFoundError(f"Image {image_id} not found")
        await self._db.delete(row)
        await self._db.commit()
        logger.info("Image deleted: %s", image_id)

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _get_album(self, album_id: str) -> GalleryAlbum:
        row = await self._db.get(GalleryAlbum, album_id) if is_persisted_id(album_id) else None
        if row is None:
            raise AlbumNotFoundError(f"Album {album_id} not found")
        return row

    @staticmethod
    def _to_album(row: GalleryAlbum) -> AlbumSchema:
        return AlbumSchema(
            id=row.id,
            title=row.title,
            description=row.description,
            thumbnail=row.thumbnail,
            created_date=row.created_date,
            created_at=row.created_at,
        )

    @staticmethod
    def _to_image(row: GalleryImage) -> GalleryImageSchema:
        return GalleryImageSchema(id=row.id, url=row.url, caption=row.caption, album_id=row.album_id)
