# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Upload handling for images and attachments.

Files are stored under ``uploads/<yyyy>/<mm>/<uuid>-<safe-name>`` in the
configured storage backend. Only images and common office/PDF documents
are accepted; SVG is not.
"""

import logging
import uuid
from datetime import datetime
from pathlib import PurePosixPath
from typing import Callable

from school_portal.infrastructure.storage import StorageBackend, StorageError
from school_portal.models.media import UploadResponse
from school_portal.utils.datetime import utc_now
from school_portal.utils.text import slugify

logger = logging.getLogger(__name__)

UPLOAD_PREFIX = "uploads"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024

ALLOWED_CONTENT_TYPES: frozenset[str] = frozenset(
    {
        "image/jpeg",
        "image/png",
        "image/gif",
        "image/webp",
        "image/x-icon",
        "image/vnd.microsoft.icon",
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/vnd.ms-excel",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "application/vnd.ms-powerpoint",
        "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    }
)


class MediaServiceError(Exception):
    """Base exception for media service errors."""

    pass


class MediaValidationError(MediaServiceError):
    """Raised when an upload is empty, too large or of a refused type."""

    pass


class MediaStorageError(MediaServiceError):
    """Raised when the storage backend fails."""

    pass


def safe_filename(filename: str | None) -> str:
    """Reduce an uploaded file name to ASCII slug characters.

    Example:
        >>> safe_filename("Ảnh lễ khai giảng.JPG")
        'anh-le-khai-giang.jpg'
    """
    name = PurePosixPath((filename or "").replace("\\", "/")).name
    stem, dot, ext = name.rpartition(".")
    if not dot:
        stem, ext = ext, ""
    safe = slugify(stem)
    ext = slugify(ext).replace("-", "")
    return f"{safe}.{ext}" if ext and ext != "noslug" else safe


def build_object_path(filename: str | None, now: datetime) -> str:
    """Build the storage key of a new upload."""
    return f"{UPLOAD_PREFIX}/{now:%Y}/{now:%m}/{uuid.uuid4()}-{safe_filename(filename)}"


class MediaService:
    """Service for media uploads.

    Attributes:
        _storage: Storage backend receiving the bytes.
        _max_bytes: Largest accepted upload.
    """

    def __init__(
        self,
        storage: StorageBackend,
        max_bytes: int = DEFAULT_MAX_BYTES,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._storage = storage
        self._max_bytes = max_bytes
        self._clock = clock

    @property
    def max_bytes(self) -> int:
        """Largest accepted upload in bytes."""
        return self._max_bytes

    async def upload(self, filename: str | None, content_type: str | None, data: bytes) -> UploadResponse:
        """Validate and store an upload.

        Args:
            filename: Name given by the client.
            content_type: MIME type declared by the client.
            data: File content.

        Returns:
            Storage path and public URL of the stored file.

        Raises:
            MediaValidationError: If the file is empty, too large or not allowed.
            MediaStorageError: If the storage backend fails.
        """
        content_type = (content_type or "").split(";", 1)[0].strip().lower()
        if content_type not in ALLOWED_CONTENT_TYPES:
            raise MediaValidationError(f"File type '{content_type or 'unknown'}' is not allowed")
        if not data:
            raise MediaValidationError("File is empty")
        if len(data) > self._max_bytes:
            raise MediaValidationError(f"File is too large (limit {self._max_bytes} bytes)")

        path = build_object_path(filename, self._clock())
        try:
            await self._storage.put(path, data, content_type)
        except StorageError as e:
            raise MediaStorageError(f"Failed to store upload: {e}") from e

        logger.info("Upload stored: %s (%s, %d bytes)", path, content_type, len(data))
        return UploadResponse(
            path=path,
            url=self._storage.public_url(path),
            content_type=content_type,
            size=len(data),
        )

    async def delete(self, path: str) -> None:
        """Remove a stored upload.

        Raises:
            MediaValidationError: If the path is outside the upload area.
            MediaStorageError: If the storage backend fails.
        """
        if not path.startswith(f"{UPLOAD_PREFIX}/") or ".." in path.split("/"):
            raise MediaValidationError(f"Invalid upload path: {path}")
        try:
            await self._storage.delete(path)
        except StorageError as e:
            raise MediaStorageError(f"Failed to delete upload: {e}") from e
        logger.info("Upload deleted: %s", path)

    def public_url(self, path: str) -> str:
        """Public URL for a stored path; absolute URLs pass through."""
        if path.startswith("http"):
            return path
        return self._storage.public_url(path)
