# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Object storage backends for uploaded media.

Two backends are provided:
- LocalStorageBackend: writes under a directory that the app serves at /media
- S3StorageBackend: S3 or any S3-compatible service via boto3

Both expose public URLs through ``public_url`` so callers never build
storage URLs themselves.
"""

import asyncio
import logging
from pathlib import Path
from typing import Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from school_portal.core.config import StorageSettings, get_settings

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when an object cannot be stored or removed."""


class StorageBackend(Protocol):
    """Defines the operations the media service needs from object storage."""

    async def put(self, path: str, data: bytes, content_type: str) -> None:
        ...

    async def delete(self, path: str) -> None:
        ...

    def public_url(self, path: str) -> str:
        ...


def join_url(base_url: str, path: str) -> str:
    """Join a storage base URL and an object path.

    Values that already are absolute http(s) URLs pass through unchanged.

    Example:
        >>> join_url("https://cdn.example.org/assets/", "/uploads/a.png")
        'https://cdn.example.org/assets/uploads/a.png'
    """
    if path.startswith("http"):
        return path
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


class LocalStorageBackend:
    """Stores objects on the local filesystem."""

    def __init__(self, root: str | Path, base_url: str = "/media") -> None:
        self._root = Path(root).resolve()
        self._base_url = base_url

    def _resolve(self, path: str) -> Path:
        target = (self._root / path).resolve()
        if not target.is_relative_to(self._root):
            raise StorageError(f"Path escapes storage root: {path}")
        return target

    @property
    def root(self) -> Path:
        return self._root

    async def put(self, path: str, data: bytes, content_type: str) -> None:
        target = self._resolve(path)

        def _write() -> None:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)

        try:
            await asyncio.to_thread(_write)
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e

    async def delete(self, path: str) -> None:
        target = self._resolve(path)
        try:
            await asyncio.to_thread(target.unlink, True)
        except OSError as e:
            raise StorageError(f"Failed to delete {path}: {e}") from e

    def public_url(self, path: str) -> str:
        return join_url(self._base_url, path)


class S3StorageBackend:
    """S3-compatible storage client.

    Credentials come from the standard boto3 chain (environment, shared
    config, instance role).
    """

    def __init__(
        self,
        bucket: str,
        base_url: str,
        region: str | None = None,
        endpoint_url: str | None = None,
    ) -> None:
        self._bucket = bucket
        self._base_url = base_url
        self._client = boto3.client(
            "s3",
            endpoint_url=endpoint_url,
            region_name=region,
            config=Config(signature_version="s3v4"),
        )

    async def put(self, path: str, data: bytes, content_type: str) -> None:
        try:
            await asyncio.to_thread(
                self._client.put_object,
                Bucket=self._bucket,
                Key=path,
                Body=data,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Failed to upload {path}: {e}") from e

    async def delete(self, path: str) -> None:
        try:
            await asyncio.to_thread(
                self._client.delete_object,
                Bucket=self._bucket,
                Key=path,
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Failed to delete {path}: {e}") from e

    def public_url(self, path: str) -> str:
        return join_url(self._base_url, path)


def create_storage_backend(settings: StorageSettings) -> StorageBackend:
    """Build the backend selected by ``settings.backend``."""
    if settings.backend == "s3":
        logger.info("Using S3 media storage (bucket=%s)", settings.bucket)
        return S3StorageBackend(
            bucket=settings.bucket,
            base_url=settings.public_base_url,
            region=settings.region,
            endpoint_url=settings.endpoint_url,
        )
    logger.info("Using local media storage at %s", settings.local_root)
    return LocalStorageBackend(settings.local_root, settings.public_base_url)


_storage: StorageBackend | None = None


def get_storage() -> StorageBackend:
    """Get the process-wide storage backend, creating it from settings on first use."""
    global _storage
    if _storage is None:
        _storage = create_storage_backend(get_settings().storage)
    return _storage


def reset_storage() -> None:
    """Forget the cached backend (tests)."""
    global _storage
    _storage = None
