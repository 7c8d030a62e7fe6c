# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the media upload service."""

import re
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import HTTPException

from school_portal.api.v1.media import upload_file
from school_portal.domains.media import (
    MediaService,
    MediaStorageError,
    MediaValidationError,
)
from school_portal.domains.media.service import build_object_path, safe_filename
from school_portal.infrastructure.storage import StorageError

NOW = datetime(2025, 9, 5, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
def storage() -> MagicMock:
    """Create mock storage backend."""
    backend = MagicMock()
    backend.put = AsyncMock()
    backend.delete = AsyncMock()
    backend.public_url.side_effect = lambda path: f"/media/{path}"
    return backend


@pytest.fixture
def media_service(storage) -> MediaService:
    return MediaService(storage, max_bytes=1024, clock=lambda: NOW)


class TestFilenames:
    """Tests for upload naming."""

    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("Ảnh lễ khai giảng.JPG", "anh-le-khai-giang.jpg"),
            ("C:\\Users\\gv\\Kế hoạch.docx", "ke-hoach.docx"),
            ("../../etc/passwd", "passwd"),
            ("README", "readme"),
            (None, "no-slug"),
        ],
    )
    def test_safe_filename(self, filename, expected) -> None:
        assert safe_filename(filename) == expected

    def test_object_path_layout(self) -> None:
        path = build_object_path("a.png", NOW)

        assert re.fullmatch(r"uploads/2025/09/[0-9a-f-]{36}-a\.png", path)


class TestUpload:
    """Tests for MediaService.upload."""

    @pytest.mark.asyncio
    async def test_upload_stores_file(self, media_service, storage) -> None:
        response = await media_service.upload("Ảnh.PNG", "image/png; charset=binary", b"\x89PNG")

        storage.put.assert_awaited_once()
        path, data, content_type = storage.put.call_args[0]
        assert path.startswith("uploads/2025/09/")
        assert path.endswith("-anh.png")
        assert data == b"\x89PNG"
        assert content_type == "image/png"
        assert response.url == f"/media/{path}"
        assert response.size == 4

    @pytest.mark.asyncio
    async def test_rejects_unknown_type(self, media_service, storage) -> None:
        with pytest.raises(MediaValidationError, match="not allowed"):
            await media_service.upload("x.exe", "application/x-msdownload", b"MZ")

        storage.put.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rejects_svg(self, media_service, storage) -> None:
        with pytest.raises(MediaValidationError, match="not allowed"):
            await media_service.upload("logo.svg", "image/svg+xml", b"<svg onload=\"x\"/>")

        storage.put.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rejects_empty_file(self, media_service) -> None:
        with pytest.raises(MediaValidationError, match="empty"):
            await media_service.upload("a.pdf", "application/pdf", b"")

    @pytest.mark.asyncio
    async def test_rejects_large_file(self, media_service) -> None:
        with pytest.raises(MediaValidationError, match="too large"):
            await media_service.upload("a.pdf", "application/pdf", b"x" * 1025)

    @pytest.mark.asyncio
    async def test_storage_failure(self, media_service, storage) -> None:
        storage.put.side_effect = StorageError("disk full")

        with pytest.raises(MediaStorageError, match="disk full"):
            await media_service.upload("a.pdf", "application/pdf", b"%PDF")


class TestDelete:
    """Tests for MediaService.delete."""

    @pytest.mark.asyncio
    async def test_delete_upload(self, media_service, storage) -> None:
        await media_service.delete("uploads/2025/09/a.png")

        storage.delete.assert_awaited_once_with("uploads/2025/09/a.png")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["config/.env", "uploads/../secret", "/uploads/a.png"])
    async def test_rejects_paths_outside_uploads(self, media_service, storage, path) -> None:
        with pytest.raises(MediaValidationError):
            await media_service.delete(path)

        storage.delete.assert_not_awaited()

    def test_public_url(self, media_service) -> None:
        assert media_service.public_url("uploads/a.png") == "/media/uploads/a.png"
        assert media_service.public_url("https://x.org/a.png") == "https://x.org/a.png"


class TestUploadRoute:
    """Tests for the upload endpoint handler."""

    @pytest.mark.asyncio
    async def test_reads_at_most_one_byte_past_limit(self, media_service, storage) -> None:
        upload = MagicMock()
        upload.filename = "video.pdf"
        upload.content_type = "application/pdf"
        upload.read = AsyncMock(return_value=b"x" * 1025)

        with pytest.raises(HTTPException) as exc_info:
            await upload_file(file=upload, current_user=MagicMock(), service=media_service)

        assert exc_info.value.status_code == 400
        upload.read.assert_awaited_once_with(1025)
        storage.put.assert_not_awaited()
