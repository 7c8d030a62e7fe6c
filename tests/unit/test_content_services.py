# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the smaller content services.

Covers gallery, videos, introductions, display blocks, staff and documents.
"""

from datetime import date
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from school_portal.domains.blocks import BlockNotFoundError, BlockService, to_block_response
from school_portal.domains.documents import (
    DocumentNotFoundError,
    DocumentService,
    DocumentValidationError,
)
from school_portal.domains.gallery import (
    AlbumNotFoundError,
    GalleryService,
    GalleryValidationError,
    ImageNotFoundError,
)
from school_portal.domains.introductions import (
    IntroductionNotFoundError,
    IntroductionService,
    IntroductionSlugExistsError,
)
from school_portal.domains.staff import StaffService, StaffValidationError
from school_portal.domains.videos import VideoNotFoundError, VideoService, VideoValidationError
from school_portal.infrastructure.database.models import (
    DisplayBlock,
    GalleryAlbum,
    SchoolIntroduction,
    StaffMember,
    Video,
)
from school_portal.models.common import OrderUpdate
from school_portal.models.content import DocumentSchema, IntroductionSchema
from school_portal.models.media import AlbumSchema, GalleryImageSchema, VideoSchema
from school_portal.models.people import StaffMemberSchema
from school_portal.models.site import DisplayBlockSchema


def create_mock_result(values=None, one=None):
    """Create a mock result for scalars().all() and scalar_one_or_none()."""
    result = MagicMock()
    result.scalars.return_value.all.return_value = values or []
    result.scalar_one_or_none.return_value = one
    return result


@pytest.fixture
def assigning_db(mock_db):
    """Database mock that assigns ids on refresh like a real insert."""

    def assign_id(row):
        if row.id is None:
            row.id = str(uuid4())

    mock_db.refresh.side_effect = assign_id
    return mock_db


# ============================================================================
# Gallery
# ============================================================================


class TestGalleryService:
    """Tests for albums and images."""

    @pytest.mark.asyncio
    async def test_save_album_requires_title(self, assigning_db) -> None:
        service = GalleryService(db=assigning_db)

        with pytest.raises(GalleryValidationError):
            await service.save_album(AlbumSchema(title="   "))

        assigning_db.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_save_album_creates_row(self, assigning_db) -> None:
        service = GalleryService(db=assigning_db)

        album = await service.save_album(
            AlbumSchema(title=" Lễ khai giảng ", created_date=date(2025, 9, 5))
        )

        assert album.id is not None
        assert album.title == "Lễ khai giảng"
        assert album.created_date == date(2025, 9, 5)
        assigning_db.add.assert_called_once()

    @pytest.mark.asyncio
    async def test_add_image_requires_existing_album(self, assigning_db) -> None:
        service = GalleryService(db=assigning_db)
        assigning_db.get.return_value = None

        with pytest.raises(AlbumNotFoundError):
            await service.add_image(
                GalleryImageSchema(url="/uploads/a.jpg", album_id=str(uuid4()))
            )

        assigning_db.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_add_image_to_album(self, assigning_db) -> None:
        service = GalleryService(db=assigning_db)
        album = GalleryAlbum(id=str(uuid4()), title="Hội thao")
        assigning_db.get.return_value = album

        image = await service.add_image(
            GalleryImageSchema(url=" /uploads/a.jpg ", caption="Chạy tiếp sức", album_id=album.id)
        )

        assert image.album_id == album.id
        assert image.url == "/uploads/a.jpg"
        assert image.id is not None

    @pytest.mark.asyncio
    async def test_delete_missing_image(self, assigning_db) -> None:
        service = GalleryService(db=assigning_db)

        with pytest.raises(ImageNotFoundError):
            await service.delete_image("not-a-uuid")

        assigning_db.get.assert_not_called()


# ============================================================================
# Videos
# ============================================================================


class TestVideoService:
    """Tests for the video library."""

    @pytest.mark.asyncio
    async def test_invalid_link_rejected(self, assigning_db) -> None:
        service = VideoService(db=assigning_db)

        with pytest.raises(VideoValidationError):
            await service.save_video(
                VideoSchema(title="Clip", youtube_url="https://example.com/video")
            )

        assigning_db.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_save_extracts_video_id(self, assigning_db) -> None:
        service = VideoService(db=assigning_db)

        video = await service.save_video(
            VideoSchema(title="Văn nghệ", youtube_url="https://www.youtube.com/watch?v=dQw4w9WgXcQ")
        )

        assert video.video_id == "dQw4w9WgXcQ"
        assert video.id is not None

    @pytest.mark.asyncio
    async def test_update_missing_video(self, assigning_db) -> None:
        service = VideoService(db=assigning_db)
        assigning_db.get.return_value = None

        with pytest.raises(VideoNotFoundError):
            await service.save_video(
                VideoSchema(id=str(uuid4()), title="Clip", youtube_url="https://youtu.be/dQw4w9WgXcQ")
            )

    @pytest.mark.asyncio
    async def test_list_videos(self, assigning_db) -> None:
        service = VideoService(db=assigning_db)
        rows = [
            Video(
                id=str(uuid4()),
                title="Clip",
                youtube_url="https://youtu.be/dQw4w9WgXcQ",
                order_index=0,
            )
        ]
        assigning_db.execute.return_value = create_mock_result(values=rows)

        videos = await service.list_videos()

        assert [v.video_id for v in videos] == ["dQw4w9WgXcQ"]


# ============================================================================
# Introductions
# ============================================================================


def make_introduction(**overrides) -> SchoolIntroduction:
    values = {
        "id": str(uuid4()),
        "title": "Lịch sử nhà trường",
        "slug": "lich-su-nha-truong",
        "content": "<p>...</p>",
        "image_url": None,
        "order_index": 0,
        "is_visible": True,
    }
    values.update(overrides)
    return SchoolIntroduction(**values)


class TestIntroductionService:
    """Tests for introduction pages."""

    @pytest.mark.asyncio
    async def test_slug_derived_from_title(self, assigning_db) -> None:
        service = IntroductionService(db=assigning_db)
        assigning_db.execute.return_value = create_mock_result(one=None)

        page = await service.save(IntroductionSchema(title="Sứ mệnh và Tầm nhìn"))

        assert page.slug == "su-menh-va-tam-nhin"
        assigning_db.add.assert_called_once()

    @pytest.mark.asyncio
    async def test_slug_conflict_on_create(self, assigning_db) -> None:
        service = IntroductionService(db=assigning_db)
        assigning_db.execute.return_value = create_mock_result(one=make_introduction())

        with pytest.raises(IntroductionSlugExistsError):
            await service.save(IntroductionSchema(title="Lịch sử nhà trường"))

        assigning_db.add.assert_not_called()
        assigning_db.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_keeps_own_slug(self, assigning_db) -> None:
        service = IntroductionService(db=assigning_db)
        row = make_introduction()
        assigning_db.execute.return_value = create_mock_result(one=row)
        assigning_db.get.return_value = row

        page = await service.save(
            IntroductionSchema(id=row.id, title="Lịch sử", slug=row.slug, is_visible=False)
        )

        assert page.id == row.id
        assert page.is_visible is False
        assigning_db.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_missing_page(self, assigning_db) -> None:
        service = IntroductionService(db=assigning_db)
        assigning_db.execute.return_value = create_mock_result(one=None)
        assigning_db.get.return_value = None

        with pytest.raises(IntroductionNotFoundError):
            await service.save(IntroductionSchema(id=str(uuid4()), title="Lịch sử"))

    @pytest.mark.asyncio
    async def test_hidden_page_not_public(self, assigning_db) -> None:
        service = IntroductionService(db=assigning_db)
        assigning_db.execute.return_value = create_mock_result(
            one=make_introduction(is_visible=False)
        )

        assert await service.get_by_slug("lich-su-nha-truong") is None

    @pytest.mark.asyncio
    async def test_hidden_page_visible_to_admin(self, assigning_db) -> None:
        service = IntroductionService(db=assigning_db)
        assigning_db.execute.return_value = create_mock_result(
            one=make_introduction(is_visible=False)
        )

        page = await service.get_by_slug("lich-su-nha-truong", visible_only=False)

        assert page is not None
        assert page.is_visible is False


# ============================================================================
# Display blocks
# ============================================================================


def make_block(**overrides) -> DisplayBlock:
    values = {
        "id": str(uuid4()),
        "name": "Tin mới",
        "position": "main",
        "type": "grid",
        "order_index": 0,
        "item_count": 6,
        "is_visible": True,
        "html_content": "all",
        "target_page": "home",
        "custom_color": None,
        "custom_text_color": None,
    }
    values.update(overrides)
    return DisplayBlock(**values)


class TestBlockService:
    """Tests for display blocks."""

    def test_to_block_response_defaults(self) -> None:
        block = to_block_response(make_block(item_count=0, target_page=None))

        assert block.item_count == 5
        assert block.target_page == "all"

    @pytest.mark.asyncio
    async def test_save_block_order_skips_unknown_ids(self, assigning_db) -> None:
        service = BlockService(db=assigning_db)
        first = make_block(order_index=0)
        second = make_block(name="Thông báo", order_index=1)
        assigning_db.execute.return_value = create_mock_result(values=[first, second])

        await service.save_block_order(
            [
                OrderUpdate(id=first.id, order=1),
                OrderUpdate(id=second.id, order=0),
                OrderUpdate(id=str(uuid4()), order=2),
            ]
        )

        assert first.order_index == 1
        assert second.order_index == 0
        assigning_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_save_new_block(self, assigning_db) -> None:
        service = BlockService(db=assigning_db)

        block = await service.save_block(
            DisplayBlockSchema(name="Video", position="sidebar", type="video", item_count=3)
        )

        assert block.id is not None
        assert block.position == "sidebar"
        assert block.item_count == 3

    @pytest.mark.asyncio
    async def test_delete_missing_block(self, assigning_db) -> None:
        service = BlockService(db=assigning_db)
        assigning_db.get.return_value = None

        with pytest.raises(BlockNotFoundError):
            await service.delete_block(str(uuid4()))

        assigning_db.delete.assert_not_called()


# ============================================================================
# Staff and documents
# ============================================================================


class TestStaffService:
    """Tests for the staff directory."""

    @pytest.mark.asyncio
    async def test_full_name_required(self, assigning_db) -> None:
        service = StaffService(db=assigning_db)

        with pytest.raises(StaffValidationError):
            await service.save_staff_member(StaffMemberSchema(full_name="  "))

    @pytest.mark.asyncio
    async def test_save_member(self, assigning_db) -> None:
        service = StaffService(db=assigning_db)

        member = await service.save_staff_member(
            StaffMemberSchema(full_name=" Nguyễn Văn An ", position="Hiệu trưởng", order=1)
        )

        assert member.full_name == "Nguyễn Văn An"
        assert member.order == 1
        assert member.id is not None

    @pytest.mark.asyncio
    async def test_list_staff(self, assigning_db) -> None:
        service = StaffService(db=assigning_db)
        rows = [
            StaffMember(
                id=str(uuid4()),
                full_name="Trần Thị Bình",
                position="Phó hiệu trưởng",
                party_date="12/05/2010",
                email=None,
                avatar_url=None,
                order_index=2,
            )
        ]
        assigning_db.execute.return_value = create_mock_result(values=rows)

        staff = await service.list_staff()

        assert staff[0].party_date == "12/05/2010"
        assert staff[0].order == 2


class TestDocumentService:
    """Tests for the document library."""

    @pytest.mark.asyncio
    async def test_title_required(self, assigning_db) -> None:
        service = DocumentService(db=assigning_db)

        with pytest.raises(DocumentValidationError):
            await service.save_document(DocumentSchema(title=" "))

    @pytest.mark.asyncio
    async def test_empty_category_stored_as_null(self, assigning_db) -> None:
        service = DocumentService(db=assigning_db)

        document = await service.save_document(
            DocumentSchema(number="12/QĐ-THCS", title="Quyết định", category_id="")
        )

        assert document.category_id is None
        assert document.number == "12/QĐ-THCS"

    @pytest.mark.asyncio
    async def test_delete_missing_document(self, assigning_db) -> None:
        service = DocumentService(db=assigning_db)
        assigning_db.get.return_value = None

        with pytest.raises(DocumentNotFoundError):
            await service.delete_document(str(uuid4()))

    @pytest.mark.asyncio
    async def test_issue_date_parsed_on_save(self, assigning_db) -> None:
        service = DocumentService(db=assigning_db)

        document = await service.save_document(
            DocumentSchema(title="Kế hoạch năm học", date="05/09/2025")
        )

        assert document.date == "05/09/2025"
        assert document.issued_on == date(2025, 9, 5)
