# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the category service."""

from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from school_portal.domains.categories import (
    CategoryNotFoundError,
    CategoryService,
    CategorySlugExistsError,
)
from school_portal.infrastructure.database.models import Category
from school_portal.models.common import OrderUpdate
from school_portal.models.content import DocCategorySchema, PostCategorySchema


def create_mock_result(values=None, one=None):
    """Create a mock result for scalars().all() and scalar_one_or_none()."""
    result = MagicMock()
    result.scalars.return_value.all.return_value = values or []
    result.scalar_one_or_none.return_value = one
    return result


def make_category(module_type: str = "news", **overrides) -> Category:
    values = {
        "id": str(uuid4()),
        "name": "Tin tức",
        "slug": "tin-tuc",
        "module_type": module_type,
        "display_order": 1,
        "description": None,
        "is_active": True,
    }
    values.update(overrides)
    return Category(**values)


@pytest.fixture
def category_service(mock_db):
    def assign_id(row):
        if row.id is None:
            row.id = str(uuid4())

    mock_db.refresh.side_effect = assign_id
    return CategoryService(db=mock_db)


class TestListCategories:
    """Tests for listing categories."""

    @pytest.mark.asyncio
    async def test_list_post_categories(self, category_service, mock_db) -> None:
        rows = [make_category(), make_category(name="Hoạt động", slug="hoat-dong", display_order=2)]
        mock_db.execute.return_value = create_mock_result(values=rows)

        categories = await category_service.list_post_categories()

        assert [c.slug for c in categories] == ["tin-tuc", "hoat-dong"]
        assert all(c.color == "blue" for c in categories)
        assert "categories.module_type = " in str(mock_db.execute.call_args[0][0])

    @pytest.mark.asyncio
    async def test_list_doc_categories(self, category_service, mock_db) -> None:
        rows = [make_category("documents", name="Văn bản", slug="official", description="Công văn")]
        mock_db.execute.return_value = create_mock_result(values=rows)

        categories = await category_service.list_doc_categories()

        assert categories[0].description == "Công văn"


class TestSaveCategory:
    """Tests for saving categories."""

    @pytest.mark.asyncio
    async def test_create_generates_slug(self, category_service, mock_db) -> None:
        mock_db.execute.return_value = create_mock_result(one=None)

        saved = await category_service.save_post_category(PostCategorySchema(name="Thông báo"))

        added = mock_db.add.call_args[0][0]
        assert added.module_type == "news"
        assert added.slug == "thong-bao"
        assert saved.slug == "thong-bao"
        assert saved.id is not None

    @pytest.mark.asyncio
    async def test_create_rejects_duplicate_slug(self, category_service, mock_db) -> None:
        mock_db.execute.return_value = create_mock_result(one=make_category())

        with pytest.raises(CategorySlugExistsError):
            await category_service.save_post_category(PostCategorySchema(name="Tin tức"))

        mock_db.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_keeps_own_slug(self, category_service, mock_db) -> None:
        row = make_category("documents", slug="official")
        mock_db.execute.return_value = create_mock_result(one=row)
        mock_db.get.return_value = row

        saved = await category_service.save_doc_category(
            DocCategorySchema(id=row.id, name="Văn bản chỉ đạo", slug="official", description="Mới", order=3)
        )

        assert row.name == "Văn bản chỉ đạo"
        assert row.display_order == 3
        assert saved.description == "Mới"

    @pytest.mark.asyncio
    async def test_update_wrong_module_is_not_found(self, category_service, mock_db) -> None:
        """Test that a news category cannot be edited as a document category."""
        row = make_category("news")
        mock_db.execute.return_value = create_mock_result(one=None)
        mock_db.get.return_value = row

        with pytest.raises(CategoryNotFoundError):
            await category_service.save_doc_category(DocCategorySchema(id=row.id, name="X"))

    @pytest.mark.asyncio
    async def test_update_to_taken_slug(self, category_service, mock_db) -> None:
        row = make_category(slug="tin-tuc")
        other = make_category(slug="su-kien")
        mock_db.execute.return_value = create_mock_result(one=other)
        mock_db.get.return_value = row

        with pytest.raises(CategorySlugExistsError):
            await category_service.save_post_category(
                PostCategorySchema(id=row.id, name="Sự kiện", slug="su-kien")
            )


class TestDeleteAndOrder:
    """Tests for deleting and reordering categories."""

    @pytest.mark.asyncio
    async def test_delete(self, category_service, mock_db) -> None:
        row = make_category()
        mock_db.get.return_value = row

        await category_service.delete_post_category(row.id)

        mock_db.delete.assert_awaited_once_with(row)

    @pytest.mark.asyncio
    async def test_delete_missing(self, category_service, mock_db) -> None:
        with pytest.raises(CategoryNotFoundError):
            await category_service.delete_doc_category(str(uuid4()))

    @pytest.mark.asyncio
    async def test_save_order_skips_unknown_ids(self, category_service, mock_db) -> None:
        first = make_category(display_order=1)
        second = make_category(slug="b", display_order=2)
        mock_db.execute.return_value = create_mock_result(values=[first, second])

        await category_service.save_category_order(
            [
                OrderUpdate(id=first.id, order=2),
                OrderUpdate(id=second.id, order=1),
                OrderUpdate(id=str(uuid4()), order=0),
            ]
        )

        assert first.display_order == 2
        assert second.display_order == 1
        mock_db.commit.assert_awaited_once()
