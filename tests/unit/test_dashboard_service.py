# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the admin dashboard summary."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from school_portal.domains.dashboard import DashboardService
from school_portal.models.analytics import VisitorStats


def create_mock_result(rows=None, scalar=None, values=None):
    """Create a mock result for all(), scalar() and scalars().all()."""
    result = MagicMock()
    result.all.return_value = rows or []
    result.scalar.return_value = scalar
    result.scalars.return_value.all.return_value = values or []
    return result


@pytest.fixture
def visitor_service():
    service = MagicMock()
    service.get_visitor_stats = AsyncMock(
        return_value=VisitorStats(total=120, today=8, month=40, online=3)
    )
    return service


class TestDashboardStats:
    """Tests for DashboardService.get_stats."""

    @pytest.mark.asyncio
    async def test_aggregates_counts(self, mock_db, visitor_service) -> None:
        mock_db.execute.side_effect = [
            create_mock_result(rows=[("published", 3, 120), ("draft", 2, 5)]),
            create_mock_result(scalar=4),
            create_mock_result(scalar=6),
            create_mock_result(scalar=2),
            create_mock_result(rows=[("tin-tuc", 100), (None, 25)]),
            create_mock_result(rows=[("tin-tuc", "Tin tức")]),
            create_mock_result(values=[]),
        ]
        service = DashboardService(db=mock_db, visitor_service=visitor_service)

        stats = await service.get_stats()

        assert stats.post_count == 5
        assert stats.published_count == 3
        assert stats.draft_count == 2
        assert stats.total_views == 125
        assert stats.document_count == 4
        assert stats.staff_count == 6
        assert stats.user_count == 2
        assert stats.visitors.online == 3

    @pytest.mark.asyncio
    async def test_views_by_category_names(self, mock_db, visitor_service) -> None:
        mock_db.execute.side_effect = [
            create_mock_result(rows=[]),
            create_mock_result(scalar=0),
            create_mock_result(scalar=0),
            create_mock_result(scalar=0),
            create_mock_result(rows=[("tin-tuc", 100), ("cu", 7), (None, 25)]),
            create_mock_result(rows=[("tin-tuc", "Tin tức")]),
            create_mock_result(values=[]),
        ]
        service = DashboardService(db=mock_db, visitor_service=visitor_service)

        stats = await service.get_stats()

        names = [(v.category, v.name, v.views) for v in stats.views_by_category]
        assert names == [
            ("tin-tuc", "Tin tức", 100),
            ("cu", "cu", 7),
            ("", "Chưa phân loại", 25),
        ]
        assert stats.post_count == 0
        assert stats.draft_count == 0
