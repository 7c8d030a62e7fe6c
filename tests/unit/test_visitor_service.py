# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for visitor analytics."""

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from school_portal.core.config.settings import SiteSettings
from school_portal.domains.analytics import Counters, VisitorService, increment, roll_over
from school_portal.infrastructure.events import EventTypes

# 2025-03-10 09:00 in Asia/Ho_Chi_Minh
NOW = datetime(2025, 3, 10, 2, 0, tzinfo=timezone.utc)


def create_mock_result(scalar=None, rowcount=None, rows=None):
    """Create a mock result for scalar(), rowcount and scalars().all()."""
    result = MagicMock()
    result.scalar.return_value = scalar
    result.rowcount = rowcount
    result.scalars.return_value.all.return_value = rows or []
    return result


def counter_rows(today: int, month: int, total: int, last_reset: int) -> list[SimpleNamespace]:
    return [
        SimpleNamespace(key="today_visits", value=today),
        SimpleNamespace(key="month_visits", value=month),
        SimpleNamespace(key="total_visits", value=total),
        SimpleNamespace(key="last_reset_date", value=last_reset),
    ]


@pytest.fixture
def visitor_service(mock_db, mock_event_bus):
    """Create visitor service with a frozen clock."""
    return VisitorService(
        db=mock_db,
        settings=SiteSettings(timezone="Asia/Ho_Chi_Minh", online_window_minutes=10),
        event_bus=mock_event_bus,
        clock=lambda: NOW,
    )


class TestRollOver:
    """Tests for the day and month reset rule."""

    def test_same_day_keeps_counters(self) -> None:
        counters = Counters(today=5, month=40, total=900, last_reset_date=20250310)

        assert roll_over(counters, 20250310, 202503) == counters

    def test_new_day_resets_today_only(self) -> None:
        counters = Counters(today=5, month=40, total=900, last_reset_date=20250309)

        rolled = roll_over(counters, 20250310, 202503)

        assert rolled.today == 0
        assert rolled.month == 40
        assert rolled.total == 900

    def test_new_month_resets_today_and_month(self) -> None:
        counters = Counters(today=5, month=40, total=900, last_reset_date=20250131)

        rolled = roll_over(counters, 20250201, 202502)

        assert rolled.today == 0
        assert rolled.month == 0
        assert rolled.total == 900
        assert rolled.last_reset_date == 20250131

    def test_never_reset_counters(self) -> None:
        """Test that an empty store behaves like a fresh month."""
        rolled = roll_over(Counters(), 20250310, 202503)

        assert rolled == Counters()


class TestIncrement:
    """Tests for counting one visit."""

    def test_increment_same_day(self) -> None:
        counters = Counters(today=5, month=40, total=900, last_reset_date=20250310)

        assert increment(counters, 20250310, 202503) == Counters(6, 41, 901, 20250310)

    def test_increment_after_month_change(self) -> None:
        counters = Counters(today=5, month=40, total=900, last_reset_date=20250228)

        assert increment(counters, 20250301, 202503) == Counters(1, 1, 901, 20250301)

    def test_counters_mapping_round_trip(self) -> None:
        counters = Counters(1, 2, 3, 20250101)

        assert Counters.from_mapping(counters.as_mapping()) == counters
        assert Counters.from_mapping({}) == Counters()


class TestTrackVisit:
    """Tests for VisitorService.track_visit."""

    @pytest.mark.asyncio
    async def test_first_visit_of_day_is_counted(
        self,
        visitor_service,
        mock_db,
        mock_event_bus,
    ) -> None:
        """Test heartbeat, daily claim, counter update and event."""
        mock_db.execute.side_effect = [
            create_mock_result(),  # heartbeat upsert
            create_mock_result(rowcount=1),  # daily claim
            create_mock_result(rows=counter_rows(3, 30, 300, 20250310)),
            create_mock_result(),
            create_mock_result(),
            create_mock_result(),
            create_mock_result(),
        ]

        response = await visitor_service.track_visit("session-1")

        assert response.tracked is True
        assert response.counted is True
        assert mock_db.execute.await_count == 7
        mock_db.commit.assert_awaited_once()
        mock_event_bus.publish.assert_awaited_once_with(
            EventTypes.Visitor.COUNTED,
            {"sessionId": "session-1", "date": 20250310},
        )

    @pytest.mark.asyncio
    async def test_repeat_visit_same_day_is_not_counted(
        self,
        visitor_service,
        mock_db,
        mock_event_bus,
    ) -> None:
        """Test that a session already counted today only refreshes presence."""
        mock_db.execute.side_effect = [
            create_mock_result(),
            create_mock_result(rowcount=0),
        ]

        response = await visitor_service.track_visit("session-1")

        assert response.tracked is True
        assert response.counted is False
        assert mock_db.execute.await_count == 2
        mock_db.commit.assert_awaited_once()
        mock_event_bus.publish.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_database_failure_is_reported_not_raised(
        self,
        visitor_service,
        mock_db,
        mock_event_bus,
    ) -> None:
        """Test that tracking never fails the page that sent it."""
        mock_db.execute.side_effect = OperationalError("INSERT", {}, Exception("down"))

        response = await visitor_service.track_visit("session-1")

        assert response.tracked is False
        assert response.counted is False
        mock_db.rollback.assert_awaited_once()
        mock_event_bus.publish.assert_not_awaited()


class TestVisitorStats:
    """Tests for VisitorService.get_visitor_stats."""

    @pytest.mark.asyncio
    async def test_stats_add_online_visitors(self, visitor_service, mock_db) -> None:
        mock_db.execute.side_effect = [
            create_mock_result(scalar=4),
            create_mock_result(rows=counter_rows(10, 100, 1000, 20250310)),
        ]

        stats = await visitor_service.get_visitor_stats()

        assert stats.online == 4
        online_query = str(mock_db.execute.call_args_list[0][0][0])
        assert "visitor_logs.last_active > " in online_query
        assert stats.today == 14
        assert stats.month == 104
        assert stats.total == 1004

    @pytest.mark.asyncio
    async def test_stale_day_is_shown_as_zero(self, visitor_service, mock_db) -> None:
        """Test that yesterday's count is not displayed as today."""
        mock_db.execute.side_effect = [
            create_mock_result(scalar=0),
            create_mock_result(rows=counter_rows(10, 100, 1000, 20250309)),
        ]

        stats = await visitor_service.get_visitor_stats()

        assert stats.online == 1
        assert stats.today == 1
        assert stats.month == 101
        assert stats.total == 1001

    @pytest.mark.asyncio
    async def test_failure_returns_defaults(self, visitor_service, mock_db) -> None:
        mock_db.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

        stats = await visitor_service.get_visitor_stats()

        assert stats.model_dump() == {"total": 0, "today": 0, "month": 0, "online": 1}
        mock_db.rollback.assert_awaited_once()


class TestPruneVisitorLogs:
    """Tests for VisitorService.prune_visitor_logs."""

    @pytest.mark.asyncio
    async def test_prune_returns_deleted_count(self, visitor_service, mock_db) -> None:
        mock_db.execute.return_value = create_mock_result(rowcount=12)

        removed = await visitor_service.prune_visitor_logs(older_than_days=30)

        assert removed == 12
        mock_db.commit.assert_awaited_once()


class TestDefaults:
    """Tests for constructor defaults."""

    def test_uses_default_settings(self, mock_db) -> None:
        service = VisitorService(db=mock_db, event_bus=AsyncMock())

        assert service._settings.timezone == "Asia/Ho_Chi_Minh"
