# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Visitor analytics: presence heartbeats and date-bucketed visit counters.

Counters live in ``site_counters`` under four keys:

    today_visits, month_visits, total_visits, last_reset_date

``last_reset_date`` is the local YYYYMMDD of the last increment. A visit
on a later local day resets the daily counter first, and a visit in a
later local month also resets the monthly one. The same rule is applied
when counters are displayed, so a quiet morning does not show yesterday's
total as "today".

Every browser session is added to the counters at most once per local day
and keeps a heartbeat row in ``visitor_logs``. Sessions with a heartbeat
inside the online window count as online.

Example:
    >>> service = VisitorService(db, settings.site)
    >>> await service.track_visit("b9a7c0e2")
    >>> stats = await service.get_visitor_stats()
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from school_portal.core.config.settings import SiteSettings
from school_portal.infrastructure.database.models import SiteCounter, VisitorLog, new_id
from school_portal.infrastructure.events import EventBus, EventTypes, get_event_bus
from school_portal.models.analytics import TrackVisitResponse, VisitorStats
from school_portal.utils.datetime import local_date_int, local_month_int, utc_now

logger = logging.getLogger(__name__)

TODAY_KEY = "today_visits"
MONTH_KEY = "month_visits"
TOTAL_KEY = "total_visits"
RESET_KEY = "last_reset_date"
COUNTER_KEYS = (TODAY_KEY, MONTH_KEY, TOTAL_KEY, RESET_KEY)


@dataclass(frozen=True)
class Counters:
    """Snapshot of the visit counters."""

    today: int = 0
    month: int = 0
    total: int = 0
    last_reset_date: int = 0

    @classmethod
    def from_mapping(cls, values: dict[str, int]) -> "Counters":
        return cls(
            today=int(values.get(TODAY_KEY, 0) or 0),
            month=int(values.get(MONTH_KEY, 0) or 0),
            total=int(values.get(TOTAL_KEY, 0) or 0),
            last_reset_date=int(values.get(RESET_KEY, 0) or 0),
        )

    def as_mapping(self) -> dict[str, int]:
        return {
            TODAY_KEY: self.today,
            MONTH_KEY: self.month,
            TOTAL_KEY: self.total,
            RESET_KEY: self.last_reset_date,
        }


def roll_over(counters: Counters, date_int: int, month_int: int) -> Counters:
    """Apply the day/month reset rule for the given local date.

    Args:
        counters: Stored counters.
        date_int: Current local date as YYYYMMDD.
        month_int: Current local month as YYYYMM.

    Returns:
        Counters with stale buckets zeroed. ``last_reset_date`` is unchanged.

    Example:
        >>> roll_over(Counters(5, 40, 900, 20250131), 20250201, 202502)
        Counters(today=0, month=0, total=900, last_reset_date=20250131)
    """
    today, month = counters.today, counters.month
    if date_int > counters.last_reset_date:
        today = 0
        if month_int > counters.last_reset_date // 100:
            month = 0
    return Counters(today, month, counters.total, counters.last_reset_date)


def increment(counters: Counters, date_int: int, month_int: int) -> Counters:
    """Roll over stale buckets, then count one visit on ``date_int``."""
    rolled = roll_over(counters, date_int, month_int)
    return Counters(
        today=rolled.today + 1,
        month=rolled.month + 1,
        total=rolled.total + 1,
        last_reset_date=date_int,
    )


class VisitorService:
    """Service for visit tracking and visitor statistics.

    Attributes:
        _db: Async database session.
        _settings: Site settings (timezone and online window).
        _event_bus: Bus receiving ``visitor.counted`` events.
        _clock: Source of the current UTC time.
    """

    def __init__(
        self,
        db: AsyncSession,
        settings: SiteSettings | None = None,
        event_bus: EventBus | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize the visitor service.

        Args:
            db: Async database session.
            settings: Site settings; defaults are used when omitted.
            event_bus: Event bus; the process-wide bus when omitted.
            clock: Source of the current UTC time.
        """
        self._db = db
        self._settings = settings or SiteSettings()
        self._event_bus = event_bus or get_event_bus()
        self._clock = clock

    def _local_buckets(self, now: datetime) -> tuple[int, int]:
        tz = self._settings.timezone
        return local_date_int(now, tz), local_month_int(now, tz)

    async def track_visit(self, session_id: str) -> TrackVisitResponse:
        """Record a heartbeat and count the session once per local day.

        Args:
            session_id: Opaque id generated by the browser for its session.

        Returns:
            Whether the heartbeat was stored and whether it was counted.
        """
        now = self._clock()
        date_int, month_int = self._local_buckets(now)

        try:
            await self._heartbeat(session_id, now)
            counted = await self._claim_daily_count(session_id, date_int)
            if counted:
                counters = await self._read_counters(for_update=True)
                await self._write_counters(increment(counters, date_int, month_int))
            await self._db.commit()
        except Exception:
            await self._db.rollback()
            logger.exception("Visit tracking failed for session %s", session_id)
            return TrackVisitResponse(tracked=False, counted=False)

        if counted:
            logger.debug("Visit counted: session=%s date=%d", session_id, date_int)
            await self._event_bus.publish(
                EventTypes.Visitor.COUNTED,
                {"sessionId": session_id, "date": date_int},
            )
        return TrackVisitResponse(tracked=True, counted=counted)

    async def get_visitor_stats(self) -> VisitorStats:
        """Compute the counters shown to visitors.

        Visitors currently online are added to today, month and total so the
        widget never shows fewer visits than people on the site.

        Returns:
            Visitor statistics; a safe default if anything fails.
        """
        now = self._clock()
        date_int, month_int = self._local_buckets(now)

        try:
            window = now - timedelta(minutes=self._settings.online_window_minutes)
            result = await self._db.execute(
                select(func.count()).select_from(VisitorLog).where(VisitorLog.last_active > window)
            )
            online = max(result.scalar() or 0, 1)

            counters = roll_over(await self._read_counters(), date_int, month_int)
        except Exception:
            await self._db.rollback()
            logger.exception("Failed to load visitor statistics")
            return VisitorStats()

        return VisitorStats(
            total=counters.total + online,
            today=counters.today + online,
            month=counters.month + online,
            online=online,
        )

    async def prune_visitor_logs(self, older_than_days: int = 30) -> int:
        """Delete heartbeat rows older than a cutoff.

        Args:
            older_than_days: Age in days beyond which rows are removed.

        Returns:
            Number of deleted rows.
        """
        cutoff = self._clock() - timedelta(days=older_than_days)
        result = await self._db.execute(delete(VisitorLog).where(VisitorLog.last_active < cutoff))
        await self._db.commit()
        removed = result.rowcount or 0
        logger.info("Pruned %d visitor logs older than %s", removed, cutoff.isoformat())
        return removed

    async def _heartbeat(self, session_id: str, now: datetime) -> None:
        stmt = (
            pg_insert(VisitorLog)
            .values(id=new_id(), session_id=session_id, last_active=now)
            .on_conflict_do_update(
                index_elements=[VisitorLog.session_id],
                set_={"last_active": now},
            )
        )
        await self._db.execute(stmt)

    async def _claim_daily_count(self, session_id: str, date_int: int) -> bool:
        """Mark the session as counted today; False if it already was."""
        stmt = (
            update(VisitorLog)
            .where(
                VisitorLog.session_id == session_id,
                or_(
                    VisitorLog.last_counted_date.is_(None),
                    VisitorLog.last_counted_date != date_int,
                ),
            )
            .values(last_counted_date=date_int)
        )
        result = await self._db.execute(stmt)
        return (result.rowcount or 0) > 0

    async def _read_counters(self, for_update: bool = False) -> Counters:
        stmt = select(SiteCounter).where(SiteCounter.key.in_(COUNTER_KEYS))
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._db.execute(stmt)
        return Counters.from_mapping({row.key: row.value for row in result.scalars().all()})

    async def _write_counters(self, counters: Counters) -> None:
        for key, value in counters.as_mapping().items():
            stmt = (
                pg_insert(SiteCounter)
                .values(key=key, value=value)
                .on_conflict_do_update(index_elements=[SiteCounter.key], set_={"value": value})
            )
            await self._db.execute(stmt)
