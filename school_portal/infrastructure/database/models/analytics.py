# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Visitor presence heartbeats and site-wide counters."""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from school_portal.infrastructure.database.models.base import Base, UUIDPrimaryKeyMixin
from school_portal.utils.datetime import utc_now


class VisitorLog(UUIDPrimaryKeyMixin, Base):
    """Last heartbeat of a browser session.

    ``last_counted_date`` is the local YYYYMMDD on which the session was
    last added to the visit counters.
    """

    __tablename__ = "visitor_logs"

    session_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    last_active: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now, index=True
    )
    last_counted_date: Mapped[int | None] = mapped_column(Integer)


class SiteCounter(Base):
    """Named integer counter (today_visits, month_visits, total_visits, last_reset_date)."""

    __tablename__ = "site_counters"

    key: Mapped[str] = mapped_column(String(50), primary_key=True)
    value: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
