# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""DateTime utilities for the school portal.

All timestamps are stored in UTC and every Python datetime is timezone-aware.
Calendar buckets shown to visitors (today, this month) are evaluated in the
school's local timezone instead, which is why the ``local_*`` helpers take an
IANA zone name.

Usage:
------
    from school_portal.utils.datetime import utc_now, local_date_int

    created_at = mapped_column(DateTime(timezone=True), default=utc_now)
    today = local_date_int(utc_now(), "Asia/Ho_Chi_Minh")  # e.g. 20250105
"""

from datetime import date, datetime, timezone
from functools import lru_cache
from zoneinfo import ZoneInfo


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Returns:
        Timezone-aware datetime representing current UTC time.
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Ensure a datetime is timezone-aware UTC.

    Args:
        dt: A datetime object (naive or aware) or None.

    Returns:
        Timezone-aware UTC datetime or None. Naive values are assumed UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


@lru_cache(maxsize=8)
def get_zone(name: str) -> ZoneInfo:
    """Resolve and cache an IANA timezone.

    Args:
        name: Zone name such as "Asia/Ho_Chi_Minh".

    Returns:
        The ZoneInfo instance.

    Raises:
        zoneinfo.ZoneInfoNotFoundError: If the zone is unknown.
    """
    return ZoneInfo(name)


def to_local(dt: datetime, tz_name: str) -> datetime:
    """Convert a datetime to the given local timezone."""
    return ensure_utc(dt).astimezone(get_zone(tz_name))


def local_date_int(dt: datetime, tz_name: str) -> int:
    """Encode the local calendar date as YYYYMMDD.

    Args:
        dt: Instant to encode.
        tz_name: Zone in which the calendar date is read.

    Returns:
        Integer such as 20250105.

    Example:
        >>> local_date_int(datetime(2025, 1, 4, 18, tzinfo=timezone.utc), "Asia/Ho_Chi_Minh")
        20250105
    """
    local = to_local(dt, tz_name)
    return local.year * 10000 + local.month * 100 + local.day


def local_month_int(dt: datetime, tz_name: str) -> int:
    """Encode the local calendar month as YYYYMM."""
    local = to_local(dt, tz_name)
    return local.year * 100 + local.month


ISSUE_DATE_FORMATS = ("%d/%m/%Y", "%d-%m-%Y", "%Y-%m-%d")


def parse_issue_date(value: str | None) -> date | None:
    """Parse the issue date typed on an official document.

    Editors enter dates the Vietnamese way (``05/09/2025``); ISO dates are
    accepted as well.

    Args:
        value: Free-form date text or None.

    Returns:
        The calendar date, or None when the text is empty or not a date.

    Example:
        >>> parse_issue_date("5/9/2025")
        datetime.date(2025, 9, 5)
    """
    if not value or not value.strip():
        return None
    text = value.strip()
    for fmt in ISSUE_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None
