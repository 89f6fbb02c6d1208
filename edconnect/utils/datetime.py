# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""DateTime utilities for EdConnect.

All timestamps are stored and compared as timezone-aware UTC datetimes.
SQLite hands back naive values for ``DateTime(timezone=True)`` columns, so
anything read from the database goes through ``ensure_utc`` before it is
compared with ``utc_now()``.

Usage:
    from edconnect.utils.datetime import utc_now

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
"""

from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Returns:
        Timezone-aware datetime representing current UTC time.
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Ensure a datetime is timezone-aware and in UTC.

    Args:
        dt: Datetime to normalise, may be naive or None.

    Returns:
        UTC-aware datetime, or None if dt is None.

    Note:
        - If dt is naive, assumes UTC and adds tzinfo
        - If dt is aware, converts to UTC
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def days_ago(days: int) -> datetime:
    """Get a datetime N days ago from now."""
    return utc_now() - timedelta(days=days)


def days_from_now(days: int) -> datetime:
    """Get a datetime N days from now."""
    return utc_now() + timedelta(days=days)


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes elapsed between two datetimes.

    Args:
        start: Start of the interval.
        end: End of the interval.

    Returns:
        Non-negative number of minutes, rounded down.
    """
    delta = ensure_utc(end) - ensure_utc(start)
    return max(0, int(delta.total_seconds() // 60))
