# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for datetime utilities."""

from datetime import datetime, timedelta, timezone

from edconnect.utils.datetime import (
    days_ago,
    days_from_now,
    ensure_utc,
    minutes_between,
    utc_now,
)


class TestDatetimeUtils:
    """Tests for UTC helpers."""

    def test_utc_now_is_aware(self) -> None:
        assert utc_now().tzinfo is timezone.utc

    def test_ensure_utc_adds_tzinfo_to_naive(self) -> None:
        naive = datetime(2025, 1, 1, 12, 0)

        assert ensure_utc(naive) == datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)
        assert ensure_utc(None) is None

    def test_ensure_utc_converts_other_zones(self) -> None:
        plus_two = datetime(2025, 1, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))

        assert ensure_utc(plus_two) == datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

    def test_days_ago_and_from_now(self) -> None:
        now = utc_now()

        assert abs((now - days_ago(3)) - timedelta(days=3)) < timedelta(seconds=5)
        assert abs((days_from_now(3) - now) - timedelta(days=3)) < timedelta(seconds=5)

    def test_minutes_between_mixed_naive_and_aware(self) -> None:
        start = datetime(2025, 1, 1, 12, 0)
        end = datetime(2025, 1, 1, 12, 45, 30, tzinfo=timezone.utc)

        assert minutes_between(start, end) == 45
