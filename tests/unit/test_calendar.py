"""
Unit tests for backend.core.calendar.

Tests for:
- Sunday-first to Monday-first weekday conversion
- Weekday of a date
- Local day bounds across DST changes
- N-day windows ending today
"""
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from backend.core.calendar import (
    day_bounds,
    domain_weekday,
    host_weekday,
    local_date,
    to_domain_weekday,
    window_bounds,
    window_start,
)

pytestmark = pytest.mark.unit


class TestToDomainWeekday:
    @pytest.mark.parametrize(
        "host,expected",
        [(1, 7), (2, 1), (3, 2), (4, 3), (5, 4), (6, 5), (7, 6)],
    )
    def test_conversion(self, host, expected):
        assert to_domain_weekday(host) == expected

    def test_sunday_maps_to_seven(self):
        assert to_domain_weekday(1) == 7

    def test_saturday_maps_to_six(self):
        assert to_domain_weekday(7) == 6


class TestWeekdayOfDate:
    def test_host_weekday_sunday_is_one(self):
        assert host_weekday(date(2024, 1, 7)) == 1

    def test_domain_weekday_monday_is_one(self):
        assert domain_weekday(date(2024, 1, 8)) == 1

    def test_domain_weekday_sunday_is_seven(self):
        assert domain_weekday(date(2024, 1, 7)) == 7

    def test_domain_weekday_matches_isoweekday(self):
        start = date(2024, 1, 1)
        for offset in range(14):
            day = start + timedelta(days=offset)
            assert domain_weekday(day) == day.isoweekday()


class TestDayBounds:
    def test_utc_day_is_24_hours(self):
        start, end = day_bounds(date(2024, 1, 10), timezone.utc)
        assert start == datetime(2024, 1, 10, tzinfo=timezone.utc)
        assert end - start == timedelta(hours=24)

    def test_dst_start_day_is_23_hours(self):
        tz = ZoneInfo("Europe/Stockholm")
        start, end = day_bounds(date(2024, 3, 31), tz)
        assert start.astimezone(timezone.utc) == datetime(2024, 3, 30, 23, tzinfo=timezone.utc)
        assert end.astimezone(timezone.utc) - start.astimezone(timezone.utc) == timedelta(hours=23)

    def test_dst_end_day_is_25_hours(self):
        tz = ZoneInfo("Europe/Stockholm")
        start, end = day_bounds(date(2024, 10, 27), tz)
        assert end.astimezone(timezone.utc) - start.astimezone(timezone.utc) == timedelta(hours=25)

    def test_local_date_uses_zone(self):
        moment = datetime(2024, 1, 10, 23, 30, tzinfo=timezone.utc)
        assert local_date(moment, ZoneInfo("Europe/Stockholm")) == date(2024, 1, 11)
        assert local_date(moment, timezone.utc) == date(2024, 1, 10)


class TestWindow:
    def test_seven_day_window_ending_sunday_starts_monday(self):
        assert window_start(date(2024, 1, 14), 7) == date(2024, 1, 8)

    def test_one_day_window_is_today(self):
        assert window_start(date(2024, 1, 14), 1) == date(2024, 1, 14)

    def test_non_positive_window_collapses_to_today(self):
        assert window_start(date(2024, 1, 14), 0) == date(2024, 1, 14)

    def test_window_bounds_cover_whole_days(self):
        start, end = window_bounds(date(2024, 1, 14), 7, timezone.utc)
        assert start == datetime(2024, 1, 8, tzinfo=timezone.utc)
        assert end == datetime(2024, 1, 15, tzinfo=timezone.utc)
