"""
Calendar helpers for the training schedule.

The domain numbers weekdays Monday=1 .. Sunday=7. Host calendars that number
Sunday=1 .. Saturday=7 are converted with to_domain_weekday().

Day windows are computed in the user's local time zone: a "day" is the
half-open interval [local midnight, next local midnight).
"""
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Tuple

SUNDAY_HOST_INDEX = 1
SUNDAY_DOMAIN_INDEX = 7


def to_domain_weekday(host_weekday: int) -> int:
    """
    Convert a Sunday-first weekday index (1=Sunday .. 7=Saturday) to the
    domain's Monday-first index (1=Monday .. 7=Sunday).

    Examples:
        >>> to_domain_weekday(1)  # Sunday
        7
        >>> to_domain_weekday(2)  # Monday
        1
        >>> to_domain_weekday(7)  # Saturday
        6
    """
    if host_weekday == SUNDAY_HOST_INDEX:
        return SUNDAY_DOMAIN_INDEX
    return host_weekday - 1


def host_weekday(day: date) -> int:
    """Sunday-first weekday index of a date (1=Sunday .. 7=Saturday)."""
    return day.isoweekday() % 7 + 1


def domain_weekday(day: date) -> int:
    """Monday-first weekday index of a date (1=Monday .. 7=Sunday)."""
    return to_domain_weekday(host_weekday(day))


def local_date(moment: datetime, tz: tzinfo) -> date:
    """Calendar date of an aware datetime in the given zone."""
    return moment.astimezone(tz).date()


def day_bounds(day: date, tz: tzinfo) -> Tuple[datetime, datetime]:
    """
    Get [start of day, start of next day) for a calendar date in a zone.

    Both bounds are aware local midnights. On DST days the elapsed time
    between them is 23 or 25 hours once converted to UTC.
    """
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return start, end


def window_start(today: date, days: int) -> date:
    """
    First calendar day of an N-day window ending on today (inclusive).

    A window of 7 days ending on a Sunday starts on the preceding Monday.
    Non-positive windows collapse to today.
    """
    return today - timedelta(days=max(days, 1) - 1)


def window_bounds(today: date, days: int, tz: tzinfo) -> Tuple[datetime, datetime]:
    """Aware [start, end) datetimes covering an N-day window ending on today."""
    start, _ = day_bounds(window_start(today, days), tz)
    _, end = day_bounds(today, tz)
    return start, end
