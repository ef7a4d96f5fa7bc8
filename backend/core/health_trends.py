"""
Health metric trends and weekly summaries.

A trend covers an N-day window ending today. The window's two most recent
halves are compared:

    change_percent = (avg(recent half) - avg(prior half)) / avg(prior half) * 100

and the direction is STABLE while the change stays within
TREND_THRESHOLD_PERCENT either way. For odd windows the oldest day falls in
neither half.
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone, tzinfo
from enum import Enum
from typing import List, Optional, Sequence

from application.ports import HealthMetricRepository
from backend.core.calendar import local_date, window_bounds, window_start
from domain.models import HealthMetric, MetricType

logger = logging.getLogger(__name__)

# Symmetric stable band, in percent. A change of exactly +/-5% is stable.
TREND_THRESHOLD_PERCENT = 5.0

WEEK_DAYS = 7
MINUTES_PER_HOUR = 60.0

WEEKLY_SUMMARY_TYPES = (
    MetricType.STEPS,
    MetricType.CALORIES_BURNED,
    MetricType.SLEEP_DURATION_MINUTES,
)


class TrendDirection(str, Enum):
    """Direction of a metric over its window."""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


@dataclass(frozen=True)
class HealthTrend:
    """Trend of one metric over a window."""
    metric_type: MetricType
    days: int
    current: Optional[float]
    average: Optional[float]
    change_percent: float
    direction: TrendDirection
    sample_count: int


@dataclass(frozen=True)
class WeeklyHealthSummary:
    """Totals over the last 7 calendar days."""
    total_steps: float
    total_calories: float
    avg_sleep_hours: float
    active_days: int


def trend_direction(change_percent: float) -> TrendDirection:
    if change_percent > TREND_THRESHOLD_PERCENT:
        return TrendDirection.INCREASING
    if change_percent < -TREND_THRESHOLD_PERCENT:
        return TrendDirection.DECREASING
    return TrendDirection.STABLE


def _mean(values: Sequence[float]) -> Optional[float]:
    if not values:
        return None
    return sum(values) / len(values)


def _in_days(
    metrics: Sequence[HealthMetric],
    first: date,
    last: date,
    tz: tzinfo,
) -> List[HealthMetric]:
    return [m for m in metrics if first <= local_date(m.recorded_at, tz) <= last]


def calculate_trend(
    metric_type: MetricType,
    metrics: Sequence[HealthMetric],
    *,
    days: int,
    today: date,
    tz: tzinfo = timezone.utc,
) -> HealthTrend:
    """
    Compute current value, average and trend of a metric.

    Args:
        metric_type: Metric to analyze; records of other types are ignored
        metrics: Candidate records (any order)
        days: Window length in calendar days, ending on today
        today: Last day of the window, in the user's zone
        tz: User's time zone

    Returns:
        HealthTrend; current and average are None when the window is empty
    """
    days = max(days, 1)
    of_type = [m for m in metrics if m.metric_type == metric_type]
    window = sorted(
        _in_days(of_type, window_start(today, days), today, tz),
        key=lambda m: m.recorded_at,
    )

    half = days // 2
    change_percent = 0.0
    if half > 0:
        recent = _in_days(window, today - timedelta(days=half - 1), today, tz)
        prior = _in_days(
            window,
            today - timedelta(days=2 * half - 1),
            today - timedelta(days=half),
            tz,
        )
        recent_avg = _mean([m.value for m in recent])
        prior_avg = _mean([m.value for m in prior])
        if recent_avg is not None and prior_avg:
            change_percent = (recent_avg - prior_avg) / prior_avg * 100.0

    return HealthTrend(
        metric_type=metric_type,
        days=days,
        current=window[-1].value if window else None,
        average=_mean([m.value for m in window]),
        change_percent=change_percent,
        direction=trend_direction(change_percent),
        sample_count=len(window),
    )


def weekly_summary(
    metrics: Sequence[HealthMetric],
    *,
    today: date,
    tz: tzinfo = timezone.utc,
) -> WeeklyHealthSummary:
    """
    Summarize the last 7 calendar days.

    Steps and calories are summed, sleep minutes are averaged per record and
    converted to hours, and a day is active when it has a non-zero steps record.
    """
    week = _in_days(metrics, window_start(today, WEEK_DAYS), today, tz)

    steps = [m for m in week if m.metric_type == MetricType.STEPS]
    calories = [m for m in week if m.metric_type == MetricType.CALORIES_BURNED]
    sleep = [m for m in week if m.metric_type == MetricType.SLEEP_DURATION_MINUTES]

    avg_sleep_minutes = _mean([m.value for m in sleep])
    return WeeklyHealthSummary(
        total_steps=sum(m.value for m in steps),
        total_calories=sum(m.value for m in calories),
        avg_sleep_hours=(avg_sleep_minutes / MINUTES_PER_HOUR) if avg_sleep_minutes else 0.0,
        active_days=len({local_date(m.recorded_at, tz) for m in steps if m.value != 0}),
    )


class HealthTrendService:
    """
    Health trends on top of repository data access.
    """

    def __init__(self, health_repo: HealthMetricRepository):
        self._health_repo = health_repo

    def get_trend(
        self,
        user_id: str,
        metric_type: MetricType,
        *,
        days: int = 14,
        today: Optional[date] = None,
        tz: tzinfo = timezone.utc,
    ) -> HealthTrend:
        today = today or datetime.now(tz).date()
        start, end = window_bounds(today, days, tz)
        metrics = self._health_repo.list_for_user(
            user_id, metric_types=[metric_type], start=start, end=end
        )
        trend = calculate_trend(metric_type, metrics, days=days, today=today, tz=tz)
        logger.info(
            f"{metric_type.value} trend for user {user_id}: {trend.direction.value} "
            f"({trend.change_percent:.1f}% over {trend.sample_count} records)"
        )
        return trend

    def get_weekly_summary(
        self,
        user_id: str,
        *,
        today: Optional[date] = None,
        tz: tzinfo = timezone.utc,
    ) -> WeeklyHealthSummary:
        today = today or datetime.now(tz).date()
        start, end = window_bounds(today, WEEK_DAYS, tz)
        metrics = self._health_repo.list_for_user(
            user_id, metric_types=list(WEEKLY_SUMMARY_TYPES), start=start, end=end
        )
        return weekly_summary(metrics, today=today, tz=tz)
