"""
Health metrics router for trends and weekly summaries.

This router provides endpoints for:
- Trend of one metric type over a window (recent half vs prior half)
- Totals over the last 7 calendar days
"""
from typing import Optional
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from api.deps import (
    get_current_user,
    get_health_trend_service,
    get_settings,
    get_user_timezone,
)
from backend.core.health_trends import HealthTrendService
from backend.settings import Settings
from domain.models import MetricType

router = APIRouter(
    prefix="/health-metrics",
    tags=["Health Metrics"],
)


class HealthTrendResponse(BaseModel):
    metric_type: MetricType
    unit: str
    days: int
    current: Optional[float] = None
    average: Optional[float] = None
    change_percent: float
    direction: str
    sample_count: int


class WeeklyHealthSummaryResponse(BaseModel):
    total_steps: float
    total_calories: float
    avg_sleep_hours: float
    active_days: int


# /weekly-summary must be registered before /{metric_type}/trend
@router.get("/weekly-summary", response_model=WeeklyHealthSummaryResponse)
async def get_weekly_summary(
    user_id: str = Depends(get_current_user),
    tz: ZoneInfo = Depends(get_user_timezone),
    service: HealthTrendService = Depends(get_health_trend_service),
) -> WeeklyHealthSummaryResponse:
    """Get steps, calories, sleep and active days over the last 7 calendar days."""
    summary = service.get_weekly_summary(user_id, tz=tz)
    return WeeklyHealthSummaryResponse(
        total_steps=summary.total_steps,
        total_calories=summary.total_calories,
        avg_sleep_hours=summary.avg_sleep_hours,
        active_days=summary.active_days,
    )


@router.get("/{metric_type}/trend", response_model=HealthTrendResponse)
async def get_trend(
    metric_type: MetricType,
    days: Optional[int] = Query(None, ge=1, le=365, description="Window in calendar days"),
    user_id: str = Depends(get_current_user),
    tz: ZoneInfo = Depends(get_user_timezone),
    settings: Settings = Depends(get_settings),
    service: HealthTrendService = Depends(get_health_trend_service),
) -> HealthTrendResponse:
    """
    Get the trend of one metric type.

    Compares the mean of the most recent half of the window with the half
    before it; changes within ±5% are reported as stable.
    """
    days = days or settings.trend_default_days
    trend = service.get_trend(user_id, metric_type, days=days, tz=tz)
    return HealthTrendResponse(
        metric_type=trend.metric_type,
        unit=trend.metric_type.default_unit,
        days=trend.days,
        current=trend.current,
        average=trend.average,
        change_percent=trend.change_percent,
        direction=trend.direction.value,
        sample_count=trend.sample_count,
    )
