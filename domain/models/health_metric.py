"""
Health metric records synced from the user's health platform.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.models._time import ensure_aware


class MetricType(str, Enum):
    """Closed set of health metric keys."""

    STEPS = "steps"
    CALORIES_BURNED = "calories_burned"
    SLEEP_DURATION_MINUTES = "sleep_duration_minutes"
    HEART_RATE_AVG = "heart_rate_avg"
    RESTING_HEART_RATE = "resting_heart_rate"
    HRV = "hrv"
    WEIGHT = "weight"

    @property
    def default_unit(self) -> str:
        return _DEFAULT_UNITS[self]


_DEFAULT_UNITS = {
    MetricType.STEPS: "steps",
    MetricType.CALORIES_BURNED: "kcal",
    MetricType.SLEEP_DURATION_MINUTES: "minutes",
    MetricType.HEART_RATE_AVG: "bpm",
    MetricType.RESTING_HEART_RATE: "bpm",
    MetricType.HRV: "ms",
    MetricType.WEIGHT: "kg",
}


class HealthMetric(BaseModel):
    """
    A timestamped value for one metric type.

    Records are append-only. One record per day per type is expected but not
    enforced.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    metric_type: MetricType
    value: float
    unit: str = ""
    recorded_at: datetime

    @field_validator("recorded_at")
    @classmethod
    def validate_recorded_at(cls, v: datetime) -> datetime:
        return ensure_aware(v)
