"""
Workout session and exercise log records.

A WorkoutSession is one concrete occurrence of a template (or ad hoc training).
ExerciseLogs are the individual sets recorded during a session.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from domain.models._time import ensure_aware


class SessionStatus(str, Enum):
    """
    Lifecycle of a workout session.

    A session starts ACTIVE and transitions exactly once to COMPLETED or
    CANCELLED.
    """

    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_finished(self) -> bool:
        return self is not SessionStatus.ACTIVE


class WorkoutSession(BaseModel):
    """A single training session."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    template_id: Optional[str] = Field(
        default=None, description="Originating template, None for ad hoc sessions"
    )
    session_name: Optional[str] = None
    status: SessionStatus = SessionStatus.ACTIVE
    started_at: datetime
    completed_at: Optional[datetime] = None

    @field_validator("started_at", "completed_at")
    @classmethod
    def validate_timestamps(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_aware(v)

    @model_validator(mode="after")
    def validate_completion_time(self) -> "WorkoutSession":
        if self.completed_at is not None and self.completed_at < self.started_at:
            raise ValueError("completed_at must not precede started_at")
        return self

    @property
    def duration_minutes(self) -> Optional[int]:
        """Whole minutes between start and completion, None while unfinished."""
        if self.completed_at is None:
            return None
        return int((self.completed_at - self.started_at).total_seconds() // 60)


class ExerciseLog(BaseModel):
    """One recorded set within a session."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    session_id: str = Field(..., min_length=1)
    exercise_key: str = Field(..., min_length=1)
    exercise_name: str = ""
    set_number: int = Field(default=1, ge=1)
    completed: bool = False
    reps: Optional[int] = Field(default=None, ge=0)
    weight: Optional[float] = Field(default=None, ge=0)
    created_at: Optional[datetime] = None

    @field_validator("created_at")
    @classmethod
    def validate_created_at(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_aware(v)

    @property
    def volume(self) -> float:
        """reps x weight, with a missing value contributing nothing."""
        if self.reps is None or self.weight is None:
            return 0.0
        return self.reps * self.weight
