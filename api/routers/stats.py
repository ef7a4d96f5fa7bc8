"""
Stats router for exercise statistics and training history.

This router provides endpoints for:
- Per-exercise statistics (volume, sets, weights, estimated 1RM)
- Weight progression series for charts
- Suggested working weight for a rep target
- Overall training overview and workout history
"""
from datetime import date, datetime
from typing import List, Optional
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, Path, Query
from pydantic import BaseModel, Field

from api.deps import (
    get_current_user,
    get_exercise_stats_service,
    get_settings,
    get_training_overview_service,
    get_user_timezone,
)
from backend.core.exercise_stats import ExerciseStats, ExerciseStatsService
from backend.core.training_overview import TrainingOverviewService
from backend.settings import Settings

router = APIRouter(
    prefix="/stats",
    tags=["Stats"],
)


# =============================================================================
# Response Models
# =============================================================================


class ExerciseStatsResponse(BaseModel):
    """Aggregated statistics for one exercise."""
    exercise_key: str
    exercise_name: str
    total_volume: float
    total_sets: int
    total_sessions: int
    max_weight: Optional[float] = None
    avg_weight: Optional[float] = None
    last_weight: Optional[float] = None
    estimated_one_rm: Optional[float] = None
    last_performed_at: Optional[datetime] = None


class ExerciseStatsListResponse(BaseModel):
    exercises: List[ExerciseStatsResponse]
    total: int


class WeightDataPointResponse(BaseModel):
    date: date
    weight: float


class WeightProgressionResponse(BaseModel):
    """Top weight per training day, ascending by date."""
    exercise_key: str
    days: int
    data: List[WeightDataPointResponse] = Field(default_factory=list)


class SuggestedWeightResponse(BaseModel):
    exercise_key: str
    target_reps: int
    suggested_weight: Optional[float] = None


class WeeklySessionCountResponse(BaseModel):
    week_start: date
    count: int


class TrainingOverviewResponse(BaseModel):
    total_sessions: int
    average_duration_minutes: int
    total_volume: float
    unique_exercises: int
    weekly_sessions: List[WeeklySessionCountResponse]
    top_exercises: List[ExerciseStatsResponse]


class WorkoutHistoryItemResponse(BaseModel):
    session_id: str
    name: str
    started_at: datetime
    status: str
    duration_minutes: int
    total_reps: int
    total_volume: float


class WorkoutHistoryResponse(BaseModel):
    sessions: List[WorkoutHistoryItemResponse]
    total: int


def _stats_response(stats: ExerciseStats) -> ExerciseStatsResponse:
    return ExerciseStatsResponse(
        exercise_key=stats.exercise_key,
        exercise_name=stats.exercise_name,
        total_volume=stats.total_volume,
        total_sets=stats.total_sets,
        total_sessions=stats.total_sessions,
        max_weight=stats.max_weight,
        avg_weight=stats.avg_weight,
        last_weight=stats.last_weight,
        estimated_one_rm=stats.estimated_one_rm,
        last_performed_at=stats.last_performed_at,
    )


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/exercises", response_model=ExerciseStatsListResponse)
async def list_exercise_stats(
    user_id: str = Depends(get_current_user),
    service: ExerciseStatsService = Depends(get_exercise_stats_service),
) -> ExerciseStatsListResponse:
    """
    Get statistics for every exercise the caller has completed a set of.

    Sorted by total volume, highest first.
    """
    stats = service.get_all_stats(user_id)
    return ExerciseStatsListResponse(
        exercises=[_stats_response(s) for s in stats],
        total=len(stats),
    )


@router.get("/exercises/{exercise_key}", response_model=ExerciseStatsResponse)
async def get_exercise_stats(
    exercise_key: str = Path(..., min_length=1, description="Exercise catalog ID"),
    days: Optional[int] = Query(
        None, ge=1, le=3650, description="Restrict to the last N calendar days"
    ),
    user_id: str = Depends(get_current_user),
    tz: ZoneInfo = Depends(get_user_timezone),
    service: ExerciseStatsService = Depends(get_exercise_stats_service),
) -> ExerciseStatsResponse:
    """
    Get statistics for one exercise.

    Exercises without completed sets return empty totals rather than 404.
    """
    stats = service.get_stats(user_id, exercise_key, days=days, tz=tz)
    return _stats_response(stats)


@router.get(
    "/exercises/{exercise_key}/progression",
    response_model=WeightProgressionResponse,
)
async def get_weight_progression(
    exercise_key: str = Path(..., min_length=1, description="Exercise catalog ID"),
    days: Optional[int] = Query(None, ge=1, le=365, description="Window in calendar days"),
    user_id: str = Depends(get_current_user),
    tz: ZoneInfo = Depends(get_user_timezone),
    settings: Settings = Depends(get_settings),
    service: ExerciseStatsService = Depends(get_exercise_stats_service),
) -> WeightProgressionResponse:
    """Get the top weight used per training day over the window."""
    days = days or settings.progression_default_days
    points = service.get_weight_progression(user_id, exercise_key, days=days, tz=tz)
    return WeightProgressionResponse(
        exercise_key=exercise_key,
        days=days,
        data=[WeightDataPointResponse(date=p.date, weight=p.weight) for p in points],
    )


@router.get(
    "/exercises/{exercise_key}/suggested-weight",
    response_model=SuggestedWeightResponse,
)
async def get_suggested_weight(
    exercise_key: str = Path(..., min_length=1, description="Exercise catalog ID"),
    target_reps: int = Query(..., ge=1, le=100, description="Planned reps per set"),
    user_id: str = Depends(get_current_user),
    service: ExerciseStatsService = Depends(get_exercise_stats_service),
) -> SuggestedWeightResponse:
    """
    Suggest a working weight for a rep target.

    suggested_weight is null when the caller has no weighted sets for the exercise.
    """
    return SuggestedWeightResponse(
        exercise_key=exercise_key,
        target_reps=target_reps,
        suggested_weight=service.get_suggested_weight(user_id, exercise_key, target_reps),
    )


@router.get("/overview", response_model=TrainingOverviewResponse)
async def get_training_overview(
    user_id: str = Depends(get_current_user),
    tz: ZoneInfo = Depends(get_user_timezone),
    service: TrainingOverviewService = Depends(get_training_overview_service),
) -> TrainingOverviewResponse:
    """Get lifetime training totals, weekly session counts and top exercises."""
    overview = service.get_overview(user_id, tz=tz)
    return TrainingOverviewResponse(
        total_sessions=overview.total_sessions,
        average_duration_minutes=overview.average_duration_minutes,
        total_volume=overview.total_volume,
        unique_exercises=overview.unique_exercises,
        weekly_sessions=[
            WeeklySessionCountResponse(week_start=w.week_start, count=w.count)
            for w in overview.weekly_sessions
        ],
        top_exercises=[_stats_response(s) for s in overview.top_exercises],
    )


@router.get("/history", response_model=WorkoutHistoryResponse)
async def get_workout_history(
    user_id: str = Depends(get_current_user),
    service: TrainingOverviewService = Depends(get_training_overview_service),
) -> WorkoutHistoryResponse:
    """Get the caller's finished sessions, most recent first, with rep and volume totals."""
    items = service.get_history(user_id)
    return WorkoutHistoryResponse(
        sessions=[
            WorkoutHistoryItemResponse(
                session_id=i.session_id,
                name=i.name,
                started_at=i.started_at,
                status=i.status.value,
                duration_minutes=i.duration_minutes,
                total_reps=i.total_reps,
                total_volume=i.total_volume,
            )
            for i in items
        ],
        total=len(items),
    )
