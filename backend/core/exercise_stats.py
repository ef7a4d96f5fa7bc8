"""
Exercise Statistics Aggregation.

This module aggregates a user's logged sets for one exercise:
- Max / average / last weight
- Total volume (reps x weight), sets and sessions
- Estimated 1RM using the Epley formula
- Weight progression: top weight per training day
- Suggested working weight for a rep target

A qualifying log is a completed log for the exercise whose session belongs to
the user. Logs take their timestamp from the owning session's start.
"""
from dataclasses import dataclass
from datetime import date, datetime, timezone, tzinfo
from typing import Dict, List, Optional, Sequence, Tuple
import logging

from application.ports import ExerciseLogRepository, SessionRepository
from backend.core.calendar import local_date, window_bounds
from domain.models import ExerciseLog, WorkoutSession

logger = logging.getLogger(__name__)


# =============================================================================
# 1RM and load suggestions
# =============================================================================


def calculate_epley_1rm(weight: float, reps: int) -> float:
    """
    Calculate estimated 1RM using the Epley formula.

    Formula: 1RM = weight * (1 + reps/30)

    Args:
        weight: Weight lifted
        reps: Number of reps completed

    Returns:
        Estimated 1RM; a single rep (or none) is the weight itself
    """
    if reps <= 1:
        return float(weight)
    return weight * (1.0 + reps / 30.0)


# (max reps in band, share of estimated 1RM, share of max weight)
LOAD_BANDS: Tuple[Tuple[int, float, float], ...] = (
    (5, 0.85, 0.90),   # strength
    (8, 0.75, 0.80),
    (12, 0.65, 0.70),  # hypertrophy
    (15, 0.55, 0.60),
)
ENDURANCE_SHARES = (0.45, 0.50)


def _load_shares(target_reps: int) -> Tuple[float, float]:
    if target_reps >= 1:
        for max_reps, one_rm_share, max_weight_share in LOAD_BANDS:
            if target_reps <= max_reps:
                return one_rm_share, max_weight_share
    return ENDURANCE_SHARES


# =============================================================================
# Result records
# =============================================================================


@dataclass(frozen=True)
class ExerciseStats:
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


@dataclass(frozen=True)
class WeightDataPoint:
    """Top weight used on one training day."""
    date: date
    weight: float


def suggested_weight(stats: ExerciseStats, target_reps: int) -> Optional[float]:
    """
    Suggest a working weight for a rep target.

    Prefers a share of the estimated 1RM; falls back to a share of the max
    weight when no 1RM estimate exists.

    Returns:
        Suggested weight rounded to 1 decimal place, or None without weight data
    """
    one_rm_share, max_weight_share = _load_shares(target_reps)
    if stats.estimated_one_rm is not None:
        return round(stats.estimated_one_rm * one_rm_share, 1)
    if stats.max_weight is not None:
        return round(stats.max_weight * max_weight_share, 1)
    return None


# =============================================================================
# Aggregation
# =============================================================================


_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _qualifying_logs(
    exercise_key: str,
    logs: Sequence[ExerciseLog],
    sessions: Sequence[WorkoutSession],
    since: Optional[datetime],
    until: Optional[datetime] = None,
) -> List[Tuple[ExerciseLog, WorkoutSession]]:
    """Completed logs of the exercise joined to their sessions, oldest first."""
    by_id = {s.id: s for s in sessions}
    joined = []
    for log in logs:
        if log.exercise_key != exercise_key or not log.completed:
            continue
        session = by_id.get(log.session_id)
        if session is None:
            continue
        if since is not None and session.started_at < since:
            continue
        if until is not None and session.started_at >= until:
            continue
        joined.append((log, session))

    joined.sort(key=lambda pair: (
        pair[1].started_at,
        pair[0].created_at or _EPOCH,
        pair[0].set_number,
    ))
    return joined


def calculate_exercise_stats(
    exercise_key: str,
    logs: Sequence[ExerciseLog],
    sessions: Sequence[WorkoutSession],
    *,
    since: Optional[datetime] = None,
) -> ExerciseStats:
    """
    Aggregate statistics for one exercise.

    Args:
        exercise_key: Exercise catalog ID
        logs: Candidate logs (other exercises and incomplete sets are skipped)
        sessions: The user's sessions; logs outside them are ignored
        since: Only count sessions started at or after this time

    Returns:
        ExerciseStats; weight fields are None when no weight was recorded
    """
    joined = _qualifying_logs(exercise_key, logs, sessions, since)

    weights = [log.weight for log, _ in joined if log.weight is not None]
    best_1rm: Optional[float] = None
    for log, _ in joined:
        if log.weight is not None and log.reps:
            estimate = calculate_epley_1rm(log.weight, log.reps)
            if best_1rm is None or estimate > best_1rm:
                best_1rm = estimate

    name = next((log.exercise_name for log, _ in joined if log.exercise_name), exercise_key)

    return ExerciseStats(
        exercise_key=exercise_key,
        exercise_name=name,
        total_volume=sum(log.volume for log, _ in joined),
        total_sets=len(joined),
        total_sessions=len({session.id for _, session in joined}),
        max_weight=max(weights) if weights else None,
        avg_weight=sum(weights) / len(weights) if weights else None,
        last_weight=weights[-1] if weights else None,
        estimated_one_rm=round(best_1rm, 1) if best_1rm is not None else None,
        last_performed_at=joined[-1][1].started_at if joined else None,
    )


def weight_progression(
    exercise_key: str,
    logs: Sequence[ExerciseLog],
    sessions: Sequence[WorkoutSession],
    *,
    tz: tzinfo,
    since: Optional[datetime] = None,
    until: Optional[datetime] = None,
) -> List[WeightDataPoint]:
    """
    Top weight per local training day, ascending by date.

    Only logs with a recorded weight contribute. Each call builds a new list.
    """
    daily: Dict[date, float] = {}
    for log, session in _qualifying_logs(exercise_key, logs, sessions, since, until):
        if log.weight is None:
            continue
        day = local_date(session.started_at, tz)
        daily[day] = max(daily.get(day, log.weight), log.weight)

    return [WeightDataPoint(date=day, weight=weight) for day, weight in sorted(daily.items())]


def calculate_all_stats(
    logs: Sequence[ExerciseLog],
    sessions: Sequence[WorkoutSession],
) -> List[ExerciseStats]:
    """Stats for every exercise with a completed log, by total volume descending."""
    keys = sorted({log.exercise_key for log in logs if log.completed})
    stats = [calculate_exercise_stats(key, logs, sessions) for key in keys]
    stats = [s for s in stats if s.total_sets > 0]
    stats.sort(key=lambda s: s.total_volume, reverse=True)
    return stats


# =============================================================================
# Exercise Stats Service
# =============================================================================


class ExerciseStatsService:
    """
    Exercise statistics on top of repository data access.
    """

    def __init__(
        self,
        session_repo: SessionRepository,
        log_repo: ExerciseLogRepository,
    ):
        """
        Initialize the stats service.

        Args:
            session_repo: Repository for workout sessions
            log_repo: Repository for exercise logs
        """
        self._session_repo = session_repo
        self._log_repo = log_repo

    def _since(self, days: Optional[int], today: date, tz: tzinfo) -> Optional[datetime]:
        if days is None:
            return None
        start, _ = window_bounds(today, days, tz)
        return start

    def get_stats(
        self,
        user_id: str,
        exercise_key: str,
        *,
        days: Optional[int] = None,
        today: Optional[date] = None,
        tz: tzinfo = timezone.utc,
    ) -> ExerciseStats:
        """
        Get statistics for one exercise.

        Args:
            user_id: User ID
            exercise_key: Exercise catalog ID
            days: Restrict to the last N calendar days, or None for all history
            today: Local date the window ends on
            tz: User's time zone

        Returns:
            ExerciseStats (empty totals when the user never logged the exercise)
        """
        today = today or datetime.now(tz).date()
        since = self._since(days, today, tz)
        sessions = self._session_repo.list_for_user(user_id, start=since)
        logs = self._log_repo.list_for_exercise(user_id, exercise_key, since=since)
        stats = calculate_exercise_stats(exercise_key, logs, sessions, since=since)
        logger.info(
            f"Stats for {exercise_key} (user {user_id}): "
            f"{stats.total_sets} sets over {stats.total_sessions} sessions"
        )
        return stats

    def get_weight_progression(
        self,
        user_id: str,
        exercise_key: str,
        *,
        days: int = 30,
        today: Optional[date] = None,
        tz: tzinfo = timezone.utc,
    ) -> List[WeightDataPoint]:
        """Top weight per training day over the last N calendar days."""
        today = today or datetime.now(tz).date()
        since, until = window_bounds(today, days, tz)
        sessions = self._session_repo.list_for_user(user_id, start=since, end=until)
        logs = self._log_repo.list_for_exercise(user_id, exercise_key, since=since)
        return weight_progression(
            exercise_key, logs, sessions, tz=tz, since=since, until=until
        )

    def get_all_stats(self, user_id: str) -> List[ExerciseStats]:
        """Stats for every exercise the user has completed a set of."""
        sessions = self._session_repo.list_for_user(user_id)
        logs = self._log_repo.list_for_user(user_id)
        return calculate_all_stats(logs, sessions)

    def get_suggested_weight(
        self,
        user_id: str,
        exercise_key: str,
        target_reps: int,
    ) -> Optional[float]:
        """Suggested working weight for a rep target, or None without history."""
        return suggested_weight(self.get_stats(user_id, exercise_key), target_reps)
