"""
Training overview: session history and headline numbers for the stats screen.
"""
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Dict, List, Optional, Sequence

from application.ports import ExerciseLogRepository, SessionRepository
from backend.core.calendar import local_date
from backend.core.exercise_stats import ExerciseStats, calculate_all_stats
from domain.models import ExerciseLog, SessionStatus, WorkoutSession

logger = logging.getLogger(__name__)

DEFAULT_SESSION_NAME = "Workout"


@dataclass(frozen=True)
class WeeklySessionCount:
    """Completed sessions in the week starting on week_start (a Monday)."""
    week_start: date
    count: int


@dataclass(frozen=True)
class WorkoutHistoryItem:
    session_id: str
    name: str
    started_at: datetime
    status: SessionStatus
    duration_minutes: int
    total_reps: int
    total_volume: float


@dataclass(frozen=True)
class TrainingOverview:
    total_sessions: int
    average_duration_minutes: int
    total_volume: float
    unique_exercises: int
    weekly_sessions: List[WeeklySessionCount] = field(default_factory=list)
    top_exercises: List[ExerciseStats] = field(default_factory=list)


def total_finished_sessions(sessions: Sequence[WorkoutSession]) -> int:
    """Sessions that were completed or cancelled."""
    return sum(1 for s in sessions if s.status.is_finished)


def average_duration_minutes(sessions: Sequence[WorkoutSession]) -> int:
    """Mean whole-minute duration of completed sessions, 0 when there are none."""
    durations = [
        s.duration_minutes
        for s in sessions
        if s.status == SessionStatus.COMPLETED and s.duration_minutes is not None
    ]
    if not durations:
        return 0
    return sum(durations) // len(durations)


def week_start(day: date) -> date:
    return day - timedelta(days=day.isoweekday() - 1)


def weekly_session_counts(
    sessions: Sequence[WorkoutSession],
    *,
    today: date,
    tz: tzinfo = timezone.utc,
    weeks: int = 12,
) -> List[WeeklySessionCount]:
    """
    Completed sessions per Monday-start week, oldest week first.

    The last bucket is the current week; empty weeks are included.
    """
    current = week_start(today)
    starts = [current - timedelta(weeks=offset) for offset in range(weeks - 1, -1, -1)]
    counts: Dict[date, int] = {start: 0 for start in starts}

    for session in sessions:
        if session.status != SessionStatus.COMPLETED:
            continue
        bucket = week_start(local_date(session.started_at, tz))
        if bucket in counts:
            counts[bucket] += 1

    return [WeeklySessionCount(week_start=start, count=counts[start]) for start in starts]


def workout_history(
    sessions: Sequence[WorkoutSession],
    logs: Sequence[ExerciseLog],
    *,
    now: Optional[datetime] = None,
) -> List[WorkoutHistoryItem]:
    """
    Finished sessions, most recent first, with totals of their completed logs.

    Sessions cancelled without a completion time run until ``now``.
    """
    now = now or datetime.now(timezone.utc)
    by_session: Dict[str, List[ExerciseLog]] = defaultdict(list)
    for log in logs:
        if log.completed:
            by_session[log.session_id].append(log)

    finished = sorted(
        (s for s in sessions if s.status.is_finished),
        key=lambda s: s.started_at,
        reverse=True,
    )

    history = []
    for session in finished:
        end = session.completed_at or now
        session_logs = by_session.get(session.id, [])
        history.append(WorkoutHistoryItem(
            session_id=session.id,
            name=session.session_name or DEFAULT_SESSION_NAME,
            started_at=session.started_at,
            status=session.status,
            duration_minutes=max(int((end - session.started_at).total_seconds() // 60), 0),
            total_reps=sum(log.reps or 0 for log in session_logs),
            total_volume=sum(log.volume for log in session_logs),
        ))
    return history


def top_exercises(stats: Sequence[ExerciseStats], limit: int = 5) -> List[ExerciseStats]:
    """Exercises with the highest total volume."""
    return sorted(stats, key=lambda s: s.total_volume, reverse=True)[:limit]


class TrainingOverviewService:
    """
    Builds the training overview from store snapshots.
    """

    def __init__(
        self,
        session_repo: SessionRepository,
        log_repo: ExerciseLogRepository,
    ):
        self._session_repo = session_repo
        self._log_repo = log_repo

    def get_overview(
        self,
        user_id: str,
        *,
        today: Optional[date] = None,
        tz: tzinfo = timezone.utc,
    ) -> TrainingOverview:
        today = today or datetime.now(tz).date()
        sessions = self._session_repo.list_for_user(user_id)
        logs = self._log_repo.list_for_user(user_id)
        stats = calculate_all_stats(logs, sessions)

        return TrainingOverview(
            total_sessions=total_finished_sessions(sessions),
            average_duration_minutes=average_duration_minutes(sessions),
            total_volume=sum(s.total_volume for s in stats),
            unique_exercises=len(stats),
            weekly_sessions=weekly_session_counts(sessions, today=today, tz=tz),
            top_exercises=top_exercises(stats),
        )

    def get_history(self, user_id: str) -> List[WorkoutHistoryItem]:
        sessions = self._session_repo.list_for_user(user_id)
        logs = self._log_repo.list_for_user(user_id)
        return workout_history(sessions, logs)
