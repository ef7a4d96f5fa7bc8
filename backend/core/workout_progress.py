"""
Live completion ratio for today's training session.

Progress compares reps logged in today's session against the reps planned by
the template:

    progress = completed reps / sum(target_sets * parse_reps(target_reps))

The ratio is not clamped. Extra sets push it past 1.0, which callers render
as over-achievement. Two "empty" results are distinct:
- None: the template plans nothing, so progress has no numeric meaning
- 0.0: a plan exists but no session has been started today
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Iterable, Optional, Sequence

from application.ports import ExerciseLogRepository, SessionRepository
from backend.core.calendar import day_bounds
from backend.core.reps import parse_reps
from backend.core.schedule import ScheduleService
from domain.models import ExerciseLog, ProgramTemplate, SessionStatus, WorkoutSession

logger = logging.getLogger(__name__)

COUNTED_STATUSES = frozenset({SessionStatus.ACTIVE, SessionStatus.COMPLETED})


@dataclass(frozen=True)
class WorkoutProgress:
    """Progress of today's session against its template."""
    template_id: str
    template_name: str
    session_id: Optional[str]
    planned_reps: int
    completed_reps: int
    progress: Optional[float]

    @property
    def is_over_target(self) -> bool:
        return self.progress is not None and self.progress > 1.0


def total_planned_reps(template: ProgramTemplate) -> int:
    """Sum of target_sets x parsed target reps over the template's exercises."""
    return sum(e.target_sets * parse_reps(e.target_reps) for e in template.exercises)


def find_today_session(
    sessions: Iterable[WorkoutSession],
    template_id: str,
    *,
    start: datetime,
    end: datetime,
) -> Optional[WorkoutSession]:
    """
    First session, in iteration order, started in [start, end) from the
    template with status active or completed.
    """
    for session in sessions:
        if (
            start <= session.started_at < end
            and session.status in COUNTED_STATUSES
            and session.template_id == template_id
        ):
            return session
    return None


def completed_reps(logs: Iterable[ExerciseLog], session_id: str) -> int:
    """Reps of the session's completed logs; logs without reps add nothing."""
    return sum(
        log.reps
        for log in logs
        if log.session_id == session_id and log.completed and log.reps is not None
    )


def calculate_progress(
    template: ProgramTemplate,
    sessions: Sequence[WorkoutSession],
    logs: Sequence[ExerciseLog],
    *,
    today: date,
    tz: tzinfo,
) -> Optional[float]:
    """
    Completion ratio of today's session.

    Returns:
        None if the template plans no reps, 0.0 if no session was started
        today, otherwise completed/planned (may exceed 1.0)
    """
    return _progress_for(template, sessions, logs, today=today, tz=tz).progress


def _progress_for(
    template: ProgramTemplate,
    sessions: Sequence[WorkoutSession],
    logs: Sequence[ExerciseLog],
    *,
    today: date,
    tz: tzinfo,
) -> WorkoutProgress:
    planned = total_planned_reps(template)
    if planned == 0:
        return WorkoutProgress(
            template_id=template.id,
            template_name=template.name,
            session_id=None,
            planned_reps=0,
            completed_reps=0,
            progress=None,
        )

    start, end = day_bounds(today, tz)
    session = find_today_session(sessions, template.id, start=start, end=end)
    if session is None:
        return WorkoutProgress(
            template_id=template.id,
            template_name=template.name,
            session_id=None,
            planned_reps=planned,
            completed_reps=0,
            progress=0.0,
        )

    done = completed_reps(logs, session.id)
    return WorkoutProgress(
        template_id=template.id,
        template_name=template.name,
        session_id=session.id,
        planned_reps=planned,
        completed_reps=done,
        progress=done / planned,
    )


class WorkoutProgressService:
    """
    Computes today's progress from store snapshots.
    """

    def __init__(
        self,
        schedule_service: ScheduleService,
        session_repo: SessionRepository,
        log_repo: ExerciseLogRepository,
    ):
        self._schedule = schedule_service
        self._session_repo = session_repo
        self._log_repo = log_repo

    def get_today_progress(
        self,
        user_id: str,
        *,
        template: Optional[ProgramTemplate] = None,
        today: Optional[date] = None,
    ) -> Optional[WorkoutProgress]:
        """
        Progress of today's session.

        Args:
            user_id: User ID
            template: Template to measure against; defaults to the template
                scheduled for today
            today: Local calendar date, defaults to today in the profile's zone

        Returns:
            WorkoutProgress, or None when there is no template for today
        """
        profile = self._schedule.get_profile(user_id)
        tz = profile.zone
        today = today or datetime.now(tz).date()

        if template is None:
            template = self._schedule.get_today_template(user_id, today=today)
        if template is None:
            logger.info(f"No template scheduled today for user {user_id}")
            return None

        start, end = day_bounds(today, tz)
        sessions = self._session_repo.list_for_user(
            user_id, start=start, end=end, template_id=template.id
        )
        logs = self._log_repo.list_for_sessions([s.id for s in sessions])

        return _progress_for(template, sessions, logs, today=today, tz=tz)
