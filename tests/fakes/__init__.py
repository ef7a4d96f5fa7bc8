"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of the repository and
sync interfaces for fast, isolated testing. No database or external
dependencies required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with domain models
- Supports reset() for test isolation
- Builder functions for the records tests need most

Usage:
    from tests.fakes import FakeSessionRepository, make_session

    repo = FakeSessionRepository()
    repo.seed([make_session("s1", started_at=datetime(2024, 1, 1, 9, tzinfo=timezone.utc))])
"""
import uuid
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence, Tuple

from domain.models import (
    ExerciseCatalogEntry,
    ExerciseLog,
    HealthMetric,
    MetricType,
    ProgramTemplate,
    ProgramTemplateExercise,
    SessionStatus,
    WorkoutSession,
)

from tests.fakes.training_repository import (
    FakeTemplateRepository,
    FakeSessionRepository,
    FakeExerciseLogRepository,
    FakeUserProfileRepository,
)
from tests.fakes.catalog_repository import FakeExerciseCatalogRepository
from tests.fakes.health_metric_repository import FakeHealthMetricRepository
from tests.fakes.sync_source import FakeSyncSource

TEST_USER_ID = "test_user"

# (exercise_key, target_sets, target_reps)
ExerciseSpec = Tuple[str, int, str]


# =============================================================================
# Builders
# =============================================================================


def make_template(
    template_id: str,
    *,
    name: Optional[str] = None,
    day_of_week: Optional[int] = None,
    exercises: Sequence[ExerciseSpec] = (),
    gym_id: Optional[str] = None,
    user_id: str = TEST_USER_ID,
) -> ProgramTemplate:
    """
    Build a ProgramTemplate from (exercise_key, target_sets, target_reps) tuples.

    Exercises are ordered as given.
    """
    return ProgramTemplate(
        id=template_id,
        user_id=user_id,
        gym_id=gym_id,
        name=name if name is not None else template_id,
        day_of_week=day_of_week,
        exercises=[
            ProgramTemplateExercise(
                exercise_key=key,
                exercise_name=key.replace("-", " ").title(),
                target_sets=sets,
                target_reps=reps,
                order_index=i,
            )
            for i, (key, sets, reps) in enumerate(exercises)
        ],
    )


def make_session(
    session_id: str,
    *,
    started_at: datetime,
    completed_at: Optional[datetime] = None,
    status: SessionStatus = SessionStatus.COMPLETED,
    template_id: Optional[str] = None,
    session_name: Optional[str] = None,
    user_id: str = TEST_USER_ID,
) -> WorkoutSession:
    return WorkoutSession(
        id=session_id,
        user_id=user_id,
        template_id=template_id,
        session_name=session_name,
        status=status,
        started_at=started_at,
        completed_at=completed_at,
    )


def make_log(
    session_id: str,
    exercise_key: str,
    *,
    set_number: int = 1,
    reps: Optional[int] = 10,
    weight: Optional[float] = None,
    completed: bool = True,
    created_at: Optional[datetime] = None,
    log_id: Optional[str] = None,
) -> ExerciseLog:
    return ExerciseLog(
        id=log_id or str(uuid.uuid4()),
        session_id=session_id,
        exercise_key=exercise_key,
        exercise_name=exercise_key.replace("-", " ").title(),
        set_number=set_number,
        completed=completed,
        reps=reps,
        weight=weight,
        created_at=created_at,
    )


def make_metric(
    metric_type: MetricType,
    value: float,
    recorded_at: datetime,
    *,
    user_id: str = TEST_USER_ID,
) -> HealthMetric:
    return HealthMetric(
        id=str(uuid.uuid4()),
        user_id=user_id,
        metric_type=metric_type,
        value=value,
        unit=metric_type.default_unit,
        recorded_at=recorded_at,
    )


def make_catalog_entry(
    exercise_id: str,
    primary_muscles: Iterable[str] = (),
) -> ExerciseCatalogEntry:
    return ExerciseCatalogEntry(
        id=exercise_id,
        name=exercise_id.replace("-", " ").title(),
        primary_muscles=list(primary_muscles),
    )


def utc(year: int, month: int, day: int, hour: int = 12, minute: int = 0) -> datetime:
    """Shorthand for an aware UTC datetime."""
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


# =============================================================================
# Factory Functions
# =============================================================================


def create_training_repos(
    *,
    templates: Iterable[ProgramTemplate] = (),
    sessions: Iterable[WorkoutSession] = (),
    logs: Iterable[ExerciseLog] = (),
) -> Tuple[FakeTemplateRepository, FakeSessionRepository, FakeExerciseLogRepository]:
    """
    Create linked template, session and log fakes pre-populated with records.

    Returns:
        (template_repo, session_repo, log_repo)
    """
    template_repo = FakeTemplateRepository()
    template_repo.seed(templates)
    session_repo = FakeSessionRepository()
    session_repo.seed(sessions)
    log_repo = FakeExerciseLogRepository(session_repo)
    log_repo.seed(logs)
    return template_repo, session_repo, log_repo


__all__: List[str] = [
    # Fakes
    "FakeTemplateRepository",
    "FakeSessionRepository",
    "FakeExerciseLogRepository",
    "FakeUserProfileRepository",
    "FakeExerciseCatalogRepository",
    "FakeHealthMetricRepository",
    "FakeSyncSource",
    # Builders
    "make_template",
    "make_session",
    "make_log",
    "make_metric",
    "make_catalog_entry",
    "utc",
    # Factories
    "create_training_repos",
    "TEST_USER_ID",
]
