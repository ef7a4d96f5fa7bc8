"""
Domain models for the RepCompanion analytics API.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services). All models are
immutable snapshots of records owned by the persistent store.

These models represent the core business concepts:
- ProgramTemplate: A reusable plan for one training day
- WorkoutSession: One concrete occurrence of training, with a lifecycle status
- ExerciseLog: One recorded set within a session
- ExerciseCatalogEntry: Reference data for an exercise
- HealthMetric: A timestamped health value of a closed metric type
- UserProfile: Gym selection, pass number and time zone

Usage:
    >>> from domain.models import ProgramTemplate, ProgramTemplateExercise

    >>> template = ProgramTemplate(
    ...     id="t1",
    ...     user_id="user_1",
    ...     name="Push",
    ...     day_of_week=1,
    ...     exercises=[
    ...         ProgramTemplateExercise(
    ...             exercise_key="bench-press", target_sets=3, target_reps="8-12"
    ...         )
    ...     ],
    ... )
"""

from domain.models.catalog import DEFAULT_MUSCLE_GROUP, ExerciseCatalogEntry
from domain.models.health_metric import HealthMetric, MetricType
from domain.models.program_template import ProgramTemplate, ProgramTemplateExercise
from domain.models.session import ExerciseLog, SessionStatus, WorkoutSession
from domain.models.user_profile import UserProfile

__all__ = [
    # Main entities
    "ProgramTemplate",
    "ProgramTemplateExercise",
    "WorkoutSession",
    "ExerciseLog",
    "ExerciseCatalogEntry",
    "HealthMetric",
    "UserProfile",
    # Enums
    "SessionStatus",
    "MetricType",
    # Constants
    "DEFAULT_MUSCLE_GROUP",
]
