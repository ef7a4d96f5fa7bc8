"""
Domain layer for the RepCompanion analytics API.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).
"""

from domain.models import (
    ExerciseCatalogEntry,
    ExerciseLog,
    HealthMetric,
    MetricType,
    ProgramTemplate,
    ProgramTemplateExercise,
    SessionStatus,
    UserProfile,
    WorkoutSession,
)

__all__ = [
    "ExerciseCatalogEntry",
    "ExerciseLog",
    "HealthMetric",
    "MetricType",
    "ProgramTemplate",
    "ProgramTemplateExercise",
    "SessionStatus",
    "UserProfile",
    "WorkoutSession",
]
