"""
Converters: Database row format <-> domain models.

Provides conversion between Supabase database rows and the domain models.
Column names follow the mobile app's schema, so a few fields are renamed on
the way in (template_name -> name, workout_session_id -> session_id,
exercise_title -> exercise_name, date -> recorded_at).

Database schema:
- program_templates: id, user_id, gym_id, template_name, day_of_week,
  program_template_exercises (nested rows)
- program_template_exercises: exercise_key, exercise_name, target_sets,
  target_reps, target_weight, required_equipment, order_index
- workout_sessions: id, user_id, template_id, session_name, status,
  started_at, completed_at
- exercise_logs: id, workout_session_id, exercise_key, exercise_title,
  set_number, completed, reps, weight, created_at
- exercise_catalog: id, name, category, difficulty, is_compound,
  primary_muscles, secondary_muscles, video_url
- user_profiles: user_id, selected_gym_id, current_pass_number, timezone
- health_metrics: id, user_id, metric_type, value, unit, date
"""

from datetime import datetime
from typing import Any, Dict, Optional

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


def _parse_datetime(value: Any) -> Optional[datetime]:
    """Parse datetime from various formats."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        # Handle ISO format with or without timezone
        try:
            # Try ISO format with Z suffix
            if value.endswith("Z"):
                value = value[:-1] + "+00:00"
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None


def db_row_to_template(row: Dict[str, Any]) -> ProgramTemplate:
    """
    Convert a program_templates row (with nested exercises) to a ProgramTemplate.

    Raises:
        ValueError: If the row fails model validation.
    """
    exercises = [
        ProgramTemplateExercise(
            exercise_key=ex["exercise_key"],
            exercise_name=ex.get("exercise_name") or "",
            target_sets=ex.get("target_sets") or 1,
            target_reps=str(ex.get("target_reps") or ""),
            target_weight=ex.get("target_weight"),
            required_equipment=ex.get("required_equipment") or [],
            order_index=ex.get("order_index") or 0,
        )
        for ex in row.get("program_template_exercises") or []
    ]
    return ProgramTemplate(
        id=row["id"],
        user_id=row["user_id"],
        gym_id=row.get("gym_id"),
        name=row.get("template_name") or "",
        day_of_week=row.get("day_of_week"),
        exercises=exercises,
    )


def db_row_to_session(row: Dict[str, Any]) -> WorkoutSession:
    """Convert a workout_sessions row to a WorkoutSession."""
    return WorkoutSession(
        id=row["id"],
        user_id=row["user_id"],
        template_id=row.get("template_id"),
        session_name=row.get("session_name"),
        status=SessionStatus(row.get("status") or SessionStatus.ACTIVE.value),
        started_at=_parse_datetime(row.get("started_at")),
        completed_at=_parse_datetime(row.get("completed_at")),
    )


def session_to_db_row(session: WorkoutSession) -> Dict[str, Any]:
    """Convert a WorkoutSession to a workout_sessions row for insertion."""
    return {
        "id": session.id,
        "user_id": session.user_id,
        "template_id": session.template_id,
        "session_name": session.session_name,
        "status": session.status.value,
        "started_at": session.started_at.isoformat(),
        "completed_at": session.completed_at.isoformat() if session.completed_at else None,
    }


def db_row_to_log(row: Dict[str, Any]) -> ExerciseLog:
    """Convert an exercise_logs row to an ExerciseLog."""
    return ExerciseLog(
        id=row["id"],
        session_id=row["workout_session_id"],
        exercise_key=row["exercise_key"],
        exercise_name=row.get("exercise_title") or "",
        set_number=row.get("set_number") or 1,
        completed=bool(row.get("completed")),
        reps=row.get("reps"),
        weight=row.get("weight"),
        created_at=_parse_datetime(row.get("created_at")),
    )


def db_row_to_catalog_entry(row: Dict[str, Any]) -> ExerciseCatalogEntry:
    """Convert an exercise_catalog row to an ExerciseCatalogEntry."""
    return ExerciseCatalogEntry(
        id=row["id"],
        name=row.get("name") or row["id"],
        category=row.get("category"),
        difficulty=row.get("difficulty"),
        is_compound=bool(row.get("is_compound")),
        primary_muscles=row.get("primary_muscles") or [],
        secondary_muscles=row.get("secondary_muscles") or [],
        video_url=row.get("video_url"),
    )


def db_row_to_profile(row: Dict[str, Any]) -> UserProfile:
    """Convert a user_profiles row to a UserProfile."""
    return UserProfile(
        user_id=row["user_id"],
        selected_gym_id=row.get("selected_gym_id"),
        current_pass_number=row.get("current_pass_number") or 1,
        timezone=row.get("timezone") or "UTC",
    )


def db_row_to_health_metric(row: Dict[str, Any]) -> HealthMetric:
    """
    Convert a health_metrics row to a HealthMetric.

    Raises:
        ValueError: If metric_type is not a known MetricType.
    """
    metric_type = MetricType(row["metric_type"])
    return HealthMetric(
        id=row["id"],
        user_id=row["user_id"],
        metric_type=metric_type,
        value=row.get("value") or 0,
        unit=row.get("unit") or metric_type.default_unit,
        recorded_at=_parse_datetime(row.get("date")),
    )
