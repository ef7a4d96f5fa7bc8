"""
Supabase Training Data Repository Implementations.

This module implements the training data ports using Supabase:
- SupabaseTemplateRepository: program_templates + program_template_exercises
- SupabaseSessionRepository: workout_sessions
- SupabaseExerciseLogRepository: exercise_logs (joined to sessions by ID)
- SupabaseUserProfileRepository: user_profiles

Read failures are logged and resolve to empty snapshots. Rows that fail
validation are skipped with a warning so one bad row never hides the rest;
analytics over an empty snapshot is always defined.
"""
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar
import logging

from supabase import Client

from application.exceptions import SessionCreationError
from domain.converters import (
    db_row_to_log,
    db_row_to_profile,
    db_row_to_session,
    db_row_to_template,
    session_to_db_row,
)
from domain.models import (
    ExerciseLog,
    ProgramTemplate,
    SessionStatus,
    UserProfile,
    WorkoutSession,
)

logger = logging.getLogger(__name__)

TEMPLATE_SELECT = "*, program_template_exercises(*)"

T = TypeVar("T")


def _convert_rows(
    rows: Optional[List[Dict[str, Any]]],
    convert: Callable[[Dict[str, Any]], T],
    kind: str,
) -> List[T]:
    """Convert rows one at a time, skipping rows that fail validation."""
    converted = []
    for row in rows or []:
        try:
            converted.append(convert(row))
        except ValueError as e:
            logger.warning(f"Skipping {kind} {row.get('id')}: {e}")
    return converted


class SupabaseTemplateRepository:
    """
    Supabase implementation of TemplateRepository.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected)
        """
        self._client = client

    def list_for_user(self, user_id: str) -> List[ProgramTemplate]:
        try:
            result = self._client.table("program_templates") \
                .select(TEMPLATE_SELECT) \
                .eq("user_id", user_id) \
                .execute()
            return _convert_rows(result.data, db_row_to_template, "template")
        except Exception as e:
            logger.exception(f"Error fetching templates for user {user_id}: {e}")
            return []

    def get(self, user_id: str, template_id: str) -> Optional[ProgramTemplate]:
        try:
            result = self._client.table("program_templates") \
                .select(TEMPLATE_SELECT) \
                .eq("user_id", user_id) \
                .eq("id", template_id) \
                .limit(1) \
                .execute()
            if not result.data:
                return None
            return db_row_to_template(result.data[0])
        except Exception as e:
            logger.exception(f"Error fetching template {template_id}: {e}")
            return None


class SupabaseSessionRepository:
    """
    Supabase implementation of SessionRepository.
    """

    def __init__(self, client: Client):
        self._client = client

    def list_for_user(
        self,
        user_id: str,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        template_id: Optional[str] = None,
    ) -> List[WorkoutSession]:
        try:
            query = self._client.table("workout_sessions") \
                .select("*") \
                .eq("user_id", user_id)
            if start is not None:
                query = query.gte("started_at", start.isoformat())
            if end is not None:
                query = query.lt("started_at", end.isoformat())
            if template_id is not None:
                query = query.eq("template_id", template_id)
            result = query.order("started_at").order("id").execute()
            return _convert_rows(result.data, db_row_to_session, "session")
        except Exception as e:
            logger.exception(f"Error fetching sessions for user {user_id}: {e}")
            return []

    def get_active(self, user_id: str) -> Optional[WorkoutSession]:
        try:
            result = self._client.table("workout_sessions") \
                .select("*") \
                .eq("user_id", user_id) \
                .eq("status", SessionStatus.ACTIVE.value) \
                .order("started_at", desc=True) \
                .limit(1) \
                .execute()
            if not result.data:
                return None
            return db_row_to_session(result.data[0])
        except Exception as e:
            logger.exception(f"Error fetching active session for user {user_id}: {e}")
            return None

    def create(self, session: WorkoutSession) -> WorkoutSession:
        try:
            result = self._client.table("workout_sessions") \
                .insert(session_to_db_row(session)) \
                .execute()
        except Exception as e:
            logger.exception(f"Error saving session {session.id}: {e}")
            raise SessionCreationError(str(e)) from e

        if not result.data:
            raise SessionCreationError(f"No row returned for session {session.id}")
        return db_row_to_session(result.data[0])


class SupabaseExerciseLogRepository:
    """
    Supabase implementation of ExerciseLogRepository.

    Logs carry no user column; user scoping goes through workout_sessions.
    """

    def __init__(self, client: Client):
        self._client = client

    def _session_ids(self, user_id: str, since: Optional[datetime] = None) -> List[str]:
        query = self._client.table("workout_sessions") \
            .select("id") \
            .eq("user_id", user_id)
        if since is not None:
            query = query.gte("started_at", since.isoformat())
        result = query.execute()
        return [row["id"] for row in result.data or []]

    def list_for_sessions(self, session_ids: Iterable[str]) -> List[ExerciseLog]:
        ids = list(session_ids)
        if not ids:
            return []
        try:
            result = self._client.table("exercise_logs") \
                .select("*") \
                .in_("workout_session_id", ids) \
                .order("workout_session_id") \
                .order("set_number") \
                .execute()
            return _convert_rows(result.data, db_row_to_log, "exercise log")
        except Exception as e:
            logger.exception(f"Error fetching logs for {len(ids)} sessions: {e}")
            return []

    def list_for_exercise(
        self,
        user_id: str,
        exercise_key: str,
        *,
        since: Optional[datetime] = None,
    ) -> List[ExerciseLog]:
        try:
            ids = self._session_ids(user_id, since)
            if not ids:
                return []
            result = self._client.table("exercise_logs") \
                .select("*") \
                .in_("workout_session_id", ids) \
                .eq("exercise_key", exercise_key) \
                .execute()
            return _convert_rows(result.data, db_row_to_log, "exercise log")
        except Exception as e:
            logger.exception(f"Error fetching {exercise_key} logs for user {user_id}: {e}")
            return []

    def list_for_user(self, user_id: str) -> List[ExerciseLog]:
        try:
            return self.list_for_sessions(self._session_ids(user_id))
        except Exception as e:
            logger.exception(f"Error fetching logs for user {user_id}: {e}")
            return []


class SupabaseUserProfileRepository:
    """
    Supabase implementation of UserProfileRepository.
    """

    def __init__(self, client: Client):
        self._client = client

    def get(self, user_id: str) -> Optional[UserProfile]:
        try:
            result = self._client.table("user_profiles") \
                .select("user_id, selected_gym_id, current_pass_number, timezone") \
                .eq("user_id", user_id) \
                .limit(1) \
                .execute()
            if not result.data:
                return None
            return db_row_to_profile(result.data[0])
        except Exception as e:
            logger.exception(f"Error fetching profile for user {user_id}: {e}")
            return None
