"""
Training Data Repository Interfaces (Ports).

This module defines the read interfaces the analytics services need from the
persistent store: program templates, workout sessions, exercise logs, the
exercise catalog and user profiles. Implementations live in
infrastructure/db (Supabase) and tests/fakes (in-memory).

All reads return freshly queried, immutable snapshots. The only write is
SessionRepository.create, used when a user starts a session.
"""
from datetime import datetime
from typing import Iterable, List, Optional, Protocol

from domain.models import (
    ExerciseCatalogEntry,
    ExerciseLog,
    ProgramTemplate,
    UserProfile,
    WorkoutSession,
)


class TemplateRepository(Protocol):
    """Read access to a user's program templates."""

    def list_for_user(self, user_id: str) -> List[ProgramTemplate]:
        """
        Get all templates owned by a user, exercises included.

        Args:
            user_id: User ID

        Returns:
            Templates in store order (no particular sort guaranteed)
        """
        ...

    def get(self, user_id: str, template_id: str) -> Optional[ProgramTemplate]:
        """
        Get a single template owned by a user.

        Returns:
            The template, or None if it does not exist for this user
        """
        ...


class SessionRepository(Protocol):
    """Access to workout sessions."""

    def list_for_user(
        self,
        user_id: str,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        template_id: Optional[str] = None,
    ) -> List[WorkoutSession]:
        """
        Get a user's sessions, optionally filtered.

        Args:
            user_id: User ID
            start: Only sessions with started_at >= start
            end: Only sessions with started_at < end
            template_id: Only sessions created from this template

        Returns:
            Sessions ordered by started_at ascending, then id
        """
        ...

    def get_active(self, user_id: str) -> Optional[WorkoutSession]:
        """Get the user's active session, if any."""
        ...

    def create(self, session: WorkoutSession) -> WorkoutSession:
        """
        Persist a newly started session.

        Returns:
            The stored session
        """
        ...


class ExerciseLogRepository(Protocol):
    """Read access to exercise logs."""

    def list_for_sessions(self, session_ids: Iterable[str]) -> List[ExerciseLog]:
        """
        Get all logs belonging to the given sessions.

        Returns:
            Logs ordered by session, then set_number
        """
        ...

    def list_for_exercise(
        self,
        user_id: str,
        exercise_key: str,
        *,
        since: Optional[datetime] = None,
    ) -> List[ExerciseLog]:
        """
        Get a user's logs for one exercise.

        Args:
            user_id: User ID (logs are joined through their sessions)
            exercise_key: Exercise catalog ID
            since: Only logs from sessions started at or after this time

        Returns:
            Logs for the exercise, completed or not
        """
        ...

    def list_for_user(self, user_id: str) -> List[ExerciseLog]:
        """Get every log belonging to any of the user's sessions."""
        ...


class ExerciseCatalogRepository(Protocol):
    """Read access to the exercise catalog."""

    def get_many(self, exercise_ids: Iterable[str]) -> List[ExerciseCatalogEntry]:
        """
        Get catalog entries by ID.

        Unknown IDs are silently omitted from the result.
        """
        ...


class UserProfileRepository(Protocol):
    """Read access to user profiles."""

    def get(self, user_id: str) -> Optional[UserProfile]:
        """Get a user's profile, or None when the user has none yet."""
        ...
