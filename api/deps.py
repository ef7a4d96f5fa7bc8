"""
FastAPI Dependency Providers for the RepCompanion analytics API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with fake implementations.

Architecture:
- Settings, the Supabase client and the sync coordinator are cached per-process (lru_cache)
- Repository and service providers create new instances per-request
- Auth provider wraps backend.auth

Usage in routers:
    from api.deps import get_current_user, get_exercise_stats_service

    @router.get("/stats/exercises/{exercise_key}")
    def exercise_stats(
        exercise_key: str,
        user_id: str = Depends(get_current_user),
        service: ExerciseStatsService = Depends(get_exercise_stats_service),
    ):
        return service.get_stats(user_id, exercise_key)

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_session_repo] = lambda: FakeSessionRepository()
"""

from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo

from fastapi import Depends, HTTPException
from supabase import Client, create_client

# Protocol types (interfaces)
from application.ports import (
    TemplateRepository,
    SessionRepository,
    ExerciseLogRepository,
    ExerciseCatalogRepository,
    UserProfileRepository,
    HealthMetricRepository,
    SyncSource,
)

# Concrete implementations
from infrastructure import (
    SupabaseTemplateRepository,
    SupabaseSessionRepository,
    SupabaseExerciseLogRepository,
    SupabaseUserProfileRepository,
    SupabaseExerciseCatalogRepository,
    SupabaseHealthMetricRepository,
)

# Services
from backend.core.schedule import ScheduleService
from backend.core.workout_progress import WorkoutProgressService
from backend.core.exercise_stats import ExerciseStatsService
from backend.core.muscle_balance import MuscleBalanceService
from backend.core.health_trends import HealthTrendService
from backend.core.training_overview import TrainingOverviewService
from backend.services.sync_client import SyncServiceClient
from backend.services.sync_coordinator import SyncCoordinator

from backend.settings import Settings, get_settings as _get_settings

# Auth from existing module (wrap to maintain single source of truth)
from backend.auth import get_current_user as _get_current_user


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.

    Returns:
        Settings: Application settings instance
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Creates a Supabase client using credentials from settings.
    Returns None if credentials are not configured.

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


def get_supabase_client_required() -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Use this dependency when the endpoint requires database access.
    Raises HTTPException 503 if database is not available.

    Returns:
        Client: Supabase client instance

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Repository Providers
# =============================================================================


def get_template_repo(
    client: Client = Depends(get_supabase_client_required),
) -> TemplateRepository:
    """
    Get TemplateRepository implementation.

    The return type is the Protocol to enable easy faking.
    """
    return SupabaseTemplateRepository(client)


def get_session_repo(
    client: Client = Depends(get_supabase_client_required),
) -> SessionRepository:
    """Get SessionRepository implementation."""
    return SupabaseSessionRepository(client)


def get_exercise_log_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ExerciseLogRepository:
    """Get ExerciseLogRepository implementation."""
    return SupabaseExerciseLogRepository(client)


def get_user_profile_repo(
    client: Client = Depends(get_supabase_client_required),
) -> UserProfileRepository:
    """Get UserProfileRepository implementation."""
    return SupabaseUserProfileRepository(client)


def get_catalog_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ExerciseCatalogRepository:
    """Get ExerciseCatalogRepository implementation."""
    return SupabaseExerciseCatalogRepository(client)


def get_health_metric_repo(
    client: Client = Depends(get_supabase_client_required),
) -> HealthMetricRepository:
    """Get HealthMetricRepository implementation."""
    return SupabaseHealthMetricRepository(client)


# =============================================================================
# Service Providers
# =============================================================================


def get_schedule_service(
    template_repo: TemplateRepository = Depends(get_template_repo),
    profile_repo: UserProfileRepository = Depends(get_user_profile_repo),
    session_repo: SessionRepository = Depends(get_session_repo),
) -> ScheduleService:
    """Get ScheduleService with injected repositories."""
    return ScheduleService(template_repo, profile_repo, session_repo)


def get_workout_progress_service(
    schedule: ScheduleService = Depends(get_schedule_service),
    session_repo: SessionRepository = Depends(get_session_repo),
    log_repo: ExerciseLogRepository = Depends(get_exercise_log_repo),
) -> WorkoutProgressService:
    """Get WorkoutProgressService with injected dependencies."""
    return WorkoutProgressService(schedule, session_repo, log_repo)


def get_exercise_stats_service(
    session_repo: SessionRepository = Depends(get_session_repo),
    log_repo: ExerciseLogRepository = Depends(get_exercise_log_repo),
) -> ExerciseStatsService:
    """Get ExerciseStatsService with injected repositories."""
    return ExerciseStatsService(session_repo, log_repo)


def get_training_overview_service(
    session_repo: SessionRepository = Depends(get_session_repo),
    log_repo: ExerciseLogRepository = Depends(get_exercise_log_repo),
) -> TrainingOverviewService:
    """Get TrainingOverviewService with injected repositories."""
    return TrainingOverviewService(session_repo, log_repo)


def get_muscle_balance_service(
    schedule: ScheduleService = Depends(get_schedule_service),
    catalog_repo: ExerciseCatalogRepository = Depends(get_catalog_repo),
) -> MuscleBalanceService:
    """Get MuscleBalanceService with injected dependencies."""
    return MuscleBalanceService(schedule, catalog_repo)


def get_health_trend_service(
    health_repo: HealthMetricRepository = Depends(get_health_metric_repo),
) -> HealthTrendService:
    """Get HealthTrendService with injected repository."""
    return HealthTrendService(health_repo)


@lru_cache
def get_sync_coordinator() -> SyncCoordinator:
    """
    Get the process-wide SyncCoordinator.

    Single-flight bookkeeping only works if every request sees the same
    coordinator, so this provider is cached.
    """
    return SyncCoordinator()


def get_sync_source(
    settings: Settings = Depends(get_settings),
) -> SyncSource:
    """Get the SyncSource that talks to the upstream sync service."""
    return SyncServiceClient(
        settings.sync_service_url,
        timeout=settings.sync_timeout_seconds,
    )


# =============================================================================
# Authentication Providers
# =============================================================================


async def get_current_user(
    user_id: str = Depends(_get_current_user),
) -> str:
    """
    Get the authenticated user's ID.

    Wraps backend.auth.get_current_user for use as a dependency.

    Returns:
        str: User ID
    """
    return user_id


def get_user_timezone(
    user_id: str = Depends(get_current_user),
    profile_repo: UserProfileRepository = Depends(get_user_profile_repo),
    settings: Settings = Depends(get_settings),
) -> ZoneInfo:
    """
    Get the calling user's time zone.

    Falls back to settings.default_timezone for users without a profile.
    """
    profile = profile_repo.get(user_id)
    if profile is not None:
        return profile.zone
    return ZoneInfo(settings.default_timezone)


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories
    "get_template_repo",
    "get_session_repo",
    "get_exercise_log_repo",
    "get_user_profile_repo",
    "get_catalog_repo",
    "get_health_metric_repo",
    # Services
    "get_schedule_service",
    "get_workout_progress_service",
    "get_exercise_stats_service",
    "get_training_overview_service",
    "get_muscle_balance_service",
    "get_health_trend_service",
    "get_sync_coordinator",
    "get_sync_source",
    # Auth
    "get_current_user",
    "get_user_timezone",
]
