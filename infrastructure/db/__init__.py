"""
Infrastructure Database Layer.

This package provides Supabase-backed implementations of the repository interfaces
defined in application.ports. These implementations can be injected into services
and routers for clean separation of concerns and testability.

Usage:
    from supabase import create_client
    from infrastructure.db import (
        SupabaseTemplateRepository,
        SupabaseSessionRepository,
        SupabaseExerciseLogRepository,
        SupabaseUserProfileRepository,
        SupabaseExerciseCatalogRepository,
        SupabaseHealthMetricRepository,
    )

    # Create Supabase client
    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    # Instantiate repositories with injected client
    template_repo = SupabaseTemplateRepository(client)
    session_repo = SupabaseSessionRepository(client)
"""

from infrastructure.db.training_repository import (
    SupabaseTemplateRepository,
    SupabaseSessionRepository,
    SupabaseExerciseLogRepository,
    SupabaseUserProfileRepository,
)
from infrastructure.db.catalog_repository import SupabaseExerciseCatalogRepository
from infrastructure.db.health_metric_repository import SupabaseHealthMetricRepository

__all__ = [
    # Training data
    "SupabaseTemplateRepository",
    "SupabaseSessionRepository",
    "SupabaseExerciseLogRepository",
    "SupabaseUserProfileRepository",

    # Exercise catalog
    "SupabaseExerciseCatalogRepository",

    # Health metrics
    "SupabaseHealthMetricRepository",
]
