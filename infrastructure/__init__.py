"""
Infrastructure Layer for the RepCompanion analytics API.

This package contains concrete implementations of repository interfaces:
- db/: Supabase database implementations
"""

# Re-export database repositories for convenient access
from infrastructure.db import (
    SupabaseTemplateRepository,
    SupabaseSessionRepository,
    SupabaseExerciseLogRepository,
    SupabaseUserProfileRepository,
    SupabaseExerciseCatalogRepository,
    SupabaseHealthMetricRepository,
)

__all__ = [
    "SupabaseTemplateRepository",
    "SupabaseSessionRepository",
    "SupabaseExerciseLogRepository",
    "SupabaseUserProfileRepository",
    "SupabaseExerciseCatalogRepository",
    "SupabaseHealthMetricRepository",
]
