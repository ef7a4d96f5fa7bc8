"""
API package for the RepCompanion analytics API.

This package contains:
- deps.py: FastAPI dependency providers for DI
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_supabase_client,
    get_supabase_client_required,
    get_template_repo,
    get_session_repo,
    get_exercise_log_repo,
    get_user_profile_repo,
    get_catalog_repo,
    get_health_metric_repo,
    get_current_user,
    get_user_timezone,
)

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
    # Authentication
    "get_current_user",
    "get_user_timezone",
]
