"""
Repository Interfaces (Ports) for the RepCompanion analytics API.

This package defines abstract interfaces that decouple the analytics core
from infrastructure (database, external services). Implementations are
provided in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the core needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import SessionRepository, ExerciseLogRepository

    class ExerciseStatsService:
        def __init__(self, session_repo: SessionRepository, log_repo: ExerciseLogRepository):
            self._session_repo = session_repo
            self._log_repo = log_repo
"""

# Training data
from application.ports.training_repository import (
    TemplateRepository,
    SessionRepository,
    ExerciseLogRepository,
    ExerciseCatalogRepository,
    UserProfileRepository,
)

# Health data
from application.ports.health_metric_repository import HealthMetricRepository

# Upstream sync
from application.ports.sync_source import SyncSource

__all__ = [
    # Training
    "TemplateRepository",
    "SessionRepository",
    "ExerciseLogRepository",
    "ExerciseCatalogRepository",
    "UserProfileRepository",
    # Health
    "HealthMetricRepository",
    # Sync
    "SyncSource",
]
