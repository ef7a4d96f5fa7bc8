"""
Router package for the RepCompanion analytics API.

This package contains all API routers organized by domain:
- health: Liveness endpoint
- schedule: Next template, today's progress and session start
- stats: Exercise statistics, progression, overview and history
- analysis: Muscle balance of the active templates
- health_metrics: Health metric trends and weekly summary
- sync: Background refresh from upstream sources
"""

from api.routers.health import router as health_router
from api.routers.schedule import router as schedule_router
from api.routers.stats import router as stats_router
from api.routers.analysis import router as analysis_router
from api.routers.health_metrics import router as health_metrics_router
from api.routers.sync import router as sync_router

__all__ = [
    "health_router",
    "schedule_router",
    "stats_router",
    "analysis_router",
    "health_metrics_router",
    "sync_router",
]
