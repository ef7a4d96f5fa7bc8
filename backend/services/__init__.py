"""Backend services for the RepCompanion analytics API."""

from backend.services.sync_coordinator import (
    SyncCoordinator,
    SyncJob,
    SyncResource,
    SyncStatus,
)
from backend.services.sync_client import SyncServiceClient

__all__ = [
    "SyncCoordinator",
    "SyncJob",
    "SyncResource",
    "SyncStatus",
    "SyncServiceClient",
]
