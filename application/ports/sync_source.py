"""
Sync Source Interface (Port).

The upstream collaborator that pulls fresh records (health-platform data,
remotely synced sessions) into the store. The SyncCoordinator runs it in the
background; its failures stay inside the sync job and never reach the
analytics core.
"""
from typing import Any, Dict, Protocol

from backend.services.sync_coordinator import SyncResource


class SyncSource(Protocol):
    """Abstract interface for triggering an upstream sync."""

    async def fetch(self, user_id: str, resource: SyncResource) -> Dict[str, Any]:
        """
        Pull fresh records for a user into the store.

        Args:
            user_id: User whose records are synced
            resource: What to sync

        Returns:
            Upstream summary (e.g. {"written": 12})

        Raises:
            Exception: Any upstream failure; recorded on the sync job
        """
        ...
