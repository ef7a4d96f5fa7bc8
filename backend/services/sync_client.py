"""
HTTP client for the upstream sync service.

The sync service pulls health-platform samples and remotely recorded sessions
into the store. This client only asks it to run and reports back its summary;
the analytics core reads the results through the repositories afterwards.

Usage:
    client = SyncServiceClient(settings.sync_service_url, timeout=settings.sync_timeout_seconds)
    summary = await client.fetch("user_1", SyncResource.HEALTH_METRICS)
"""

import logging
from typing import Any, Dict

import httpx

from backend.services.sync_coordinator import SyncResource

logger = logging.getLogger(__name__)


class SyncServiceClient:
    """SyncSource backed by the sync service's HTTP API."""

    def __init__(self, base_url: str, timeout: float = 30.0):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def fetch(self, user_id: str, resource: SyncResource) -> Dict[str, Any]:
        url = f"{self._base_url}/sync/{resource.value}"
        logger.info(f"Requesting {resource.value} sync for user {user_id}")
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            response = await client.post(url, json={"user_id": user_id})
            response.raise_for_status()
        if not response.content:
            return {}
        return response.json()
