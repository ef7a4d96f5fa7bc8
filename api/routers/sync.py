"""
Sync router for refreshing records from upstream sources.

This router contains endpoints for:
- POST /sync/{resource} - Start a background sync (joins one already running),
  optionally waiting for it to finish
- GET /sync/{resource} - Status of the latest sync
- DELETE /sync/{resource} - Cancel the outstanding sync

Syncs run as background tasks on the process-wide SyncCoordinator. Failures
are recorded on the job; analytics endpoints keep serving whatever the store
holds and simply recompute once the sync lands.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from api.deps import get_current_user, get_sync_coordinator, get_sync_source
from application.ports import SyncSource
from backend.services.sync_coordinator import SyncCoordinator, SyncJob, SyncResource

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/sync",
    tags=["Sync"],
)


class SyncJobResponse(BaseModel):
    id: str
    resource: SyncResource
    status: str
    error: Optional[str] = None
    requested_at: datetime
    finished_at: Optional[datetime] = None


def _job_response(job: SyncJob) -> SyncJobResponse:
    return SyncJobResponse(
        id=job.id,
        resource=job.resource,
        status=job.status.value,
        error=job.error,
        requested_at=job.requested_at,
        finished_at=job.finished_at,
    )


@router.post("/{resource}", response_model=SyncJobResponse, status_code=202)
async def request_sync(
    resource: SyncResource,
    wait: bool = Query(False, description="Respond only once the sync has finished"),
    user_id: str = Depends(get_current_user),
    coordinator: SyncCoordinator = Depends(get_sync_coordinator),
    source: SyncSource = Depends(get_sync_source),
) -> SyncJobResponse:
    """
    Start a sync for the caller.

    While a sync for the same resource is outstanding, the running job is
    returned instead of starting another one. With wait=true the response
    carries the finished job, so callers can recompute analytics right away.
    """
    async def fetch():
        return await source.fetch(user_id, resource)

    job = coordinator.request(user_id, resource, fetch)
    if wait:
        job = await coordinator.wait(user_id, resource) or job
    return _job_response(job)


@router.get("/{resource}", response_model=SyncJobResponse)
async def get_sync_status(
    resource: SyncResource,
    user_id: str = Depends(get_current_user),
    coordinator: SyncCoordinator = Depends(get_sync_coordinator),
) -> SyncJobResponse:
    """Get the latest sync job for the caller and resource."""
    job = coordinator.get_status(user_id, resource)
    if job is None:
        raise HTTPException(
            status_code=404,
            detail=f"No {resource.value} sync requested",
        )
    return _job_response(job)


@router.delete("/{resource}", response_model=SyncJobResponse)
async def cancel_sync(
    resource: SyncResource,
    user_id: str = Depends(get_current_user),
    coordinator: SyncCoordinator = Depends(get_sync_coordinator),
) -> SyncJobResponse:
    """Cancel the caller's outstanding sync for a resource."""
    if not coordinator.cancel(user_id, resource):
        raise HTTPException(
            status_code=404,
            detail=f"No {resource.value} sync in progress",
        )
    logger.info(f"User {user_id} cancelled {resource.value} sync")
    return _job_response(coordinator.get_status(user_id, resource))
