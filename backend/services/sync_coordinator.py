"""
Sync Coordinator for background fetches of fresh records.

Fetching health-sensor data or remote records runs as a cancellable asyncio
task. Requests are single-flight per (user, resource): while a fetch for a key
is outstanding, further requests for the same key join the running job
instead of starting another fetch, so the store never sees duplicate writes.

The analytics core caches nothing, so callers simply recompute after a job
completes.
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

SyncFetch = Callable[[], Awaitable[Any]]


class SyncResource(str, Enum):
    """Resources that can be refreshed from an upstream source."""

    HEALTH_METRICS = "health_metrics"
    WORKOUT_SESSIONS = "workout_sessions"


class SyncStatus(str, Enum):
    """Status states for sync jobs."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_outstanding(self) -> bool:
        return self in (SyncStatus.PENDING, SyncStatus.RUNNING)


@dataclass
class SyncJob:
    """
    A single sync run for one (user, resource) pair.

    Attributes:
        id: Unique identifier for the job
        user_id: Owner of the synced records
        resource: What is being synced
        status: Current status of the job
        result: Value returned by the fetch when the job completes
        error: Error message if the job fails
    """

    user_id: str
    resource: SyncResource
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    status: SyncStatus = SyncStatus.PENDING
    result: Optional[Any] = None
    error: Optional[str] = None
    requested_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    finished_at: Optional[datetime] = None


class SyncCoordinator:
    """
    Runs sync fetches as background tasks, one at a time per (user, resource).

    Must be used from within a running event loop.
    """

    def __init__(self):
        self._jobs: Dict[Tuple[str, SyncResource], SyncJob] = {}
        self._tasks: Dict[Tuple[str, SyncResource], asyncio.Task] = {}

    def request(self, user_id: str, resource: SyncResource, fetch: SyncFetch) -> SyncJob:
        """
        Start a sync, or join the one already outstanding for this key.

        Args:
            user_id: User whose records are synced
            resource: Resource to sync
            fetch: Coroutine function performing the fetch and store writes

        Returns:
            The new job, or the outstanding job when one is already running
        """
        key = (user_id, resource)
        existing = self._jobs.get(key)
        if existing is not None and existing.status.is_outstanding:
            logger.info(f"Sync {resource.value} for user {user_id} already running ({existing.id})")
            return existing

        job = SyncJob(user_id=user_id, resource=resource)
        self._jobs[key] = job
        self._tasks[key] = asyncio.get_running_loop().create_task(self._run(key, job, fetch))
        logger.info(f"Enqueued sync {job.id}: {resource.value} for user {user_id}")
        return job

    async def _run(self, key: Tuple[str, SyncResource], job: SyncJob, fetch: SyncFetch) -> None:
        job.status = SyncStatus.RUNNING
        try:
            job.result = await fetch()
            job.status = SyncStatus.COMPLETED
            logger.info(f"Sync {job.id} completed")
        except asyncio.CancelledError:
            job.status = SyncStatus.CANCELLED
            logger.info(f"Sync {job.id} cancelled")
            raise
        except Exception as e:
            job.error = str(e)
            job.status = SyncStatus.FAILED
            logger.error(f"Sync {job.id} failed: {e}")
        finally:
            if job.finished_at is None:
                job.finished_at = datetime.now(timezone.utc)
            if self._tasks.get(key) is asyncio.current_task():
                del self._tasks[key]

    def get_status(self, user_id: str, resource: SyncResource) -> Optional[SyncJob]:
        """The most recent job for this key, or None if none was requested."""
        return self._jobs.get((user_id, resource))

    def cancel(self, user_id: str, resource: SyncResource) -> bool:
        """
        Cancel the outstanding job for this key.

        Returns:
            True if a running job was cancelled, False if nothing was outstanding
        """
        key = (user_id, resource)
        task = self._tasks.get(key)
        if task is None or task.done():
            return False
        task.cancel()
        del self._tasks[key]
        job = self._jobs[key]
        job.status = SyncStatus.CANCELLED
        job.finished_at = datetime.now(timezone.utc)
        logger.info(f"Cancelling sync {job.id}")
        return True

    async def wait(self, user_id: str, resource: SyncResource) -> Optional[SyncJob]:
        """
        Wait for the outstanding job for this key to finish.

        Returns:
            The finished job, or the last job when none is outstanding
        """
        key = (user_id, resource)
        task = self._tasks.get(key)
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                if not task.cancelled():
                    raise
        return self._jobs.get(key)
