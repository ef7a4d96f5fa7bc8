"""
Unit tests for the sync router.

The client is used as a context manager so every request shares one event
loop and background syncs survive between requests.
"""

import pytest
from fastapi.testclient import TestClient

from api import deps
from backend.services.sync_coordinator import SyncResource
from tests.fakes import TEST_USER_ID, FakeSyncSource

pytestmark = pytest.mark.unit


@pytest.fixture
def held_source() -> FakeSyncSource:
    return FakeSyncSource(hold=True)


@pytest.fixture
def sync_client(test_app, held_source):
    test_app.dependency_overrides[deps.get_sync_source] = lambda: held_source
    with TestClient(test_app) as client:
        yield client


def test_status_before_any_request_is_404(sync_client):
    response = sync_client.get("/sync/health_metrics")
    assert response.status_code == 404


def test_unknown_resource_is_422(sync_client):
    response = sync_client.post("/sync/calendar")
    assert response.status_code == 422


def test_request_returns_accepted_job(sync_client):
    response = sync_client.post("/sync/health_metrics")

    assert response.status_code == 202
    data = response.json()
    assert data["resource"] == "health_metrics"
    assert data["status"] == "pending"
    assert data["finished_at"] is None


def test_requests_join_outstanding_job(sync_client, held_source):
    first = sync_client.post("/sync/workout_sessions").json()
    second = sync_client.post("/sync/workout_sessions").json()

    assert first["id"] == second["id"]
    assert sync_client.get("/sync/workout_sessions").json()["id"] == first["id"]
    assert len(held_source.calls) <= 1


def test_resources_are_independent(sync_client):
    health = sync_client.post("/sync/health_metrics").json()
    sessions = sync_client.post("/sync/workout_sessions").json()
    assert health["id"] != sessions["id"]


def test_cancel(sync_client):
    job = sync_client.post("/sync/health_metrics").json()

    response = sync_client.delete("/sync/health_metrics")

    assert response.status_code == 200
    assert response.json()["id"] == job["id"]
    assert response.json()["status"] == "cancelled"
    assert response.json()["finished_at"] is not None


def test_cancel_without_outstanding_job_is_404(sync_client):
    response = sync_client.delete("/sync/health_metrics")
    assert response.status_code == 404


def test_wait_returns_finished_job(sync_client, test_app):
    source = FakeSyncSource(result={"written": 3})
    test_app.dependency_overrides[deps.get_sync_source] = lambda: source

    response = sync_client.post("/sync/health_metrics", params={"wait": "true"})

    assert response.status_code == 202
    data = response.json()
    assert data["status"] == "completed"
    assert data["finished_at"] is not None
    assert source.calls == [(TEST_USER_ID, SyncResource.HEALTH_METRICS)]


def test_request_after_cancel_starts_new_job(sync_client):
    first = sync_client.post("/sync/health_metrics").json()
    sync_client.delete("/sync/health_metrics")

    second = sync_client.post("/sync/health_metrics").json()

    assert second["id"] != first["id"]
    assert second["status"] == "pending"
