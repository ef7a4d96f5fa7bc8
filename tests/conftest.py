"""
Shared fixtures for the analytics test suite.

Provides fresh in-memory fakes and a TestClient whose dependencies are
overridden with those fakes, so router tests exercise the real services
against seeded data.

Usage:
    def test_something(api_client, fake_session_repo):
        fake_session_repo.seed([...])
        response = api_client.get("/stats/overview")
"""

import pytest
from fastapi.testclient import TestClient

from api import deps
from backend.main import create_app
from backend.services.sync_coordinator import SyncCoordinator
from backend.settings import Settings

from tests.fakes import (
    TEST_USER_ID,
    FakeExerciseCatalogRepository,
    FakeExerciseLogRepository,
    FakeHealthMetricRepository,
    FakeSessionRepository,
    FakeSyncSource,
    FakeTemplateRepository,
    FakeUserProfileRepository,
)


# =============================================================================
# Fake repositories
# =============================================================================


@pytest.fixture
def fake_template_repo() -> FakeTemplateRepository:
    return FakeTemplateRepository()


@pytest.fixture
def fake_session_repo() -> FakeSessionRepository:
    return FakeSessionRepository()


@pytest.fixture
def fake_log_repo(fake_session_repo) -> FakeExerciseLogRepository:
    return FakeExerciseLogRepository(fake_session_repo)


@pytest.fixture
def fake_profile_repo() -> FakeUserProfileRepository:
    return FakeUserProfileRepository()


@pytest.fixture
def fake_catalog_repo() -> FakeExerciseCatalogRepository:
    return FakeExerciseCatalogRepository()


@pytest.fixture
def fake_health_repo() -> FakeHealthMetricRepository:
    return FakeHealthMetricRepository()


@pytest.fixture
def fake_sync_source() -> FakeSyncSource:
    return FakeSyncSource(result={"written": 3})


# =============================================================================
# App / client
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    return Settings(environment="test", api_keys="test-key", _env_file=None)


@pytest.fixture
def test_app(
    test_settings,
    fake_template_repo,
    fake_session_repo,
    fake_log_repo,
    fake_profile_repo,
    fake_catalog_repo,
    fake_health_repo,
    fake_sync_source,
):
    """App with every repository and the sync source overridden by fakes."""
    app = create_app(settings=test_settings)

    async def _current_user() -> str:
        return TEST_USER_ID

    coordinator = SyncCoordinator()
    app.dependency_overrides[deps.get_settings] = lambda: test_settings
    app.dependency_overrides[deps.get_current_user] = _current_user
    app.dependency_overrides[deps.get_template_repo] = lambda: fake_template_repo
    app.dependency_overrides[deps.get_session_repo] = lambda: fake_session_repo
    app.dependency_overrides[deps.get_exercise_log_repo] = lambda: fake_log_repo
    app.dependency_overrides[deps.get_user_profile_repo] = lambda: fake_profile_repo
    app.dependency_overrides[deps.get_catalog_repo] = lambda: fake_catalog_repo
    app.dependency_overrides[deps.get_health_metric_repo] = lambda: fake_health_repo
    app.dependency_overrides[deps.get_sync_coordinator] = lambda: coordinator
    app.dependency_overrides[deps.get_sync_source] = lambda: fake_sync_source
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def api_client(test_app) -> TestClient:
    return TestClient(test_app)
