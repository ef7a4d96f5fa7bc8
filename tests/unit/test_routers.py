"""
Unit tests for api/routers.

Routers run against the real services with in-memory fakes injected through
dependency_overrides (see tests/conftest.py).
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from api import deps
from backend.main import create_app
from backend.settings import Settings, get_settings
from domain.models import MetricType, SessionStatus
from tests.fakes import (
    TEST_USER_ID,
    make_catalog_entry,
    make_log,
    make_metric,
    make_session,
    make_template,
    utc,
)

pytestmark = pytest.mark.unit


class TestRouterInclusion:
    """Test that all routers are correctly included in the app."""

    @pytest.fixture
    def test_app(self):
        settings = Settings(environment="test", _env_file=None)
        return create_app(settings=settings)

    def test_health_endpoint_accessible(self, test_app):
        response = TestClient(test_app).get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_openapi_lists_every_router(self, test_app):
        paths = test_app.openapi()["paths"]
        for path in (
            "/health",
            "/schedule/next",
            "/schedule/today/progress",
            "/schedule/sessions",
            "/stats/exercises",
            "/stats/exercises/{exercise_key}",
            "/stats/exercises/{exercise_key}/progression",
            "/stats/exercises/{exercise_key}/suggested-weight",
            "/stats/overview",
            "/stats/history",
            "/analysis/muscle-balance",
            "/health-metrics/weekly-summary",
            "/health-metrics/{metric_type}/trend",
            "/sync/{resource}",
        ):
            assert path in paths, path

    def test_health_method_not_allowed(self, test_app):
        response = TestClient(test_app).post("/health")
        assert response.status_code == 405


class TestAuthentication:
    """The API key dependency runs for real here; only storage is faked."""

    @pytest.fixture
    def client(self, test_app, test_settings):
        del test_app.dependency_overrides[deps.get_current_user]
        test_app.dependency_overrides[get_settings] = lambda: test_settings
        return TestClient(test_app)

    def test_missing_key_is_401(self, client):
        response = client.get("/schedule/next")
        assert response.status_code == 401

    def test_invalid_key_is_401(self, client):
        response = client.get("/schedule/next", headers={"X-API-Key": "wrong"})
        assert response.status_code == 401

    def test_key_with_user_suffix(self, client, fake_template_repo):
        fake_template_repo.seed([make_template("t1", user_id="alice", day_of_week=1)])

        response = client.get("/schedule/next", headers={"X-API-Key": "test-key:alice"})

        assert response.status_code == 200
        assert response.json()["template"]["id"] == "t1"


class TestScheduleRouter:
    def test_next_without_templates(self, api_client):
        response = api_client.get("/schedule/next")
        assert response.status_code == 200
        assert response.json() == {"template": None}

    def test_next_returns_template(self, api_client, fake_template_repo):
        fake_template_repo.seed([
            make_template("t1", name="Push", day_of_week=3, exercises=[("bench-press", 3, "10")]),
        ])

        data = api_client.get("/schedule/next").json()["template"]

        assert data["name"] == "Push"
        assert data["total_sets"] == 3
        assert data["exercises"][0]["exercise_key"] == "bench-press"

    def test_today_progress_unknown_template_is_404(self, api_client):
        response = api_client.get("/schedule/today/progress", params={"template_id": "nope"})
        assert response.status_code == 404

    def test_today_progress_for_template(self, api_client, fake_template_repo):
        fake_template_repo.seed([make_template("t1", exercises=[("squat", 3, "10")])])

        response = api_client.get("/schedule/today/progress", params={"template_id": "t1"})

        assert response.status_code == 200
        progress = response.json()["progress"]
        assert progress["planned_reps"] == 30
        assert progress["completed_reps"] == 0
        assert progress["progress"] == 0.0

    def test_start_session(self, api_client, fake_template_repo, fake_session_repo):
        fake_template_repo.seed([make_template("t1", name="Legs")])

        response = api_client.post("/schedule/sessions", json={"template_id": "t1"})

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "active"
        assert data["template_id"] == "t1"
        assert data["session_name"] == "Legs"
        assert len(fake_session_repo.created) == 1

    def test_start_session_unknown_template(self, api_client):
        response = api_client.post("/schedule/sessions", json={"template_id": "nope"})
        assert response.status_code == 404

    def test_start_session_while_active_is_409(
        self, api_client, fake_template_repo, fake_session_repo
    ):
        fake_template_repo.seed([make_template("t1")])
        fake_session_repo.seed([
            make_session("s1", started_at=utc(2024, 1, 1), status=SessionStatus.ACTIVE),
        ])

        response = api_client.post("/schedule/sessions", json={"template_id": "t1"})

        assert response.status_code == 409
        assert fake_session_repo.created == []

    def test_start_session_requires_template_id(self, api_client):
        response = api_client.post("/schedule/sessions", json={"template_id": ""})
        assert response.status_code == 422


class TestStatsRouter:
    @pytest.fixture
    def seeded(self, fake_session_repo, fake_log_repo):
        fake_session_repo.seed([
            make_session("s1", started_at=utc(2024, 1, 10, 9), completed_at=utc(2024, 1, 10, 10),
                         session_name="Legs"),
        ])
        fake_log_repo.seed([
            make_log("s1", "squat", set_number=1, reps=5, weight=100),
            make_log("s1", "squat", set_number=2, reps=5, weight=100),
        ])

    def test_list_exercise_stats(self, api_client, seeded):
        data = api_client.get("/stats/exercises").json()

        assert data["total"] == 1
        squat = data["exercises"][0]
        assert squat["exercise_key"] == "squat"
        assert squat["total_sets"] == 2
        assert squat["total_volume"] == 1000
        assert squat["max_weight"] == 100

    def test_unknown_exercise_has_empty_totals(self, api_client):
        response = api_client.get("/stats/exercises/deadlift")
        assert response.status_code == 200
        assert response.json()["total_sets"] == 0

    def test_suggested_weight_requires_target_reps(self, api_client):
        response = api_client.get("/stats/exercises/squat/suggested-weight")
        assert response.status_code == 422

    def test_suggested_weight_without_data(self, api_client):
        response = api_client.get(
            "/stats/exercises/squat/suggested-weight", params={"target_reps": 8}
        )
        assert response.status_code == 200
        assert response.json()["suggested_weight"] is None

    def test_progression_uses_default_window(self, api_client, test_settings):
        data = api_client.get("/stats/exercises/squat/progression").json()
        assert data["days"] == test_settings.progression_default_days
        assert data["data"] == []

    def test_history(self, api_client, seeded):
        data = api_client.get("/stats/history").json()

        assert data["total"] == 1
        item = data["sessions"][0]
        assert item["name"] == "Legs"
        assert item["status"] == "completed"
        assert item["duration_minutes"] == 60
        assert item["total_reps"] == 10
        assert item["total_volume"] == 1000

    def test_overview(self, api_client, seeded):
        data = api_client.get("/stats/overview").json()

        assert data["total_sessions"] == 1
        assert data["average_duration_minutes"] == 60
        assert data["unique_exercises"] == 1
        assert len(data["weekly_sessions"]) == 12


class TestAnalysisRouter:
    def test_muscle_balance(self, api_client, fake_template_repo, fake_catalog_repo):
        fake_template_repo.seed([
            make_template("t1", exercises=[("squat", 3, "10"), ("bench-press", 3, "10")]),
            make_template("t2", exercises=[("lunge", 2, "10")]),
        ])
        fake_catalog_repo.seed([
            make_catalog_entry("squat", ["Legs"]),
            make_catalog_entry("bench-press", ["Chest"]),
            make_catalog_entry("lunge", ["Legs"]),
        ])

        data = api_client.get("/analysis/muscle-balance").json()

        assert data["total_sets"] == 8
        assert [s["muscle_group"] for s in data["stats"]] == ["Legs", "Chest"]
        assert data["stats"][0]["percentage"] == pytest.approx(62.5)
        assert data["least_trained"]["muscle_group"] == "Chest"

    def test_muscle_balance_without_templates(self, api_client):
        data = api_client.get("/analysis/muscle-balance").json()
        assert data == {"stats": [], "total_sets": 0, "least_trained": None}


class TestHealthMetricsRouter:
    def test_unknown_metric_type_is_422(self, api_client):
        response = api_client.get("/health-metrics/vo2max/trend")
        assert response.status_code == 422

    def test_trend_without_data(self, api_client):
        data = api_client.get("/health-metrics/steps/trend").json()

        assert data["unit"] == "steps"
        assert data["sample_count"] == 0
        assert data["current"] is None
        assert data["direction"] == "stable"

    def test_trend_increasing(self, api_client, fake_health_repo):
        now = datetime.now(timezone.utc)
        fake_health_repo.seed([
            make_metric(MetricType.STEPS, 10000, now - timedelta(days=8)),
            make_metric(MetricType.STEPS, 12000, now),
        ])

        data = api_client.get("/health-metrics/steps/trend", params={"days": 14}).json()

        assert data["change_percent"] == pytest.approx(20.0)
        assert data["direction"] == "increasing"
        assert data["current"] == 12000

    def test_weekly_summary(self, api_client, fake_health_repo):
        now = datetime.now(timezone.utc)
        fake_health_repo.seed([
            make_metric(MetricType.STEPS, 8000, now),
            make_metric(MetricType.SLEEP_DURATION_MINUTES, 480, now),
            make_metric(MetricType.STEPS, 5000, now - timedelta(days=30)),
            make_metric(MetricType.STEPS, 1, now, user_id="someone-else"),
        ])

        data = api_client.get("/health-metrics/weekly-summary").json()

        assert data["total_steps"] == 8000
        assert data["avg_sleep_hours"] == pytest.approx(8.0)
        assert data["active_days"] == 1
