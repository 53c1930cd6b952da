"""Tests for the JSON API."""

import pytest
from fastapi.testclient import TestClient

from orca_block import __version__
from orca_block.models.exercises import default_catalog
from orca_block.web import create_app

from conftest import START_MS


@pytest.fixture
def client():
    return TestClient(create_app(catalog=default_catalog()))


@pytest.fixture
def block_data(ppl_block):
    return ppl_block.to_dict()


class TestAppRoutes:
    """Tests for app-level routes."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": __version__}

    def test_templates(self, client):
        templates = client.get("/templates").json()["templates"]
        assert [t["id"] for t in templates] == [
            "linear-8-week",
            "powerlifting-12-week",
            "hypertrophy-6-week",
        ]
        assert templates[1]["total_weeks"] == 12


class TestPlanningRoutes:
    """Tests for /planning routes."""

    def test_skeleton(self, client, block_data):
        response = client.post("/planning/skeleton", json=block_data)

        assert response.status_code == 200
        data = response.json()
        assert data["training_block_id"] == "block-1"
        assert data["total_weeks"] == 3
        assert len(data["sessions"]) == 9
        assert data["sessions"][2]["label"] == "Hypertrophy - Wk1 Legs"

    def test_skeleton_field_errors(self, client, block_data):
        """Test that invalid blocks come back as structured field errors."""
        block_data["goal_bias"] = 140
        block_data["phases"][0]["sessions_per_week"] = 1

        response = client.post("/planning/skeleton", json=block_data)

        assert response.status_code == 422
        fields = [e["field"] for e in response.json()["errors"]]
        assert fields == ["phases[0].sessions_per_week", "goal_bias"]

    def test_skeleton_unknown_enum(self, client, block_data):
        block_data["session_structure"] = "circuit"
        response = client.post("/planning/skeleton", json=block_data)

        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "session_structure"

    def test_skeleton_non_object_phase(self, client, block_data):
        block_data["phases"] = ["x"]
        response = client.post("/planning/skeleton", json=block_data)

        assert response.status_code == 422
        assert response.json()["errors"][0] == {
            "field": "phases[0]",
            "message": "must be an object",
            "expected": "object",
            "value": "x",
        }

    def test_phase(self, client, block_data):
        response = client.post("/planning/phase", json={"block": block_data, "now_ms": START_MS})

        data = response.json()
        assert data["now_ms"] == START_MS
        assert data["status"] == "active"
        assert data["phase"]["phase_index"] == 0

    def test_phase_before_start(self, client, block_data):
        data = client.post("/planning/phase", json={"block": block_data, "now_ms": START_MS - 1}).json()
        assert data["status"] == "not-started"
        assert data["phase"] is None

    def test_recommendations_defaults(self, client):
        response = client.post("/planning/recommendations", json={})

        assert response.status_code == 200
        data = response.json()
        assert data["phase"] is None
        assert data["recommendations"]["training_goal_focus"] == "general"
        assert "no active block" in data["recommendations"]["rationale"]

    def test_recommendations_with_block(self, client, block_data):
        block_data["goal_bias"] = 85
        response = client.post(
            "/planning/recommendations",
            json={
                "profile": {"goal": "hypertrophy", "readiness": "low"},
                "block": block_data,
                "now_ms": START_MS,
            },
        )

        data = response.json()
        assert data["phase"]["phase"]["phase"] == "Hypertrophy"
        recs = data["recommendations"]
        assert recs["training_goal_focus"] == "strength"
        assert recs["fatigue_adjustment"] == 0.55
        assert "low readiness" in recs["rationale"]

    def test_recommendations_bad_profile(self, client):
        response = client.post("/planning/recommendations", json={"profile": {"goal": "bulk"}})
        assert response.status_code == 422

    def test_recommendations_goal_bias_range(self, client):
        response = client.post("/planning/recommendations", json={"goal_bias": 150})
        assert response.status_code == 422


class TestMetabolicRoutes:
    """Tests for /metabolic routes."""

    def test_session(self, client):
        response = client.post(
            "/metabolic/session",
            json={"sets": [{"intensity_pct": 100, "reps": 1, "rpe": 10}] * 2},
        )

        data = response.json()
        assert data["set_loads"] == [100.0, 100.0]
        assert data["total_load"] == 200.0
        assert data["zone"] == "light"

    def test_session_with_drift(self, client):
        sets = [{"intensity_pct": 75, "reps": 10, "rpe": 7}] * 3
        plain = client.post("/metabolic/session", json={"sets": sets}).json()
        drifted = client.post("/metabolic/session", json={"sets": sets, "rpe_drift": 0.5}).json()
        assert drifted["total_load"] > plain["total_load"]

    def test_drift_set_loads_sum_to_total(self, client):
        """Test that per-set loads include the drift."""
        sets = [{"intensity_pct": 75, "reps": 10, "rpe": 7}] * 3
        data = client.post("/metabolic/session", json={"sets": sets, "rpe_drift": 0.5}).json()

        loads = data["set_loads"]
        assert loads[0] < loads[1] < loads[2]
        assert sum(loads) == pytest.approx(data["total_load"], abs=0.02)

    def test_invalid_set(self, client):
        response = client.post("/metabolic/session", json={"sets": [{"reps": 5}]})
        assert response.status_code == 422

    def test_zones(self, client):
        zones = client.get("/metabolic/zones").json()["zones"]

        assert [z["zone"] for z in zones] == ["light", "moderate", "moderate-high", "high", "extreme"]
        assert zones[1] == {
            "zone": "moderate",
            "label": "Moderate (hypertrophy sweet spot)",
            "min": 500.0,
            "max": 800.0,
        }
        assert zones[-1]["max"] is None
