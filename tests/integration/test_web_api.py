"""Integration tests for the REST API.

These tests verify:
- Health check
- Layout validation, auto-sort and gap fill endpoints
- Single placement checks
- Unusable layouts are rejected with 422 and a structured error body
"""

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from drawerzen import __version__
from drawerzen.web.app import create_app

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures" / "layouts"

pytestmark = pytest.mark.integration


def _fixture(name: str) -> dict:
    return json.loads((FIXTURES_PATH / name).read_text())


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


class TestHealth:
    """Tests for the health endpoint."""

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": __version__}

    def test_cors_origins_are_configurable(self) -> None:
        client = TestClient(create_app(cors_origins=["https://planner.example"]))
        response = client.get("/health", headers={"Origin": "https://planner.example"})

        assert response.headers["access-control-allow-origin"] == "https://planner.example"


class TestLayoutEndpoints:
    """Tests for /api/v1/layout."""

    def test_validate_valid_layout(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/layout/validate", json={"config": _fixture("valid_layout.json")}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["is_valid"] is True
        assert body["grid"] == {"cols": 19, "rows": 14, "pitch": 21.0}
        assert body["summary"]["bin_count"] == 2
        assert body["layout"] is None

    def test_validate_overlapping_layout(self, client: TestClient) -> None:
        """Layout issues are a normal result, not an HTTP error."""
        response = client.post(
            "/api/v1/layout/validate",
            json={"config": _fixture("overlapping_layout.json")},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["is_valid"] is False
        assert body["issues"][0]["error_kind"] == "collision"
        assert body["issues"][0]["other_id"] == "bin-a"

    def test_sort(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/layout/sort", json={"config": _fixture("overlapping_layout.json")}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["is_valid"] is True
        assert [(b["id"], b["x"]) for b in body["bins"]] == [
            ("bin-a", 0.0),
            ("bin-b", 84.0),
        ]
        assert body["layout"]["bins"][1]["x"] == 84.0
        assert body["layout"]["schema_version"] == "1.0"

    def test_fill(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/layout/fill", json={"config": _fixture("fill_demo.json")}
        )

        assert response.status_code == 200
        body = response.json()
        assert len(body["created_bin_ids"]) == 3
        assert body["summary"]["fill_percentage"] == 100.0
        assert len(body["layout"]["bins"]) == 3

    def test_fill_refused(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/layout/fill",
            json={"config": _fixture("overlapping_layout.json")},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["is_valid"] is False
        assert body["created_bin_ids"] == []
        assert body["layout"] is None

    def test_invalid_layout_returns_422(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/layout/validate", json={"config": _fixture("unknown_field.json")}
        )

        assert response.status_code == 422
        body = response.json()
        assert body["error_type"] == "validation"
        assert body["details"][0]["path"] == "drawer.depth"

    def test_missing_config_key(self, client: TestClient) -> None:
        response = client.post("/api/v1/layout/validate", json={})
        assert response.status_code == 422


class TestPlacementEndpoint:
    """Tests for /api/v1/placement/check."""

    @pytest.fixture
    def base_request(self) -> dict:
        return {
            "drawer": {"width": 400, "length": 300},
            "bins": [{"id": "a", "x": 0, "y": 0, "width": 84, "length": 84}],
        }

    def test_valid_placement(self, client: TestClient, base_request: dict) -> None:
        base_request["candidate"] = {"x": 84, "y": 0, "width": 42, "length": 42}
        response = client.post("/api/v1/placement/check", json=base_request)

        assert response.status_code == 200
        assert response.json() == {"is_valid": True, "error_kind": None}

    def test_collision(self, client: TestClient, base_request: dict) -> None:
        base_request["candidate"] = {"x": 42, "y": 42, "width": 84, "length": 84}
        response = client.post("/api/v1/placement/check", json=base_request)
        assert response.json()["error_kind"] == "collision"

    def test_exclude_id(self, client: TestClient, base_request: dict) -> None:
        base_request["candidate"] = {"x": 21, "y": 0, "width": 84, "length": 84}
        base_request["exclude_id"] = "a"
        response = client.post("/api/v1/placement/check", json=base_request)
        assert response.json()["is_valid"] is True

    def test_out_of_bounds(self, client: TestClient, base_request: dict) -> None:
        base_request["candidate"] = {"x": 0, "y": 0, "width": 420, "length": 294}
        response = client.post("/api/v1/placement/check", json=base_request)
        assert response.json()["error_kind"] == "out_of_bounds"

    def test_size_check(self, client: TestClient, base_request: dict) -> None:
        base_request["candidate"] = {"x": 210, "y": 210, "width": 21, "length": 21}
        base_request["check_size"] = True
        response = client.post("/api/v1/placement/check", json=base_request)
        assert response.json()["error_kind"] == "size_invalid"

    def test_bad_drawer(self, client: TestClient, base_request: dict) -> None:
        base_request["drawer"] = {"width": 10, "length": 300}
        base_request["candidate"] = {"x": 0, "y": 0, "width": 42, "length": 42}
        response = client.post("/api/v1/placement/check", json=base_request)
        assert response.status_code == 422
