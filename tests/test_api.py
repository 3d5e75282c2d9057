"""Tests for the FastAPI server."""

from __future__ import annotations

import math

import pytest

pytest.importorskip("fastapi")

from starlette.testclient import TestClient  # noqa: E402

from reactor_calc.api.server import app  # noqa: E402


@pytest.fixture
def client() -> TestClient:
    """Create a test client for the API."""
    return TestClient(app)


class TestHealthCheck:
    def test_health_returns_ok(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"


class TestListReactors:
    def test_reactors(self, client: TestClient) -> None:
        response = client.get("/reactors")
        assert response.status_code == 200
        assert response.json()["reactors"] == ["batch", "cstr", "pbr", "pfr"]


class TestUnits:
    def test_cgs_table(self, client: TestClient) -> None:
        response = client.get("/units/cgs", params={"order": 2})
        assert response.status_code == 200
        data = response.json()
        assert data["unit_system"] == "CGS"
        assert data["units"]["volume"] == {"factor": 1e6, "symbol": "cm³"}
        assert data["units"]["rate_constant"]["factor"] == pytest.approx(1e3)

    def test_unknown_system_returns_404(self, client: TestClient) -> None:
        assert client.get("/units/furlongs").status_code == 404

    def test_negative_order_rejected(self, client: TestClient) -> None:
        assert client.get("/units/SI", params={"order": -1}).status_code == 422

    def test_overflowing_order_returns_error_envelope(self, client: TestClient) -> None:
        response = client.get("/units/cgs", params={"order": 200})
        assert response.status_code == 422
        assert response.json()["error"]["kind"] == "DomainError"


class TestCalculate:
    def test_success(self, client: TestClient, batch_request) -> None:
        response = client.post("/calculate", json=batch_request)
        assert response.status_code == 200
        data = response.json()
        assert data["mode"] == "conversion"
        assert data["values"]["conversion"] == pytest.approx(1.0 - math.exp(-1.0))
        assert data["units"]["residence_time"] == "s"

    def test_engine_error_returns_envelope(self, client: TestClient, batch_request) -> None:
        batch_request["kinetics"] = {"order": 0.0, "rate_constant": 1.0}
        response = client.post("/calculate", json=batch_request)
        assert response.status_code == 422
        assert response.json()["error"]["kind"] == "ConversionOutOfRange"

    def test_invalid_request_returns_envelope(self, client: TestClient) -> None:
        response = client.post("/calculate", json={"reactor_type": "batch"})
        assert response.status_code == 422
        assert response.json()["error"]["kind"] == "ValidationError"
