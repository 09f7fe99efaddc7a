"""Tests for the /api/v1/health endpoint."""
from __future__ import annotations

from unittest.mock import patch

from metacheck.parser.meta_parser import MetaTags


class TestHealthEndpoint:
    """Tests for GET /api/v1/health."""

    def test_healthy(self, client):
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "1.0.0"
        assert data["checks"] == {"parser": True}

    def test_degraded_when_parser_fails(self, client):
        with patch("app.api.v1.endpoints.health.parse_meta_tags", return_value=MetaTags()):
            response = client.get("/api/v1/health")

        assert response.json()["status"] == "degraded"

    def test_not_rate_limited(self, client):
        response = client.get("/api/v1/health")

        assert "X-RateLimit-Limit" not in response.headers


class TestUnhandledErrors:
    """Tests for the global exception handler."""

    def test_structured_500(self):
        from fastapi.testclient import TestClient

        from app.main import app

        client = TestClient(app, raise_server_exceptions=False)
        with patch("app.api.v1.endpoints.health.parse_meta_tags", side_effect=RuntimeError("boom")):
            response = client.get("/api/v1/health")

        assert response.status_code == 500
        assert response.json()["detail"]["error"]["code"] == "INTERNAL_ERROR"
