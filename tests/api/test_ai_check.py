"""Tests for the /api/v1/ai-check endpoint."""
from __future__ import annotations

from unittest.mock import patch

import pytest

pytestmark = pytest.mark.usefixtures("no_api_key")


class TestAiCheckEndpoint:
    """Tests for GET /api/v1/ai-check."""

    def test_returns_site_files(self, client):
        with patch("app.api.v1.endpoints.ai_check.validate_url", return_value=""), \
             patch(
                 "app.api.v1.endpoints.ai_check.fetch_site_files",
                 return_value=("User-agent: *\nAllow: /", "# Example"),
             ) as mock_fetch:
            response = client.get("/api/v1/ai-check", params={"url": "https://example.com/a/b"})

        mock_fetch.assert_called_once_with("https://example.com/a/b")
        assert response.status_code == 200
        assert response.json() == {
            "ok": True,
            "robotsTxt": "User-agent: *\nAllow: /",
            "llmsTxt": "# Example",
        }

    def test_missing_files_are_null(self, client):
        with patch("app.api.v1.endpoints.ai_check.validate_url", return_value=""), \
             patch("app.api.v1.endpoints.ai_check.fetch_site_files", return_value=(None, None)):
            response = client.get("/api/v1/ai-check", params={"url": "https://example.com/"})

        assert response.status_code == 200
        assert response.json()["robotsTxt"] is None
        assert response.json()["llmsTxt"] is None

    def test_blocked_url(self, client):
        with patch(
            "app.api.v1.endpoints.ai_check.validate_url",
            return_value="Access to private/internal IP addresses is forbidden: 10.0.0.1",
        ), patch("app.api.v1.endpoints.ai_check.fetch_site_files") as mock_fetch:
            response = client.get("/api/v1/ai-check", params={"url": "http://10.0.0.1/"})

        mock_fetch.assert_not_called()
        assert response.status_code == 400
        assert response.json()["detail"]["error"]["code"] == "URL_BLOCKED_SSRF"

    def test_non_http_scheme(self, client):
        response = client.get("/api/v1/ai-check", params={"url": "ftp://example.com/"})

        assert response.status_code == 400
        assert response.json()["detail"]["error"]["code"] == "INVALID_URL"

    def test_missing_url(self, client):
        response = client.get("/api/v1/ai-check")

        assert response.status_code == 422
