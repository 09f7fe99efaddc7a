"""Fixtures shared by the API tests."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.api.services.auth import API_KEY_ENV, api_key_manager
from app.api.v1.deps import api_rate_limiter
from app.main import app


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    """Reset the API rate limiter around each test."""
    api_rate_limiter.reset()
    yield
    api_rate_limiter.reset()


@pytest.fixture
def api_key(monkeypatch):
    """Configure a single API key for the duration of a test."""
    monkeypatch.setenv(API_KEY_ENV, "test-key-123, second-key")
    api_key_manager.reload()
    yield "test-key-123"
    monkeypatch.delenv(API_KEY_ENV)
    api_key_manager.reload()


@pytest.fixture
def no_api_key(monkeypatch):
    """Make sure the API runs without authentication."""
    monkeypatch.delenv(API_KEY_ENV, raising=False)
    api_key_manager.reload()
    yield
    api_key_manager.reload()
