"""Unit tests for environment-driven settings."""
from __future__ import annotations

from metacheck.config.settings import Settings


class TestSettingsDefaults:
    """Tests for default values."""

    def test_defaults(self, monkeypatch):
        for name in ("METACHECK_DEBUG", "METACHECK_LOG_LEVEL", "METACHECK_API_RATE_LIMIT"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings()

        assert settings.debug is False
        assert settings.log_level == "WARNING"
        assert settings.fetcher.request_timeout == 10
        assert settings.fetcher.site_file_timeout == 5
        assert settings.fetcher.max_redirects == 5
        assert settings.diagnostics.title_max_length == 60
        assert settings.api.anonymous_rate_limit == 30


class TestEnvironmentOverrides:
    """Tests for METACHECK_* environment variables."""

    def test_debug_forces_debug_logging(self, monkeypatch):
        monkeypatch.setenv("METACHECK_DEBUG", "true")
        monkeypatch.setenv("METACHECK_LOG_LEVEL", "error")

        settings = Settings()

        assert settings.debug is True
        assert settings.log_level == "DEBUG"

    def test_log_level_uppercased(self, monkeypatch):
        monkeypatch.delenv("METACHECK_DEBUG", raising=False)
        monkeypatch.setenv("METACHECK_LOG_LEVEL", "info")

        assert Settings().log_level == "INFO"

    def test_fetcher_overrides(self, monkeypatch):
        monkeypatch.setenv("METACHECK_REQUEST_TIMEOUT", "3")
        monkeypatch.setenv("METACHECK_USER_AGENT", "TestAgent/2.0")

        settings = Settings()

        assert settings.fetcher.request_timeout == 3
        assert settings.fetcher.user_agent == "TestAgent/2.0"

    def test_api_overrides(self, monkeypatch):
        monkeypatch.setenv("METACHECK_API_RATE_LIMIT", "7")
        monkeypatch.setenv("METACHECK_API_CORS_ORIGINS", "https://a.example, https://b.example")

        settings = Settings()

        assert settings.api.anonymous_rate_limit == 7
        assert settings.api.cors_origins == ["https://a.example", "https://b.example"]

    def test_instances_do_not_share_groups(self, monkeypatch):
        monkeypatch.setenv("METACHECK_REQUEST_TIMEOUT", "3")
        first = Settings()
        monkeypatch.delenv("METACHECK_REQUEST_TIMEOUT")
        second = Settings()

        assert first.fetcher.request_timeout == 3
        assert second.fetcher.request_timeout == 10
