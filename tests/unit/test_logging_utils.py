"""Unit tests for logging helpers."""
from __future__ import annotations

import logging
from unittest.mock import patch

from metacheck.logging_utils import configure_logging, sanitize_url_for_logging, truncate


class TestSanitizeUrl:
    """Tests for redacting sensitive query parameters."""

    def test_sensitive_params_redacted(self):
        sanitized = sanitize_url_for_logging("https://example.com/api?token=secret&user=john")
        assert "secret" not in sanitized
        assert "REDACTED" in sanitized
        assert "user=john" in sanitized

    def test_param_names_case_insensitive(self):
        sanitized = sanitize_url_for_logging("https://example.com/?API_KEY=abc123")
        assert "abc123" not in sanitized

    def test_url_without_query_unchanged(self):
        assert sanitize_url_for_logging("https://example.com/page") == "https://example.com/page"

    def test_non_url_truncated(self):
        sanitized = sanitize_url_for_logging("not a url " * 30)
        assert len(sanitized) == 103
        assert sanitized.endswith("...")


class TestTruncate:
    """Tests for log string truncation."""

    def test_short_unchanged(self):
        assert truncate("short") == "short"

    def test_long_truncated(self):
        assert truncate("x" * 300) == "x" * 200 + "..."

    def test_empty_is_none(self):
        assert truncate("") is None
        assert truncate(None) is None


class TestConfigureLogging:
    """Tests for root logger configuration."""

    def test_explicit_level(self):
        with patch("logging.basicConfig") as mock_config:
            configure_logging("debug")
        assert mock_config.call_args.kwargs["level"] == logging.DEBUG

    def test_unknown_level_falls_back_to_warning(self):
        with patch("logging.basicConfig") as mock_config:
            configure_logging("chatty")
        assert mock_config.call_args.kwargs["level"] == logging.WARNING
