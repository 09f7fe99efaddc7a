"""Logging helpers shared by the CLI, the fetcher and the API."""
from __future__ import annotations

import logging
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

from metacheck.config.settings import settings

# Query parameters redacted before a URL is written to the log
_SENSITIVE_PARAMS = frozenset({
    "token",
    "key",
    "apikey",
    "api_key",
    "secret",
    "password",
    "pass",
    "pwd",
    "auth",
    "authorization",
    "session",
    "sid",
    "jwt",
    "bearer",
    "oauth",
})

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for the CLI or API process."""
    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper(), logging.WARNING),
        format=LOG_FORMAT,
    )


def truncate(text: str | None, max_length: int = 200) -> str | None:
    """Shorten long strings for log lines."""
    if not text:
        return None
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def sanitize_url_for_logging(url: str) -> str:
    """Replace sensitive query parameter values with [REDACTED].

    Example:
        https://example.com/api?token=secret&user=john
        -> https://example.com/api?token=%5BREDACTED%5D&user=john
    """
    try:
        parsed = urlparse(url)
    except ValueError:
        return truncate(url, 100) or ""

    if not parsed.scheme or not parsed.netloc:
        return truncate(url, 100) or ""

    if not parsed.query:
        return url

    query = [
        (name, "[REDACTED]" if name.lower() in _SENSITIVE_PARAMS else value)
        for name, value in parse_qsl(parsed.query, keep_blank_values=True)
    ]
    return urlunparse(parsed._replace(query=urlencode(query)))
