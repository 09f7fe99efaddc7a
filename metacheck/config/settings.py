"""Centralized configuration settings."""
from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass
class FetcherSettings:
    """Settings for the document and site-file fetcher."""
    request_timeout: int = 10
    site_file_timeout: int = 5
    max_response_size: int = 1024 * 1024  # 1 MB
    max_redirects: int = 5
    max_url_length: int = 2048
    user_agent: str = "MetaCheck/1.0 (+https://github.com/metacheck/metacheck)"


@dataclass
class DiagnosticSettings:
    """Thresholds for meta tag diagnostics."""
    title_max_length: int = 60

    description_min_length: int = 50
    description_max_length: int = 160

    # Platform image sizes (px)
    image_min_width: int = 200
    image_min_height: int = 200
    image_recommended_width: int = 1200
    image_recommended_height: int = 630


@dataclass
class AiReadinessSettings:
    """Thresholds for AI readiness checks."""
    description_pass_length: int = 80
    description_warn_length: int = 50


@dataclass
class APISettings:
    """API-specific settings."""
    # Rate limiting (requests per window)
    anonymous_rate_limit: int = 30
    authenticated_rate_limit: int = 120
    rate_limit_window: int = 60  # seconds

    # CORS
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


@dataclass
class Settings:
    """Main application settings container."""
    fetcher: FetcherSettings = field(default_factory=FetcherSettings)
    diagnostics: DiagnosticSettings = field(default_factory=DiagnosticSettings)
    ai_readiness: AiReadinessSettings = field(default_factory=AiReadinessSettings)
    api: APISettings = field(default_factory=APISettings)

    # Application settings
    debug: bool = False
    log_level: str = "WARNING"

    def __post_init__(self):
        """Load settings from environment variables."""
        self.debug = os.environ.get("METACHECK_DEBUG", "").lower() in ("true", "1", "yes")
        self.log_level = os.environ.get("METACHECK_LOG_LEVEL", self.log_level).upper()
        if self.debug:
            self.log_level = "DEBUG"

        # Fetcher overrides
        if timeout := os.environ.get("METACHECK_REQUEST_TIMEOUT"):
            self.fetcher.request_timeout = int(timeout)
        if user_agent := os.environ.get("METACHECK_USER_AGENT"):
            self.fetcher.user_agent = user_agent

        # API overrides
        if rate_limit := os.environ.get("METACHECK_API_RATE_LIMIT"):
            self.api.anonymous_rate_limit = int(rate_limit)
        if cors := os.environ.get("METACHECK_API_CORS_ORIGINS"):
            self.api.cors_origins = [o.strip() for o in cors.split(",")]


# Global settings instance
settings = Settings()
