"""API request models."""
from __future__ import annotations

from pydantic import BaseModel, Field, HttpUrl

from metacheck.config.settings import settings


class AnalyzeHtmlRequest(BaseModel):
    """Request body for analyzing pasted HTML."""

    html: str = Field(
        ...,
        max_length=settings.fetcher.max_response_size,
        description="Raw HTML document (or just its <head>)",
        examples=['<html lang="en"><head><title>Example</title></head></html>'],
    )
    url: HttpUrl | None = Field(
        default=None,
        description="Optional source URL, recorded in the report only",
        examples=["https://example.com/article"],
    )
