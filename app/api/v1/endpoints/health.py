"""Health check endpoint."""
from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter

from app.api.models.responses import HealthResponse
from metacheck.parser.meta_parser import parse_meta_tags

router = APIRouter(tags=["Health"])

VERSION = "1.0.0"

_PROBE_HTML = "<html><head><title>ok</title></head></html>"


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check API health and service status.",
)
async def health_check() -> HealthResponse:
    """Return API health status."""
    checks: dict[str, bool] = {}

    # Parser backend (bs4 + lxml) round trip
    checks["parser"] = parse_meta_tags(_PROBE_HTML).title == "ok"

    return HealthResponse(
        status="healthy" if all(checks.values()) else "degraded",
        version=VERSION,
        timestamp=datetime.now(UTC),
        checks=checks,
    )
