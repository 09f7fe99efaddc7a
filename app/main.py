"""FastAPI entry point."""
import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.api.models.errors import ErrorCodes, error_detail
from app.api.v1.router import router as api_router
from metacheck.config.settings import settings
from metacheck.logging_utils import configure_logging

configure_logging()
logger = logging.getLogger(__name__)

DOCS_PATHS = frozenset({"/api/docs", "/api/redoc", "/api/openapi.json"})

# Swagger UI and ReDoc load their assets from a CDN
DOCS_CSP = (
    "default-src 'self'; "
    "script-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
    "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
    "img-src 'self' data: https://cdn.jsdelivr.net https://fastapi.tiangolo.com; "
    "font-src 'self' https://cdn.jsdelivr.net; "
    "connect-src 'self'; "
    "frame-ancestors 'none'"
)
JSON_CSP = "default-src 'none'; frame-ancestors 'none'"

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "geolocation=(), microphone=(), camera=()",
}


class ResponseHeadersMiddleware(BaseHTTPMiddleware):
    """Add security, timing and rate limit headers, and log each request."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000

        path = request.url.path
        response.headers["Content-Security-Policy"] = DOCS_CSP if path in DOCS_PATHS else JSON_CSP
        response.headers.update(SECURITY_HEADERS)
        response.headers["Server-Timing"] = f"app;dur={duration_ms:.1f}"

        # Set by the check_rate_limit dependency
        decision = getattr(request.state, "rate_limit", None)
        if decision is not None:
            response.headers.update(decision.headers())

        logger.debug(
            "%s %s -> %d (%.1fms)", request.method, path, response.status_code, duration_ms
        )
        return response


app = FastAPI(
    title="MetaCheck API",
    description="""
API for inspecting a web page's meta tags, social previews and AI readiness.

## Features

- **Tag extraction**: title, description, Open Graph, Twitter/X, Facebook,
  Pinterest, Apple, Microsoft tags and JSON-LD
- **Diagnostics**: green/yellow/red verdict per category with suggestions
- **Score**: weighted 0-100 score with A-F grade
- **AI readiness**: structured data, authorship, freshness, language,
  robots.txt AI bot access and llms.txt

## Authentication

When the server sets `METACHECK_API_KEY`, pass the key via `X-API-Key` or
`Authorization: Bearer <key>`. Otherwise the API is open.
""",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return a structured 500 instead of a bare traceback."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": error_detail(ErrorCodes.INTERNAL_ERROR, "Internal server error")},
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.api.cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["X-API-Key", "Authorization", "Content-Type"],
)
app.add_middleware(ResponseHeadersMiddleware)

app.include_router(api_router, prefix="/api/v1")
