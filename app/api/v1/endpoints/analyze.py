"""Analysis endpoints."""
from __future__ import annotations

import logging
from datetime import UTC, datetime

import requests
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.concurrency import run_in_threadpool

from app.api.models.errors import ErrorCodes, ErrorResponse, error_detail
from app.api.models.requests import AnalyzeHtmlRequest
from app.api.models.responses import AnalysisResponse
from app.api.v1.deps import check_rate_limit
from metacheck.analyzer import AnalysisReport, analyze_html, analyze_url
from metacheck.config.settings import settings
from metacheck.fetcher.html_fetcher import SSRF_ERROR_PREFIX
from metacheck.logging_utils import sanitize_url_for_logging

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Analysis"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid or blocked URL"},
    401: {"model": ErrorResponse, "description": "Invalid API key"},
    429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
    500: {"model": ErrorResponse, "description": "Analysis failed"},
}


def _to_response(report: AnalysisReport) -> AnalysisResponse:
    return AnalysisResponse.model_validate(
        {**report.to_dict(), "ok": True, "analyzedAt": datetime.now(UTC)}
    )


def _analysis_failed(url: str | None) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=error_detail(ErrorCodes.ANALYSIS_FAILED, "Analysis failed", url=url),
    )


def fetch_error_to_http(url: str, exc: Exception) -> HTTPException:
    """Map a fetch-layer exception to an API error."""
    message = str(exc)
    if isinstance(exc, ValueError):
        if SSRF_ERROR_PREFIX in message:
            return HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=error_detail(ErrorCodes.URL_BLOCKED_SSRF, message, url=url),
            )
        if message.startswith("Response too large"):
            return HTTPException(
                status_code=413,
                detail=error_detail(ErrorCodes.RESPONSE_TOO_LARGE, message, url=url),
            )
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_detail(ErrorCodes.INVALID_URL, message, url=url),
        )

    if isinstance(exc, requests.Timeout):
        return HTTPException(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            detail=error_detail(ErrorCodes.URL_NOT_ACCESSIBLE, "Request timed out", url=url),
        )

    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=error_detail(ErrorCodes.URL_NOT_ACCESSIBLE, message, url=url),
    )


@router.get(
    "/analyze",
    response_model=AnalysisResponse,
    responses={
        **_ERROR_RESPONSES,
        413: {"model": ErrorResponse, "description": "Target response too large"},
        502: {"model": ErrorResponse, "description": "Target could not be fetched"},
        504: {"model": ErrorResponse, "description": "Target timed out"},
    },
    summary="Fetch and analyze a URL",
    description="""
Fetch a page, then extract and evaluate its meta tags.

**The response includes:**
- **tags**: every recognized meta tag, grouped by platform
- **diagnostics**: green/yellow/red verdict per category
- **score**: weighted 0-100 score with letter grade
- **aiReadiness**: nine checks for AI crawler and LLM consumption,
  including the site's robots.txt and llms.txt
""",
    dependencies=[Depends(check_rate_limit)],
)
async def analyze_page(
    url: str = Query(..., min_length=1, description="URL to analyze"),
) -> AnalysisResponse:
    """Fetch a URL and run the full analysis."""
    if len(url) > settings.fetcher.max_url_length:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_detail(
                ErrorCodes.INVALID_URL,
                f"URL exceeds maximum length of {settings.fetcher.max_url_length} characters",
            ),
        )

    try:
        report = await run_in_threadpool(analyze_url, url)
    except (ValueError, requests.RequestException) as exc:
        raise fetch_error_to_http(url, exc) from exc
    except Exception as exc:
        logger.exception("Analysis failed for %s", sanitize_url_for_logging(url))
        raise _analysis_failed(url) from exc

    logger.info(
        "Analyzed %s: %d (%s), AI %s",
        sanitize_url_for_logging(url),
        report.score.overall,
        report.score.grade,
        report.ai_readiness.verdict,
    )
    return _to_response(report)


@router.post(
    "/analyze",
    response_model=AnalysisResponse,
    responses=_ERROR_RESPONSES,
    summary="Analyze pasted HTML",
    description="""
Analyze an HTML document supplied in the request body. Nothing is fetched,
so the robots.txt and llms.txt checks are reported as `na`.
""",
    dependencies=[Depends(check_rate_limit)],
)
async def analyze_pasted_html(body: AnalyzeHtmlRequest) -> AnalysisResponse:
    """Analyze HTML in paste mode."""
    url = str(body.url) if body.url else None
    try:
        report = await run_in_threadpool(analyze_html, body.html, paste_mode=True, url=url)
    except Exception as exc:
        logger.exception("Analysis of pasted HTML failed (%d chars)", len(body.html))
        raise _analysis_failed(url) from exc
    return _to_response(report)
