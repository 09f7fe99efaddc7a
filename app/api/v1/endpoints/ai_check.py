"""robots.txt / llms.txt lookup endpoint."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.concurrency import run_in_threadpool

from app.api.models.errors import ErrorCodes, ErrorResponse, error_detail
from app.api.models.responses import SiteFilesResponse
from app.api.v1.deps import check_rate_limit
from metacheck.fetcher.html_fetcher import SSRF_ERROR_PREFIX, fetch_site_files, validate_url

router = APIRouter(tags=["AI Readiness"])


@router.get(
    "/ai-check",
    response_model=SiteFilesResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid or blocked URL"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
    },
    summary="Fetch a site's robots.txt and llms.txt",
    description="""
Derive the origin of `url` and fetch `{origin}/robots.txt` and
`{origin}/llms.txt` in parallel. Either value is `null` when the file is
missing or cannot be fetched.
""",
    dependencies=[Depends(check_rate_limit)],
)
async def ai_check(
    url: str = Query(..., min_length=1, description="Any URL on the site"),
) -> SiteFilesResponse:
    """Return the site files used by the AI readiness checks."""
    error_msg = await run_in_threadpool(validate_url, url)
    if error_msg:
        code = ErrorCodes.URL_BLOCKED_SSRF if error_msg.startswith(SSRF_ERROR_PREFIX) else ErrorCodes.INVALID_URL
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_detail(code, error_msg, url=url),
        )

    robots_txt, llms_txt = await run_in_threadpool(fetch_site_files, url)
    return SiteFilesResponse(ok=True, robots_txt=robots_txt, llms_txt=llms_txt)
