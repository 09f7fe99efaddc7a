"""API dependencies for authentication and rate limiting."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from cachetools import TTLCache
from fastapi import Depends, Header, HTTPException, Request, status

from app.api.models.errors import ErrorCodes, error_detail
from app.api.services.auth import api_key_manager
from metacheck.config.settings import settings

logger = logging.getLogger(__name__)


def get_client_ip(request: Request) -> str:
    """Client IP, honouring X-Forwarded-For from a reverse proxy."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of one rate limit check."""
    allowed: bool
    limit: int
    remaining: int
    reset_seconds: int

    def headers(self) -> dict[str, str]:
        return {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(int(time.time()) + self.reset_seconds),
        }


class APIRateLimiter:
    """Sliding-window limiter keyed by API key fingerprint or client IP.

    Request timestamps live in a TTLCache, so idle clients expire without a
    cleanup task.
    """

    def __init__(self, max_identifiers: int = 10000):
        self._requests: TTLCache[str, list[float]] = TTLCache(
            maxsize=max_identifiers, ttl=settings.api.rate_limit_window * 2
        )

    @staticmethod
    def identify(request: Request, api_key: str | None) -> str:
        if api_key and api_key_manager.validate(api_key):
            return f"key:{api_key_manager.fingerprint(api_key)}"
        return f"ip:{get_client_ip(request)}"

    def check(self, request: Request, api_key: str | None) -> RateLimitDecision:
        """Record a request and decide whether it is within the limit."""
        identifier = self.identify(request, api_key)
        limit = api_key_manager.get_rate_limit(api_key)
        window = settings.api.rate_limit_window
        now = time.time()

        recent = [t for t in self._requests.get(identifier, []) if t > now - window]

        if len(recent) >= limit:
            self._requests[identifier] = recent
            reset = max(1, int(min(recent) + window - now))
            return RateLimitDecision(False, limit, 0, reset)

        recent.append(now)
        self._requests[identifier] = recent
        return RateLimitDecision(True, limit, limit - len(recent), window)

    def reset(self) -> None:
        self._requests.clear()


api_rate_limiter = APIRateLimiter()


async def get_optional_api_key(
    x_api_key: str | None = Header(None, alias="X-API-Key"),
    authorization: str | None = Header(None),
) -> str | None:
    """Extract an API key from ``X-API-Key`` or ``Authorization: Bearer``."""
    if x_api_key:
        return x_api_key
    if authorization and authorization.lower().startswith("bearer "):
        return authorization[7:].strip()
    return None


async def validate_api_key(
    request: Request,
    api_key: str | None = Depends(get_optional_api_key),
) -> str | None:
    """Require a valid API key when keys are configured.

    Returns the key if valid, None if authentication is disabled.
    Raises HTTPException if a key is required but missing or invalid.
    """
    if not api_key_manager.auth_required:
        return None

    if not api_key_manager.validate(api_key):
        logger.warning("Rejected API request from %s: invalid or missing API key", get_client_ip(request))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=error_detail(ErrorCodes.INVALID_API_KEY, "Unauthorized. Invalid or missing API key."),
            headers={"WWW-Authenticate": "Bearer"},
        )

    return api_key


async def check_rate_limit(
    request: Request,
    api_key: str | None = Depends(validate_api_key),
) -> None:
    """Enforce the per-client rate limit.

    The decision is kept on ``request.state.rate_limit`` so the response
    middleware can emit the X-RateLimit-* headers.
    """
    decision = api_rate_limiter.check(request, api_key)
    request.state.rate_limit = decision

    if not decision.allowed:
        logger.info("Rate limit exceeded for %s", get_client_ip(request))
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=error_detail(
                ErrorCodes.RATE_LIMIT_EXCEEDED,
                "Too many requests. Please slow down.",
                retry_after=decision.reset_seconds,
                limit=decision.limit,
            ),
            headers={"Retry-After": str(decision.reset_seconds), **decision.headers()},
        )
