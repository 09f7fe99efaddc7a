"""API error response models."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | None = Field(
        default=None, description="Additional error details"
    )


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: ErrorDetail

    model_config = {
        "json_schema_extra": {
            "example": {
                "error": {
                    "code": "URL_BLOCKED_SSRF",
                    "message": "Access to private/internal IP addresses is forbidden: 127.0.0.1",
                    "details": {"url": "http://localhost/"},
                }
            }
        }
    }


class ErrorCodes:
    """Standardized error codes."""

    # 4xx Client Errors
    INVALID_URL = "INVALID_URL"
    URL_NOT_ACCESSIBLE = "URL_NOT_ACCESSIBLE"
    URL_BLOCKED_SSRF = "URL_BLOCKED_SSRF"
    RESPONSE_TOO_LARGE = "RESPONSE_TOO_LARGE"
    INVALID_API_KEY = "INVALID_API_KEY"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # 5xx Server Errors
    ANALYSIS_FAILED = "ANALYSIS_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


def error_detail(code: str, message: str, **details: Any) -> dict[str, Any]:
    """Build the ``detail`` payload for an HTTPException."""
    error: dict[str, Any] = {"code": code, "message": message}
    if details:
        error["details"] = details
    return {"error": error}
