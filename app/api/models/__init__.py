"""API Pydantic models."""
from app.api.models.errors import ErrorCodes, ErrorDetail, ErrorResponse
from app.api.models.requests import AnalyzeHtmlRequest
from app.api.models.responses import AnalysisResponse, HealthResponse, SiteFilesResponse

__all__ = [
    "AnalyzeHtmlRequest",
    "AnalysisResponse",
    "SiteFilesResponse",
    "HealthResponse",
    "ErrorResponse",
    "ErrorDetail",
    "ErrorCodes",
]
