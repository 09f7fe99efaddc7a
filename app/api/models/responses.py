"""API response models."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Response model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# === Diagnostics Models ===


class DiagnosticResultModel(CamelModel):
    """Traffic-light result for one diagnostic category."""

    status: Literal["green", "yellow", "red"]
    icon: Literal["check", "warning", "error"]
    message: str
    suggestion: str | None = None


class DiagnosticsModel(CamelModel):
    """Diagnostics for every category plus the aggregate."""

    overall: DiagnosticResultModel
    title: DiagnosticResultModel
    description: DiagnosticResultModel
    og_tags: DiagnosticResultModel
    og_image: DiagnosticResultModel
    twitter_card: DiagnosticResultModel
    canonical: DiagnosticResultModel
    robots: DiagnosticResultModel


# === Score Models ===


class ScoreCategoryModel(CamelModel):
    """Score for a single category."""

    name: str
    score: int = Field(..., ge=0, le=100)
    max_score: int = 100
    status: Literal["pass", "warning", "fail"]
    weight: int = Field(..., gt=0)
    issues: list[str] = Field(default_factory=list)


class MetaScoreModel(CamelModel):
    """Weighted meta tag score."""

    overall: int = Field(..., ge=0, le=100, description="Weighted score (0-100)")
    grade: Literal["A", "B", "C", "D", "F"] = Field(..., description="Letter grade")
    total_issues: int = Field(..., ge=0, le=7)
    categories: dict[str, ScoreCategoryModel]


# === AI Readiness Models ===


class AiReadinessCheckModel(CamelModel):
    """Outcome of one AI readiness check."""

    id: str
    label: str
    status: Literal["pass", "warn", "fail", "na"]
    message: str
    suggestion: str | None = None


class AiReadinessModel(CamelModel):
    """AI readiness verdict and checks."""

    verdict: Literal["ready", "partial", "not-ready"]
    checks: list[AiReadinessCheckModel]


class SpaDetectionModel(CamelModel):
    """Client-side rendering signals."""

    is_spa: bool
    confidence: Literal["low", "medium", "high"]
    score: int
    signals: list[str] = Field(default_factory=list)


# === Main Response Models ===


class AnalysisResponse(CamelModel):
    """Complete analysis of one document."""

    ok: bool = True
    url: str | None = None
    final_url: str | None = None
    analyzed_at: datetime
    timing_ms: int | None = None
    tags: dict[str, Any] = Field(..., description="Extracted meta tags, grouped by platform")
    diagnostics: DiagnosticsModel
    score: MetaScoreModel
    ai_readiness: AiReadinessModel
    spa_detection: SpaDetectionModel

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "ok": True,
                "url": "https://example.com/article",
                "finalUrl": "https://example.com/article",
                "analyzedAt": "2026-01-15T10:30:00Z",
                "timingMs": 412,
                "score": {"overall": 94, "grade": "A", "totalIssues": 1, "categories": {}},
                "aiReadiness": {"verdict": "partial", "checks": []},
            }
        },
    )


class SiteFilesResponse(CamelModel):
    """robots.txt and llms.txt of a site (null when unavailable)."""

    ok: bool = True
    robots_txt: str | None = None
    llms_txt: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["healthy", "degraded", "unhealthy"]
    version: str
    timestamp: datetime
    checks: dict[str, bool] = Field(
        default_factory=dict, description="Individual health check results"
    )
