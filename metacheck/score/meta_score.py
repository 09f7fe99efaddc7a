"""Weighted meta tag score.

Converts diagnostics into a 0-100 score with a letter grade (A-F) and a
per-category breakdown.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Literal

from metacheck.diagnostics.diagnostics import DiagnosticResult, Diagnostics, DiagnosticStatus

CategoryStatus = Literal["pass", "warning", "fail"]
Grade = Literal["A", "B", "C", "D", "F"]

MAX_CATEGORY_SCORE = 100

# Category weights, summing to 100. Social sharing tags weigh the most.
CATEGORY_WEIGHTS = {
    "title": 15,
    "description": 15,
    "openGraph": 25,
    "ogImage": 20,
    "twitterCard": 10,
    "canonical": 10,
    "robots": 5,
}

CATEGORY_NAMES = {
    "title": "Title Tag",
    "description": "Meta Description",
    "openGraph": "Open Graph Tags",
    "ogImage": "OG Image",
    "twitterCard": "X/Twitter Card",
    "canonical": "Canonical URL",
    "robots": "Robots Meta",
}

STATUS_SCORES: dict[DiagnosticStatus, tuple[int, CategoryStatus]] = {
    DiagnosticStatus.GREEN: (100, "pass"),
    DiagnosticStatus.YELLOW: (60, "warning"),
    DiagnosticStatus.RED: (0, "fail"),
}

# Lower bound (inclusive) per grade, highest first
GRADE_THRESHOLDS: tuple[tuple[int, Grade], ...] = (
    (90, "A"),
    (80, "B"),
    (70, "C"),
    (60, "D"),
)


@dataclass(frozen=True)
class ScoreCategory:
    """Score and status for a single diagnostic category."""
    name: str
    score: int
    status: CategoryStatus
    weight: int
    issues: list[str] = field(default_factory=list)
    max_score: int = MAX_CATEGORY_SCORE

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "score": self.score,
            "maxScore": self.max_score,
            "status": self.status,
            "weight": self.weight,
            "issues": list(self.issues),
        }


@dataclass(frozen=True)
class MetaScore:
    """Overall score with letter grade and category breakdown."""
    overall: int
    grade: Grade
    total_issues: int
    categories: dict[str, ScoreCategory]

    def to_dict(self) -> dict:
        return {
            "overall": self.overall,
            "grade": self.grade,
            "totalIssues": self.total_issues,
            "categories": {key: category.to_dict() for key, category in self.categories.items()},
        }


def _round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _grade(score: int) -> Grade:
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return "F"


def _score_category(key: str, result: DiagnosticResult) -> ScoreCategory:
    score, status = STATUS_SCORES[result.status]
    return ScoreCategory(
        name=CATEGORY_NAMES[key],
        score=score,
        status=status,
        weight=CATEGORY_WEIGHTS[key],
        issues=[result.message] if status != "pass" else [],
    )


def compute_score(diagnostics: Diagnostics) -> MetaScore:
    """Compute the weighted overall score from diagnostics.

    Args:
        diagnostics: Output of generate_diagnostics

    Returns:
        MetaScore with overall (0-100), grade and per-category breakdown
    """
    results = {
        "title": diagnostics.title,
        "description": diagnostics.description,
        "openGraph": diagnostics.og_tags,
        "ogImage": diagnostics.og_image,
        "twitterCard": diagnostics.twitter_card,
        "canonical": diagnostics.canonical,
        "robots": diagnostics.robots,
    }
    categories = {key: _score_category(key, result) for key, result in results.items()}

    weighted = sum(category.score * category.weight for category in categories.values())
    overall = _round_half_up(Decimal(weighted) / 100)

    return MetaScore(
        overall=overall,
        grade=_grade(overall),
        total_issues=sum(1 for category in categories.values() if category.status != "pass"),
        categories=categories,
    )
