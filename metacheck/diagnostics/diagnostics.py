"""Meta tag diagnostics.

Evaluates title, description, Open Graph tags, og:image, Twitter Card,
canonical URL and robots directives, producing a green/yellow/red verdict
with a message and optional suggestion per category.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

from metacheck.config.settings import settings
from metacheck.parser.meta_parser import MetaTags, OpenGraphTags, TwitterTags

ImageStatus = Literal["optimal", "acceptable", "issues"]


class DiagnosticStatus(Enum):
    """Traffic-light status of a diagnostic category."""
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


_ICONS = {
    DiagnosticStatus.GREEN: "check",
    DiagnosticStatus.YELLOW: "warning",
    DiagnosticStatus.RED: "error",
}


@dataclass(frozen=True)
class DiagnosticResult:
    """Result of a single diagnostic category."""
    status: DiagnosticStatus
    message: str
    suggestion: str | None = None

    @property
    def icon(self) -> str:
        return _ICONS[self.status]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        data = {
            "status": self.status.value,
            "icon": self.icon,
            "message": self.message,
        }
        if self.suggestion is not None:
            data["suggestion"] = self.suggestion
        return data


@dataclass(frozen=True)
class Diagnostics:
    """Diagnostics for every category plus the aggregate ``overall``."""
    overall: DiagnosticResult
    title: DiagnosticResult
    description: DiagnosticResult
    og_tags: DiagnosticResult
    og_image: DiagnosticResult
    twitter_card: DiagnosticResult
    canonical: DiagnosticResult
    robots: DiagnosticResult

    def categories(self) -> dict[str, DiagnosticResult]:
        """The seven category results keyed by wire name, in fixed order."""
        return {
            "title": self.title,
            "description": self.description,
            "ogTags": self.og_tags,
            "ogImage": self.og_image,
            "twitterCard": self.twitter_card,
            "canonical": self.canonical,
            "robots": self.robots,
        }

    def to_dict(self) -> dict:
        data = {"overall": self.overall.to_dict()}
        data.update({key: result.to_dict() for key, result in self.categories().items()})
        return data


@dataclass(frozen=True)
class ImageAnalysisResult:
    """Measured og:image dimensions and their platform fit.

    ``overall_status`` is None when the image could not be measured.
    """
    width: int
    height: int
    overall_status: ImageStatus | None

    @classmethod
    def from_dimensions(cls, width: int, height: int) -> ImageAnalysisResult:
        return cls(width, height, classify_image_dimensions(width, height))


def classify_image_dimensions(width: int, height: int) -> ImageStatus:
    """Classify image dimensions against platform minimum and recommended sizes."""
    limits = settings.diagnostics
    if width < limits.image_min_width or height < limits.image_min_height:
        return "issues"
    if width < limits.image_recommended_width or height < limits.image_recommended_height:
        return "acceptable"
    return "optimal"


def text_length(text: str) -> int:
    """Length in UTF-16 code units, the unit browsers and search engines count in."""
    return len(text.encode("utf-16-le")) // 2


def _green(message: str) -> DiagnosticResult:
    return DiagnosticResult(DiagnosticStatus.GREEN, message)


def _check_title(title: str | None) -> DiagnosticResult:
    if not title:
        return DiagnosticResult(
            DiagnosticStatus.RED,
            "Title tag missing",
            "Add a <title> tag with a descriptive page title",
        )

    max_length = settings.diagnostics.title_max_length
    length = text_length(title)
    if length > max_length:
        return DiagnosticResult(
            DiagnosticStatus.YELLOW,
            f"Title exceeds {max_length} characters ({length})",
            f"Google may truncate titles longer than {max_length} characters in search results",
        )

    return _green("Title tag present and optimal length")


def _check_description(description: str | None) -> DiagnosticResult:
    if not description:
        return DiagnosticResult(
            DiagnosticStatus.RED,
            "Meta description missing",
            'Add <meta name="description" content="...">',
        )

    limits = settings.diagnostics
    length = text_length(description)
    if length > limits.description_max_length:
        return DiagnosticResult(
            DiagnosticStatus.YELLOW,
            f"Description exceeds {limits.description_max_length} characters ({length})",
            f"Google may truncate descriptions longer than {limits.description_max_length} characters",
        )

    if length < limits.description_min_length:
        return DiagnosticResult(
            DiagnosticStatus.YELLOW,
            f"Description is very short ({length} characters)",
            "Consider adding more detail (aim for 120-160 characters)",
        )

    return _green("Meta description present and optimal length")


def _check_og_tags(og: OpenGraphTags) -> DiagnosticResult:
    missing = [
        name
        for name, value in (
            ("og:title", og.title),
            ("og:description", og.description),
            ("og:image", og.image),
        )
        if not value
    ]

    if len(missing) >= 2:
        return DiagnosticResult(
            DiagnosticStatus.RED,
            f"Missing: {', '.join(missing)}",
            "Add all three core Open Graph tags for social media sharing",
        )

    if len(missing) == 1:
        return DiagnosticResult(
            DiagnosticStatus.YELLOW,
            f"Missing: {missing[0]}",
            "Add all three core Open Graph tags for optimal social sharing",
        )

    return _green("All required Open Graph tags present")


def _check_og_image(image: str | None, image_analysis: ImageAnalysisResult | None) -> DiagnosticResult:
    if not image:
        return DiagnosticResult(
            DiagnosticStatus.RED,
            "og:image missing",
            "Add og:image, it is critical for social media previews",
        )

    if not image.startswith(("http://", "https://")):
        return DiagnosticResult(
            DiagnosticStatus.YELLOW,
            "og:image is a relative path",
            "Use an absolute URL (https://...) for og:image",
        )

    if image_analysis is not None and image_analysis.overall_status:
        size = f"{image_analysis.width}×{image_analysis.height}px"
        limits = settings.diagnostics
        recommended = f"{limits.image_recommended_width}×{limits.image_recommended_height}px"

        if image_analysis.overall_status == "issues":
            return DiagnosticResult(
                DiagnosticStatus.RED,
                f"Image too small ({size})",
                "Image fails minimum size requirements for most platforms. "
                f"Use at least {recommended} for optimal social sharing.",
            )

        if image_analysis.overall_status == "acceptable":
            return DiagnosticResult(
                DiagnosticStatus.YELLOW,
                f"Image meets minimums but could be larger ({size})",
                "Image will work but may appear pixelated on some platforms. "
                f"Recommended: {recommended} or larger.",
            )

        return _green(f"Image dimensions optimal ({size})")

    return _green("og:image present with absolute URL")


def _check_twitter_card(twitter: TwitterTags, og: OpenGraphTags) -> DiagnosticResult:
    if twitter.card:
        return _green("Twitter Card configured")

    if og.has_core_tags:
        return DiagnosticResult(
            DiagnosticStatus.RED,
            "Twitter Card missing",
            'Add <meta name="twitter:card" content="summary_large_image"> for X/Twitter previews',
        )

    return _green("Twitter Card tags optional (will fall back to Open Graph)")


def _strip_trailing_slash(url: str) -> str:
    return url[:-1] if url.endswith("/") else url


def _check_canonical(canonical: str | None, og_url: str | None) -> DiagnosticResult:
    if not canonical:
        return DiagnosticResult(
            DiagnosticStatus.RED,
            "Canonical URL missing",
            'Add <link rel="canonical" href="..."> to prevent duplicate content issues',
        )

    if (
        og_url
        and canonical != og_url
        and _strip_trailing_slash(canonical) == _strip_trailing_slash(og_url)
    ):
        canonical_has = "has" if canonical.endswith("/") else "lacks"
        og_url_has = "has" if og_url.endswith("/") else "lacks"
        return DiagnosticResult(
            DiagnosticStatus.YELLOW,
            "Trailing slash inconsistency with og:url",
            f"Canonical {canonical_has} a trailing slash but og:url {og_url_has} it. "
            "Search engines treat /page and /page/ as different URLs, so ranking "
            "signals can be split between them. Use one form consistently across "
            "canonical, og:url and all meta tags.",
        )

    return _green("Canonical URL present")


def _check_robots(robots: str | None) -> DiagnosticResult:
    if not robots:
        return _green("No robots restrictions (page will be indexed)")

    if "noindex" in robots:
        return DiagnosticResult(
            DiagnosticStatus.YELLOW,
            "Page is set to noindex",
            "This page will not appear in search results. Remove noindex if this is unintentional.",
        )

    return _green("Robots meta tag present")


def _overall(results: list[DiagnosticResult]) -> DiagnosticResult:
    statuses = {result.status for result in results}

    if DiagnosticStatus.RED in statuses:
        return DiagnosticResult(
            DiagnosticStatus.RED,
            "Critical issues found",
            "Fix red items for basic meta tag functionality",
        )

    if DiagnosticStatus.YELLOW in statuses:
        return DiagnosticResult(
            DiagnosticStatus.YELLOW,
            "Some improvements recommended",
            "Address yellow items for optimal sharing and SEO",
        )

    return _green("All checks passed")


def generate_diagnostics(
    tags: MetaTags,
    image_analysis: ImageAnalysisResult | None = None,
) -> Diagnostics:
    """Generate diagnostics for all meta tag categories.

    Args:
        tags: Parsed meta tags from parse_meta_tags
        image_analysis: Optional measured og:image dimensions

    Returns:
        Diagnostics with a status, message and suggestion per category
    """
    title = _check_title(tags.title)
    description = _check_description(tags.description)
    og_tags = _check_og_tags(tags.og)
    og_image = _check_og_image(tags.og.image, image_analysis)
    twitter_card = _check_twitter_card(tags.twitter, tags.og)
    canonical = _check_canonical(tags.canonical, tags.og.url)
    robots = _check_robots(tags.robots)

    overall = _overall([title, description, og_tags, og_image, twitter_card, canonical, robots])

    return Diagnostics(
        overall=overall,
        title=title,
        description=description,
        og_tags=og_tags,
        og_image=og_image,
        twitter_card=twitter_card,
        canonical=canonical,
        robots=robots,
    )
