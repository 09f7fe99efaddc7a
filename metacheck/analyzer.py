"""Full analysis pipeline: parse, diagnose, score and assess a document."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from metacheck.ai.ai_readiness import AiReadinessResult, assess_ai_readiness
from metacheck.diagnostics.diagnostics import Diagnostics, ImageAnalysisResult, generate_diagnostics
from metacheck.fetcher.html_fetcher import fetch_html, fetch_site_files
from metacheck.logging_utils import sanitize_url_for_logging
from metacheck.parser.meta_parser import MetaTags, parse_meta_tags
from metacheck.score.meta_score import MetaScore, compute_score
from metacheck.spa.spa_detector import SpaDetectionResult, detect_spa

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisReport:
    """Everything known about one document."""
    meta: MetaTags
    diagnostics: Diagnostics
    score: MetaScore
    ai_readiness: AiReadinessResult
    spa: SpaDetectionResult
    url: str | None = None
    final_url: str | None = None
    timing_ms: int | None = None

    def to_dict(self) -> dict:
        return {
            "url": self.url,
            "finalUrl": self.final_url,
            "timingMs": self.timing_ms,
            "tags": self.meta.to_dict(),
            "diagnostics": self.diagnostics.to_dict(),
            "score": self.score.to_dict(),
            "aiReadiness": self.ai_readiness.to_dict(),
            "spaDetection": self.spa.to_dict(),
        }


def analyze_html(
    html: str,
    *,
    paste_mode: bool = True,
    robots_txt: str | None = None,
    llms_txt: str | None = None,
    image_analysis: ImageAnalysisResult | None = None,
    url: str | None = None,
    final_url: str | None = None,
) -> AnalysisReport:
    """Analyze an HTML document without touching the network.

    Args:
        html: Raw HTML document
        paste_mode: True when the markup was supplied directly, so robots.txt
            and llms.txt checks are reported as not applicable
        robots_txt: Site robots.txt content when known
        llms_txt: Site llms.txt content when known
        image_analysis: Optional measured og:image dimensions
        url: Source URL, if any
        final_url: URL after redirects, if any
    """
    tags = parse_meta_tags(html)
    diagnostics = generate_diagnostics(tags, image_analysis)
    score = compute_score(diagnostics)
    ai_readiness = assess_ai_readiness(
        tags, paste_mode=paste_mode, robots_txt=robots_txt, llms_txt=llms_txt
    )
    spa = detect_spa(html if isinstance(html, str) else "", tags)

    if spa.is_spa:
        logger.info("Document looks like a client-rendered SPA (%s confidence)", spa.confidence)

    return AnalysisReport(
        meta=tags,
        diagnostics=diagnostics,
        score=score,
        ai_readiness=ai_readiness,
        spa=spa,
        url=url,
        final_url=final_url or url,
    )


def analyze_url(url: str) -> AnalysisReport:
    """Fetch a URL plus its robots.txt and llms.txt, then analyze it.

    Raises:
        ValueError: URL rejected by fetch validation
        requests.RequestException: Document could not be fetched
    """
    result = fetch_html(url)
    robots_txt, llms_txt = fetch_site_files(result.final_url)
    logger.debug(
        "Site files for %s: robots.txt=%s llms.txt=%s",
        sanitize_url_for_logging(result.final_url),
        robots_txt is not None,
        llms_txt is not None,
    )

    report = analyze_html(
        result.html,
        paste_mode=False,
        robots_txt=robots_txt,
        llms_txt=llms_txt,
        url=url,
        final_url=result.final_url,
    )
    return replace(report, timing_ms=result.timing_ms)
