"""Single-page application detection.

A page whose metadata is injected by JavaScript shows crawlers (and this
tool) an almost empty document. The detector scores a handful of signals to
flag that case, and stays conservative: server-rendered or statically
generated sites that hydrate on the client usually carry both a mount div
and proper meta tags, and are not reported.

Scoring:
    +3  framework mount div (app, root, __nuxt, __next, ...)
    +3  minimal body text (< 100 chars)
    +2  bundled/chunked JavaScript (webpack, vite, ...)
    +2  generic framework title
    +2  JavaScript bundles but no Open Graph tags
    +1  framework-specific attributes
    -4  mount div together with proper meta tags
    -3  substantial body text (> 500 chars)

Thresholds: >= 7 high confidence, >= 5 medium confidence, otherwise not a SPA.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Literal

from bs4 import BeautifulSoup

from metacheck.parser.meta_parser import MetaTags

Confidence = Literal["low", "medium", "high"]

_MOUNT_DIV_PATTERNS = [
    re.compile(r"<div\s+id=[\"']app[\"']", re.IGNORECASE),
    re.compile(r"<div\s+id=[\"']__nuxt[\"']", re.IGNORECASE),
    re.compile(r"<div\s+id=[\"']root[\"']", re.IGNORECASE),
    re.compile(r"<div\s+id=[\"']__next[\"']", re.IGNORECASE),
    re.compile(r"<div\s+id=[\"']main[\"']", re.IGNORECASE),
    re.compile(r"<div\s+class=[\"'][^\"']*ng-app[^\"']*[\"']", re.IGNORECASE),
    re.compile(r"<div\s+class=[\"'][^\"']*v-app[^\"']*[\"']", re.IGNORECASE),
]

_BUNDLE_PATTERNS = [
    re.compile(r"\.(chunk|bundle|app|main|vendor)\.[a-f0-9]+\.js", re.IGNORECASE),
    re.compile(r"webpack", re.IGNORECASE),
    re.compile(r"vite", re.IGNORECASE),
    re.compile(r"_next/static", re.IGNORECASE),
    re.compile(r"_nuxt/", re.IGNORECASE),
]

_FRAMEWORK_PATTERNS = [
    re.compile(r"ng-app", re.IGNORECASE),
    re.compile(r"ng-controller", re.IGNORECASE),
    re.compile(r"v-app", re.IGNORECASE),
    re.compile(r"v-cloak", re.IGNORECASE),
    re.compile(r"data-reactroot", re.IGNORECASE),
    re.compile(r"data-react-helmet", re.IGNORECASE),
]

_SCRIPT_SRC = re.compile(r"<script[^>]+src=", re.IGNORECASE)

GENERIC_TITLES = (
    "vite app",
    "react app",
    "vue app",
    "angular app",
    "svelte app",
    "next.js",
    "nuxt",
    "loading...",
    "loading",
    "welcome",
    "home",
)

MINIMAL_TEXT_LENGTH = 100
SUBSTANTIAL_TEXT_LENGTH = 500
HIGH_CONFIDENCE_SCORE = 7
MEDIUM_CONFIDENCE_SCORE = 5


@dataclass(frozen=True)
class SpaDetectionResult:
    is_spa: bool
    confidence: Confidence
    score: int
    signals: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "isSpa": self.is_spa,
            "confidence": self.confidence,
            "score": self.score,
            "signals": list(self.signals),
        }


def _split_body(html: str) -> tuple[str, str]:
    """Body markup and its visible text (scripts, styles and noscript removed)."""
    soup = BeautifulSoup(html, "lxml")
    body = soup.body
    if body is None:
        return html, ""
    body_html = str(body)
    for tag in body.find_all(["script", "style", "noscript"]):
        tag.decompose()
    return body_html, " ".join(body.get_text(" ").split())


def is_generic_title(title: str | None) -> bool:
    """True for framework default titles such as "Vite App" or "Loading..."."""
    if not title:
        return False
    lowered = title.lower().strip()
    return any(lowered.startswith(generic) for generic in GENERIC_TITLES)


def detect_spa(html: str, tags: MetaTags) -> SpaDetectionResult:
    """Score SPA signals in a document's body.

    Args:
        html: Full HTML document
        tags: Meta tags already parsed from the same document
    """
    body_html, text = _split_body(html or "")
    score = 0
    signals: list[str] = []

    text_length = len(text)
    has_mount_div = any(p.search(body_html) for p in _MOUNT_DIV_PATTERNS)
    has_js_bundles = _SCRIPT_SRC.search(body_html) is not None
    has_proper_meta = bool(
        tags.og.title and tags.og.description and tags.title and not is_generic_title(tags.title)
    )

    if has_mount_div:
        score += 3
        signals.append("Body contains a framework mount div (app/root/__nuxt/etc.)")

    if text_length < MINIMAL_TEXT_LENGTH:
        score += 3
        signals.append(f"Body has minimal text content (<{MINIMAL_TEXT_LENGTH} chars)")

    if any(p.search(body_html) for p in _BUNDLE_PATTERNS):
        score += 2
        signals.append("Bundled/chunked JavaScript files detected (webpack/vite build artifacts)")

    if is_generic_title(tags.title):
        score += 2
        signals.append(f'Title is a generic framework default: "{tags.title}"')

    if has_js_bundles and not tags.og.has_core_tags:
        score += 2
        signals.append("Page has JavaScript bundles but no Open Graph tags")

    if any(p.search(body_html) for p in _FRAMEWORK_PATTERNS):
        score += 1
        signals.append("Framework-specific classes or attributes detected")

    if has_mount_div and has_proper_meta:
        score -= 4
        signals.append(
            "Has a framework mount div but also proper meta tags, likely SSG/SSR with hydration"
        )

    if text_length > SUBSTANTIAL_TEXT_LENGTH:
        score -= 3
        signals.append(f"Body has substantial text content (>{SUBSTANTIAL_TEXT_LENGTH} chars)")

    if score >= HIGH_CONFIDENCE_SCORE:
        return SpaDetectionResult(True, "high", score, signals)
    if score >= MEDIUM_CONFIDENCE_SCORE:
        return SpaDetectionResult(True, "medium", score, signals)
    return SpaDetectionResult(False, "low", score, signals)
