"""AI readiness assessment.

Runs nine checks that describe how well a page can be consumed by AI
crawlers and LLMs: seven against the parsed meta tags and two against the
site's ``robots.txt`` and ``llms.txt``.
"""
from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Literal

from metacheck.config.settings import settings
from metacheck.diagnostics.diagnostics import text_length
from metacheck.parser.meta_parser import MetaTags

CheckStatus = Literal["pass", "warn", "fail", "na"]
Verdict = Literal["ready", "partial", "not-ready"]

# User agents of the major LLM providers' crawlers
AI_BOTS: tuple[str, ...] = (
    "GPTBot",
    "ChatGPT-User",
    "Google-Extended",
    "Anthropic-AI",
    "ClaudeBot",
    "CCBot",
    "PerplexityBot",
    "Bytespider",
)

# Robots meta directives that opt content out of AI use
AI_BLOCKING_DIRECTIVES: tuple[str, ...] = ("noai", "noimageai")

PASTE_MODE_MESSAGE = "Not available in paste mode."

NOT_READY_FAILS = 3
PARTIAL_WARNS = 2


@dataclass(frozen=True)
class AiReadinessCheck:
    """Outcome of a single AI readiness check."""
    id: str
    label: str
    status: CheckStatus
    message: str
    suggestion: str | None = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "label": self.label,
            "status": self.status,
            "message": self.message,
        }
        if self.suggestion is not None:
            data["suggestion"] = self.suggestion
        return data


@dataclass(frozen=True)
class AiReadinessResult:
    """Verdict plus the nine checks in fixed order."""
    verdict: Verdict
    checks: tuple[AiReadinessCheck, ...]

    def get(self, check_id: str) -> AiReadinessCheck | None:
        return next((check for check in self.checks if check.id == check_id), None)

    def to_dict(self) -> dict:
        return {
            "verdict": self.verdict,
            "checks": [check.to_dict() for check in self.checks],
        }


# --------------------------------------------------------------------------
# robots.txt
# --------------------------------------------------------------------------


@dataclass
class RobotsGroup:
    """A run of User-agent lines and the directives that follow them."""
    agents: list[str] = field(default_factory=list)
    rules: list[tuple[str, str]] = field(default_factory=list)

    def matches(self, bot: str) -> bool:
        return "*" in self.agents or bot.lower() in self.agents

    def blocks_site(self) -> bool:
        return any(key == "disallow" and value == "/" for key, value in self.rules)


def parse_robots_txt(text: str) -> list[RobotsGroup]:
    """Split robots.txt into user-agent groups.

    Consecutive User-agent lines share a group. Any other non-blank line ends
    the run of agents, including a line without a colon and a User-agent line
    with no value, so the next User-agent line opens a new group. Lines break
    on LF or CRLF only. Comments and blank lines are ignored.
    """
    groups: list[RobotsGroup] = []
    current: RobotsGroup | None = None
    in_agent_lines = False

    for raw_line in re.split(r"\r?\n", text or ""):
        line = raw_line.split("#", 1)[0].strip()
        if not line:
            continue
        key, sep, value = line.partition(":")
        key = key.strip().lower()
        value = value.strip()

        if sep and key == "user-agent" and value:
            if current is None or not in_agent_lines:
                current = RobotsGroup()
                groups.append(current)
                in_agent_lines = True
            current.agents.append(value.lower())
            continue

        in_agent_lines = False
        if sep and current is not None:
            current.rules.append((key, value))

    return groups


def is_bot_blocked(groups: Iterable[RobotsGroup], bot: str) -> bool:
    """True if a group naming ``bot`` (or ``*``) disallows the whole site."""
    return any(group.matches(bot) and group.blocks_site() for group in groups)


def blocked_bots(robots_txt: str) -> list[str]:
    """Roster bots that robots.txt blocks from the site root, in roster order."""
    groups = parse_robots_txt(robots_txt)
    return [bot for bot in AI_BOTS if is_bot_blocked(groups, bot)]


# --------------------------------------------------------------------------
# JSON-LD helpers
# --------------------------------------------------------------------------


def _json_ld_nodes(structured_data: Iterable[Any]) -> list[dict]:
    """Top-level JSON-LD objects. A block whose root is an array is not searched."""
    return [item for item in structured_data if isinstance(item, dict)]


def _json_ld_value(structured_data: Iterable[Any], key: str) -> Any:
    """First value of ``key`` across JSON-LD objects, or None."""
    for node in _json_ld_nodes(structured_data):
        if node.get(key) is not None:
            return node[key]
    return None


def _has_type(node: dict) -> bool:
    if "@type" in node:
        return True
    # @graph wrapper (WordPress/Yoast)
    graph = node.get("@graph")
    if isinstance(graph, list):
        return any(isinstance(entry, dict) and "@type" in entry for entry in graph)
    return False


# --------------------------------------------------------------------------
# Checks
# --------------------------------------------------------------------------


def _check_json_ld(tags: MetaTags) -> AiReadinessCheck:
    check_id, label = "json-ld", "JSON-LD Structured Data"

    if not tags.structured_data:
        return AiReadinessCheck(
            check_id, label, "fail",
            "No JSON-LD structured data found.",
            'Add a <script type="application/ld+json"> block with Schema.org markup '
            "(e.g. Article, WebPage).",
        )

    if not any(_has_type(node) for node in _json_ld_nodes(tags.structured_data)):
        return AiReadinessCheck(
            check_id, label, "warn",
            "JSON-LD present but missing @type.",
            'Add an @type property (e.g. "Article", "WebPage") so AI systems can identify '
            "the content type.",
        )

    return AiReadinessCheck(check_id, label, "pass", "JSON-LD with @type found.")


def _check_authorship(tags: MetaTags) -> AiReadinessCheck:
    check_id, label = "authorship", "Authorship"

    if tags.author:
        return AiReadinessCheck(check_id, label, "pass", "Author found in meta tags.")

    if tags.article.author:
        return AiReadinessCheck(check_id, label, "pass", "Author found in article:author.")

    if _json_ld_value(tags.structured_data, "author"):
        return AiReadinessCheck(check_id, label, "pass", "Author found in JSON-LD structured data.")

    return AiReadinessCheck(
        check_id, label, "fail",
        "No authorship information found.",
        'Add <meta name="author" content="..."> or include author in JSON-LD to help AI '
        "attribute content.",
    )


def _check_freshness(tags: MetaTags) -> AiReadinessCheck:
    check_id, label = "freshness", "Content Freshness"

    published = tags.article.published_time or _json_ld_value(tags.structured_data, "datePublished")
    modified = (
        tags.article.modified_time
        or tags.og.updated_time
        or _json_ld_value(tags.structured_data, "dateModified")
    )

    if published and modified:
        return AiReadinessCheck(check_id, label, "pass", "Both published and modified dates found.")

    if published or modified:
        return AiReadinessCheck(
            check_id, label, "warn",
            "Published date found but no modified date."
            if published
            else "Modified date found but no published date.",
            "Add both datePublished and dateModified to help AI assess content freshness.",
        )

    return AiReadinessCheck(
        check_id, label, "fail",
        "No published or modified date found.",
        "Add article:published_time / article:modified_time or datePublished / "
        "dateModified in JSON-LD.",
    )


def _check_canonical(tags: MetaTags) -> AiReadinessCheck:
    check_id, label = "canonical", "Canonical URL"

    if tags.canonical:
        return AiReadinessCheck(check_id, label, "pass", "Canonical URL present.")

    return AiReadinessCheck(
        check_id, label, "fail",
        "Canonical URL missing.",
        'Add <link rel="canonical" href="..."> so AI systems reference the correct URL.',
    )


def _check_language(tags: MetaTags) -> AiReadinessCheck:
    check_id, label = "language", "Language Declaration"

    if tags.html_lang:
        return AiReadinessCheck(
            check_id, label, "pass", f'Language declared via html lang="{tags.html_lang}".'
        )

    if tags.language:
        return AiReadinessCheck(check_id, label, "pass", "Language declared via meta tag.")

    return AiReadinessCheck(
        check_id, label, "fail",
        "No language declaration found.",
        'Add a lang attribute to the <html> tag (e.g. <html lang="en">) so AI systems know '
        "the content language.",
    )


def _check_description_quality(tags: MetaTags) -> AiReadinessCheck:
    check_id, label = "description-quality", "Description Quality"
    thresholds = settings.ai_readiness

    description = tags.description or tags.og.description
    if not description:
        return AiReadinessCheck(
            check_id, label, "fail",
            "No meta description found.",
            f"Add a meta description of at least {thresholds.description_pass_length} characters "
            "to give AI systems a clear page summary.",
        )

    length = text_length(description)
    if length >= thresholds.description_pass_length:
        return AiReadinessCheck(check_id, label, "pass", f"Description is {length} characters.")

    if length >= thresholds.description_warn_length:
        return AiReadinessCheck(
            check_id, label, "warn",
            f"Description is only {length} characters.",
            f"Aim for at least {thresholds.description_pass_length} characters to give AI "
            "systems enough context to summarize the page.",
        )

    return AiReadinessCheck(
        check_id, label, "fail",
        f"Description is too short ({length} characters).",
        f"Expand the description to at least {thresholds.description_pass_length} characters "
        "for meaningful AI summarization.",
    )


def _check_ai_crawl_directives(tags: MetaTags) -> AiReadinessCheck:
    check_id, label = "ai-crawl-directives", "AI Crawl Directives"

    robots = (tags.robots or "").lower()
    found = [directive for directive in AI_BLOCKING_DIRECTIVES if directive in robots]

    if found:
        return AiReadinessCheck(
            check_id, label, "fail",
            f"Robots meta contains {', '.join(found)}.",
            "These directives block AI systems from using your content. Remove them if you "
            "want AI visibility.",
        )

    return AiReadinessCheck(check_id, label, "pass", "No AI-blocking directives found in robots meta.")


_ROBOTS_TXT_ID, _ROBOTS_TXT_LABEL = "robots-txt", "robots.txt AI Bot Access"
_LLMS_TXT_ID, _LLMS_TXT_LABEL = "llms-txt", "llms.txt"


def _check_robots_txt(robots_txt: str | None) -> AiReadinessCheck:
    check_id, label = _ROBOTS_TXT_ID, _ROBOTS_TXT_LABEL

    if robots_txt is None:
        return AiReadinessCheck(check_id, label, "na", "robots.txt not available.")

    blocked = blocked_bots(robots_txt)
    total = len(AI_BOTS)

    if not blocked:
        return AiReadinessCheck(check_id, label, "pass", "No AI bots blocked in robots.txt.")

    if len(blocked) == total:
        return AiReadinessCheck(
            check_id, label, "fail",
            f"All {total} AI bots are blocked in robots.txt.",
            "Remove Disallow rules for AI bots if you want your content to appear in "
            "AI-generated answers.",
        )

    return AiReadinessCheck(
        check_id, label, "warn",
        f"{len(blocked)} of {total} AI bots blocked: {', '.join(blocked)}.",
        "Some AI crawlers are blocked. Review your robots.txt if you want broader AI coverage.",
    )


def _check_llms_txt(llms_txt: str | None) -> AiReadinessCheck:
    check_id, label = _LLMS_TXT_ID, _LLMS_TXT_LABEL

    # A lone byte order mark counts as empty
    if llms_txt is None or not llms_txt.replace("\ufeff", "").strip():
        return AiReadinessCheck(
            check_id, label, "fail",
            "No llms.txt found." if llms_txt is None else "llms.txt is empty.",
            "Add a /llms.txt file describing your site for LLM consumption. See llmstxt.org "
            "for the format.",
        )

    return AiReadinessCheck(check_id, label, "pass", "llms.txt found and non-empty.")


# Checks evaluated against the parsed meta tags, in report order
CONTENT_CHECKS: tuple[Callable[[MetaTags], AiReadinessCheck], ...] = (
    _check_json_ld,
    _check_authorship,
    _check_freshness,
    _check_canonical,
    _check_language,
    _check_description_quality,
    _check_ai_crawl_directives,
)


def compute_verdict(checks: Iterable[AiReadinessCheck]) -> Verdict:
    """Derive the verdict from check statuses, ignoring ``na`` checks.

    - not-ready: 3 or more fails
    - partial: 1-2 fails, or 2 or more warns
    - ready: otherwise
    """
    statuses = [check.status for check in checks if check.status != "na"]
    fails = statuses.count("fail")
    warns = statuses.count("warn")

    if fails >= NOT_READY_FAILS:
        return "not-ready"
    if fails >= 1 or warns >= PARTIAL_WARNS:
        return "partial"
    return "ready"


def assess_ai_readiness(
    tags: MetaTags,
    *,
    paste_mode: bool = False,
    robots_txt: str | None = None,
    llms_txt: str | None = None,
) -> AiReadinessResult:
    """Run all nine AI readiness checks.

    Args:
        tags: Parsed meta tags from parse_meta_tags
        paste_mode: When True the robots.txt and llms.txt checks are ``na``
        robots_txt: Raw robots.txt content, None if unavailable
        llms_txt: Raw llms.txt content, None if unavailable

    Returns:
        AiReadinessResult with verdict and per-check details
    """
    checks = [check(tags) for check in CONTENT_CHECKS]

    if paste_mode:
        checks.append(AiReadinessCheck(_ROBOTS_TXT_ID, _ROBOTS_TXT_LABEL, "na", PASTE_MODE_MESSAGE))
        checks.append(AiReadinessCheck(_LLMS_TXT_ID, _LLMS_TXT_LABEL, "na", PASTE_MODE_MESSAGE))
    else:
        checks.append(_check_robots_txt(robots_txt))
        checks.append(_check_llms_txt(llms_txt))

    return AiReadinessResult(verdict=compute_verdict(checks), checks=tuple(checks))
