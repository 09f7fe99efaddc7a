"""Shared test fixtures and configuration."""
from __future__ import annotations

import pytest

from metacheck.parser.meta_parser import MetaTags, parse_meta_tags

# 111 characters: passes both the diagnostics and the AI description checks
GOOD_DESCRIPTION = (
    "A practical guide to inspecting meta tags, Open Graph previews and AI readiness "
    "signals on any public web page."
)


@pytest.fixture
def complete_html() -> str:
    """Return a page with every tag the diagnostics and AI checks look for."""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>Inspecting Meta Tags - MetaCheck Example</title>
    <meta name="description" content="{GOOD_DESCRIPTION}">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <meta name="robots" content="index, follow">
    <meta name="author" content="Jane Doe">
    <meta name="theme-color" content="#336699">
    <link rel="canonical" href="https://example.com/article">
    <link rel="icon" href="/favicon.ico">
    <link rel="apple-touch-icon" href="/apple-touch-icon.png">

    <meta property="og:title" content="Inspecting Meta Tags">
    <meta property="og:description" content="{GOOD_DESCRIPTION}">
    <meta property="og:type" content="article">
    <meta property="og:url" content="https://example.com/article">
    <meta property="og:image" content="https://example.com/cover.png">
    <meta property="og:image:alt" content="Cover image">
    <meta property="og:site_name" content="Example">

    <meta property="article:published_time" content="2026-01-10T08:00:00Z">
    <meta property="article:modified_time" content="2026-02-01T08:00:00Z">
    <meta property="article:tag" content="seo">
    <meta property="article:tag" content="metadata">

    <meta name="twitter:card" content="summary_large_image">
    <meta name="twitter:site" content="@example">

    <script type="application/ld+json">
    {{"@context": "https://schema.org", "@type": "Article", "headline": "Inspecting Meta Tags"}}
    </script>
</head>
<body>
    <h1>Inspecting Meta Tags</h1>
    <p>Meta tags tell search engines, social networks and AI systems what a page is about.</p>
</body>
</html>"""


@pytest.fixture
def long_title_html() -> str:
    """Return a page with only a 70-character title."""
    return f"<html><head><title>{'T' * 70}</title></head><body></body></html>"


@pytest.fixture
def social_html() -> str:
    """Return a page with core Open Graph, Twitter and canonical tags only."""
    return """<html><head>
    <meta property="og:title" content="Social Title">
    <meta property="og:description" content="Social description">
    <meta property="og:image" content="https://example.com/image.png">
    <meta property="og:url" content="https://example.com/page">
    <meta name="twitter:card" content="summary_large_image">
    <link rel="canonical" href="https://example.com/page">
</head><body></body></html>"""


@pytest.fixture
def spa_shell_html() -> str:
    """Return an empty client-rendered application shell."""
    return """<!DOCTYPE html>
<html>
<head>
    <title>Vite App</title>
</head>
<body>
    <div id="app"></div>
    <script type="module" crossorigin src="/assets/index.4f9c2a1b.js"></script>
</body>
</html>"""


@pytest.fixture
def complete_tags(complete_html: str) -> MetaTags:
    """Return parsed tags from the complete page."""
    return parse_meta_tags(complete_html)


@pytest.fixture
def mock_url() -> str:
    """Return a mock URL for testing."""
    return "https://example.com/article"


@pytest.fixture
def robots_txt_allow_all() -> str:
    """Return robots.txt that allows all crawlers."""
    return """User-agent: *
Allow: /

User-agent: GPTBot
Allow: /
"""


@pytest.fixture
def robots_txt_block_some_ai() -> str:
    """Return robots.txt that blocks three AI crawlers."""
    return """User-agent: *
Allow: /

User-agent: GPTBot
Disallow: /

User-agent: ClaudeBot
Disallow: /

User-agent: PerplexityBot
Disallow: /
"""


@pytest.fixture
def robots_txt_block_all() -> str:
    """Return robots.txt that blocks every crawler."""
    return """User-agent: *
Disallow: /
"""
