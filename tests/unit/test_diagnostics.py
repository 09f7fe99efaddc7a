"""Unit tests for meta tag diagnostics."""
from __future__ import annotations

import pytest

from metacheck.diagnostics.diagnostics import (
    DiagnosticStatus,
    ImageAnalysisResult,
    classify_image_dimensions,
    generate_diagnostics,
    text_length,
)
from metacheck.parser.meta_parser import MetaTags, OpenGraphTags, TwitterTags, parse_meta_tags

GREEN, YELLOW, RED = DiagnosticStatus.GREEN, DiagnosticStatus.YELLOW, DiagnosticStatus.RED


def _og(**kwargs) -> MetaTags:
    return MetaTags(og=OpenGraphTags(**kwargs))


class TestTitle:
    """Tests for the title category."""

    def test_missing(self):
        result = generate_diagnostics(MetaTags()).title
        assert result.status is RED
        assert result.message == "Title tag missing"
        assert result.suggestion

    def test_exactly_sixty_is_green(self):
        assert generate_diagnostics(MetaTags(title="x" * 60)).title.status is GREEN

    def test_sixty_one_is_yellow(self):
        result = generate_diagnostics(MetaTags(title="x" * 61)).title
        assert result.status is YELLOW
        assert "exceeds 60" in result.message
        assert "(61)" in result.message

    def test_emoji_counted_as_two_units(self):
        """31 emoji are 62 UTF-16 units, over the 60 limit."""
        result = generate_diagnostics(MetaTags(title="\U0001F600" * 31)).title
        assert result.status is YELLOW
        assert "(62)" in result.message

    def test_bmp_characters_counted_once(self):
        assert generate_diagnostics(MetaTags(title="\u00e9" * 60)).title.status is GREEN


class TestDescription:
    """Tests for the description category."""

    def test_missing(self):
        assert generate_diagnostics(MetaTags()).description.status is RED

    @pytest.mark.parametrize("length", [50, 120, 160])
    def test_in_range_is_green(self, length):
        assert generate_diagnostics(MetaTags(description="d" * length)).description.status is GREEN

    def test_too_long(self):
        result = generate_diagnostics(MetaTags(description="d" * 161)).description
        assert result.status is YELLOW
        assert "exceeds 160" in result.message

    def test_too_short(self):
        result = generate_diagnostics(MetaTags(description="d" * 49)).description
        assert result.status is YELLOW
        assert "very short" in result.message

    def test_emoji_length_in_utf16_units(self):
        result = generate_diagnostics(MetaTags(description="\U0001F600" * 81)).description
        assert result.status is YELLOW
        assert "(162)" in result.message


class TestTextLength:
    """Tests for UTF-16 length counting."""

    @pytest.mark.parametrize(
        "text,length",
        [("", 0), ("abc", 3), ("caf\u00e9", 4), ("\U0001F600", 2), ("a\U0001F44Db", 4)],
    )
    def test_text_length(self, text, length):
        assert text_length(text) == length


class TestOpenGraph:
    """Tests for the Open Graph category."""

    def test_all_present(self):
        tags = _og(title="t", description="d", image="https://x/i.png")
        assert generate_diagnostics(tags).og_tags.status is GREEN

    def test_one_missing_is_yellow(self):
        result = generate_diagnostics(_og(title="t", description="d")).og_tags
        assert result.status is YELLOW
        assert result.message == "Missing: og:image"

    def test_two_missing_is_red(self):
        result = generate_diagnostics(_og(title="t")).og_tags
        assert result.status is RED
        assert result.message == "Missing: og:description, og:image"

    def test_all_missing_is_red(self):
        assert generate_diagnostics(MetaTags()).og_tags.status is RED


class TestOgImage:
    """Tests for the og:image category."""

    def test_missing(self):
        assert generate_diagnostics(MetaTags()).og_image.status is RED

    def test_relative_path(self):
        result = generate_diagnostics(_og(image="/cover.png")).og_image
        assert result.status is YELLOW
        assert "relative" in result.message

    def test_absolute(self):
        assert generate_diagnostics(_og(image="https://x/i.png")).og_image.status is GREEN

    def test_scheme_prefix_is_literal(self):
        """Only http:// and https:// prefixes count as absolute."""
        assert generate_diagnostics(_og(image="//cdn.x/i.png")).og_image.status is YELLOW

    @pytest.mark.parametrize(
        "width,height,expected",
        [
            (100, 100, RED),
            (600, 400, YELLOW),
            (1200, 630, GREEN),
        ],
    )
    def test_image_analysis(self, width, height, expected):
        analysis = ImageAnalysisResult.from_dimensions(width, height)
        result = generate_diagnostics(_og(image="https://x/i.png"), analysis).og_image
        assert result.status is expected
        assert f"{width}×{height}px" in result.message

    def test_unmeasured_image_ignored(self):
        analysis = ImageAnalysisResult(0, 0, None)
        result = generate_diagnostics(_og(image="https://x/i.png"), analysis).og_image
        assert result.message == "og:image present with absolute URL"

    @pytest.mark.parametrize(
        "width,height,expected",
        [
            (199, 1000, "issues"),
            (1000, 199, "issues"),
            (200, 200, "acceptable"),
            (1199, 630, "acceptable"),
            (1200, 630, "optimal"),
            (2400, 1260, "optimal"),
        ],
    )
    def test_classify_dimensions(self, width, height, expected):
        assert classify_image_dimensions(width, height) == expected


class TestTwitterCard:
    """Tests for the Twitter Card category."""

    def test_present(self):
        tags = MetaTags(twitter=TwitterTags(card="summary"))
        assert generate_diagnostics(tags).twitter_card.status is GREEN

    def test_missing_with_og_is_red(self):
        result = generate_diagnostics(_og(title="t")).twitter_card
        assert result.status is RED

    def test_missing_without_og_is_green(self):
        result = generate_diagnostics(MetaTags()).twitter_card
        assert result.status is GREEN
        assert "fall back" in result.message


class TestCanonical:
    """Tests for the canonical category."""

    def test_missing(self):
        assert generate_diagnostics(MetaTags()).canonical.status is RED

    def test_matches_og_url(self):
        tags = MetaTags(canonical="https://x/page", og=OpenGraphTags(url="https://x/page"))
        assert generate_diagnostics(tags).canonical.status is GREEN

    @pytest.mark.parametrize(
        "canonical,og_url",
        [
            ("https://x/page/", "https://x/page"),
            ("https://x/page", "https://x/page/"),
        ],
    )
    def test_trailing_slash_mismatch(self, canonical, og_url):
        tags = MetaTags(canonical=canonical, og=OpenGraphTags(url=og_url))
        result = generate_diagnostics(tags).canonical
        assert result.status is YELLOW
        assert "Trailing slash" in result.message

    def test_different_url_is_green(self):
        """Only trailing slash differences are flagged."""
        tags = MetaTags(canonical="https://x/a", og=OpenGraphTags(url="https://x/b"))
        assert generate_diagnostics(tags).canonical.status is GREEN


class TestRobots:
    """Tests for the robots category."""

    def test_absent_is_green(self):
        assert generate_diagnostics(MetaTags()).robots.status is GREEN

    def test_noindex_is_yellow(self):
        result = generate_diagnostics(MetaTags(robots="noindex, nofollow")).robots
        assert result.status is YELLOW

    def test_index_is_green(self):
        assert generate_diagnostics(MetaTags(robots="index, follow")).robots.status is GREEN

    def test_noindex_match_is_case_sensitive(self):
        assert generate_diagnostics(MetaTags(robots="NOINDEX")).robots.status is GREEN


class TestOverall:
    """Tests for the aggregate status."""

    def test_red_dominates(self):
        assert generate_diagnostics(MetaTags()).overall.status is RED

    def test_all_green(self, complete_tags):
        diagnostics = generate_diagnostics(complete_tags)
        assert diagnostics.overall.status is GREEN
        assert diagnostics.overall.message == "All checks passed"

    def test_yellow_without_red(self, complete_tags):
        from dataclasses import replace

        diagnostics = generate_diagnostics(replace(complete_tags, title="x" * 70))
        assert diagnostics.overall.status is YELLOW

    def test_long_title_only_page(self, long_title_html):
        """A page with only a long title: title yellow, most categories red."""
        diagnostics = generate_diagnostics(parse_meta_tags(long_title_html))
        assert diagnostics.title.status is YELLOW
        assert "exceeds 60" in diagnostics.title.message
        for result in (
            diagnostics.description,
            diagnostics.og_tags,
            diagnostics.og_image,
            diagnostics.canonical,
        ):
            assert result.status is RED
        assert diagnostics.overall.status is RED

    def test_social_page(self, social_html):
        """Core OG, absolute image, twitter card and matching canonical are all green."""
        diagnostics = generate_diagnostics(parse_meta_tags(social_html))
        assert diagnostics.og_tags.status is GREEN
        assert diagnostics.og_image.status is GREEN
        assert diagnostics.twitter_card.status is GREEN
        assert diagnostics.canonical.status is GREEN


class TestSerialization:
    """Tests for wire-format dictionaries."""

    def test_to_dict(self):
        data = generate_diagnostics(MetaTags()).to_dict()
        assert list(data) == [
            "overall", "title", "description", "ogTags", "ogImage",
            "twitterCard", "canonical", "robots",
        ]
        assert data["title"]["status"] == "red"
        assert data["title"]["icon"] == "error"
        assert "suggestion" in data["title"]
        assert "suggestion" not in data["robots"]
