"""Unit tests for report formatting."""
from __future__ import annotations

import json

import pytest

from metacheck.analyzer import analyze_html
from metacheck.report.formatter import format_report, grade_color


@pytest.fixture
def complete_report(complete_html):
    return analyze_html(complete_html, url="https://example.com/article")


@pytest.fixture
def spa_report(spa_shell_html):
    return analyze_html(spa_shell_html)


class TestJsonFormat:
    """Tests for JSON output."""

    def test_valid_json(self, complete_report):
        data = json.loads(format_report(complete_report, "json"))
        assert data["url"] == "https://example.com/article"
        assert data["score"]["overall"] == 100
        assert data["score"]["grade"] == "A"
        assert data["aiReadiness"]["verdict"] == "ready"
        assert data["tags"]["openGraph"]["title"] == "Inspecting Meta Tags"

    def test_non_ascii_preserved(self):
        report = analyze_html("<html><head><title>Café 東京</title></head></html>")
        assert "Café 東京" in format_report(report, "json")


class TestMarkdownFormat:
    """Tests for Markdown output."""

    def test_sections(self, complete_report):
        output = format_report(complete_report, "markdown")
        assert output.startswith("# Meta Tag Report")
        assert "**100/100** (A)" in output
        assert "| Open Graph Tags | 100/100 | 25 | pass |" in output
        assert "## AI Readiness" in output
        assert "Verdict: **ready**" in output

    def test_recommended_fixes_listed(self, spa_report):
        output = format_report(spa_report, "markdown")
        assert "### Recommended Fixes" in output
        assert "1. **JSON-LD Structured Data:**" in output

    def test_spa_section(self, spa_report, complete_report):
        assert "## Client-Side Rendering" in format_report(spa_report, "markdown")
        assert "## Client-Side Rendering" not in format_report(complete_report, "markdown")


class TestCliFormat:
    """Tests for terminal output."""

    def test_default_is_cli(self, complete_report):
        assert format_report(complete_report) == format_report(complete_report, "cli")

    def test_contents(self, complete_report):
        output = format_report(complete_report, "cli")
        assert "Meta Tag Report" in output
        assert "100/100 (A)" in output
        assert "https://example.com/article" in output
        assert "AI Readiness:" in output
        assert "Issues:[/bold] 0" in output

    def test_long_title_shortened(self, long_title_html):
        output = format_report(analyze_html(long_title_html), "cli")
        assert "T" * 57 + "..." in output
        assert "T" * 58 not in output

    def test_untitled_page(self):
        output = format_report(analyze_html(""), "cli")
        assert "Untitled Page" in output

    def test_spa_warning(self, spa_report):
        output = format_report(spa_report, "cli")
        assert "Client-rendered page detected" in output
        assert "(high confidence)" in output


class TestGradeColor:
    """Tests for grade colors."""

    @pytest.mark.parametrize(
        "grade,color",
        [("A", "green"), ("B", "blue"), ("C", "yellow"), ("D", "red"), ("F", "red bold"), ("?", "white")],
    )
    def test_colors(self, grade, color):
        assert grade_color(grade) == color


class TestMarkupEscaping:
    """Page content must not be interpreted as rich markup."""

    def test_brackets_in_title_escaped(self):
        report = analyze_html("<html><head><title>[/draft] Notes</title></head></html>")
        output = format_report(report, "cli")
        assert "\\[/draft] Notes" in output
