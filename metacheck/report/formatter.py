"""Report formatting utilities."""
from __future__ import annotations

import json
from typing import Literal

from rich.markup import escape

from metacheck.analyzer import AnalysisReport

OutputFormat = Literal["cli", "json", "markdown"]

_GRADE_COLORS = {"A": "green", "B": "blue", "C": "yellow", "D": "red", "F": "red bold"}

_DIAGNOSTIC_LABELS = {
    "title": "Title",
    "description": "Description",
    "ogTags": "Open Graph",
    "ogImage": "OG Image",
    "twitterCard": "Twitter Card",
    "canonical": "Canonical",
    "robots": "Robots",
}

_STATUS_MARKUP = {
    "green": "[green]✓[/green]",
    "yellow": "[yellow]![/yellow]",
    "red": "[red]✗[/red]",
}

_STATUS_EMOJI = {"green": "✅", "yellow": "⚠️", "red": "❌"}

_CHECK_MARKUP = {
    "pass": "[green]✓ pass[/green]",
    "warn": "[yellow]! warn[/yellow]",
    "fail": "[red]✗ fail[/red]",
    "na": "[dim]- n/a[/dim]",
}

_CHECK_EMOJI = {"pass": "✅", "warn": "⚠️", "fail": "❌", "na": "➖"}

_VERDICT_COLORS = {"ready": "green", "partial": "yellow", "not-ready": "red"}


def grade_color(grade: str) -> str:
    return _GRADE_COLORS.get(grade, "white")


def format_report(report: AnalysisReport, output: OutputFormat = "cli") -> str:
    """Format an analysis report for output.

    Args:
        report: Result of analyze_html or analyze_url
        output: Output format - 'cli', 'json', or 'markdown'

    Returns:
        Formatted string representation of the report
    """
    if output == "json":
        return _format_json(report)
    elif output == "markdown":
        return _format_markdown(report)
    else:
        return _format_cli(report)


def _format_json(report: AnalysisReport) -> str:
    """Format the report as JSON."""
    return json.dumps(report.to_dict(), ensure_ascii=False, indent=2)


def _page_title(report: AnalysisReport) -> str:
    title = report.meta.title or report.meta.og.title or "Untitled Page"
    if len(title) > 60:
        title = title[:57] + "..."
    return title


def _format_cli(report: AnalysisReport) -> str:
    """Format the report for terminal display with Rich-compatible markup."""
    lines = []
    score = report.score

    lines.append("[bold cyan]Meta Tag Report[/bold cyan]")
    lines.append(f"[dim]Page:[/dim] {escape(_page_title(report))}")
    if report.final_url:
        lines.append(f"[dim]URL:[/dim] {escape(report.final_url)}")
    lines.append("")

    color = grade_color(score.grade)
    lines.append(f"[bold]Score:[/bold] [{color}]{score.overall}/100 ({score.grade})[/{color}]")
    lines.append("")

    lines.append("[bold]Score Breakdown:[/bold]")
    for category in score.categories.values():
        bar_width = 20
        filled = int(bar_width * category.score / category.max_score)
        bar = "█" * filled + "░" * (bar_width - filled)

        if category.status == "pass":
            bar_color = "green"
        elif category.status == "warning":
            bar_color = "yellow"
        else:
            bar_color = "red"

        lines.append(
            f"  {category.name:18} [{bar_color}]{bar}[/{bar_color}] "
            f"{category.score}/{category.max_score} (weight {category.weight})"
        )
    lines.append("")

    lines.append("[bold]Diagnostics:[/bold]")
    for key, result in report.diagnostics.categories().items():
        marker = _STATUS_MARKUP[result.status.value]
        lines.append(f"  {marker} {_DIAGNOSTIC_LABELS[key]:14} {escape(result.message)}")
        if result.suggestion and result.status.value != "green":
            lines.append(f"      [dim]{escape(result.suggestion)}[/dim]")
    lines.append("")

    verdict = report.ai_readiness.verdict
    verdict_color = _VERDICT_COLORS[verdict]
    lines.append(f"[bold]AI Readiness:[/bold] [{verdict_color}]{verdict}[/{verdict_color}]")
    for check in report.ai_readiness.checks:
        lines.append(f"  {_CHECK_MARKUP[check.status]:28} {check.label}: {escape(check.message)}")
    lines.append("")

    if report.spa.is_spa:
        lines.append(
            f"[bold yellow]Client-rendered page detected[/bold yellow] "
            f"({report.spa.confidence} confidence)"
        )
        lines.append("  [dim]Meta tags may be injected by JavaScript and invisible to crawlers.[/dim]")
        for signal in report.spa.signals:
            lines.append(f"  - {signal}")
        lines.append("")

    lines.append(f"[bold]Issues:[/bold] {score.total_issues}")

    return "\n".join(lines)


def _format_markdown(report: AnalysisReport) -> str:
    """Format the report as Markdown."""
    lines = []
    score = report.score

    lines.append("# Meta Tag Report")
    lines.append("")
    lines.append(f"**Page:** {_page_title(report)}")
    if report.final_url:
        lines.append(f"**URL:** {report.final_url}")
    lines.append("")

    lines.append("## Score")
    lines.append("")
    lines.append(f"**{score.overall}/100** ({score.grade})")
    lines.append("")

    lines.append("### Score Breakdown")
    lines.append("")
    lines.append("| Category | Score | Weight | Status |")
    lines.append("|----------|-------|--------|--------|")
    for category in score.categories.values():
        lines.append(
            f"| {category.name} | {category.score}/{category.max_score} | "
            f"{category.weight} | {category.status} |"
        )
    lines.append("")

    lines.append("## Diagnostics")
    lines.append("")
    for key, result in report.diagnostics.categories().items():
        emoji = _STATUS_EMOJI[result.status.value]
        lines.append(f"- {emoji} **{_DIAGNOSTIC_LABELS[key]}:** {result.message}")
        if result.suggestion and result.status.value != "green":
            lines.append(f"  - _{result.suggestion}_")
    lines.append("")

    lines.append("## AI Readiness")
    lines.append("")
    lines.append(f"Verdict: **{report.ai_readiness.verdict}**")
    lines.append("")
    lines.append("| Check | Status | Message |")
    lines.append("|-------|--------|---------|")
    for check in report.ai_readiness.checks:
        lines.append(f"| {check.label} | {_CHECK_EMOJI[check.status]} {check.status} | {check.message} |")
    lines.append("")

    suggestions = [check for check in report.ai_readiness.checks if check.suggestion]
    if suggestions:
        lines.append("### Recommended Fixes")
        lines.append("")
        for i, check in enumerate(suggestions, 1):
            lines.append(f"{i}. **{check.label}:** {check.suggestion}")
        lines.append("")

    if report.spa.is_spa:
        lines.append("## Client-Side Rendering")
        lines.append("")
        lines.append(
            f"This page looks like a single-page application ({report.spa.confidence} "
            "confidence). Meta tags may be injected by JavaScript."
        )
        lines.append("")
        for signal in report.spa.signals:
            lines.append(f"- {signal}")
        lines.append("")

    return "\n".join(lines)
