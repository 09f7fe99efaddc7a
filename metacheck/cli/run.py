"""CLI commands."""
from __future__ import annotations

from pathlib import Path

import requests
import typer
from rich.console import Console
from rich.panel import Panel

from metacheck.analyzer import AnalysisReport, analyze_html, analyze_url
from metacheck.defaults.tag_defaults import generate_default_tags
from metacheck.logging_utils import configure_logging
from metacheck.report.formatter import OutputFormat, format_report, grade_color

app = typer.Typer(
    add_completion=False,
    help="MetaCheck - Inspect a page's meta tags, social previews and AI readiness",
)
console = Console()

FAILING_GRADES = ("D", "F")


def _analyze(target: str, from_file: bool) -> AnalysisReport:
    """Analyze a URL, or a local HTML file in paste mode."""
    if from_file:
        path = Path(target)
        if not path.is_file():
            raise ValueError(f"File not found: {target}")
        return analyze_html(path.read_text(encoding="utf-8", errors="replace"), paste_mode=True)
    return analyze_url(target)


@app.callback()
def main(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    ),
) -> None:
    configure_logging(log_level)


@app.command()
def run(
    target: str = typer.Argument(..., help="URL to analyze (or HTML file with --file)"),
    from_file: bool = typer.Option(
        False,
        "--file",
        "-f",
        help="Treat TARGET as a local HTML file (paste mode)",
    ),
    output: str = typer.Option(
        "cli",
        "--output",
        "-o",
        help="Output format: cli, json, markdown",
    ),
    save: str | None = typer.Option(
        None,
        "--save",
        "-s",
        help="Save report to file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show detailed analysis information",
    ),
) -> None:
    """Analyze the meta tags of a page.

    Examples:
        metacheck run https://example.com
        metacheck run https://example.com -o json
        metacheck run page.html --file -o markdown -s report.md
    """
    if output not in ("cli", "json", "markdown"):
        console.print(f"[red]Error:[/red] Invalid output format '{output}'. Use cli, json, or markdown.")
        raise typer.Exit(1)

    output_format: OutputFormat = output  # type: ignore

    console.print(Panel.fit(
        f"[bold cyan]MetaCheck[/bold cyan]\n[dim]Analyzing:[/dim] {target}",
        border_style="cyan",
    ))

    try:
        with console.status("[bold blue]Analyzing page...", spinner="dots"):
            report = _analyze(target, from_file)
    except ValueError as e:
        console.print(f"\n[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except requests.RequestException as e:
        console.print(f"\n[red]Fetch failed:[/red] {e}")
        raise typer.Exit(1)

    if verbose:
        console.print(
            f"[dim]{report.score.total_issues} issue(s), "
            f"{len(report.meta.structured_data)} JSON-LD block(s), "
            f"SPA score {report.spa.score}[/dim]"
        )

    rendered = format_report(report, output_format)

    if save:
        save_path = Path(save)
        save_path.write_text(rendered, encoding="utf-8")
        console.print(f"\n[green]Report saved to:[/green] {save_path}")
    else:
        console.print("")
        if output_format == "cli":
            console.print(rendered)
        else:
            console.print(rendered, markup=False)

    if report.score.grade in FAILING_GRADES:
        raise typer.Exit(1)


@app.command()
def check(
    target: str = typer.Argument(..., help="URL to quick-check (or HTML file with --file)"),
    from_file: bool = typer.Option(False, "--file", "-f", help="Treat TARGET as a local HTML file"),
) -> None:
    """Quick check - prints only the score, grade and AI verdict.

    Example:
        metacheck check https://example.com
    """
    try:
        with console.status("[bold blue]Analyzing...", spinner="dots"):
            report = _analyze(target, from_file)
    except (ValueError, requests.RequestException) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    score = report.score
    color = grade_color(score.grade)
    console.print(
        f"[{color}]{score.grade}[/{color}] ({score.overall}/100) "
        f"AI: {report.ai_readiness.verdict} - {target}"
    )

    if score.grade in FAILING_GRADES:
        raise typer.Exit(1)


@app.command()
def suggest(
    target: str = typer.Argument(..., help="URL (or HTML file with --file) to build tags for"),
    from_file: bool = typer.Option(False, "--file", "-f", help="Treat TARGET as a local HTML file"),
) -> None:
    """Print a suggested <head> tag block based on the page's current tags."""
    try:
        report = _analyze(target, from_file)
    except (ValueError, requests.RequestException) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    source_url = None if from_file else (report.final_url or target)
    console.print(generate_default_tags(report.meta, source_url), markup=False, highlight=False, soft_wrap=True)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Bind port"),
    workers: int = typer.Option(1, "--workers", "-w", help="Number of worker processes"),
) -> None:
    """Run the HTTP API with uvicorn.

    Example:
        metacheck serve --host 0.0.0.0 --port 8080
    """
    import uvicorn

    uvicorn.run("app.main:app", host=host, port=port, workers=workers)


@app.command()
def version() -> None:
    """Show version information."""
    console.print("[bold]MetaCheck[/bold] v1.0.0")
    console.print("[dim]Meta tag and AI readiness inspector[/dim]")


if __name__ == "__main__":
    app()
