"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from elevate_cv.clients.llm_client import LLMClient
from elevate_cv.clients.search_client import SearchClient
from elevate_cv.config import AppConfig, load_config, optional_search_key, require_api_key
from elevate_cv.errors import CareerTaskError, ConfigError
from elevate_cv.models.document import DocumentModel
from elevate_cv.models.draft import Theme
from elevate_cv.models.request import GapCheckRequest, GenerateRequest
from elevate_cv.parsers.cv_parser import parse_cv_file
from elevate_cv.pipeline.career_agent import CareerAgent
from elevate_cv.pipeline.section_refiner import SectionRefiner
from elevate_cv.templates.renderer import (
    render_document_html,
    render_document_markdown,
    render_gap_report_markdown,
    save_text,
)
from elevate_cv.templates.themes import THEMES

app = typer.Typer(
    name="elevate-cv",
    help="AI CV builder and skill-gap analyzer",
    no_args_is_help=True,
)
console = Console()

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


def _setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def _build_agent(config: AppConfig) -> tuple[CareerAgent, LLMClient]:
    try:
        api_key = require_api_key()
    except ConfigError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    llm = LLMClient(api_key=api_key, timeout=config.llm.timeout)
    search = SearchClient() if optional_search_key() else None
    return CareerAgent(llm, config, search=search), llm


def _run(coro, label: str):
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        progress.add_task(label, total=None)
        try:
            return asyncio.run(coro)
        except CareerTaskError as e:
            progress.stop()
            console.print(f"[red]{e.user_message}[/red]")
            logging.getLogger(__name__).debug("Task error: %s", e)
            raise typer.Exit(1)


def _print_usage(llm: LLMClient, search: SearchClient | None = None) -> None:
    summary = llm.get_token_summary()
    console.print(
        f"[dim]Tokens: {summary['input']} in / {summary['output']} out "
        f"over {len(summary['calls'])} call(s)[/dim]"
    )
    if search is not None:
        console.print(f"[dim]Searches: {search.get_search_count()}[/dim]")


@app.command()
def generate(
    goal: str = typer.Argument(help="Career goal or target position"),
    output: Path = typer.Option(None, "--output", "-o", help="Output file path (.md)"),
    html: bool = typer.Option(False, "--html", help="Also write a printable HTML file"),
    theme: Theme = typer.Option(None, "--theme", "-t", help="Override the suggested theme"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Draft a CV architecture for a career goal."""
    _setup_logging(verbose)
    config = load_config()
    agent, llm = _build_agent(config)

    draft = _run(agent.process(GenerateRequest(goal=goal)), "Designing CV architecture...")
    document = DocumentModel.from_draft(draft)
    if theme is not None:
        document.set_theme(theme)

    console.print(
        Panel(
            f"[bold]{document.headline}[/bold]\n"
            f"Sections: {', '.join(document.sections)}\n"
            f"Skills: {', '.join(document.skills)}\n"
            f"Theme: {document.selected_theme.value}",
            title="Blueprint Ready",
        )
    )
    if draft.canva_cta:
        console.print("[dim]Tip: this role benefits from a visual layout tool.[/dim]")

    if output is None:
        output = Path("./output") / (goal.strip().replace(" ", "_")[:60] + ".md")
    save_text(render_document_markdown(document), output)
    console.print(f"[green]CV saved: {output}[/green]")

    if html:
        html_path = save_text(
            render_document_html(document, print_mode=False), output.with_suffix(".html")
        )
        console.print(f"[green]HTML saved: {html_path}[/green]")

    if verbose:
        _print_usage(llm, agent.search)


@app.command("gap-check")
def gap_check(
    cv: Path = typer.Option(..., "--cv", help="CV file path (PDF/TXT/MD)"),
    jd: Path = typer.Option(..., "--jd", help="Job description text file"),
    output: Path = typer.Option(None, "--output", "-o", help="Output file path (.md)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Find skill gaps between a CV and a job description, with courses."""
    _setup_logging(verbose)
    if not jd.exists():
        console.print(f"[red]Job description file not found: {jd}[/red]")
        raise typer.Exit(1)
    try:
        cv_text = parse_cv_file(cv)
    except CareerTaskError as e:
        console.print(f"[red]{e.user_message}[/red]")
        raise typer.Exit(1)
    jd_text = jd.read_text(encoding="utf-8")

    config = load_config()
    agent, llm = _build_agent(config)
    report = _run(
        agent.process(GapCheckRequest(cv=cv_text, job_description=jd_text)),
        "Analyzing skill gaps...",
    )

    table = Table(title="Gap Remediation Plan")
    table.add_column("#", justify="right")
    table.add_column("Skill")
    table.add_column("Courses")
    for i, gap in enumerate(report.skill_gaps, 1):
        courses = "\n".join(f"{c.course_name} ({c.platform})" for c in gap.courses)
        table.add_row(str(i), gap.skill, courses)
    console.print(table)

    if report.grounding_sources:
        console.print("\n[dim]Sources:[/dim]")
        for source in report.grounding_sources:
            console.print(f"  - {source.title}: {source.uri}")

    if output is not None:
        save_text(render_gap_report_markdown(report), output)
        console.print(f"[green]Report saved: {output}[/green]")

    if verbose:
        _print_usage(llm, agent.search)


@app.command()
def refine(
    goal: str = typer.Argument(help="Career goal the section should serve"),
    title: str = typer.Argument(help="Section title, e.g. 'Professional Summary'"),
    text: str = typer.Option(..., "--text", help="Current section text"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Refine a single CV section."""
    _setup_logging(verbose)
    config = load_config()
    agent, llm = _build_agent(config)
    document = DocumentModel(sections={title: text})
    refined = asyncio.run(SectionRefiner(agent).refine(document, title, goal))
    if refined is None:
        console.print("[yellow]Refinement failed. The section was left unchanged.[/yellow]")
        raise typer.Exit(1)
    console.print(Panel(refined, title=title))

    if verbose:
        _print_usage(llm, agent.search)


@app.command()
def themes() -> None:
    """List available CV themes."""
    table = Table(title="Themes")
    table.add_column("Name")
    table.add_column("Accent")
    table.add_column("Background")
    for theme, palette in THEMES.items():
        table.add_row(theme.value, f"[{palette.accent}]{palette.accent}[/]", palette.background)
    console.print(table)


if __name__ == "__main__":
    app()
