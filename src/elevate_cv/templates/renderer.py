"""Render documents and gap reports to HTML (print view) and Markdown."""

from __future__ import annotations

from pathlib import Path

import markdown
from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup, escape

from elevate_cv.models.document import DocumentModel
from elevate_cv.models.gap import GapReport
from elevate_cv.templates.themes import get_palette

HTML_TEMPLATES_DIR = Path(__file__).parent


def _env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(HTML_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html"]),
    )


def _section_html(text: str) -> Markup:
    # Raw HTML in section text is shown as text.
    return Markup(markdown.markdown(str(escape(text)), extensions=["nl2br"]))


def render_document_html(
    document: DocumentModel,
    *,
    print_mode: bool = True,
    auto_print: bool = False,
) -> str:
    """Render the CV as a self-contained themed HTML page.

    The page carries a print stylesheet (A4, 1cm margins, controls hidden).
    ``auto_print`` adds a script that opens the browser's print dialog.
    """
    template = _env().get_template("cv.html")
    return template.render(
        doc=document,
        palette=get_palette(document.selected_theme),
        sections=[(title, _section_html(text)) for title, text in document.sections.items()],
        print_mode=print_mode,
        auto_print=auto_print,
    )


def render_document_markdown(document: DocumentModel) -> str:
    lines = [f"# {document.user_name}"]
    if document.headline:
        lines.append(f"**{document.headline}**")
    contacts = [v for v in document.contact_fields.values() if v]
    contacts.append(document.user_location)
    lines.append(" | ".join(c for c in contacts if c))
    for title, text in document.sections.items():
        lines += ["", f"## {title}", text.strip()]
    if document.skills:
        lines += ["", "## Skills", ", ".join(document.skills)]
    return "\n".join(lines) + "\n"


def render_gap_report_markdown(report: GapReport) -> str:
    lines = ["# Gap Remediation Plan"]
    for i, gap in enumerate(report.skill_gaps, 1):
        lines += ["", f"## {i}. {gap.skill}"]
        for course in gap.courses:
            lines.append(f"- [{course.course_name}]({course.url}) ({course.platform})")
    if report.grounding_sources:
        lines += ["", "## Sources"]
        lines += [f"- [{s.title}]({s.uri})" for s in report.grounding_sources]
    return "\n".join(lines) + "\n"


def save_text(content: str, output_path: str | Path) -> Path:
    """Save rendered content to file."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path
