"""Response Validator/Adapter: strict decode of reasoning-service replies.

Each decoder either returns a complete, freshly built model or raises a
``CareerTaskError`` subclass. Nothing is mutated on the way.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from elevate_cv.errors import EmptyGeneration, SchemaViolation
from elevate_cv.models.draft import GeneratedDraft
from elevate_cv.models.gap import GapReport, GroundingSource
from elevate_cv.models.request import AgentMode
from elevate_cv.utils.json_parser import extract_json

logger = logging.getLogger(__name__)

_SECTION_KEYS = ("suggested_sections", "suggested_sections_v2")


def _summarize(error: ValidationError) -> str:
    parts = []
    for item in error.errors()[:5]:
        loc = ".".join(str(p) for p in item["loc"])
        parts.append(f"{loc}: {item['msg']}")
    return "; ".join(parts)


def decode_draft(text: str) -> GeneratedDraft:
    """Decode a Generate reply.

    Raises:
        MalformedResponse: the text is not a JSON object.
        EmptyGeneration: the object has no sections.
        SchemaViolation: required fields missing or mistyped, or duplicate
            section titles.
    """
    data = extract_json(text)

    raw_sections = next((data[k] for k in _SECTION_KEYS if k in data), None)
    if isinstance(raw_sections, list) and not raw_sections:
        raise EmptyGeneration("The AI returned zero CV sections")

    data = {**data, "mode": AgentMode.GENERATE.value}
    try:
        draft = GeneratedDraft.model_validate(data)
    except ValidationError as e:
        logger.warning("Generate reply failed validation: %s", _summarize(e))
        raise SchemaViolation(f"Generate reply violates schema: {_summarize(e)}") from e

    seen: set[str] = set()
    for section in draft.suggested_sections:
        if section.title in seen:
            raise SchemaViolation(f"Duplicate section title: {section.title!r}")
        seen.add(section.title)
    return draft


def decode_gap_report(
    text: str,
    grounding_sources: list[GroundingSource] | None = None,
    min_courses: int = 1,
) -> GapReport:
    """Decode a GapCheck reply and attach optional grounding sources.

    Raises:
        MalformedResponse: the text is not a JSON object.
        SchemaViolation: required fields missing or mistyped, or a gap has
            fewer than ``min_courses`` courses.
    """
    data = extract_json(text)
    data = {**data, "mode": AgentMode.CHECK.value}
    if grounding_sources is not None:
        data["grounding_sources"] = [s.model_dump() for s in grounding_sources]

    try:
        report = GapReport.model_validate(data)
    except ValidationError as e:
        logger.warning("GapCheck reply failed validation: %s", _summarize(e))
        raise SchemaViolation(f"GapCheck reply violates schema: {_summarize(e)}") from e

    for gap in report.skill_gaps:
        if len(gap.courses) < min_courses:
            raise SchemaViolation(
                f"Gap {gap.skill!r} has {len(gap.courses)} courses, expected at least {min_courses}"
            )
    return report
