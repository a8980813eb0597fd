"""Task Request Builder: turns raw user input into a reasoning-service call.

Pure construction. Nothing here touches the network.
"""

from __future__ import annotations

from elevate_cv.config import AppConfig
from elevate_cv.errors import InputValidationError
from elevate_cv.models.draft import Theme
from elevate_cv.models.request import (
    AgentMode,
    CareerTaskRequest,
    GapCheckRequest,
    GenerateRequest,
    TaskRequest,
)

THEME_VALUES = [t.value for t in Theme]

GENERATE_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "mode": {"type": "string", "enum": [AgentMode.GENERATE.value]},
        "suggested_skills": {"type": "array", "items": {"type": "string"}},
        "suggested_sections": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "properties": {
                    "title": {"type": "string"},
                    "content": {"type": "string"},
                },
                "required": ["title", "content"],
            },
        },
        "theme": {"type": "string", "enum": THEME_VALUES},
        "niche_summary": {"type": "string"},
        "canva_cta": {"type": "boolean"},
    },
    "required": ["mode", "suggested_skills", "suggested_sections", "theme", "niche_summary"],
}


def check_schema(min_courses: int = 3) -> dict:
    """Response schema for GapCheck with the given course floor."""
    return {
        "type": "object",
        "properties": {
            "mode": {"type": "string", "enum": [AgentMode.CHECK.value]},
            "skill_gaps": {
                "type": "array",
                "minItems": 1,
                "items": {
                    "type": "object",
                    "properties": {
                        "skill": {"type": "string"},
                        "courses": {
                            "type": "array",
                            "minItems": min_courses,
                            "items": {
                                "type": "object",
                                "properties": {
                                    "course_name": {"type": "string"},
                                    "platform": {"type": "string"},
                                    "url": {"type": "string"},
                                },
                                "required": ["course_name", "platform", "url"],
                            },
                        },
                    },
                    "required": ["skill", "courses"],
                },
            },
        },
        "required": ["mode", "skill_gaps"],
    }


GENERATE_SYSTEM = """\
You are an elite career strategist who designs CV architectures.
Given a career goal, propose the sections a strong CV for that goal should
have, each with a concise, high-impact draft the candidate can edit.

Rules:
1. 4 to 7 sections, each with a unique title (e.g. "Professional Summary",
   "Experience", "Projects", "Education", "Certifications").
2. Draft content uses placeholders in [brackets] for facts only the candidate
   knows; never invent employers, dates or numbers.
3. suggested_skills: 8 to 10 keywords recruiters and ATS filters look for.
4. theme: the visual style that suits the field: tech, corporate, creative,
   medical or finance.
5. niche_summary: a short headline role title, e.g. "Senior Product Designer".
6. canva_cta: true when the role is design-heavy enough that a visual layout
   tool would help."""

CHECK_SYSTEM = """\
You are a career coach who compares a candidate's CV with a job description.
Identify the skills the job requires that are missing or weak in the CV and,
for each gap, recommend {min_courses} real online courses that close it.

Rules:
1. Order gaps from most to least important for the job.
2. Only recommend courses that exist. Prefer the search results provided;
   use the exact course URL, without tracking parameters.
3. platform is the provider name, e.g. Coursera, edX, Udemy, LinkedIn Learning."""

REFINE_SYSTEM = """\
You are a CV editor. Rewrite the given CV section so it is sharper, more
specific and better aligned with the candidate's goal. Keep every fact, keep
[bracketed] placeholders, do not add new claims. Output only the refined
section text, no preamble or quotes."""


def _require(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise InputValidationError(field_name)
    return value.strip()


def _clip(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit] + "\n[truncated]"


def validate_request(request: CareerTaskRequest) -> None:
    """Check that the required text fields of ``request`` are filled in.

    Raises:
        InputValidationError: a required text field is empty.
    """
    if isinstance(request, GenerateRequest):
        _require(request.goal, "goal")
    elif isinstance(request, GapCheckRequest):
        _require(request.cv, "cv")
        _require(request.job_description, "job_description")


def build_task_request(request: CareerTaskRequest, config: AppConfig) -> TaskRequest:
    """Build the reasoning-service call for a Generate or GapCheck request.

    Raises:
        InputValidationError: a required text field is empty.
    """
    if isinstance(request, GenerateRequest):
        goal = _require(request.goal, "goal")
        return TaskRequest(
            operation="generate_cv",
            mode=AgentMode.GENERATE,
            prompt=(
                f'Design a CV architecture for: "{_clip(goal, config.task.max_input_chars)}". '
                "Focus on high-impact keywords."
            ),
            system=GENERATE_SYSTEM,
            model=config.llm.generate_model,
            response_schema=GENERATE_SCHEMA,
        )

    if isinstance(request, GapCheckRequest):
        cv = _require(request.cv, "cv")
        jd = _require(request.job_description, "job_description")
        limit = config.task.max_input_chars
        min_courses = config.task.min_courses_per_gap
        return TaskRequest(
            operation="check_gaps",
            mode=AgentMode.CHECK,
            prompt=(
                f"Identify skill gaps between this CV and this job.\n\n"
                f"CV:\n---\n{_clip(cv, limit)}\n---\n\n"
                f"Job description:\n---\n{_clip(jd, limit)}\n---\n\n"
                f"Find {min_courses} real courses for each gap."
            ),
            system=CHECK_SYSTEM.format(min_courses=min_courses),
            model=config.llm.gap_model,
            response_schema=check_schema(min_courses),
            search_query=build_search_query(jd),
        )

    raise TypeError(f"Unsupported request type: {type(request).__name__}")


def build_search_query(job_description: str) -> str:
    """Course search query from the first meaningful line of a job posting."""
    headline = next(
        (line.strip() for line in job_description.splitlines() if line.strip()), ""
    )
    return f"best online courses for skills required by {headline[:120]}"


def build_refine_request(
    title: str, current_text: str, goal: str, config: AppConfig
) -> TaskRequest:
    """Free-text refinement call scoped to one section."""
    return TaskRequest(
        operation="refine_section",
        mode=None,
        prompt=(
            f'Refine this "{title}" section for the goal "{goal}".\n\n'
            f"Original:\n{current_text}\n\n"
            "Output only the refined text."
        ),
        system=REFINE_SYSTEM,
        model=config.llm.refine_model,
    )
