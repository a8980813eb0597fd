"""Pydantic models for the GapCheck task output, plus its view state."""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import AliasChoices, BaseModel, Field

from elevate_cv.models.request import AgentMode


class Course(BaseModel):
    course_name: str
    platform: str
    url: str = Field(validation_alias=AliasChoices("url", "clean_url"))


class SkillGap(BaseModel):
    skill: str
    courses: list[Course]


class GroundingSource(BaseModel):
    title: str
    uri: str


class GapReport(BaseModel):
    mode: AgentMode = AgentMode.CHECK
    skill_gaps: list[SkillGap] = Field(min_length=1)
    grounding_sources: list[GroundingSource] = []


@dataclass
class GapReportView:
    """Which gaps show their full course list. Pure view state."""

    report: GapReport
    expanded: dict[int, bool] = field(default_factory=dict)

    def is_expanded(self, index: int) -> bool:
        return self.expanded.get(index, False)

    def toggle(self, index: int) -> bool:
        if not 0 <= index < len(self.report.skill_gaps):
            raise IndexError(f"No skill gap at index {index}")
        self.expanded[index] = not self.is_expanded(index)
        return self.expanded[index]

    def visible_courses(self, index: int) -> list[Course]:
        courses = self.report.skill_gaps[index].courses
        return list(courses) if self.is_expanded(index) else courses[:1]
