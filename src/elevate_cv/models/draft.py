"""Pydantic models for the Generate task output."""

from __future__ import annotations

from enum import Enum

from pydantic import AliasChoices, BaseModel, Field

from elevate_cv.models.request import AgentMode


class Theme(str, Enum):
    TECH = "tech"
    CORPORATE = "corporate"
    CREATIVE = "creative"
    MEDICAL = "medical"
    FINANCE = "finance"


class DraftSection(BaseModel):
    title: str
    content: str = Field(validation_alias=AliasChoices("content", "draft_content"))


class GeneratedDraft(BaseModel):
    mode: AgentMode = AgentMode.GENERATE
    suggested_skills: list[str]
    suggested_sections: list[DraftSection] = Field(
        validation_alias=AliasChoices("suggested_sections", "suggested_sections_v2")
    )
    theme: Theme
    niche_summary: str = Field(validation_alias=AliasChoices("niche_summary", "nicheSummary"))
    canva_cta: bool = False  # model suggests finishing the design in a layout tool

    model_config = {"populate_by_name": True}
