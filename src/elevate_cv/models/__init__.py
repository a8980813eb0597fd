"""Data models for career tasks and the editable document."""

from elevate_cv.models.document import DocumentModel
from elevate_cv.models.draft import DraftSection, GeneratedDraft, Theme
from elevate_cv.models.gap import (
    Course,
    GapReport,
    GapReportView,
    GroundingSource,
    SkillGap,
)
from elevate_cv.models.request import (
    AgentMode,
    CareerTaskRequest,
    GapCheckRequest,
    GenerateRequest,
    TaskRequest,
)
from elevate_cv.models.state import UIRequestState

__all__ = [
    "AgentMode",
    "CareerTaskRequest",
    "Course",
    "DocumentModel",
    "DraftSection",
    "GapCheckRequest",
    "GapReport",
    "GapReportView",
    "GenerateRequest",
    "GeneratedDraft",
    "GroundingSource",
    "SkillGap",
    "TaskRequest",
    "Theme",
    "UIRequestState",
]
