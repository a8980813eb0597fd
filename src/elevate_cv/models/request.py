"""Career task requests and the descriptor sent to the reasoning service."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from pydantic import BaseModel


class AgentMode(str, Enum):
    GENERATE = "generate"
    CHECK = "check"


class GenerateRequest(BaseModel):
    goal: str

    @property
    def mode(self) -> AgentMode:
        return AgentMode.GENERATE


class GapCheckRequest(BaseModel):
    cv: str
    job_description: str

    @property
    def mode(self) -> AgentMode:
        return AgentMode.CHECK


CareerTaskRequest = Union[GenerateRequest, GapCheckRequest]


@dataclass(frozen=True)
class TaskRequest:
    """Fully specified call to the reasoning service.

    ``response_schema`` is None for free-text operations (refinement).
    ``search_query`` is set only when the operation is grounded by web search.
    """

    operation: str
    mode: AgentMode | None
    prompt: str
    system: str
    model: str
    response_schema: dict | None = None
    search_query: str | None = None

    @property
    def use_search(self) -> bool:
        return self.search_query is not None
