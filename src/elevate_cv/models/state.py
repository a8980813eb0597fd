"""Outcome of the most recent top-level task."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from elevate_cv.models.draft import GeneratedDraft
from elevate_cv.models.gap import GapReport

TaskResult = Union[GeneratedDraft, GapReport]


@dataclass
class UIRequestState:
    is_loading: bool = False
    error: str | None = None
    result: TaskResult | None = None

    def begin(self) -> None:
        self.is_loading = True
        self.error = None
        self.result = None

    def succeed(self, result: TaskResult) -> None:
        self.is_loading = False
        self.error = None
        self.result = result

    def fail(self, message: str) -> None:
        self.is_loading = False
        self.error = message
        self.result = None

    def reset(self) -> None:
        self.is_loading = False
        self.error = None
        self.result = None
