"""Session state machine for one user of the app.

Holds the form inputs, the outcome of the latest task, the editable document
and the gap-report view. Every transition is a method here so it can be
driven and tested without a UI.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from elevate_cv.errors import (
    CareerTaskError,
    ExtractionError,
    InputValidationError,
    TaskInFlightError,
    TransportError,
)
from elevate_cv.models.document import DocumentModel
from elevate_cv.models.draft import GeneratedDraft, Theme
from elevate_cv.models.gap import GapReport, GapReportView
from elevate_cv.models.request import (
    AgentMode,
    CareerTaskRequest,
    GapCheckRequest,
    GenerateRequest,
)
from elevate_cv.models.state import UIRequestState
from elevate_cv.parsers.cv_parser import ingest_cv_bytes
from elevate_cv.pipeline.career_agent import CareerAgent
from elevate_cv.pipeline.request_builder import validate_request
from elevate_cv.pipeline.section_refiner import SectionRefiner

logger = logging.getLogger(__name__)


@dataclass
class CareerSession:
    agent: CareerAgent
    mode: AgentMode = AgentMode.GENERATE
    goal: str = ""
    cv_text: str = ""
    job_description: str = ""
    state: UIRequestState = field(default_factory=UIRequestState)
    document: DocumentModel | None = None
    report_view: GapReportView | None = None
    notice: str | None = None
    generation: int = 0

    def __post_init__(self):
        self.refiner = SectionRefiner(self.agent)

    def current_request(self) -> CareerTaskRequest:
        """Request built from the form inputs of the active tab."""
        if self.mode is AgentMode.GENERATE:
            return GenerateRequest(goal=self.goal)
        return GapCheckRequest(cv=self.cv_text, job_description=self.job_description)

    async def submit(self, request: CareerTaskRequest | None = None) -> bool:
        """Run a top-level task and install its result.

        Returns False without touching any state when another task is still
        in flight. Errors end up in ``state.error``; the previous document
        is kept whenever the task fails. An empty required field is reported
        before anything else changes, so the previous result stays too.
        """
        if self.state.is_loading:
            logger.warning("%s", TaskInFlightError("Submission rejected, task in flight"))
            return False
        if request is None:
            request = self.current_request()
        try:
            validate_request(request)
        except InputValidationError as e:
            logger.info("Submission rejected: %s", e)
            self.state.error = e.user_message
            return True

        self.generation += 1
        token = self.generation
        self.state.begin()
        try:
            result = await self.agent.process(request)
        except CareerTaskError as e:
            if self._is_stale(token):
                return True
            logger.info("Task failed: %s", e)
            self.state.fail(e.user_message)
            return True
        except Exception as e:
            if self._is_stale(token):
                return True
            logger.exception("Task failed unexpectedly")
            self.state.fail(TransportError(str(e) or type(e).__name__).user_message)
            return True

        if self._is_stale(token):
            return True
        self._install(request, result)
        return True

    def _is_stale(self, token: int) -> bool:
        if token != self.generation:
            logger.debug("Discarding stale task result (token %d, current %d)", token, self.generation)
            return True
        return False

    def _install(self, request: CareerTaskRequest, result: GeneratedDraft | GapReport) -> None:
        if isinstance(result, GeneratedDraft):
            self.document = DocumentModel.from_draft(result)
            if isinstance(request, GenerateRequest):
                self.goal = request.goal.strip()
        else:
            self.report_view = GapReportView(report=result)
        self.state.succeed(result)

    def switch_mode(self, mode: AgentMode) -> None:
        """Change tab. Drops results and orphans any task still in flight."""
        self.mode = AgentMode(mode)
        self.generation += 1
        self.state.reset()
        self.document = None
        self.report_view = None
        self.notice = None

    async def refine_section(self, title: str) -> str | None:
        if self.document is None:
            return None
        return await self.refiner.refine(self.document, title, self.goal)

    def edit_section(self, title: str, text: str) -> None:
        self._require_document().edit_section(title, text)

    def set_theme(self, theme: Theme | str) -> None:
        self._require_document().set_theme(theme)

    def set_name(self, value: str) -> None:
        self._require_document().set_name(value)

    def set_location(self, value: str) -> None:
        self._require_document().set_location(value)

    def set_contact(self, field_name: str, value: str) -> None:
        self._require_document().set_contact(field_name, value)

    def toggle_gap(self, index: int) -> bool:
        if self.report_view is None:
            raise RuntimeError("No gap report to expand")
        return self.report_view.toggle(index)

    def load_cv_file(
        self, data: bytes, filename: str = "", content_type: str | None = None
    ) -> bool:
        """Replace ``cv_text`` with the uploaded file's text.

        On failure the existing text stays and ``notice`` tells the user why.
        """
        try:
            text = ingest_cv_bytes(data, filename, content_type)
        except ExtractionError as e:
            logger.warning("CV upload failed: %s", e)
            self.notice = e.user_message
            return False
        self.cv_text = text
        self.notice = None
        return True

    def _require_document(self) -> DocumentModel:
        if self.document is None:
            raise RuntimeError("No generated document to edit")
        return self.document
