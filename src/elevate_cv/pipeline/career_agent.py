"""CareerAgent: runs career tasks against the reasoning service."""

from __future__ import annotations

import logging

from elevate_cv.clients.llm_client import LLMClient
from elevate_cv.clients.search_client import SearchClient
from elevate_cv.config import AppConfig
from elevate_cv.errors import TransportError
from elevate_cv.models.draft import GeneratedDraft
from elevate_cv.models.gap import GapReport, GroundingSource
from elevate_cv.models.request import CareerTaskRequest, TaskRequest
from elevate_cv.pipeline.request_builder import build_refine_request, build_task_request
from elevate_cv.pipeline.response_adapter import decode_draft, decode_gap_report

logger = logging.getLogger(__name__)


class CareerAgent:
    """Issues Generate, GapCheck and refinement calls.

    The LLM client is injected; the search client is optional and only used
    to ground course recommendations.
    """

    def __init__(
        self,
        llm: LLMClient,
        config: AppConfig,
        search: SearchClient | None = None,
    ):
        self.llm = llm
        self.config = config
        self.search = search

    async def process(self, request: CareerTaskRequest) -> GeneratedDraft | GapReport:
        """Run one top-level task and return its decoded result."""
        task = build_task_request(request, self.config)
        if task.use_search:
            return await self._check_gaps(task)
        return await self._generate(task)

    async def _generate(self, task: TaskRequest) -> GeneratedDraft:
        response = await self.llm.generate(
            prompt=task.prompt,
            system=task.system,
            model=task.model,
            temperature=self.config.llm.temperature,
            max_tokens=self.config.llm.max_tokens,
            response_schema=task.response_schema,
        )
        draft = decode_draft(response.text)
        logger.info(
            "Generated draft: %d sections, theme=%s",
            len(draft.suggested_sections),
            draft.theme.value,
        )
        return draft

    async def _check_gaps(self, task: TaskRequest) -> GapReport:
        results = await self._search_courses(task.search_query)
        prompt = task.prompt
        if results:
            context = "\n".join(
                f"- {r['title']} ({r['url']}): {r['content'][:300]}" for r in results
            )
            prompt = f"{prompt}\n\nSearch results for relevant courses:\n{context}"

        response = await self.llm.generate(
            prompt=prompt,
            system=task.system,
            model=task.model,
            temperature=self.config.llm.temperature,
            max_tokens=self.config.llm.max_tokens,
            response_schema=task.response_schema,
        )
        sources = [GroundingSource(title=r["title"], uri=r["url"]) for r in results]
        report = decode_gap_report(
            response.text,
            grounding_sources=sources,
            min_courses=self.config.task.min_courses_per_gap,
        )
        logger.info(
            "Gap report: %d gaps, %d grounding sources",
            len(report.skill_gaps),
            len(report.grounding_sources),
        )
        return report

    async def _search_courses(self, query: str | None) -> list[dict]:
        """Search results are advisory; a failed search never fails the task."""
        if self.search is None or not query:
            return []
        try:
            return await self.search.search(
                query,
                max_results=self.config.search.max_results,
                search_depth=self.config.search.search_depth,
            )
        except TransportError:
            logger.warning("Course search failed, continuing without grounding")
            return []

    async def refine(self, title: str, current_text: str, goal: str) -> str:
        """Return a refined version of one section, or the current text if the reply is empty."""
        task = build_refine_request(title, current_text, goal, self.config)
        response = await self.llm.generate(
            prompt=task.prompt,
            system=task.system,
            model=task.model,
            temperature=self.config.llm.temperature,
            max_tokens=self.config.llm.max_tokens,
        )
        return response.text.strip() or current_text
