"""Section refinement: rewrite one CV section in place with the AI."""

from __future__ import annotations

import itertools
import logging

from elevate_cv.errors import RefinementError
from elevate_cv.models.document import DocumentModel
from elevate_cv.pipeline.career_agent import CareerAgent

logger = logging.getLogger(__name__)


class SectionRefiner:
    """Runs refinements, one coordinator per section title.

    Refinements of different titles run independently. For the same title the
    most recently issued refinement wins: an older call that completes later
    is discarded and leaves both text and ``refining`` flag alone.
    """

    def __init__(self, agent: CareerAgent):
        self.agent = agent
        self._counter = itertools.count(1)
        self._latest: dict[str, int] = {}

    async def refine(self, document: DocumentModel, title: str, goal: str) -> str | None:
        """Refine ``document.sections[title]`` for ``goal``.

        Returns the applied text, or None when nothing was applied (no goal,
        a failed call, or a superseded call).
        """
        if not goal or not goal.strip():
            return None
        current = document.sections[title]

        token = next(self._counter)
        self._latest[title] = token
        document.refining[title] = True
        try:
            refined = await self.agent.refine(title, current, goal.strip())
        except Exception as e:
            err = RefinementError(f"Refinement of {title!r} failed: {e}")
            logger.warning("%s", err, exc_info=True)
            if self._is_current(title, token):
                document.refining[title] = False
            return None

        if not self._is_current(title, token):
            logger.debug("Discarding superseded refinement of %r", title)
            return None
        if title in document.sections:
            document.sections[title] = refined
        document.refining[title] = False
        return refined

    def _is_current(self, title: str, token: int) -> bool:
        return self._latest.get(title) == token
