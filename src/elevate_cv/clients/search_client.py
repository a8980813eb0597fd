"""Tavily search wrapper used to ground course recommendations."""

from __future__ import annotations

import logging

from tavily import AsyncTavilyClient

from elevate_cv.config import optional_search_key
from elevate_cv.errors import TransportError

logger = logging.getLogger(__name__)


class SearchClient:
    """Async Tavily search client."""

    def __init__(self, api_key: str | None = None):
        key = api_key or optional_search_key()
        if not key:
            raise ValueError(
                "Tavily API key required. Set TAVILY_API_KEY env var or pass api_key."
            )
        self.client = AsyncTavilyClient(api_key=key)
        self._search_count: int = 0

    async def search(
        self,
        query: str,
        max_results: int = 5,
        search_depth: str = "advanced",
    ) -> list[dict]:
        """Search and return list of {title, url, content} dicts."""
        logger.info("Searching: %s", query)
        self._search_count += 1
        try:
            response = await self.client.search(
                query=query,
                max_results=max_results,
                search_depth=search_depth,
            )
        except Exception as e:
            logger.error("Search failed", exc_info=True)
            raise TransportError(f"Search service error: {e}") from e
        return [
            {
                "title": r.get("title") or "Source",
                "url": r["url"],
                "content": r.get("content", ""),
            }
            for r in response.get("results", [])
            if r.get("url")
        ]

    def get_search_count(self) -> int:
        """Return accumulated search count and reset the counter."""
        count = self._search_count
        self._search_count = 0
        return count
