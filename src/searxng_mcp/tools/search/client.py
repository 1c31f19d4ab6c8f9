from __future__ import annotations

from typing import Any, List, Optional

import httpx

from searxng_mcp.errors import UpstreamError
from searxng_mcp.models import SearchQuery, SearchResult
from searxng_mcp.tools.search.query import build_search_url
from searxng_mcp.utils.config import Settings
from searxng_mcp.utils.logger import get_logger


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def format_results(results: List[SearchResult]) -> str:
    """Render results as blank-line separated Title/Description/URL blocks."""
    return "\n\n".join(
        f"Title: {r.title}\nDescription: {r.content}\nURL: {r.url}" for r in results
    )


class SearchTools:
    """SearXNG search for the web_search tool"""

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self.logger = get_logger("search_mcp")
        self._client = client

    def _make_client(self) -> httpx.AsyncClient:
        if self.settings.search_timeout is not None:
            return httpx.AsyncClient(timeout=self.settings.search_timeout)
        return httpx.AsyncClient()

    async def fetch_results(self, query: SearchQuery) -> List[SearchResult]:
        url = build_search_url(self.settings.searxng_url, query)
        self.logger.info(f"Searching SearXNG: {query.query!r} (page {query.pageno})")

        if self._client is not None:
            resp = await self._client.get(url)
        else:
            async with self._make_client() as client:
                resp = await client.get(url)

        if not resp.is_success:
            raise UpstreamError(resp.status_code, resp.reason_phrase, resp.text)

        data = resp.json()
        raw = data.get("results") if isinstance(data, dict) else None
        if not isinstance(raw, list):
            raw = []

        results: List[SearchResult] = []
        for item in raw:
            if not isinstance(item, dict):
                item = {}
            results.append(
                SearchResult(
                    title=_text(item.get("title")),
                    content=_text(item.get("content")),
                    url=_text(item.get("url")),
                )
            )
        self.logger.info(f"SearXNG returned {len(results)} results")
        return results

    async def search(self, query: SearchQuery) -> str:
        """Run a search and return the text digest handed back to the agent."""
        return format_results(await self.fetch_results(query))
