"""Routes tool calls and wraps every outcome in a ToolResponse."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from searxng_mcp.errors import ArgumentError
from searxng_mcp.models import SearchQuery, ToolRequest, ToolResponse
from searxng_mcp.server.definitions import READ_URL_TOOL, TOOLS, WEB_SEARCH_TOOL
from searxng_mcp.tools.scraper.fetcher import ContentFetcher
from searxng_mcp.tools.scraper.manager import ScraperManager
from searxng_mcp.tools.search.client import SearchTools
from searxng_mcp.utils.logger import get_logger


NOT_READY_MESSAGE = (
    "Tool not ready: Puppeteer is still initializing. Please try again in a few moments."
)


def _positive_int(args: Mapping[str, Any], key: str, default: int) -> int:
    value = args.get(key)
    if value is None:
        return default
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ArgumentError(f"Invalid arguments for web_search: {key} must be a positive integer")
    return value


def _optional_str(args: Mapping[str, Any], key: str) -> Optional[str]:
    value = args.get(key)
    return value if isinstance(value, str) else None


def parse_search_query(args: Mapping[str, Any]) -> SearchQuery:
    query = args.get("query")
    if not isinstance(query, str):
        raise ArgumentError("Invalid arguments for web_search")
    return SearchQuery(
        query=query,
        pageno=_positive_int(args, "pageno", 1),
        count=_positive_int(args, "count", 10),
        time_range=_optional_str(args, "time_range"),
        language=_optional_str(args, "language") or "all",
        safesearch=_optional_str(args, "safesearch"),
    )


def error_response(exc: BaseException) -> ToolResponse:
    """Single mapping from any failure to the error envelope."""
    return ToolResponse.error(f"Error: {exc}")


class ToolDispatcher:
    def __init__(self, search: SearchTools, manager: ScraperManager, fetcher: ContentFetcher):
        self.search = search
        self.manager = manager
        self.fetcher = fetcher
        self.logger = get_logger("dispatcher")

    def list_tools(self) -> List[Dict[str, Any]]:
        return list(TOOLS)

    async def call_tool(self, request: ToolRequest) -> ToolResponse:
        try:
            return await self._dispatch(request)
        except Exception as e:
            self.logger.warning(f"Tool '{request.name}' failed: {e}")
            return error_response(e)

    async def _dispatch(self, request: ToolRequest) -> ToolResponse:
        args = request.arguments
        if args is None:
            raise ArgumentError("No arguments provided")

        if request.name == WEB_SEARCH_TOOL["name"]:
            query = parse_search_query(args)
            return ToolResponse.text(await self.search.search(query))

        if request.name == READ_URL_TOOL["name"]:
            if not self.manager.is_ready:
                return ToolResponse.error(NOT_READY_MESSAGE)
            url = args.get("url")
            if not isinstance(url, str) or not url:
                raise ArgumentError("Invalid arguments for get_url_content")
            return ToolResponse.text(await self.fetcher.fetch_content(url))

        return ToolResponse.error(f"Unknown tool: {request.name}")
