"""MCP server exposing web_search and get_url_content over stdio."""
from __future__ import annotations

from typing import List, Optional

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from searxng_mcp import __version__
from searxng_mcp.models import ToolRequest, ToolResponse
from searxng_mcp.server.dispatcher import ToolDispatcher
from searxng_mcp.tools.scraper.fetcher import ContentFetcher
from searxng_mcp.tools.scraper.manager import ScraperManager, default_options
from searxng_mcp.tools.search.client import SearchTools
from searxng_mcp.utils.config import Settings
from searxng_mcp.utils.logger import get_logger


SERVER_NAME = "@missionsquad/mcp-searxng-puppeteer"

logger = get_logger("mcp_server")


def build_dispatcher(settings: Settings, manager: Optional[ScraperManager] = None) -> ToolDispatcher:
    manager = manager or ScraperManager(default_options(settings.proxy_url))
    return ToolDispatcher(
        search=SearchTools(settings),
        manager=manager,
        fetcher=ContentFetcher(manager, timeout=settings.fetch_timeout),
    )


def to_call_tool_result(response: ToolResponse) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=c["text"]) for c in response.content],
        isError=response.is_error,
    )


def create_server(dispatcher: ToolDispatcher) -> Server:
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def handle_list_tools() -> List[types.Tool]:
        return [
            types.Tool(name=t["name"], description=t["description"], inputSchema=t["inputSchema"])
            for t in dispatcher.list_tools()
        ]

    # Registered directly: the SDK decorator would validate input and turn
    # absent arguments into {}, both of which the dispatcher owns
    async def handle_call_tool(req: types.CallToolRequest) -> types.ServerResult:
        request = ToolRequest(name=req.params.name, arguments=req.params.arguments)
        response = await dispatcher.call_tool(request)
        return types.ServerResult(to_call_tool_result(response))

    server.request_handlers[types.CallToolRequest] = handle_call_tool

    return server


async def serve(settings: Settings) -> None:
    dispatcher = build_dispatcher(settings)
    server = create_server(dispatcher)

    async with stdio_server() as (read_stream, write_stream):
        logger.info(f"Serving {SERVER_NAME} {__version__} on stdio (SearXNG at {settings.searxng_url})")
        # Browser start-up runs detached; tools are served immediately
        dispatcher.manager.start()
        try:
            await server.run(read_stream, write_stream, server.create_initialization_options())
        finally:
            await dispatcher.manager.close()
