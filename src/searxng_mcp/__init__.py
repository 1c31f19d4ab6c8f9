"""SearXNG search and headless-browser page reader exposed as MCP tools."""

__version__ = "0.5.5"
