"""Tool definitions advertised over MCP.

- web_search      → SearXNG search digest
- get_url_content → rendered page text
"""

WEB_SEARCH_TOOL = {
    "name": "web_search",
    "description": (
        "Performs a web search using the SearXNG API, ideal for general queries, news, articles, and online content. "
        "Use this for broad information gathering, recent events, or when you need diverse web sources."
    ),
    "inputSchema": {
        "type": "object",
        "properties": {
            "query": {"type": "string", "description": "The search query. This is the main input for the web search"},
            "pageno": {"type": "number", "description": "Search page number (starts at 1)", "default": 1},
            "count": {"type": "number", "description": "Number of results per page (default: 10)", "default": 10},
            "time_range": {
                "type": "string",
                "description": "Time range of search (day, month, year)",
                "enum": ["day", "month", "year"],
            },
            "language": {
                "type": "string",
                "description": "Language code for search results (e.g., 'en', 'fr', 'de'). Default is instance-dependent.",
            },
            "safesearch": {
                "type": "string",
                "description": "Safe search filter level (0: None, 1: Moderate, 2: Strict) (default: 0)",
                "enum": ["0", "1", "2"],
            },
        },
        "required": ["query"],
    },
}

READ_URL_TOOL = {
    "name": "get_url_content",
    "description": (
        "Get the content of a URL. "
        "Use this for further information retrieving to understand the content of each URL."
    ),
    "inputSchema": {
        "type": "object",
        "properties": {
            "url": {"type": "string", "description": "URL"}
        },
        "required": ["url"],
    },
}

TOOLS = (WEB_SEARCH_TOOL, READ_URL_TOOL)
