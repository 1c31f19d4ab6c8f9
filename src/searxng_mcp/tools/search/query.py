from __future__ import annotations

from urllib.parse import urlencode

from searxng_mcp.models import SearchQuery


TIME_RANGES = ("day", "month", "year")
SAFESEARCH_LEVELS = ("0", "1", "2")


def build_search_url(base_url: str, query: SearchQuery) -> str:
    """Build the SearXNG JSON search URL.

    Unknown time_range/safesearch values are dropped rather than rejected,
    and language "all" is left to the instance default.
    """
    params = {
        "q": query.query,
        "format": "json",
        "pageno": str(query.pageno),
        "count": str(query.count),
    }
    if query.time_range in TIME_RANGES:
        params["time_range"] = query.time_range
    if query.language and query.language != "all":
        params["language"] = query.language
    if query.safesearch in SAFESEARCH_LEVELS:
        params["safesearch"] = query.safesearch

    return f"{base_url.rstrip('/')}/search?{urlencode(params)}"
