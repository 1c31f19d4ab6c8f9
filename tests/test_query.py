from urllib.parse import parse_qs, urlparse

import pytest

from searxng_mcp.models import SearchQuery
from searxng_mcp.tools.search.query import build_search_url


def _params(url):
    return {k: v[0] for k, v in parse_qs(urlparse(url).query).items()}


def test_required_params_always_present():
    url = build_search_url("http://localhost:8080", SearchQuery(query="python asyncio"))
    parsed = urlparse(url)
    assert parsed.netloc == "localhost:8080"
    assert parsed.path == "/search"
    assert _params(url) == {"q": "python asyncio", "format": "json", "pageno": "1", "count": "10"}


def test_trailing_slash_on_base_url():
    url = build_search_url("http://searx.test/", SearchQuery(query="x"))
    assert url.startswith("http://searx.test/search?")


@pytest.mark.parametrize("time_range", ["day", "month", "year"])
def test_valid_time_range_forwarded(time_range):
    params = _params(build_search_url("http://s", SearchQuery(query="q", time_range=time_range)))
    assert params["time_range"] == time_range


@pytest.mark.parametrize("time_range", [None, "week", "", "DAY"])
def test_invalid_time_range_dropped(time_range):
    params = _params(build_search_url("http://s", SearchQuery(query="q", time_range=time_range)))
    assert "time_range" not in params


@pytest.mark.parametrize("safesearch", ["0", "1", "2"])
def test_valid_safesearch_forwarded(safesearch):
    params = _params(build_search_url("http://s", SearchQuery(query="q", safesearch=safesearch)))
    assert params["safesearch"] == safesearch


@pytest.mark.parametrize("safesearch", [None, "3", "strict", ""])
def test_invalid_safesearch_dropped(safesearch):
    params = _params(build_search_url("http://s", SearchQuery(query="q", safesearch=safesearch)))
    assert "safesearch" not in params


@pytest.mark.parametrize("language,expected", [("en", "en"), ("all", None), ("", None)])
def test_language_only_when_specific(language, expected):
    params = _params(build_search_url("http://s", SearchQuery(query="q", language=language)))
    assert params.get("language") == expected


def test_paging_values_and_escaping():
    url = build_search_url("http://s", SearchQuery(query="a&b c", pageno=3, count=25))
    params = _params(url)
    assert params["q"] == "a&b c"
    assert params["pageno"] == "3"
    assert params["count"] == "25"
