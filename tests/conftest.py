from typing import Any, Callable, List, Optional, Tuple

import httpx
import pytest

from searxng_mcp.tools.scraper.backend import PageContent, ScrapeResult
from searxng_mcp.utils.config import Settings


class FakeScraper:
    """Stands in for PlaywrightScraper; pages maps url -> text (None = no result)."""

    def __init__(self, options=None, pages=None, fail_init: bool = False):
        self.options = options
        self.pages = pages or {}
        self.fail_init = fail_init
        self.scraped: List[str] = []
        self.closed = False

    async def init(self):
        if self.fail_init:
            raise RuntimeError("browser launch failed")

    async def scrape_page(self, url: str) -> Optional[ScrapeResult]:
        self.scraped.append(url)
        text = self.pages.get(url)
        if text is None:
            return None
        return ScrapeResult(url=url, status=200, content=PageContent(text=text, html="<html></html>", title="t"))

    async def close(self):
        self.closed = True


class RecordingScheduler:
    """Collects retries instead of sleeping so tests can run them by hand."""

    def __init__(self):
        self.calls: List[Tuple[float, Callable[..., Any], tuple]] = []
        self.fired: List[float] = []

    def call_later(self, delay, callback, *args):
        self.calls.append((delay, callback, args))

    @property
    def delays(self) -> List[float]:
        return [c[0] for c in self.calls]

    async def run_pending(self):
        # each retry only fires after the previous attempt has settled
        while self.calls:
            delay, callback, args = self.calls.pop(0)
            self.fired.append(delay)
            await callback(*args)


@pytest.fixture
def settings():
    return Settings(
        searxng_url="http://searx.test",
        search_timeout=None,
        fetch_timeout=10.0,
        proxy_url=None,
    )


@pytest.fixture
def scheduler():
    return RecordingScheduler()


@pytest.fixture
def mock_searxng():
    """Build an AsyncClient whose transport answers with the given status/json."""
    requests: List[httpx.Request] = []

    def make(status_code: int = 200, json: Any = None, text: Optional[str] = None) -> httpx.AsyncClient:
        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if text is not None:
                return httpx.Response(status_code, text=text)
            return httpx.Response(status_code, json=json if json is not None else {})

        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    make.requests = requests  # type: ignore[attr-defined]
    return make
